"""
Tests for Financial Planner models

Test strategy:
1. Unit tests for individual components (models, parsers, validators)
2. Integration tests for flows (with in-memory sheets)
3. No real API calls in tests (use mocks)
"""

import pytest
from uuid import uuid4

from finplanner.models.records import (
    AggregatedRecord,
    CategoryKind,
    ColumnDescriptor,
    FinancialRecord,
    InvestmentPosition,
    IssueSeverity,
    ParseIssue,
    PortfolioParseResult,
    PortfolioItem,
    Wealth,
)
from finplanner.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)


class TestPortfolioItem:
    """Tests for the portfolio holding model."""

    def test_portfolio_item_creation(self):
        """Test PortfolioItem model creation."""
        item = PortfolioItem(name="AAPL", investment="Stock", value_cad=2000.0, percent=0.5)
        assert item.name == "AAPL"
        assert item.value_cad == 2000.0

    def test_portfolio_item_accepts_contract_alias(self):
        """Test valueCAD is accepted by its camelCase name."""
        item = PortfolioItem(name="AAPL", valueCAD=2000.0)
        assert item.value_cad == 2000.0

    def test_portfolio_item_dumps_contract_names(self):
        """Test by-alias dump uses the consumer field names."""
        item = PortfolioItem(name="AAPL", value_cad=2000.0)
        dumped = item.model_dump(by_alias=True)
        assert dumped["valueCAD"] == 2000.0
        assert set(dumped) == {
            "name", "investment", "category", "amount",
            "price", "currency", "valueCAD", "percent",
        }

    def test_portfolio_item_strips_whitespace(self):
        """Test that whitespace is stripped from the name."""
        item = PortfolioItem(name="  AAPL  ", value_cad=1.0)
        assert item.name == "AAPL"

    def test_portfolio_item_rejects_non_positive_value(self):
        """Test that zero and negative CAD values are rejected."""
        with pytest.raises(ValueError):
            PortfolioItem(name="AAPL", value_cad=0)
        with pytest.raises(ValueError):
            PortfolioItem(name="AAPL", value_cad=-5)

    def test_portfolio_item_rejects_empty_name(self):
        """Test that a blank name is rejected."""
        with pytest.raises(ValueError):
            PortfolioItem(name="   ", value_cad=10)

    def test_portfolio_item_is_frozen(self):
        """Test that holdings are read-only once parsed."""
        item = PortfolioItem(name="AAPL", value_cad=10)
        with pytest.raises(ValueError):
            item.value_cad = 20


class TestFinancialRecord:
    """Tests for dated and monthly financial records."""

    def test_record_defaults_are_zeroed(self):
        """Test a new record starts with zeros and empty maps."""
        record = FinancialRecord(date="15 April 2024")
        assert record.income_basic == 0.0
        assert record.expenses == {}
        assert record.investments == {}
        assert record.cash == {}
        assert record.wealth.total == 0.0

    def test_record_maps_are_not_shared(self):
        """Test default maps are independent between records."""
        first = FinancialRecord(date="1 April 2024")
        second = FinancialRecord(date="2 April 2024")
        first.expenses["Rent"] = 1000
        assert second.expenses == {}

    def test_record_totals(self):
        """Test income and expense totals."""
        record = FinancialRecord(
            date="15 April 2024",
            income_basic=5000,
            income_extra=1000,
            expenses={"Rent": 2000, "Food": 500},
        )
        assert record.total_income == 6000
        assert record.total_expenses == 2500

    def test_contract_dict_uses_camel_case(self):
        """Test the dump uses the names consumers read."""
        record = FinancialRecord(
            date="15 April 2024",
            income_basic=5000,
            investments={"RRSP": InvestmentPosition(contribution=1000, current_value=10000)},
            wealth=Wealth(liquid=1, fixed=2),
        )
        dumped = record.to_contract_dict()
        assert dumped["incomeBasic"] == 5000
        assert dumped["investments"]["RRSP"] == {"contribution": 1000, "currentValue": 10000}
        assert dumped["wealth"] == {"liquid": 1, "fixed": 2}
        assert "lostMoney" in dumped
        assert "netIncome" in dumped

    def test_aggregated_record_has_record_shape(self):
        """Test monthly records share the daily record fields."""
        month = AggregatedRecord(date="April 2024")
        assert set(month.to_contract_dict()) == set(FinancialRecord(date="x").to_contract_dict())


class TestDiagnostics:
    """Tests for parse issue models."""

    def test_issue_location_is_one_based(self):
        """Test location is rendered the way a sheet user counts."""
        issue = ParseIssue(row=3, column=0, issue_type="missing_date", message="x")
        assert issue.location == "row 4, column 1"

    def test_issue_location_empty_without_position(self):
        issue = ParseIssue(issue_type="missing_header_rows", message="x")
        assert issue.location == ""

    def test_outcome_has_errors(self):
        """Test has_errors property."""
        result = PortfolioParseResult(issues=[
            ParseIssue(issue_type="a", message="a", severity=IssueSeverity.ERROR),
            ParseIssue(issue_type="b", message="b", severity=IssueSeverity.WARNING),
        ])
        assert result.has_errors is True
        assert result.warning_count == 1

    def test_outcome_warnings_only(self):
        """Test that warnings don't count as errors."""
        result = PortfolioParseResult(issues=[
            ParseIssue(issue_type="b", message="b", severity=IssueSeverity.WARNING),
        ])
        assert result.has_errors is False


class TestColumnDescriptor:
    """Tests for resolved header columns."""

    def test_descriptor_defaults_empty(self):
        column = ColumnDescriptor()
        assert (column.category, column.sub_category, column.metric) == ("", "", "")

    def test_descriptor_is_frozen(self):
        column = ColumnDescriptor(category="Income")
        with pytest.raises(ValueError):
            column.category = "Expense"

    def test_category_kinds(self):
        """Test category kind string values."""
        assert CategoryKind.NET_INCOME.value == "net_income"
        assert CategoryKind.UNKNOWN.value == "unknown"


class TestAuditModels:
    """Tests for audit-related models."""

    def test_audit_event_creation(self):
        """Test AuditEvent model creation."""
        event = AuditEvent(
            event_type=AuditEventType.SHEET_FETCHED,
            description="Fetched rows",
        )
        assert event.event_type == AuditEventType.SHEET_FETCHED
        assert event.severity == AuditSeverity.INFO
        assert event.timestamp.tzinfo is not None

    def test_audit_event_to_log_dict(self):
        """Test conversion to log dictionary."""
        event = AuditEvent(
            event_type=AuditEventType.PORTFOLIO_PARSED,
            description="Parsed",
            details={"item_count": 3},
        )
        log_dict = event.to_log_dict()
        assert "event_id" in log_dict
        assert log_dict["event_type"] == "portfolio_parsed"
        assert log_dict["details"]["item_count"] == 3
        assert log_dict["correlation_id"] is None

    def test_audit_event_builder_sheet_fetched(self):
        """Test AuditEventBuilder.sheet_fetched."""
        correlation_id = uuid4()
        event = AuditEventBuilder.sheet_fetched(
            spreadsheet_id="sheet-1",
            cell_range="A:H",
            row_count=42,
            correlation_id=correlation_id,
        )
        assert event.event_type == AuditEventType.SHEET_FETCHED
        assert event.entity_id == "sheet-1"
        assert event.correlation_id == correlation_id
        assert event.details["row_count"] == 42

    def test_audit_event_builder_fetch_failed_is_error(self):
        event = AuditEventBuilder.sheet_fetch_failed(
            spreadsheet_id="sheet-1",
            cell_range="A:H",
            error_message="boom",
            correlation_id=uuid4(),
        )
        assert event.severity == AuditSeverity.ERROR
        assert event.error_message == "boom"

    def test_parse_issues_severity_follows_worst_issue(self):
        """Test issue events escalate to ERROR only when an issue is an error."""
        warnings_only = AuditEventBuilder.parse_issues_found(
            spreadsheet_id="s",
            stage="portfolio",
            issues=[{"severity": "warning"}],
            correlation_id=uuid4(),
        )
        with_error = AuditEventBuilder.parse_issues_found(
            spreadsheet_id="s",
            stage="financials",
            issues=[{"severity": "warning"}, {"severity": "error"}],
            correlation_id=uuid4(),
        )
        assert warnings_only.severity == AuditSeverity.WARNING
        assert with_error.severity == AuditSeverity.ERROR
        assert with_error.details["stage"] == "financials"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
