"""
Main Orchestrator for Financial Planner

This module ties together all the components and defines the
end-to-end load flow:
1. Portfolio  (fetch → flat parse)
2. Financials (fetch → header resolve → hierarchical parse → monthly aggregate)
3. Summary    (portfolio + months → dashboard figures)

DESIGN DECISION: The orchestrator enforces the boundaries:
- Fetch failures are audited and raised, there is nothing to show
- Parse and aggregation never raise, they report issues instead
- Every step is audited under one correlation ID
"""

import logging
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field

from finplanner.aggregation import aggregate_monthly_report
from finplanner.audit import AuditLogger, configure_logging, create_correlation_id
from finplanner.config import GoogleSheetsSettings, get_settings
from finplanner.models.records import (
    AggregatedRecord,
    AggregationResult,
    FinancialParseResult,
    FinancialRecord,
    ParseIssue,
    PortfolioItem,
    PortfolioParseResult,
)
from finplanner.parsing import parse_financials_report, parse_portfolio_report
from finplanner.queries import DashboardSummary, build_dashboard_summary, total_portfolio_value
from finplanner.services.sheets import (
    GoogleSheetsClient,
    GoogleSheetsFetcher,
    RawGrid,
    SheetAccessError,
    SheetFetcherInterface,
)
from finplanner.validation import RecordValidator


class FinancialLoadResult(BaseModel):
    """Daily records, their monthly roll-up and every issue found."""
    daily: FinancialParseResult
    monthly: AggregationResult

    @property
    def issues(self) -> list[ParseIssue]:
        return self.daily.issues + self.monthly.issues


class DashboardData(BaseModel):
    """Everything one dashboard refresh needs."""
    portfolio: list[PortfolioItem] = Field(default_factory=list)
    daily_records: list[FinancialRecord] = Field(default_factory=list)
    monthly_records: list[AggregatedRecord] = Field(default_factory=list)
    summary: DashboardSummary = Field(default_factory=DashboardSummary)
    issues: list[ParseIssue] = Field(default_factory=list)
    issue_summary: str = ""


class DashboardDataFlow:
    """
    Orchestrates loading both sheets for the dashboard.

    Flow:
    1. Fetch    → Read the configured range of each spreadsheet
    2. Parse    → Portfolio rows and dated financial rows
    3. Validate → Flag out-of-order financial records
    4. Aggregate→ Roll daily records up into months
    5. Summarize→ Dashboard figures

    Spreadsheet ids and ranges default to GoogleSheetsSettings; pass them
    explicitly to run without that configuration.
    """

    def __init__(
        self,
        fetcher: Optional[SheetFetcherInterface] = None,
        validator: Optional[RecordValidator] = None,
        audit_logger: Optional[AuditLogger] = None,
        sheets_settings: Optional[GoogleSheetsSettings] = None,
    ):
        self._sheets_settings = sheets_settings
        self._fetcher = fetcher or GoogleSheetsFetcher(GoogleSheetsClient(sheets_settings))
        self._validator = validator or RecordValidator()
        self._audit_logger = audit_logger or AuditLogger()

    def _settings(self) -> GoogleSheetsSettings:
        if self._sheets_settings is None:
            self._sheets_settings = get_settings().google_sheets
        return self._sheets_settings

    def _fetch(
        self,
        spreadsheet_id: str,
        cell_range: str,
        correlation_id: UUID,
    ) -> RawGrid:
        try:
            rows = self._fetcher.fetch_values(spreadsheet_id, cell_range)
        except SheetAccessError as e:
            self._audit_logger.log_sheet_fetch_failed(
                spreadsheet_id=spreadsheet_id,
                cell_range=cell_range,
                error_message=str(e),
                correlation_id=correlation_id,
            )
            raise

        self._audit_logger.log_sheet_fetched(
            spreadsheet_id=spreadsheet_id,
            cell_range=cell_range,
            row_count=len(rows),
            correlation_id=correlation_id,
        )
        return rows

    def load_portfolio(
        self,
        spreadsheet_id: Optional[str] = None,
        cell_range: Optional[str] = None,
        correlation_id: Optional[UUID] = None,
    ) -> PortfolioParseResult:
        """
        Fetch and parse the portfolio sheet.

        Raises:
            SheetAccessError: If the sheet cannot be read
        """
        correlation_id = correlation_id or create_correlation_id()
        spreadsheet_id = spreadsheet_id or self._settings().portfolio_spreadsheet_id
        cell_range = cell_range or self._settings().portfolio_range

        rows = self._fetch(spreadsheet_id, cell_range, correlation_id)
        result = parse_portfolio_report(rows)

        self._audit_logger.log_portfolio_parsed(
            spreadsheet_id=spreadsheet_id,
            item_count=len(result.items),
            total_value=total_portfolio_value(result.items),
            correlation_id=correlation_id,
        )
        self._audit_logger.log_parse_issues(
            spreadsheet_id=spreadsheet_id,
            stage="portfolio",
            issues=result.issues,
            correlation_id=correlation_id,
        )
        return result

    def load_financials(
        self,
        spreadsheet_id: Optional[str] = None,
        cell_range: Optional[str] = None,
        correlation_id: Optional[UUID] = None,
    ) -> FinancialLoadResult:
        """
        Fetch, parse and aggregate the financial plan sheet.

        Records are aggregated in sheet order; out-of-order rows are
        reported, not re-sorted.

        Raises:
            SheetAccessError: If the sheet cannot be read
        """
        correlation_id = correlation_id or create_correlation_id()
        spreadsheet_id = spreadsheet_id or self._settings().financial_spreadsheet_id
        cell_range = cell_range or self._settings().financial_range

        rows = self._fetch(spreadsheet_id, cell_range, correlation_id)

        daily = parse_financials_report(rows)
        self._audit_logger.log_financials_parsed(
            spreadsheet_id=spreadsheet_id,
            record_count=len(daily.records),
            column_count=len(daily.columns),
            correlation_id=correlation_id,
        )
        self._audit_logger.log_parse_issues(
            spreadsheet_id=spreadsheet_id,
            stage="financials",
            issues=daily.issues,
            correlation_id=correlation_id,
        )

        monthly = aggregate_monthly_report(daily.records, validator=self._validator)
        self._audit_logger.log_months_aggregated(
            spreadsheet_id=spreadsheet_id,
            record_count=len(daily.records),
            month_count=len(monthly.records),
            correlation_id=correlation_id,
        )
        self._audit_logger.log_parse_issues(
            spreadsheet_id=spreadsheet_id,
            stage="aggregation",
            issues=monthly.issues,
            correlation_id=correlation_id,
        )

        return FinancialLoadResult(daily=daily, monthly=monthly)

    def load_dashboard(
        self,
        portfolio_spreadsheet_id: Optional[str] = None,
        financial_spreadsheet_id: Optional[str] = None,
        correlation_id: Optional[UUID] = None,
    ) -> DashboardData:
        """
        Load both sheets and compute the dashboard summary.

        Raises:
            SheetAccessError: If either sheet cannot be read
        """
        correlation_id = correlation_id or create_correlation_id()

        portfolio = self.load_portfolio(
            spreadsheet_id=portfolio_spreadsheet_id,
            correlation_id=correlation_id,
        )
        financials = self.load_financials(
            spreadsheet_id=financial_spreadsheet_id,
            correlation_id=correlation_id,
        )

        issues = portfolio.issues + financials.issues
        return DashboardData(
            portfolio=portfolio.items,
            daily_records=financials.daily.records,
            monthly_records=financials.monthly.records,
            summary=build_dashboard_summary(portfolio.items, financials.monthly.records),
            issues=issues,
            issue_summary=self._validator.get_user_friendly_summary(issues),
        )


def create_app_components(
    use_sheets: bool = True,
) -> tuple[DashboardDataFlow, Optional[GoogleSheetsClient]]:
    """
    Factory function to create all application components.

    Args:
        use_sheets: Whether to connect to Google Sheets.
                    Set to False to get a flow backed by an empty
                    in-memory fetcher (tests, offline use).

    Returns:
        (dashboard_flow, sheets_client)
    """
    from finplanner.services.sheets import InMemorySheetFetcher

    app_settings = get_settings().app
    logging.basicConfig(level=app_settings.log_level, format="%(message)s")
    configure_logging(debug=app_settings.debug_mode)
    audit_logger = AuditLogger(history_size=app_settings.audit_history_size)

    if use_sheets:
        try:
            sheets_client = GoogleSheetsClient()
            flow = DashboardDataFlow(
                fetcher=GoogleSheetsFetcher(sheets_client),
                audit_logger=audit_logger,
                sheets_settings=sheets_client.settings,
            )
            return flow, sheets_client
        except Exception as e:
            # Sheets not configured - continue without them
            audit_logger.log_error(
                error_type="sheets_not_configured",
                error_message=str(e),
            )

    flow = DashboardDataFlow(
        fetcher=InMemorySheetFetcher(),
        audit_logger=audit_logger,
    )
    return flow, None
