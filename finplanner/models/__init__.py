"""
Data Models Package

Pydantic models for everything parsed out of the sheets, plus the
audit trail models.
"""

from finplanner.models.records import (
    AggregatedRecord,
    AggregationResult,
    CategoryKind,
    ColumnDescriptor,
    FinancialParseResult,
    FinancialRecord,
    InvestmentPosition,
    IssueSeverity,
    ParseIssue,
    ParseOutcome,
    PortfolioItem,
    PortfolioParseResult,
    Wealth,
)
from finplanner.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Record models
    "AggregatedRecord",
    "AggregationResult",
    "CategoryKind",
    "ColumnDescriptor",
    "FinancialParseResult",
    "FinancialRecord",
    "InvestmentPosition",
    "IssueSeverity",
    "ParseIssue",
    "ParseOutcome",
    "PortfolioItem",
    "PortfolioParseResult",
    "Wealth",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
