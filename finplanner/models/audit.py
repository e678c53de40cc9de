"""
Audit Models for Financial Planner

Every sheet load is recorded as a short trail of events:
fetch → parse → aggregate, plus any issues found along the way.
This provides:
1. Traceability of which sheet produced which numbers
2. Debugging information when a sheet layout changes
3. A record of degraded parses that still returned data

DESIGN DECISION: Audit events are append-only and kept in process only.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AuditEventType(str, Enum):
    """
    Types of events we audit.

    Every step of the load pipeline has its own event type.
    """
    # Sheet access
    SHEET_FETCHED = "sheet_fetched"
    SHEET_FETCH_FAILED = "sheet_fetch_failed"

    # Parsing
    PORTFOLIO_PARSED = "portfolio_parsed"
    FINANCIALS_PARSED = "financials_parsed"
    PARSE_ISSUES_FOUND = "parse_issues_found"

    # Aggregation
    MONTHS_AGGREGATED = "months_aggregated"

    # System events
    SYSTEM_ERROR = "system_error"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class AuditEvent(BaseModel):
    """
    A single audit event.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=_utcnow,
        description="When the event occurred (UTC)"
    )

    # Event classification
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )

    # Context - which sheet is this about?
    entity_type: Optional[str] = Field(
        default=None,
        description="Type of entity (e.g., 'portfolio_sheet', 'financial_sheet')"
    )
    entity_id: Optional[str] = Field(
        default=None,
        description="Spreadsheet id the event relates to"
    )

    # Correlation - for tracking the events of one load
    correlation_id: Optional[UUID] = Field(
        default=None,
        description="ID shared by all events of one load"
    )

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )

    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )

    error_message: Optional[str] = None

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "correlation_id": str(self.correlation_id) if self.correlation_id else None,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.sheet_fetched(sheet_id, "A:H", 42, correlation_id)
        event = AuditEventBuilder.months_aggregated(sheet_id, 120, 6, correlation_id)
    """

    @staticmethod
    def sheet_fetched(
        spreadsheet_id: str,
        cell_range: str,
        row_count: int,
        correlation_id: UUID,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SHEET_FETCHED,
            entity_type="spreadsheet",
            entity_id=spreadsheet_id,
            correlation_id=correlation_id,
            description=f"Fetched {row_count} rows from {cell_range}",
            details={
                "cell_range": cell_range,
                "row_count": row_count,
            },
        )

    @staticmethod
    def sheet_fetch_failed(
        spreadsheet_id: str,
        cell_range: str,
        error_message: str,
        correlation_id: UUID,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SHEET_FETCH_FAILED,
            severity=AuditSeverity.ERROR,
            entity_type="spreadsheet",
            entity_id=spreadsheet_id,
            correlation_id=correlation_id,
            description=f"Failed to fetch {cell_range}",
            error_message=error_message,
            details={
                "cell_range": cell_range,
            },
        )

    @staticmethod
    def portfolio_parsed(
        spreadsheet_id: str,
        item_count: int,
        total_value: float,
        correlation_id: UUID,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.PORTFOLIO_PARSED,
            entity_type="portfolio_sheet",
            entity_id=spreadsheet_id,
            correlation_id=correlation_id,
            description=f"Parsed {item_count} portfolio items",
            details={
                "item_count": item_count,
                "total_value_cad": total_value,
            },
        )

    @staticmethod
    def financials_parsed(
        spreadsheet_id: str,
        record_count: int,
        column_count: int,
        correlation_id: UUID,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.FINANCIALS_PARSED,
            entity_type="financial_sheet",
            entity_id=spreadsheet_id,
            correlation_id=correlation_id,
            description=f"Parsed {record_count} dated records over {column_count} columns",
            details={
                "record_count": record_count,
                "column_count": column_count,
            },
        )

    @staticmethod
    def months_aggregated(
        spreadsheet_id: str,
        record_count: int,
        month_count: int,
        correlation_id: UUID,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.MONTHS_AGGREGATED,
            entity_type="financial_sheet",
            entity_id=spreadsheet_id,
            correlation_id=correlation_id,
            description=f"Aggregated {record_count} records into {month_count} months",
            details={
                "record_count": record_count,
                "month_count": month_count,
            },
        )

    @staticmethod
    def parse_issues_found(
        spreadsheet_id: str,
        stage: str,
        issues: list[dict],
        correlation_id: UUID,
    ) -> AuditEvent:
        has_error = any(issue.get("severity") == "error" for issue in issues)
        return AuditEvent(
            event_type=AuditEventType.PARSE_ISSUES_FOUND,
            severity=AuditSeverity.ERROR if has_error else AuditSeverity.WARNING,
            entity_type="spreadsheet",
            entity_id=spreadsheet_id,
            correlation_id=correlation_id,
            description=f"{stage.capitalize()} produced {len(issues)} issues",
            details={
                "stage": stage,
                "issues": issues,
            },
        )

    @staticmethod
    def system_error(
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SYSTEM_ERROR,
            severity=AuditSeverity.ERROR,
            description=f"System error: {error_type}",
            error_message=error_message,
            details=details or {},
            correlation_id=correlation_id,
        )
