"""
Audit Logger

DESIGN DECISION: Every sheet load is logged as a trail of events.
This provides:
1. Traceability from dashboard numbers back to a sheet and range
2. Visibility of degraded parses (zeroed cells, skipped rows)
3. Debugging capability when a sheet layout changes

The audit logger:
- Writes structured JSON logs through structlog
- Keeps a bounded in-process history (nothing is persisted)
- Supports correlation IDs to trace the events of one load
"""

from collections import deque
from typing import Optional
from uuid import UUID, uuid4

import structlog

from finplanner.models.audit import AuditEvent, AuditEventBuilder, AuditSeverity
from finplanner.models.records import IssueSeverity, ParseIssue


def configure_logging(debug: bool = False) -> None:
    """
    Configure structlog for local logging.

    JSON lines by default; debug mode renders readable console output.
    """
    renderer = (
        structlog.dev.ConsoleRenderer(colors=False)
        if debug
        else structlog.processors.JSONRenderer()
    )
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        # Module loggers must pick up a later reconfiguration
        cache_logger_on_first_use=False,
    )


configure_logging()


class AuditLogger:
    """
    Central audit logging service.

    Logs events both to:
    1. Structured local log (for debugging)
    2. An in-memory history (for the current process)
    """

    def __init__(self, history_size: int = 500):
        """
        Initialize audit logger.

        Args:
            history_size: How many recent events to keep in memory.
        """
        self._events: deque[AuditEvent] = deque(maxlen=history_size)
        self._logger = structlog.get_logger(__name__)

    def log(self, event: AuditEvent) -> None:
        """Log an audit event locally and remember it."""
        log_dict = event.to_log_dict()

        if event.severity in (AuditSeverity.ERROR, AuditSeverity.CRITICAL):
            self._logger.error("audit_event", **log_dict)
        elif event.severity == AuditSeverity.WARNING:
            self._logger.warning("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

        self._events.append(event)

    def recent_events(self, limit: int = 100) -> list[AuditEvent]:
        """Most recent events, newest first."""
        return list(reversed(self._events))[:limit]

    def events_for(self, correlation_id: UUID) -> list[AuditEvent]:
        """All remembered events of one load, in the order they happened."""
        return [e for e in self._events if e.correlation_id == correlation_id]

    def log_sheet_fetched(
        self,
        spreadsheet_id: str,
        cell_range: str,
        row_count: int,
        correlation_id: UUID,
    ) -> None:
        self.log(AuditEventBuilder.sheet_fetched(
            spreadsheet_id=spreadsheet_id,
            cell_range=cell_range,
            row_count=row_count,
            correlation_id=correlation_id,
        ))

    def log_sheet_fetch_failed(
        self,
        spreadsheet_id: str,
        cell_range: str,
        error_message: str,
        correlation_id: UUID,
    ) -> None:
        self.log(AuditEventBuilder.sheet_fetch_failed(
            spreadsheet_id=spreadsheet_id,
            cell_range=cell_range,
            error_message=error_message,
            correlation_id=correlation_id,
        ))

    def log_portfolio_parsed(
        self,
        spreadsheet_id: str,
        item_count: int,
        total_value: float,
        correlation_id: UUID,
    ) -> None:
        self.log(AuditEventBuilder.portfolio_parsed(
            spreadsheet_id=spreadsheet_id,
            item_count=item_count,
            total_value=total_value,
            correlation_id=correlation_id,
        ))

    def log_financials_parsed(
        self,
        spreadsheet_id: str,
        record_count: int,
        column_count: int,
        correlation_id: UUID,
    ) -> None:
        self.log(AuditEventBuilder.financials_parsed(
            spreadsheet_id=spreadsheet_id,
            record_count=record_count,
            column_count=column_count,
            correlation_id=correlation_id,
        ))

    def log_months_aggregated(
        self,
        spreadsheet_id: str,
        record_count: int,
        month_count: int,
        correlation_id: UUID,
    ) -> None:
        self.log(AuditEventBuilder.months_aggregated(
            spreadsheet_id=spreadsheet_id,
            record_count=record_count,
            month_count=month_count,
            correlation_id=correlation_id,
        ))

    def log_parse_issues(
        self,
        spreadsheet_id: str,
        stage: str,
        issues: list[ParseIssue],
        correlation_id: UUID,
    ) -> None:
        """Log warnings and errors of one stage; info-level issues are not audited."""
        notable = [
            issue.model_dump(mode="json")
            for issue in issues
            if issue.severity != IssueSeverity.INFO
        ]
        if not notable:
            return
        self.log(AuditEventBuilder.parse_issues_found(
            spreadsheet_id=spreadsheet_id,
            stage=stage,
            issues=notable,
            correlation_id=correlation_id,
        ))

    def log_error(
        self,
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        self.log(AuditEventBuilder.system_error(
            error_type=error_type,
            error_message=error_message,
            details=details,
            correlation_id=correlation_id,
        ))


def create_correlation_id() -> UUID:
    """
    Create a new correlation ID for tracking related events.

    Use this at the start of a load and pass it through every step.
    """
    return uuid4()
