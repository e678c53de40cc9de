"""
Record Validation

DESIGN DECISION: Monthly aggregation trusts input order. Snapshot fields
(cash, wealth, investment current values) take the LAST record of each
month, so a sheet sorted the wrong way silently reports a stale balance.

The validator does not fix this. It parses each record's date and reports
records that go back in time, so the caller can decide what to do:
- Sort the sheet
- Accept the result knowingly

IMPORTANT: Validation NEVER reorders or drops records.
It reports issues for human review.
"""

from datetime import datetime
from typing import Iterable, Optional, Sequence

from finplanner.config import get_settings
from finplanner.models.records import (
    FinancialRecord,
    IssueSeverity,
    ParseIssue,
)


class RecordValidator:
    """
    Checks parsed financial records before they are aggregated.
    """

    def __init__(self, date_formats: Optional[Sequence[str]] = None):
        """
        Initialize validator.

        Args:
            date_formats: strptime formats tried in order.
                         If None, the configured parser formats are used.
        """
        if date_formats is None:
            date_formats = get_settings().parser.date_formats_list
        self._date_formats = list(date_formats)

    def parse_date(self, text: str) -> Optional[datetime]:
        """Parse a sheet date with the first matching format, or None."""
        value = " ".join(text.split())
        for fmt in self._date_formats:
            try:
                return datetime.strptime(value, fmt)
            except ValueError:
                continue
        return None

    def check_chronological_order(
        self,
        records: Sequence[FinancialRecord],
    ) -> list[ParseIssue]:
        """
        Report records dated before a record that precedes them.

        Returns:
            One `out_of_order` warning per offending record and one
            `unparseable_date` info per record whose date matches no format.
        """
        issues = []
        latest: Optional[datetime] = None
        latest_text = ""

        for index, record in enumerate(records):
            parsed = self.parse_date(record.date)
            if parsed is None:
                issues.append(ParseIssue(
                    row=index,
                    issue_type="unparseable_date",
                    message=f"Date '{record.date}' could not be checked for ordering",
                    severity=IssueSeverity.INFO,
                ))
                continue

            if latest is not None and parsed < latest:
                issues.append(ParseIssue(
                    row=index,
                    issue_type="out_of_order",
                    message=(
                        f"'{record.date}' comes after '{latest_text}' in the sheet; "
                        "monthly balances use the last row of each month"
                    ),
                    severity=IssueSeverity.WARNING,
                ))
            else:
                latest = parsed
                latest_text = record.date

        return issues

    def get_user_friendly_summary(self, issues: Iterable[ParseIssue]) -> str:
        """
        Generate a readable summary of parse issues.

        Info-level issues (blank rows and the like) are counted, not listed.
        """
        issues = list(issues)
        errors = [i for i in issues if i.severity == IssueSeverity.ERROR]
        warnings = [i for i in issues if i.severity == IssueSeverity.WARNING]
        info_count = len(issues) - len(errors) - len(warnings)

        if not errors and not warnings:
            if info_count:
                return f"✅ Sheets loaded. {info_count} blank or ignored entries skipped."
            return "✅ Sheets loaded with no issues."

        lines = []

        if errors:
            lines.append("❌ The sheet layout could not be read correctly:")
            for issue in errors:
                lines.append(f"   • {self._describe(issue)}")

        if warnings:
            if lines:
                lines.append("")
            lines.append("⚠️ Please check the following:")
            for issue in warnings:
                lines.append(f"   • {self._describe(issue)}")

        if info_count:
            lines.append("")
            lines.append(f"{info_count} blank or ignored entries were skipped.")

        return "\n".join(lines)

    @staticmethod
    def _describe(issue: ParseIssue) -> str:
        if issue.location:
            return f"{issue.location}: {issue.message}"
        return issue.message
