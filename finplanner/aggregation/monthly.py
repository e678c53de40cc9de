"""
Temporal Aggregator

Rolls dated financial records up into one record per month.

Two kinds of quantity live in a record:
- FLOWS accumulate over a period and are SUMMED:
  income_basic, income_extra, net_income, lost_money, expenses,
  investment contributions
- SNAPSHOTS are point-in-time balances and the LAST one wins:
  cash (per account), wealth (whole), investment current values

"Last" means last in input order. Records are expected in chronological
order; nothing here sorts them. `aggregate_monthly_report` flags input
that goes back in time.

Months come out in first-seen order, which is calendar order only when
the input is.

Input with one dated record per month comes back with identical numbers.
The aggregator's own output does not: its "April 2024" labels have only
two tokens, so feeding monthly records back in returns no months.
"""

from typing import Optional, Sequence

import structlog

from finplanner.config import get_settings
from finplanner.models.records import (
    AggregatedRecord,
    AggregationResult,
    FinancialRecord,
    InvestmentPosition,
    IssueSeverity,
    ParseIssue,
)
from finplanner.validation import RecordValidator

logger = structlog.get_logger(__name__)


def month_key(date: str) -> Optional[str]:
    """
    "15 April 2024" -> "April 2024".

    Returns None when the date has fewer than three tokens.
    """
    parts = date.split()
    if len(parts) < 3:
        return None
    return f"{parts[1]} {parts[2]}"


def _merge_into(month: AggregatedRecord, record: FinancialRecord) -> None:
    # Flows
    month.income_basic += record.income_basic
    month.income_extra += record.income_extra
    month.net_income += record.net_income
    month.lost_money += record.lost_money

    for name, amount in record.expenses.items():
        month.expenses[name] = month.expenses.get(name, 0.0) + amount

    for account, position in record.investments.items():
        target = month.investments.setdefault(account, InvestmentPosition())
        target.contribution += position.contribution
        target.current_value = position.current_value

    # Snapshots
    for account, balance in record.cash.items():
        month.cash[account] = balance
    month.wealth = record.wealth.model_copy()


def _aggregate(
    records: Sequence[FinancialRecord],
    issues: list[ParseIssue],
) -> list[AggregatedRecord]:
    months: dict[str, AggregatedRecord] = {}

    for index, record in enumerate(records):
        key = month_key(record.date)
        if key is None:
            issues.append(ParseIssue(
                row=index,
                issue_type="unparseable_date",
                message=f"Date '{record.date}' is not '<day> <month> <year>', record skipped",
                severity=IssueSeverity.WARNING,
            ))
            continue

        if key not in months:
            months[key] = AggregatedRecord(date=key)
        _merge_into(months[key], record)

    return list(months.values())


def aggregate_monthly(records: Sequence[FinancialRecord]) -> list[AggregatedRecord]:
    """Group records by month, summing flows and keeping the latest snapshots."""
    return _aggregate(records, [])


def aggregate_monthly_report(
    records: Sequence[FinancialRecord],
    validator: Optional[RecordValidator] = None,
    check_order: Optional[bool] = None,
) -> AggregationResult:
    """
    Aggregate and report skipped records and ordering problems.

    The months are identical to `aggregate_monthly(records)`.

    Args:
        records: Daily records in sheet order
        validator: Used for the chronological check; built from settings if None
        check_order: Override the configured `check_chronological_order`
    """
    issues: list[ParseIssue] = []

    if check_order is None:
        check_order = get_settings().parser.check_chronological_order
    if check_order:
        validator = validator or RecordValidator()
        issues.extend(
            issue for issue in validator.check_chronological_order(records)
            if issue.issue_type == "out_of_order"
        )

    months = _aggregate(records, issues)

    logger.debug(
        "monthly_records_aggregated",
        records=len(records),
        months=len(months),
        issues=len(issues),
    )
    return AggregationResult(records=months, issues=issues)
