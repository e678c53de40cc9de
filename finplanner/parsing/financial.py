"""
Hierarchical Row Parser (financial plan sheet)

Layout:
    rows 0-2  header hierarchy (see finplanner.parsing.headers)
    rows 3+   one row per date
    column 0  the date, kept as the literal sheet text

Each data cell is routed by the kind of its column's category:

    INCOME      sub "basic" -> income_basic (+=), "extra" -> income_extra (+=),
                "net" -> net_income (=)
    NET_INCOME  net_income (=)
    EXPENSE     expenses[sub] (+=)
    INVESTMENT  investments[sub].contribution / .current_value (=), by metric
    CASH        cash[sub] (=)
    WEALTH      sub "liquid" -> wealth.liquid (=), "fixed" -> wealth.fixed (=)
    LOST_MONEY  lost_money (=)
    UNKNOWN     ignored

Columns are visited left to right, so "=" fields are last-write-wins
within a row. Only cells actually present in a row are visited: a short
row contributes nothing for its missing trailing columns.
"""

from typing import Sequence

import structlog

from finplanner.models.records import (
    CategoryKind,
    ColumnDescriptor,
    FinancialParseResult,
    FinancialRecord,
    InvestmentPosition,
    IssueSeverity,
    ParseIssue,
)
from finplanner.parsing.classification import (
    IncomeKind,
    InvestmentMetric,
    WealthKind,
    classify_category,
    classify_income,
    classify_investment_metric,
    classify_wealth,
)
from finplanner.parsing.headers import HEADER_ROW_COUNT, cell_at, resolve_columns
from finplanner.parsing.numeric import parse_number, try_parse_number

logger = structlog.get_logger(__name__)

DATE_COLUMN = 0

# Kinds whose cells are keyed by the sub-category text
_KEYED_KINDS = {CategoryKind.EXPENSE, CategoryKind.INVESTMENT, CategoryKind.CASH}


def _route_value(
    record: FinancialRecord,
    kind: CategoryKind,
    column: ColumnDescriptor,
    value: float,
) -> bool:
    """
    Apply one cell value to the record.

    Returns False when the column's sub-category/metric did not select
    a field, so the caller can report it.
    """
    sub = column.sub_category

    if kind == CategoryKind.INCOME:
        income = classify_income(sub)
        if income == IncomeKind.BASIC:
            record.income_basic += value
        elif income == IncomeKind.EXTRA:
            record.income_extra += value
        elif income == IncomeKind.NET:
            record.net_income = value
        else:
            return False

    elif kind == CategoryKind.NET_INCOME:
        record.net_income = value

    elif kind == CategoryKind.EXPENSE:
        if not sub:
            return False
        record.expenses[sub] = record.expenses.get(sub, 0.0) + value

    elif kind == CategoryKind.INVESTMENT:
        if not sub:
            return False
        position = record.investments.setdefault(sub, InvestmentPosition())
        metric = classify_investment_metric(column.metric)
        if metric == InvestmentMetric.CONTRIBUTION:
            position.contribution = value
        elif metric == InvestmentMetric.CURRENT_VALUE:
            position.current_value = value
        else:
            return False

    elif kind == CategoryKind.CASH:
        if not sub:
            return False
        record.cash[sub] = value

    elif kind == CategoryKind.WEALTH:
        wealth = classify_wealth(sub)
        if wealth == WealthKind.LIQUID:
            record.wealth.liquid = value
        elif wealth == WealthKind.FIXED:
            record.wealth.fixed = value
        else:
            return False

    elif kind == CategoryKind.LOST_MONEY:
        record.lost_money = value

    return True


def _unrouted_issue(kind: CategoryKind, column: ColumnDescriptor, index: int) -> ParseIssue:
    if kind in _KEYED_KINDS and not column.sub_category:
        return ParseIssue(
            column=index,
            issue_type="missing_sub_category",
            message=f"'{column.category}' column has no sub-category, values ignored",
            severity=IssueSeverity.WARNING,
        )
    if kind == CategoryKind.INVESTMENT:
        return ParseIssue(
            column=index,
            issue_type="unrecognized_metric",
            message=(
                f"Investment '{column.sub_category}' metric '{column.metric}' is neither "
                "a contribution nor a current value, values ignored"
            ),
            severity=IssueSeverity.WARNING,
        )
    return ParseIssue(
        column=index,
        issue_type="unrecognized_sub_category",
        message=f"'{column.category}' sub-category '{column.sub_category}' not recognized, values ignored",
        severity=IssueSeverity.WARNING,
    )


def parse_financials_report(rows: Sequence[Sequence[str]]) -> FinancialParseResult:
    """
    Parse the financial plan grid and report what was skipped or misread.

    The records are identical to `parse_financials(rows)`.
    """
    issues: list[ParseIssue] = []

    if len(rows) < HEADER_ROW_COUNT:
        issues.append(ParseIssue(
            issue_type="missing_header_rows",
            message=(
                f"Expected {HEADER_ROW_COUNT} header rows (category, sub-category, metric), "
                f"found {len(rows)}"
            ),
            severity=IssueSeverity.ERROR,
        ))

    columns = resolve_columns(rows[:HEADER_ROW_COUNT])
    kinds = [classify_category(column.category) for column in columns]

    # Column-level issues are reported once, not per row
    flagged_columns: set[int] = set()
    for index, (column, kind) in enumerate(zip(columns, kinds)):
        if index == DATE_COLUMN:
            continue
        if kind == CategoryKind.UNKNOWN and (column.category or column.metric):
            issues.append(ParseIssue(
                column=index,
                issue_type="unrecognized_category",
                message=f"Category '{column.category}' is not recognized, column ignored",
                severity=IssueSeverity.INFO,
            ))

    records: list[FinancialRecord] = []

    for row_index, row in enumerate(rows[HEADER_ROW_COUNT:], start=HEADER_ROW_COUNT):
        row = row or []
        date = cell_at(row, DATE_COLUMN)
        if not date:
            issues.append(ParseIssue(
                row=row_index,
                column=DATE_COLUMN,
                issue_type="missing_date",
                message="Row has no date and was skipped",
                severity=IssueSeverity.INFO,
            ))
            continue

        record = FinancialRecord(date=date)

        for index, cell in enumerate(row):
            if index == DATE_COLUMN or index >= len(columns):
                continue
            kind = kinds[index]
            if kind == CategoryKind.UNKNOWN:
                continue

            text = "" if cell is None else str(cell)
            if try_parse_number(text) is None:
                issues.append(ParseIssue(
                    row=row_index,
                    column=index,
                    issue_type="non_numeric",
                    message=f"'{text}' is not a number, read as 0",
                    severity=IssueSeverity.WARNING,
                ))

            routed = _route_value(record, kind, columns[index], parse_number(text))
            if not routed and index not in flagged_columns:
                flagged_columns.add(index)
                issues.append(_unrouted_issue(kind, columns[index], index))

        records.append(record)

    logger.debug(
        "financial_rows_parsed",
        columns=len(columns),
        data_rows=max(len(rows) - HEADER_ROW_COUNT, 0),
        records=len(records),
        issues=len(issues),
    )
    return FinancialParseResult(records=records, columns=columns, issues=issues)


def parse_financials(rows: Sequence[Sequence[str]]) -> list[FinancialRecord]:
    """Parse the financial plan grid into one record per dated row."""
    return parse_financials_report(rows).records
