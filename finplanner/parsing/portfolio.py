"""
Flat Row Parser (portfolio sheet)

Row 0 is a single header row. Every following row is one holding with a
fixed column order:

    Name | Investment | Category | Amount | Price | Currency | Value (CAD) | Percent

Rows without a name or without a positive CAD value are dropped. That is
the only validation gate: spreadsheets use blank rows as separators and
they are expected to disappear here.
"""

from typing import Sequence

import structlog

from finplanner.models.records import (
    IssueSeverity,
    ParseIssue,
    PortfolioItem,
    PortfolioParseResult,
)
from finplanner.parsing.headers import cell_at
from finplanner.parsing.numeric import (
    is_blank,
    parse_number,
    parse_percent,
    try_parse_number,
)

logger = structlog.get_logger(__name__)

# Column positions in the portfolio sheet
NAME, INVESTMENT, CATEGORY, AMOUNT, PRICE, CURRENCY, VALUE_CAD, PERCENT = range(8)

NUMERIC_COLUMNS = {
    AMOUNT: "amount",
    PRICE: "price",
    VALUE_CAD: "value_cad",
    PERCENT: "percent",
}


def _check_numeric_cells(row: Sequence[str], row_index: int) -> list[ParseIssue]:
    issues = []
    for column, field in NUMERIC_COLUMNS.items():
        cell = cell_at(row, column)
        if try_parse_number(cell) is None:
            issues.append(ParseIssue(
                row=row_index,
                column=column,
                issue_type="non_numeric",
                message=f"{field} '{cell}' is not a number, read as 0",
                severity=IssueSeverity.WARNING,
            ))
    return issues


def parse_portfolio_report(rows: Sequence[Sequence[str]]) -> PortfolioParseResult:
    """
    Parse the portfolio grid and report what was dropped or misread.

    The items are identical to `parse_portfolio(rows)`.
    """
    items: list[PortfolioItem] = []
    issues: list[ParseIssue] = []

    for row_index, row in enumerate(rows[1:], start=1):
        row = row or []
        if all(is_blank(cell) for cell in row):
            issues.append(ParseIssue(
                row=row_index,
                issue_type="blank_row",
                message="Blank row skipped",
                severity=IssueSeverity.INFO,
            ))
            continue

        issues.extend(_check_numeric_cells(row, row_index))

        name = cell_at(row, NAME)
        value_cad = parse_number(cell_at(row, VALUE_CAD))

        if not name:
            issues.append(ParseIssue(
                row=row_index,
                column=NAME,
                issue_type="missing_name",
                message="Row has no name and was dropped",
                severity=IssueSeverity.WARNING,
            ))
            continue
        if value_cad <= 0:
            issues.append(ParseIssue(
                row=row_index,
                column=VALUE_CAD,
                issue_type="non_positive_value",
                message=f"'{name}' has no positive CAD value and was dropped",
                severity=IssueSeverity.WARNING,
            ))
            continue

        items.append(PortfolioItem(
            name=name,
            investment=cell_at(row, INVESTMENT),
            category=cell_at(row, CATEGORY),
            amount=parse_number(cell_at(row, AMOUNT)),
            price=parse_number(cell_at(row, PRICE)),
            currency=cell_at(row, CURRENCY),
            value_cad=value_cad,
            percent=parse_percent(cell_at(row, PERCENT)),
        ))

    logger.debug(
        "portfolio_rows_parsed",
        data_rows=max(len(rows) - 1, 0),
        items=len(items),
        issues=len(issues),
    )
    return PortfolioParseResult(items=items, issues=issues)


def parse_portfolio(rows: Sequence[Sequence[str]]) -> list[PortfolioItem]:
    """Parse the portfolio grid into holdings, silently dropping empty rows."""
    return parse_portfolio_report(rows).items
