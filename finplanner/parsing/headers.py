"""
Header Resolver

The financial plan uses three stacked header rows:

    row 0: category      (Income, Expense, Investment, ...)  - merged cells
    row 1: sub-category  (Basic, Rent, RRSP, ...)            - merged cells
    row 2: metric        (Contribution, Current Value, ...)

The values API only returns text in the top-left cell of a merge, the
rest of the merged range reads as "". Merges are rebuilt by carrying the
last non-empty category and sub-category forward across columns.
"""

from functools import reduce
from typing import Optional, Sequence

from finplanner.models.records import ColumnDescriptor

HEADER_ROW_COUNT = 3


def cell_at(row: Optional[Sequence[str]], index: int) -> str:
    """Read a cell, treating missing trailing cells as empty."""
    if row is None or index >= len(row):
        return ""
    value = row[index]
    return "" if value is None else str(value).strip()


def _fold_column(
    columns: list[ColumnDescriptor],
    cells: tuple[str, str, str],
) -> list[ColumnDescriptor]:
    category, sub_category, metric = cells
    previous = columns[-1] if columns else ColumnDescriptor()
    columns.append(ColumnDescriptor(
        category=category or previous.category,
        sub_category=sub_category or previous.sub_category,
        metric=metric,
    ))
    return columns


def resolve_columns(header_rows: Sequence[Sequence[str]]) -> list[ColumnDescriptor]:
    """
    Build one ColumnDescriptor per column from the three header rows.

    Args:
        header_rows: Category, sub-category and metric rows. Fewer than
            three rows is allowed; the missing ones read as empty.

    Returns:
        Descriptors for every column up to the widest header row.
    """
    rows = [header_rows[i] if i < len(header_rows) else None for i in range(HEADER_ROW_COUNT)]
    width = max((len(row) for row in rows if row is not None), default=0)

    header_cells = (
        (cell_at(rows[0], i), cell_at(rows[1], i), cell_at(rows[2], i))
        for i in range(width)
    )
    return reduce(_fold_column, header_cells, [])
