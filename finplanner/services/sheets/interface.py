"""
Abstract Sheet Access Interface

DESIGN DECISION: Parsers never talk to Google directly. They receive a
grid of strings from a fetcher behind this interface. This allows us to:
1. Use in-memory grids for testing
2. Swap the Sheets API for CSV/Excel exports later
3. Keep parsing pure and free of network concerns

The interface is intentionally tiny: one read of one range.
"""

from abc import ABC, abstractmethod
from typing import Optional, Sequence

RawGrid = list[list[str]]


class SheetFetcherInterface(ABC):
    """
    Abstract interface for reading cell values from a spreadsheet.
    """

    @abstractmethod
    def fetch_values(self, spreadsheet_id: str, cell_range: str) -> RawGrid:
        """
        Read the displayed values of a range.

        Args:
            spreadsheet_id: The spreadsheet's identifier
            cell_range: A1 notation range, e.g. "A:H" or "Plan!A1:Z500"

        Returns:
            Rows of cell text. Rows may be ragged; trailing empty
            cells are usually omitted by the source.

        Raises:
            SheetNotFoundError: If the spreadsheet does not exist
            SheetAccessError: If the read fails
        """
        pass


class InMemorySheetFetcher(SheetFetcherInterface):
    """
    Fetcher backed by grids held in memory.

    Grids are registered per (spreadsheet_id, cell_range); a grid
    registered with cell_range=None answers any range of that spreadsheet.
    """

    def __init__(self):
        self._grids: dict[tuple[str, Optional[str]], RawGrid] = {}

    def add_grid(
        self,
        spreadsheet_id: str,
        rows: Sequence[Sequence[str]],
        cell_range: Optional[str] = None,
    ) -> None:
        self._grids[(spreadsheet_id, cell_range)] = [list(row) for row in rows]

    def fetch_values(self, spreadsheet_id: str, cell_range: str) -> RawGrid:
        grid = self._grids.get((spreadsheet_id, cell_range))
        if grid is None:
            grid = self._grids.get((spreadsheet_id, None))
        if grid is None:
            raise SheetNotFoundError(f"Spreadsheet not found: {spreadsheet_id}")
        # Callers get their own copy
        return [list(row) for row in grid]


class SheetAccessError(Exception):
    """Base exception for sheet access."""
    pass


class SheetNotFoundError(SheetAccessError):
    """Spreadsheet or range does not exist."""
    pass


class SheetConnectionError(SheetAccessError):
    """Could not authenticate or reach the sheet backend."""
    pass
