"""
Sheet Access Package

Abstract fetcher interface plus the Google Sheets and in-memory
implementations.
"""

from finplanner.services.sheets.interface import (
    InMemorySheetFetcher,
    RawGrid,
    SheetAccessError,
    SheetConnectionError,
    SheetFetcherInterface,
    SheetNotFoundError,
)
from finplanner.services.sheets.google_sheets import (
    GoogleSheetsClient,
    GoogleSheetsFetcher,
)

__all__ = [
    # Interface
    "RawGrid",
    "SheetFetcherInterface",
    "InMemorySheetFetcher",
    # Exceptions
    "SheetAccessError",
    "SheetConnectionError",
    "SheetNotFoundError",
    # Google Sheets implementation
    "GoogleSheetsClient",
    "GoogleSheetsFetcher",
]
