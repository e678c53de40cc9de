"""Services package."""

from finplanner.services.sheets import (
    GoogleSheetsClient,
    GoogleSheetsFetcher,
    InMemorySheetFetcher,
    RawGrid,
    SheetAccessError,
    SheetConnectionError,
    SheetFetcherInterface,
    SheetNotFoundError,
)

__all__ = [
    "GoogleSheetsClient",
    "GoogleSheetsFetcher",
    "InMemorySheetFetcher",
    "RawGrid",
    "SheetAccessError",
    "SheetConnectionError",
    "SheetFetcherInterface",
    "SheetNotFoundError",
]
