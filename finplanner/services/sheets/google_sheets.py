"""
Google Sheets Fetcher

DESIGN DECISION: The financial plan and the portfolio live in Google
Sheets that the user maintains by hand. We read them with a service
account and the read-only scope; nothing is ever written back.

TRADEOFFS:
- Displayed (formatted) values are read, so numbers arrive as "$2,000.00"
  and are normalized by the parsers
- Merged cells come back as text in the top-left cell only; the header
  resolver rebuilds the merges
"""

from typing import Optional

import gspread
import structlog
from google.oauth2.service_account import Credentials
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from finplanner.config import GoogleSheetsSettings, get_settings
from finplanner.services.sheets.interface import (
    RawGrid,
    SheetAccessError,
    SheetConnectionError,
    SheetFetcherInterface,
    SheetNotFoundError,
)

logger = structlog.get_logger(__name__)

SCOPES = [
    "https://www.googleapis.com/auth/spreadsheets.readonly",
]


class GoogleSheetsClient:
    """
    Low-level Google Sheets client wrapper.

    Handles authentication and caches opened spreadsheets.
    """

    def __init__(self, settings: Optional[GoogleSheetsSettings] = None):
        self._client: Optional[gspread.Client] = None
        self._spreadsheets: dict[str, gspread.Spreadsheet] = {}
        self._settings = settings or get_settings().google_sheets

    @property
    def settings(self) -> GoogleSheetsSettings:
        return self._settings

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        reraise=True,
    )
    def connect(self) -> gspread.Client:
        """
        Establish connection to Google Sheets.

        Uses service account credentials for authentication.
        """
        if self._client is None:
            try:
                credentials = Credentials.from_service_account_file(
                    self._settings.credentials_path,
                    scopes=SCOPES,
                )
                self._client = gspread.authorize(credentials)
            except FileNotFoundError:
                raise SheetConnectionError(
                    f"Google credentials file not found: {self._settings.credentials_path}"
                )
            except Exception as e:
                raise SheetConnectionError(f"Failed to connect to Google Sheets: {e}")

        return self._client

    def get_spreadsheet(self, spreadsheet_id: str) -> gspread.Spreadsheet:
        """Open a spreadsheet by key (cached per id)."""
        if spreadsheet_id not in self._spreadsheets:
            client = self.connect()
            try:
                self._spreadsheets[spreadsheet_id] = client.open_by_key(spreadsheet_id)
            except gspread.SpreadsheetNotFound:
                raise SheetNotFoundError(f"Spreadsheet not found: {spreadsheet_id}")
        return self._spreadsheets[spreadsheet_id]


class GoogleSheetsFetcher(SheetFetcherInterface):
    """
    Google Sheets implementation of the fetcher interface.
    """

    def __init__(self, client: Optional[GoogleSheetsClient] = None):
        self._client = client or GoogleSheetsClient()

    @retry(
        retry=retry_if_exception_type(gspread.exceptions.APIError),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        reraise=True,
    )
    def _read_range(self, spreadsheet_id: str, cell_range: str) -> dict:
        spreadsheet = self._client.get_spreadsheet(spreadsheet_id)
        return spreadsheet.values_get(cell_range)

    def fetch_values(self, spreadsheet_id: str, cell_range: str) -> RawGrid:
        """Read the displayed values of a range as rows of strings."""
        try:
            response = self._read_range(spreadsheet_id, cell_range)
        except SheetAccessError:
            raise
        except gspread.exceptions.APIError as e:
            raise SheetAccessError(
                f"Failed to read {cell_range} from {spreadsheet_id}: {e}"
            )

        rows = response.get("values", [])
        grid = [["" if cell is None else str(cell) for cell in row] for row in rows]

        logger.info(
            "sheet_values_fetched",
            spreadsheet_id=spreadsheet_id,
            cell_range=cell_range,
            rows=len(grid),
        )
        return grid
