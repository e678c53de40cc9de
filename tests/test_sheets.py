"""
Tests for sheet access.

No real API calls: the Google client is replaced with mocks.
"""

from functools import partial
from unittest.mock import MagicMock

import gspread
import pytest
from tenacity import wait_none

from finplanner.services.sheets import (
    GoogleSheetsClient,
    GoogleSheetsFetcher,
    InMemorySheetFetcher,
    SheetAccessError,
    SheetConnectionError,
    SheetNotFoundError,
)


class TestInMemorySheetFetcher:
    """In-memory fetcher used by tests and offline runs."""

    def test_returns_registered_grid(self):
        fetcher = InMemorySheetFetcher()
        fetcher.add_grid("sheet-1", [["a", "b"], ["c"]], cell_range="A:H")
        assert fetcher.fetch_values("sheet-1", "A:H") == [["a", "b"], ["c"]]

    def test_grid_without_range_answers_any_range(self):
        fetcher = InMemorySheetFetcher()
        fetcher.add_grid("sheet-1", [["x"]])
        assert fetcher.fetch_values("sheet-1", "Plan!A1:Z9") == [["x"]]

    def test_exact_range_preferred(self):
        fetcher = InMemorySheetFetcher()
        fetcher.add_grid("sheet-1", [["any"]])
        fetcher.add_grid("sheet-1", [["exact"]], cell_range="A:H")
        assert fetcher.fetch_values("sheet-1", "A:H") == [["exact"]]
        assert fetcher.fetch_values("sheet-1", "A:Z") == [["any"]]

    def test_unknown_sheet(self):
        with pytest.raises(SheetNotFoundError):
            InMemorySheetFetcher().fetch_values("missing", "A:H")

    def test_callers_get_copies(self):
        fetcher = InMemorySheetFetcher()
        fetcher.add_grid("sheet-1", [["a"]])
        fetcher.fetch_values("sheet-1", "A:H")[0].append("mutated")
        assert fetcher.fetch_values("sheet-1", "A:H") == [["a"]]

    def test_not_found_is_access_error(self):
        """Test callers can catch every sheet failure with one type."""
        assert issubclass(SheetNotFoundError, SheetAccessError)
        assert issubclass(SheetConnectionError, SheetAccessError)


class TestGoogleSheetsFetcher:
    """Google Sheets fetcher with a mocked client."""

    @pytest.fixture
    def client(self):
        client = MagicMock(spec=GoogleSheetsClient)
        client.get_spreadsheet.return_value.values_get.return_value = {
            "values": [["Name", "Value"], ["AAPL", 2000], ["Blank", None]],
        }
        return client

    def test_reads_values_as_text(self, client):
        rows = GoogleSheetsFetcher(client).fetch_values("sheet-1", "A:H")

        assert rows == [["Name", "Value"], ["AAPL", "2000"], ["Blank", ""]]
        client.get_spreadsheet.assert_called_once_with("sheet-1")
        client.get_spreadsheet.return_value.values_get.assert_called_once_with("A:H")

    def test_empty_range(self, client):
        client.get_spreadsheet.return_value.values_get.return_value = {"range": "A1:H1"}
        assert GoogleSheetsFetcher(client).fetch_values("sheet-1", "A:H") == []

    def test_api_errors_wrapped_after_retries(self, client):
        """Test a failing Sheets API read is retried, then raised as SheetAccessError."""
        response = MagicMock()
        response.json.return_value = {
            "error": {"code": 403, "message": "denied", "status": "PERMISSION_DENIED"},
        }
        values_get = client.get_spreadsheet.return_value.values_get
        values_get.side_effect = gspread.exceptions.APIError(response)

        fetcher = GoogleSheetsFetcher(client)
        fetcher._read_range = partial(
            GoogleSheetsFetcher._read_range.retry_with(wait=wait_none()), fetcher,
        )

        with pytest.raises(SheetAccessError) as excinfo:
            fetcher.fetch_values("sheet-1", "A:H")

        assert not isinstance(excinfo.value, SheetNotFoundError)
        assert "sheet-1" in str(excinfo.value)
        assert values_get.call_count == 3

    def test_access_errors_propagate(self, client):
        client.get_spreadsheet.side_effect = SheetNotFoundError("Spreadsheet not found: nope")
        with pytest.raises(SheetNotFoundError):
            GoogleSheetsFetcher(client).fetch_values("nope", "A:H")


class TestGoogleSheetsClient:
    """Connection handling with mocked gspread."""

    def test_spreadsheets_are_cached(self, sheets_settings):
        client = GoogleSheetsClient(sheets_settings)
        gc = MagicMock()
        client.connect = MagicMock(return_value=gc)

        first = client.get_spreadsheet("sheet-1")
        second = client.get_spreadsheet("sheet-1")

        assert first is second
        gc.open_by_key.assert_called_once_with("sheet-1")

    def test_missing_spreadsheet(self, sheets_settings):
        client = GoogleSheetsClient(sheets_settings)
        gc = MagicMock()
        gc.open_by_key.side_effect = gspread.SpreadsheetNotFound
        client.connect = MagicMock(return_value=gc)

        with pytest.raises(SheetNotFoundError):
            client.get_spreadsheet("missing")

    def test_bad_credentials_raise_connection_error(self, sheets_settings):
        """Test unreadable credentials surface as SheetConnectionError after retries."""
        client = GoogleSheetsClient(sheets_settings)
        connect = GoogleSheetsClient.connect.retry_with(wait=wait_none())

        with pytest.raises(SheetConnectionError):
            connect(client)

    def test_settings_exposed(self, sheets_settings):
        assert GoogleSheetsClient(sheets_settings).settings is sheets_settings
