"""Shared sheet fixtures."""

import pytest

from finplanner.config import GoogleSheetsSettings, get_settings


@pytest.fixture(autouse=True)
def fresh_settings():
    """Settings are cached per process; start every test from the environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def portfolio_grid():
    return [
        ["Name", "Investment", "Category", "Amount", "Price", "Currency", "Value (CAD)", "Percent"],
        ["AAPL", "Stock", "Tech", "10", "$150.00", "USD", "$2,000.00", "50%"],
        ["GOOGL", "Stock", "Tech", "5", "$120.00", "USD", "$1,000.00", "25%"],
        ["XEQT", "ETF", "Equity", "20", "$30.00", "CAD", "$1,000.00", "25%"],
        ["", "", "", "", "", "", "", ""],
        ["Invalid", "", "", "", "", "", "0", ""],
    ]


@pytest.fixture
def financial_grid():
    return [
        ["Date", "Income", "", "Net Income", "Expense", "", "Investment", "", "Cash", "Wealth", "", "Lost Money"],
        ["", "Basic", "Extra", "", "Rent", "Food", "RRSP", "", "Chequing", "Liquid", "Fixed", ""],
        ["", "", "", "", "", "", "Contribution", "Current Value", "", "", "", ""],
        ["01 April 2024", "$2,000.00", "", "1,500", "1,000", "200", "500", "10,000", "3,000", "13,000", "300,000", ""],
        ["15 April 2024", "$2,000.00", "250", "1,750", "", "300", "500", "10,500", "3,500", "14,000", "300,000", "50"],
        ["01 May 2024", "$2,000.00", "", "1,200", "1,000", "250", "500", "11,000", "2,900", "13,900", "301,000", ""],
    ]


@pytest.fixture
def sheets_settings(tmp_path):
    credentials = tmp_path / "service-account.json"
    credentials.write_text("{}")
    return GoogleSheetsSettings(
        credentials_path=str(credentials),
        portfolio_spreadsheet_id="portfolio-sheet",
        financial_spreadsheet_id="financial-sheet",
    )
