"""Sheet parsing package."""

from finplanner.parsing.classification import CATEGORY_PRECEDENCE, classify_category
from finplanner.parsing.financial import parse_financials, parse_financials_report
from finplanner.parsing.headers import resolve_columns
from finplanner.parsing.numeric import parse_number, parse_percent, try_parse_number
from finplanner.parsing.portfolio import parse_portfolio, parse_portfolio_report

__all__ = [
    "CATEGORY_PRECEDENCE",
    "classify_category",
    "parse_financials",
    "parse_financials_report",
    "parse_number",
    "parse_percent",
    "parse_portfolio",
    "parse_portfolio_report",
    "resolve_columns",
    "try_parse_number",
]
