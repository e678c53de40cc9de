"""
Category classification for financial plan columns.

Header text is matched case-insensitively by substring, in this order
(first match wins):

    1. "net income"  -> NET_INCOME
    2. "income"      -> INCOME
    3. "expense"     -> EXPENSE
    4. "investment"  -> INVESTMENT
    5. "cash"        -> CASH
    6. "wealth"      -> WEALTH
    7. "lost"        -> LOST_MONEY
    otherwise        -> UNKNOWN

"net income" has to come before "income", it would be shadowed otherwise.
"""

from enum import Enum

from finplanner.models.records import CategoryKind


CATEGORY_PRECEDENCE: tuple[tuple[str, CategoryKind], ...] = (
    ("net income", CategoryKind.NET_INCOME),
    ("income", CategoryKind.INCOME),
    ("expense", CategoryKind.EXPENSE),
    ("investment", CategoryKind.INVESTMENT),
    ("cash", CategoryKind.CASH),
    ("wealth", CategoryKind.WEALTH),
    ("lost", CategoryKind.LOST_MONEY),
)


def classify_category(category: str) -> CategoryKind:
    """Map free-form category header text to a CategoryKind."""
    text = category.lower()
    for needle, kind in CATEGORY_PRECEDENCE:
        if needle in text:
            return kind
    return CategoryKind.UNKNOWN


class IncomeKind(str, Enum):
    """Which income field a sub-category feeds."""
    BASIC = "basic"
    EXTRA = "extra"
    NET = "net"
    UNKNOWN = "unknown"


def classify_income(sub_category: str) -> IncomeKind:
    text = sub_category.lower()
    if "basic" in text:
        return IncomeKind.BASIC
    if "extra" in text:
        return IncomeKind.EXTRA
    if "net" in text:
        return IncomeKind.NET
    return IncomeKind.UNKNOWN


class InvestmentMetric(str, Enum):
    """Which value of an investment account a column holds."""
    CONTRIBUTION = "contribution"
    CURRENT_VALUE = "current_value"
    UNKNOWN = "unknown"


def classify_investment_metric(metric: str) -> InvestmentMetric:
    text = metric.lower()
    if "contribution" in text:
        return InvestmentMetric.CONTRIBUTION
    if "current" in text or "value" in text:
        return InvestmentMetric.CURRENT_VALUE
    return InvestmentMetric.UNKNOWN


class WealthKind(str, Enum):
    LIQUID = "liquid"
    FIXED = "fixed"
    UNKNOWN = "unknown"


def classify_wealth(sub_category: str) -> WealthKind:
    text = sub_category.lower()
    if "liquid" in text:
        return WealthKind.LIQUID
    if "fixed" in text:
        return WealthKind.FIXED
    return WealthKind.UNKNOWN
