"""
Core Data Models for Financial Planner

These models define the schemas for everything the parsers produce.
They are designed to:
1. Give weakly-typed sheet cells a strict, typed shape
2. Keep the camelCase field names downstream consumers read
   (valueCAD, incomeBasic, currentValue, ...) as serialization aliases
3. Carry parse diagnostics alongside the data, never instead of it

DESIGN DECISION: Python attributes are snake_case. The dashboard and
summarization consumers address fields by their camelCase names, so every
model dumps with `model_dump(by_alias=True)` to that stable contract.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class CategoryKind(str, Enum):
    """
    Recognized top-level categories of the financial plan header.

    DESIGN DECISION: Header text is free-form, so it is classified once
    into this closed set. Routing then switches on the kind instead of
    re-matching substrings at every cell.
    """
    INCOME = "income"
    EXPENSE = "expense"
    NET_INCOME = "net_income"
    INVESTMENT = "investment"
    CASH = "cash"
    WEALTH = "wealth"
    LOST_MONEY = "lost_money"
    UNKNOWN = "unknown"  # Ignored by the parser


class IssueSeverity(str, Enum):
    """Severity of a parse issue."""
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


# =============================================================================
# SHEET STRUCTURE
# =============================================================================

class ColumnDescriptor(BaseModel):
    """
    Resolved meaning of one column of the financial plan.

    Built from the three header rows: category and sub-category are
    forward-filled across merged-cell gaps, metric is per column.
    """
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    category: str = ""
    sub_category: str = ""
    metric: str = ""


# =============================================================================
# PORTFOLIO
# =============================================================================

class PortfolioItem(BaseModel):
    """
    One holding from the portfolio sheet.

    Only created for rows with a name and a positive CAD value.
    """
    model_config = ConfigDict(
        frozen=True,
        str_strip_whitespace=True,
        populate_by_name=True,
    )

    name: str = Field(..., min_length=1)
    investment: str = ""
    category: str = ""
    amount: float = 0.0
    price: float = 0.0
    currency: str = ""
    value_cad: float = Field(
        ...,
        gt=0,
        alias="valueCAD",
        description="Position value converted to CAD"
    )
    percent: float = Field(
        default=0.0,
        description="Share of the portfolio on a 0-1 scale"
    )


# =============================================================================
# FINANCIAL PLAN
# =============================================================================

class InvestmentPosition(BaseModel):
    """Contribution (flow) and current value (snapshot) of one account."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    contribution: float = 0.0
    current_value: float = 0.0


class Wealth(BaseModel):
    """Net worth split into liquid and fixed assets."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    liquid: float = 0.0
    fixed: float = 0.0

    @property
    def total(self) -> float:
        return self.liquid + self.fixed


class FinancialRecord(BaseModel):
    """
    One dated row of the financial plan.

    `date` is the literal source text (e.g. "15 April 2024"); it is not
    parsed here. Map-shaped fields are keyed by the sub-category text of
    the sheet (expense name, account type, cash account).
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    date: str
    income_basic: float = 0.0
    income_extra: float = 0.0
    expenses: dict[str, float] = Field(default_factory=dict)
    net_income: float = 0.0
    investments: dict[str, InvestmentPosition] = Field(default_factory=dict)
    cash: dict[str, float] = Field(default_factory=dict)
    wealth: Wealth = Field(default_factory=Wealth)
    lost_money: float = 0.0

    @property
    def total_income(self) -> float:
        return self.income_basic + self.income_extra

    @property
    def total_expenses(self) -> float:
        return sum(self.expenses.values())

    def to_contract_dict(self) -> dict:
        """Dump with the camelCase names consumers rely on."""
        return self.model_dump(by_alias=True)


class AggregatedRecord(FinancialRecord):
    """
    A month of financial records merged together.

    Same shape as FinancialRecord; `date` holds the "Month Year" label.
    Flows are summed across the month, snapshots (cash, wealth,
    investment current values) come from the last record of the month.
    """


# =============================================================================
# DIAGNOSTICS
# =============================================================================

class ParseIssue(BaseModel):
    """A single problem noticed while parsing or aggregating."""

    row: Optional[int] = Field(
        default=None,
        description="0-based grid row (or record index for aggregation)"
    )
    column: Optional[int] = Field(
        default=None,
        description="0-based grid column"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'non_numeric', 'missing_date', 'out_of_order')"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )
    severity: IssueSeverity = IssueSeverity.WARNING

    @property
    def location(self) -> str:
        parts = []
        if self.row is not None:
            parts.append(f"row {self.row + 1}")
        if self.column is not None:
            parts.append(f"column {self.column + 1}")
        return ", ".join(parts)


class ParseOutcome(BaseModel):
    """Base for results that carry data plus the issues found producing it."""

    issues: list[ParseIssue] = Field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        return any(issue.severity == IssueSeverity.ERROR for issue in self.issues)

    @property
    def warning_count(self) -> int:
        return sum(1 for issue in self.issues if issue.severity == IssueSeverity.WARNING)


class PortfolioParseResult(ParseOutcome):
    items: list[PortfolioItem] = Field(default_factory=list)


class FinancialParseResult(ParseOutcome):
    records: list[FinancialRecord] = Field(default_factory=list)
    columns: list[ColumnDescriptor] = Field(default_factory=list)


class AggregationResult(ParseOutcome):
    records: list[AggregatedRecord] = Field(default_factory=list)
