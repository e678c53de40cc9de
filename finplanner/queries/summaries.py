"""
Dashboard Summaries

DESIGN DECISION: Summary numbers are computed DETERMINISTICALLY here from
parsed records. Presentation code and the AI summarizer read these
results; neither re-derives totals from the raw sheet.

Inputs are the portfolio items and the MONTHLY records (already
aggregated). Nothing here mutates its inputs.
"""

from typing import Sequence

from pydantic import BaseModel, Field

from finplanner.models.records import FinancialRecord, PortfolioItem


class AllocationSlice(BaseModel):
    """Total CAD value held in one investment type."""
    name: str
    value: float


class CashFlowPoint(BaseModel):
    """Income versus spending for one month."""
    label: str
    income: float
    expenses: float
    savings: float


class NetWorthPoint(BaseModel):
    """Liquid and fixed wealth at the end of one month."""
    label: str
    liquid: float
    fixed: float
    total: float


class DashboardSummary(BaseModel):
    """Everything the dashboard shows, in one result."""
    net_worth: float = Field(
        default=0.0,
        description="Wealth total of the latest month"
    )
    portfolio_value: float = 0.0
    average_monthly_burn: float = 0.0
    allocation: list[AllocationSlice] = Field(default_factory=list)
    cash_flow: list[CashFlowPoint] = Field(default_factory=list)
    net_worth_history: list[NetWorthPoint] = Field(default_factory=list)


def allocation_by_investment(items: Sequence[PortfolioItem]) -> list[AllocationSlice]:
    """Sum value_cad per investment type, largest first."""
    totals: dict[str, float] = {}
    for item in items:
        totals[item.investment] = totals.get(item.investment, 0.0) + item.value_cad

    slices = [AllocationSlice(name=name, value=value) for name, value in totals.items()]
    slices.sort(key=lambda s: s.value, reverse=True)
    return slices


def total_portfolio_value(items: Sequence[PortfolioItem]) -> float:
    return sum(item.value_cad for item in items)


def cash_flow_series(months: Sequence[FinancialRecord]) -> list[CashFlowPoint]:
    """
    Income (basic + extra), total expenses and net income per month.

    Savings is the sheet's own net income figure, not income - expenses.
    """
    return [
        CashFlowPoint(
            label=month.date,
            income=month.total_income,
            expenses=month.total_expenses,
            savings=month.net_income,
        )
        for month in months
    ]


def net_worth_series(months: Sequence[FinancialRecord]) -> list[NetWorthPoint]:
    return [
        NetWorthPoint(
            label=month.date,
            liquid=month.wealth.liquid,
            fixed=month.wealth.fixed,
            total=month.wealth.total,
        )
        for month in months
    ]


def average_monthly_burn(months: Sequence[FinancialRecord]) -> float:
    """Mean total expenses per month; 0.0 when there are no months."""
    if not months:
        return 0.0
    return sum(month.total_expenses for month in months) / len(months)


def build_dashboard_summary(
    items: Sequence[PortfolioItem],
    months: Sequence[FinancialRecord],
) -> DashboardSummary:
    """Compute all dashboard figures from parsed data."""
    history = net_worth_series(months)
    return DashboardSummary(
        net_worth=history[-1].total if history else 0.0,
        portfolio_value=total_portfolio_value(items),
        average_monthly_burn=average_monthly_burn(months),
        allocation=allocation_by_investment(items),
        cash_flow=cash_flow_series(months),
        net_worth_history=history,
    )
