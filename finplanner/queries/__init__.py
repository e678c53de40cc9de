"""Dashboard summary package."""

from finplanner.queries.summaries import (
    AllocationSlice,
    CashFlowPoint,
    DashboardSummary,
    NetWorthPoint,
    allocation_by_investment,
    average_monthly_burn,
    build_dashboard_summary,
    cash_flow_series,
    net_worth_series,
    total_portfolio_value,
)

__all__ = [
    "AllocationSlice",
    "CashFlowPoint",
    "DashboardSummary",
    "NetWorthPoint",
    "allocation_by_investment",
    "average_monthly_burn",
    "build_dashboard_summary",
    "cash_flow_series",
    "net_worth_series",
    "total_portfolio_value",
]
