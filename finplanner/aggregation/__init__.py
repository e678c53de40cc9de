"""Monthly aggregation package."""

from finplanner.aggregation.monthly import (
    aggregate_monthly,
    aggregate_monthly_report,
    month_key,
)

__all__ = ["aggregate_monthly", "aggregate_monthly_report", "month_key"]
