"""
Metrics Engine

Pure transformation from (entries, goals, reference date) to
(aggregates, classifications):
- Window calculation (fiscal YTD, MTD, rolling 30, WTD)
- Aggregation of entries per window
- NSLI ratio and tier classification
- What-if calculators
- Dashboard snapshot generation
"""

from .windows import (
    fiscal_year_range,
    month_to_date_range,
    rolling_30_range,
    week_to_date_range,
    compute_windows
)
from .calculator import (
    aggregate_entries,
    as_entry,
    net_sales,
    nsli_ratio,
    daily_target,
    scenario,
    ScenarioResult
)
from .tiers import classify
from .dashboard import DashboardData, StatCard, generate_dashboard, format_summary

__all__ = [
    "fiscal_year_range",
    "month_to_date_range",
    "rolling_30_range",
    "week_to_date_range",
    "compute_windows",
    "aggregate_entries",
    "as_entry",
    "net_sales",
    "nsli_ratio",
    "daily_target",
    "scenario",
    "ScenarioResult",
    "classify",
    "DashboardData",
    "StatCard",
    "generate_dashboard",
    "format_summary"
]
