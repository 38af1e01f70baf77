"""Performance analytics: metrics engine and monthly/yearly aggregation."""

from pnl_dashboard.analytics.metrics import PnLMetricsCalculator, compute_metrics
from pnl_dashboard.analytics.monthly_report import aggregate_by_year

__all__ = [
    "PnLMetricsCalculator",
    "aggregate_by_year",
    "compute_metrics",
]
