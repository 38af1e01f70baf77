"""
Data models for the P&L dashboard.

ORM models are imported here so that ``Base.metadata`` knows every table.
"""

from pnl_dashboard.models.account_settings import AccountSettingsModel
from pnl_dashboard.models.metrics import (
    DailyEntry,
    DrawdownPoint,
    EquityPoint,
    MetricsReport,
    YearlyPnLReport,
    YearStats,
)
from pnl_dashboard.models.pnl import DailyPnLModel

__all__ = [
    "AccountSettingsModel",
    "DailyEntry",
    "DailyPnLModel",
    "DrawdownPoint",
    "EquityPoint",
    "MetricsReport",
    "YearStats",
    "YearlyPnLReport",
]
