"""
Performance Metrics Data Models

Purpose:
--------
Pydantic models for the input and output of the metrics engine and the
monthly/yearly aggregator. These are derived values only: nothing here is
persisted, and every field is recomputed from the daily P&L series and the
account's initial capital.

Numeric semantics:
------------------
- Monetary values and percentages are floats.
- Ratios with a zero denominator and a positive numerator are ``float("inf")``.
  JSON serialization renders infinity as the string ``"Infinity"``; Python
  ``model_dump()`` keeps the float.
"""

import datetime as dt
import math

from pydantic import BaseModel, ConfigDict, Field, field_serializer


class DailyEntry(BaseModel):
    """One day of P&L. ``pnl == 0`` marks a no-trade day."""

    model_config = ConfigDict(frozen=True)

    date: dt.date
    pnl: float


class EquityPoint(BaseModel):
    """Account equity after a day's P&L is applied."""

    model_config = ConfigDict(frozen=True)

    date: dt.date
    equity: float
    pnl: float
    percent_change: float = Field(description="Equity change vs initial capital, in percent")


class DrawdownPoint(BaseModel):
    """Shortfall of equity below the running peak on a given day."""

    model_config = ConfigDict(frozen=True)

    date: dt.date
    drawdown: float = Field(ge=0)
    drawdown_percent: float = Field(ge=0)


class MetricsReport(BaseModel):
    """
    Full set of performance metrics for one account.

    The default instance is the canonical empty report: every scalar is 0 and
    every curve is empty.
    """

    model_config = ConfigDict(frozen=True)

    # Curves (index-aligned with the date-sorted input)
    equity_curve: list[EquityPoint] = Field(default_factory=list)
    drawdown_curve: list[DrawdownPoint] = Field(default_factory=list)

    # Equity
    current_equity: float = 0.0
    peak_equity: float = 0.0

    # Profit
    overall_profit: float = 0.0
    overall_profit_percent: float = 0.0
    today_profit: float = 0.0
    today_profit_percent: float = 0.0
    current_month_profit: float = 0.0
    current_month_profit_percent: float = 0.0

    # Win / loss
    total_win_days: int = 0
    total_loss_days: int = 0
    total_no_trade_days: int = 0
    total_active_days: int = 0
    current_month_win_days: int = 0
    win_rate: float = 0.0
    total_win_amount: float = 0.0
    total_loss_amount: float = 0.0

    # Averages
    avg_daily_profit: float = 0.0
    avg_daily_profit_percent: float = 0.0
    avg_win: float = 0.0
    avg_win_percent: float = 0.0
    avg_loss: float = 0.0
    avg_loss_percent: float = 0.0

    # Risk
    risk_reward_ratio: float = 0.0
    profit_factor: float = 0.0
    expectancy: float = 0.0
    expectancy_percent: float = 0.0

    # Drawdown
    current_drawdown: float = 0.0
    current_drawdown_percent: float = 0.0
    max_drawdown: float = 0.0
    max_drawdown_percent: float = 0.0
    current_days_in_drawdown: int = 0
    max_days_in_drawdown: int = 0

    # Advanced ratios
    recovery_factor: float = 0.0
    annualized_return_percent: float = 0.0
    calmar_ratio: float = 0.0

    # Streaks
    current_streak: int = Field(default=0, description="Positive for wins, negative for losses")
    max_win_streak: int = 0
    max_losing_streak: int = 0

    # Extremes
    max_profit_day: float = 0.0
    max_loss_day: float = 0.0
    max_profit_week: float = 0.0
    max_loss_week: float = 0.0
    avg_profit_week: float = 0.0
    max_profit_month: float = 0.0
    max_loss_month: float = 0.0
    avg_profit_month: float = 0.0

    @field_serializer("risk_reward_ratio", "profit_factor", "recovery_factor", when_used="json")
    def serialize_ratio(self, value: float) -> float | str:
        """Serialize unbounded ratios as "Infinity" (JSON has no infinity literal)."""
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        return value

    def without_no_trade_days(self) -> "MetricsReport":
        """
        Copy of this report with zero-P&L points dropped from both curves.

        This is the display view used by the dashboard charts; scalar metrics are
        unchanged.
        """
        kept = [i for i, point in enumerate(self.equity_curve) if point.pnl != 0]
        return self.model_copy(
            update={
                "equity_curve": [self.equity_curve[i] for i in kept],
                "drawdown_curve": [self.drawdown_curve[i] for i in kept],
            }
        )


class YearStats(BaseModel):
    """Intra-year swing statistics (equity measured from 0 at the start of the year)."""

    model_config = ConfigDict(frozen=True)

    total: float = 0.0
    max_drawdown: float = 0.0
    max_drawdown_days: int = 0


class YearlyPnLReport(BaseModel):
    """
    Monthly P&L table grouped by year.

    ``month_totals[year][month]`` uses 0-based months (0 = January); months
    without entries are absent and read as 0.
    """

    model_config = ConfigDict(frozen=True)

    years: list[int] = Field(default_factory=list, description="Most recent year first")
    month_totals: dict[int, dict[int, float]] = Field(default_factory=dict)
    year_stats: dict[int, YearStats] = Field(default_factory=dict)
