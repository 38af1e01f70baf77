"""
P&L Metrics Calculator.

Derives the dashboard's performance metrics from a daily P&L series and the
account's initial capital:
- Equity and drawdown curves (index-aligned with the date-sorted series)
- Profit aggregates (overall, reference day, reference month)
- Win/loss statistics, averages, risk/reward, profit factor, expectancy
- Drawdown maxima and duration, recovery factor, Calmar ratio
- Current and maximum win/loss streaks
- Best/worst day, week and month

The calculation is pure: no I/O, no clock reads, no mutation of the input.
"today" is the caller-supplied ``reference_date``.

A ``pnl`` of exactly 0 is a no-trade day. It contributes a zero-delta point to
the curves but is excluded from win/loss counts, from the active-day
denominator, and it breaks every streak.
"""

import math
from collections.abc import Iterable
from datetime import date
from operator import attrgetter

from pnl_dashboard.analytics.drawdown import DrawdownSummary, DrawdownTracker
from pnl_dashboard.analytics.periods import (
    WeekNumbering,
    bucket_totals,
    month_key,
    period_extremes,
    week_key_function,
)
from pnl_dashboard.models.metrics import (
    DailyEntry,
    DrawdownPoint,
    EquityPoint,
    MetricsReport,
)

TRADING_DAYS_PER_YEAR = 252


def _ratio(numerator: float, denominator: float) -> float:
    """numerator / denominator, with inf for a positive numerator over zero and 0 otherwise."""
    if denominator > 0:
        return numerator / denominator
    if numerator > 0:
        return math.inf
    return 0.0


class PnLMetricsCalculator:
    """Calculate dashboard performance metrics from daily P&L.

    Example:
        calculator = PnLMetricsCalculator()
        report = calculator.calculate(
            series=[DailyEntry(date=date(2024, 1, 2), pnl=100.0)],
            initial_capital=1000.0,
            reference_date=date(2024, 1, 2),
        )
    """

    def __init__(self, week_numbering: WeekNumbering = "calendar"):
        """Initialize metrics calculator.

        Args:
            week_numbering: Week bucketing for weekly extremes ("calendar" or "iso")
        """
        self.week_numbering = week_numbering

    def calculate(
        self,
        series: Iterable[DailyEntry],
        initial_capital: float,
        reference_date: date,
    ) -> MetricsReport:
        """Calculate all metrics.

        Args:
            series: Daily entries in any order, at most one per date
            initial_capital: Equity before the first entry; must be positive
            reference_date: The day treated as "today"

        Returns:
            MetricsReport. An empty series returns the all-zero report.
        """
        ordered = sorted(series, key=attrgetter("date"))
        if not ordered:
            return MetricsReport()

        equity_curve = self._build_equity_curve(ordered, initial_capital)
        drawdown_curve, drawdown = self._track_drawdown(equity_curve, initial_capital)

        current_equity = equity_curve[-1].equity
        overall_profit = current_equity - initial_capital
        overall_profit_percent = self._percent_of(overall_profit, initial_capital)

        # Reference day and month
        today_profit = sum(e.pnl for e in ordered if e.date == reference_date)
        month_entries = [
            e
            for e in ordered
            if e.date.year == reference_date.year and e.date.month == reference_date.month
        ]
        current_month_profit = sum(e.pnl for e in month_entries)
        current_month_win_days = sum(1 for e in month_entries if e.pnl > 0)

        # Win / loss partition
        wins = [e.pnl for e in ordered if e.pnl > 0]
        losses = [e.pnl for e in ordered if e.pnl < 0]
        active_days = len(wins) + len(losses)
        win_rate = len(wins) / active_days * 100 if active_days else 0.0

        total_win_amount = sum(wins)
        total_loss_amount = abs(sum(losses))

        avg_daily_profit = overall_profit / active_days if active_days else 0.0
        avg_win = total_win_amount / len(wins) if wins else 0.0
        avg_loss = total_loss_amount / len(losses) if losses else 0.0

        expectancy = (
            (win_rate / 100) * avg_win - ((100 - win_rate) / 100) * avg_loss
            if active_days
            else 0.0
        )

        annualized_return_percent = (
            overall_profit_percent / active_days * TRADING_DAYS_PER_YEAR if active_days else 0.0
        )
        calmar_ratio = (
            annualized_return_percent / drawdown.max_drawdown_percent
            if drawdown.max_drawdown_percent > 0
            else 0.0
        )

        current_drawdown = drawdown.peak - current_equity
        max_win_streak, max_losing_streak = self._calculate_max_streaks(ordered)

        day_pnls = [e.pnl for e in ordered]
        weeks = period_extremes(
            bucket_totals(ordered, week_key_function(self.week_numbering)).values()
        )
        months = period_extremes(bucket_totals(ordered, month_key).values())

        return MetricsReport(
            equity_curve=equity_curve,
            drawdown_curve=drawdown_curve,
            current_equity=current_equity,
            peak_equity=drawdown.peak,
            overall_profit=overall_profit,
            overall_profit_percent=overall_profit_percent,
            today_profit=today_profit,
            today_profit_percent=self._percent_of(today_profit, initial_capital),
            current_month_profit=current_month_profit,
            current_month_profit_percent=self._percent_of(current_month_profit, initial_capital),
            total_win_days=len(wins),
            total_loss_days=len(losses),
            total_no_trade_days=len(ordered) - active_days,
            total_active_days=active_days,
            current_month_win_days=current_month_win_days,
            win_rate=win_rate,
            total_win_amount=total_win_amount,
            total_loss_amount=total_loss_amount,
            avg_daily_profit=avg_daily_profit,
            avg_daily_profit_percent=self._percent_of(avg_daily_profit, initial_capital),
            avg_win=avg_win,
            avg_win_percent=self._percent_of(avg_win, initial_capital),
            avg_loss=avg_loss,
            avg_loss_percent=self._percent_of(avg_loss, initial_capital),
            risk_reward_ratio=_ratio(avg_win, avg_loss),
            profit_factor=_ratio(total_win_amount, total_loss_amount),
            expectancy=expectancy,
            expectancy_percent=self._percent_of(expectancy, initial_capital),
            current_drawdown=current_drawdown,
            current_drawdown_percent=(
                current_drawdown / drawdown.peak * 100 if drawdown.peak > 0 else 0.0
            ),
            max_drawdown=drawdown.max_drawdown,
            max_drawdown_percent=drawdown.max_drawdown_percent,
            current_days_in_drawdown=drawdown.current_days,
            max_days_in_drawdown=drawdown.max_days,
            recovery_factor=_ratio(overall_profit, drawdown.max_drawdown),
            annualized_return_percent=annualized_return_percent,
            calmar_ratio=calmar_ratio,
            current_streak=self._calculate_current_streak(ordered),
            max_win_streak=max_win_streak,
            max_losing_streak=max_losing_streak,
            max_profit_day=max(0.0, max(day_pnls)),
            max_loss_day=min(0.0, min(day_pnls)),
            max_profit_week=weeks.max_profit,
            max_loss_week=weeks.max_loss,
            avg_profit_week=weeks.average,
            max_profit_month=months.max_profit,
            max_loss_month=months.max_loss,
            avg_profit_month=months.average,
        )

    def _build_equity_curve(
        self, ordered: list[DailyEntry], initial_capital: float
    ) -> list[EquityPoint]:
        """Running equity: initial capital plus cumulative P&L through each date."""
        equity = initial_capital
        curve = []
        for entry in ordered:
            equity += entry.pnl
            curve.append(
                EquityPoint(
                    date=entry.date,
                    equity=equity,
                    pnl=entry.pnl,
                    percent_change=self._percent_of(equity - initial_capital, initial_capital),
                )
            )
        return curve

    def _track_drawdown(
        self, equity_curve: list[EquityPoint], initial_capital: float
    ) -> tuple[list[DrawdownPoint], DrawdownSummary]:
        """Second pass over the equity curve; peak starts at initial capital."""
        tracker = DrawdownTracker(starting_peak=initial_capital)
        curve = []
        for point in equity_curve:
            observation = tracker.observe(point.equity)
            curve.append(
                DrawdownPoint(
                    date=point.date,
                    drawdown=observation.drawdown,
                    drawdown_percent=observation.drawdown_percent,
                )
            )
        return curve, tracker.finish()

    def _calculate_current_streak(self, ordered: list[DailyEntry]) -> int:
        """Signed run length ending at the most recent entry.

        Walks backward from the latest entry; stops at the first sign change or
        no-trade day. A no-trade latest entry gives 0.

        Example:
            pnls [+, -, +, +] -> 2
            pnls [+, -, -]    -> -2
            pnls [+, +, 0]    -> 0
        """
        streak = 0
        for entry in reversed(ordered):
            if entry.pnl > 0 and streak >= 0:
                streak += 1
            elif entry.pnl < 0 and streak <= 0:
                streak -= 1
            else:
                break
        return streak

    def _calculate_max_streaks(self, ordered: list[DailyEntry]) -> tuple[int, int]:
        """Longest consecutive win and loss runs; a no-trade day resets both."""
        max_wins = max_losses = 0
        wins = losses = 0
        for entry in ordered:
            if entry.pnl > 0:
                wins += 1
                losses = 0
                max_wins = max(max_wins, wins)
            elif entry.pnl < 0:
                losses += 1
                wins = 0
                max_losses = max(max_losses, losses)
            else:
                wins = losses = 0
        return max_wins, max_losses

    @staticmethod
    def _percent_of(value: float, initial_capital: float) -> float:
        return value / initial_capital * 100


def compute_metrics(
    series: Iterable[DailyEntry],
    initial_capital: float,
    reference_date: date,
    week_numbering: WeekNumbering = "calendar",
) -> MetricsReport:
    """
    Calculate the full metrics report.

    Convenience wrapper around ``PnLMetricsCalculator.calculate``.
    """
    return PnLMetricsCalculator(week_numbering=week_numbering).calculate(
        series=series,
        initial_capital=initial_capital,
        reference_date=reference_date,
    )
