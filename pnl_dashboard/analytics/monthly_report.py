"""
Monthly/Yearly P&L Aggregator.

Folds dated P&L into a year x month table and measures each year's intra-year
swing: equity and peak both start from 0 on the year's first entry, so the
drawdown is in currency units and independent of account capital.
"""

from collections.abc import Iterable
from operator import attrgetter

from pnl_dashboard.analytics.drawdown import DrawdownTracker
from pnl_dashboard.models.metrics import DailyEntry, YearlyPnLReport, YearStats


def aggregate_by_year(series: Iterable[DailyEntry]) -> YearlyPnLReport:
    """
    Group P&L by year and 0-based month, with per-year drawdown statistics.

    Args:
        series: Daily entries in any order

    Returns:
        YearlyPnLReport with years most-recent-first

    Example:
        >>> report = aggregate_by_year([
        ...     DailyEntry(date=date(2024, 1, 2), pnl=100.0),
        ...     DailyEntry(date=date(2024, 1, 3), pnl=-40.0),
        ... ])
        >>> report.month_totals[2024][0]
        60.0
    """
    by_year: dict[int, list[DailyEntry]] = {}
    for entry in series:
        by_year.setdefault(entry.date.year, []).append(entry)

    month_totals: dict[int, dict[int, float]] = {}
    year_stats: dict[int, YearStats] = {}

    for year, entries in by_year.items():
        months: dict[int, float] = {}
        for entry in entries:
            month = entry.date.month - 1
            months[month] = months.get(month, 0.0) + entry.pnl
        month_totals[year] = months
        year_stats[year] = _year_stats(sorted(entries, key=attrgetter("date")))

    return YearlyPnLReport(
        years=sorted(by_year, reverse=True),
        month_totals=month_totals,
        year_stats=year_stats,
    )


def _year_stats(ordered: list[DailyEntry]) -> YearStats:
    tracker = DrawdownTracker(starting_peak=0.0)
    equity = 0.0
    for entry in ordered:
        equity += entry.pnl
        tracker.observe(equity)
    summary = tracker.finish()

    return YearStats(
        total=equity,
        max_drawdown=summary.max_drawdown,
        max_drawdown_days=summary.max_days,
    )
