"""
Period Bucketing Helpers

Groups daily P&L into weeks and months and reports per-period extremes.

Week numbering:
- "calendar": week index from the ordinal day of the year plus the weekday of
  1 January (Sunday = 0), keyed by calendar year. Week 1 is the partial week
  containing 1 January, so a year can have a week 53 (or 54 in a leap year
  starting on Saturday). This is not ISO-8601.
- "iso": ``date.isocalendar()`` (ISO year, ISO week). Late-December and
  early-January dates may fall into the neighbouring year's bucket.
"""

import math
from collections.abc import Callable, Iterable
from datetime import date
from typing import Literal, NamedTuple

from pnl_dashboard.models.metrics import DailyEntry

WeekNumbering = Literal["calendar", "iso"]


class PeriodExtremes(NamedTuple):
    """Best, worst and mean bucket sum for one period granularity."""

    max_profit: float
    max_loss: float
    average: float


def calendar_week_key(day: date) -> tuple[int, int]:
    """
    Week bucket using the day-of-year formula.

    week = ceil((days_since_jan_1 + weekday_of_jan_1 + 1) / 7), Sunday = 0.

    Example:
        2024-01-01 is a Monday: (0 + 1 + 1) / 7 -> week 1
        2024-01-07 (Sunday):    (6 + 1 + 1) / 7 -> week 2
    """
    jan_first = date(day.year, 1, 1)
    days_elapsed = (day - jan_first).days
    jan_first_weekday = (jan_first.weekday() + 1) % 7
    return day.year, math.ceil((days_elapsed + jan_first_weekday + 1) / 7)


def iso_week_key(day: date) -> tuple[int, int]:
    """ISO-8601 (year, week) bucket."""
    iso_year, iso_week, _ = day.isocalendar()
    return iso_year, iso_week


def month_key(day: date) -> tuple[int, int]:
    """(year, month) bucket with 1-based month."""
    return day.year, day.month


def week_key_function(numbering: WeekNumbering) -> Callable[[date], tuple[int, int]]:
    """Return the week-key function for a numbering scheme."""
    if numbering == "iso":
        return iso_week_key
    return calendar_week_key


def bucket_totals(
    entries: Iterable[DailyEntry],
    key: Callable[[date], tuple[int, int]],
) -> dict[tuple[int, int], float]:
    """Sum P&L per bucket. Buckets appear in first-seen order."""
    totals: dict[tuple[int, int], float] = {}
    for entry in entries:
        bucket = key(entry.date)
        totals[bucket] = totals.get(bucket, 0.0) + entry.pnl
    return totals


def period_extremes(totals: Iterable[float]) -> PeriodExtremes:
    """
    Extremes over bucket sums.

    ``max_profit`` is floored at 0 and ``max_loss`` capped at 0, so a series
    that only ever wins reports a max loss of 0 and vice versa. No buckets
    gives all zeros.
    """
    values = list(totals)
    if not values:
        return PeriodExtremes(0.0, 0.0, 0.0)
    return PeriodExtremes(
        max_profit=max(0.0, max(values)),
        max_loss=min(0.0, min(values)),
        average=sum(values) / len(values),
    )
