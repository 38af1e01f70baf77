"""
Drawdown Tracker

Two-state machine shared by the metrics engine (capital-relative drawdown) and
the yearly aggregator (intra-year swing from zero).

States:
- OUT_OF_DRAWDOWN: equity is at or above every earlier peak.
- IN_DRAWDOWN: equity fell strictly below the running peak and has not yet set
  a new one.

Transitions, evaluated once per observed equity value:
- OUT -> IN when equity < peak.
- IN -> OUT when equity > peak (a new peak). The finished drawdown's day count
  is committed to ``max_days`` and the counter resets.
- While IN, every observation (including one that touches the old peak without
  exceeding it) adds one day.

``finish()`` commits a drawdown still open at the end of the series.
"""

from dataclasses import dataclass
from enum import StrEnum


class DrawdownState(StrEnum):
    """Drawdown-duration state."""

    OUT_OF_DRAWDOWN = "out_of_drawdown"
    IN_DRAWDOWN = "in_drawdown"


@dataclass(frozen=True)
class DrawdownObservation:
    """Drawdown at a single point, measured against the peak including that point."""

    peak: float
    drawdown: float
    drawdown_percent: float


@dataclass(frozen=True)
class DrawdownSummary:
    """Final state of a tracker after ``finish()``."""

    peak: float
    max_drawdown: float
    max_drawdown_percent: float
    max_days: int
    current_days: int
    in_drawdown: bool


class DrawdownTracker:
    """
    Running peak, drawdown maxima and drawdown duration over an equity series.

    Example:
        >>> tracker = DrawdownTracker(starting_peak=1000.0)
        >>> tracker.observe(1100.0).drawdown
        0.0
        >>> tracker.observe(1050.0).drawdown
        50.0
        >>> tracker.finish().max_days
        1
    """

    def __init__(self, starting_peak: float) -> None:
        """
        Args:
            starting_peak: Peak before the first observation (initial capital, or 0
                for intra-year swings).
        """
        self._peak = starting_peak
        self._state = DrawdownState.OUT_OF_DRAWDOWN
        self._current_days = 0
        self._max_days = 0
        self._max_drawdown = 0.0
        self._max_drawdown_percent = 0.0

    @property
    def state(self) -> DrawdownState:
        return self._state

    @property
    def peak(self) -> float:
        return self._peak

    def observe(self, equity: float) -> DrawdownObservation:
        """
        Feed the next equity value in date order.

        The peak is updated before the drawdown is measured, so a point that sets
        a new peak has zero drawdown.
        """
        if equity > self._peak:
            self._peak = equity
            if self._state is DrawdownState.IN_DRAWDOWN:
                self._commit()
                self._state = DrawdownState.OUT_OF_DRAWDOWN
        elif equity < self._peak and self._state is DrawdownState.OUT_OF_DRAWDOWN:
            self._state = DrawdownState.IN_DRAWDOWN

        if self._state is DrawdownState.IN_DRAWDOWN:
            self._current_days += 1

        drawdown = self._peak - equity
        drawdown_percent = drawdown / self._peak * 100 if self._peak > 0 else 0.0

        # percent is reported at the point of the deepest dollar drawdown
        if drawdown > self._max_drawdown:
            self._max_drawdown = drawdown
            self._max_drawdown_percent = drawdown_percent

        return DrawdownObservation(
            peak=self._peak,
            drawdown=drawdown,
            drawdown_percent=drawdown_percent,
        )

    def finish(self) -> DrawdownSummary:
        """Flush an open drawdown into ``max_days`` and return the summary."""
        in_drawdown = self._state is DrawdownState.IN_DRAWDOWN
        if in_drawdown:
            self._max_days = max(self._max_days, self._current_days)

        return DrawdownSummary(
            peak=self._peak,
            max_drawdown=self._max_drawdown,
            max_drawdown_percent=self._max_drawdown_percent,
            max_days=self._max_days,
            current_days=self._current_days if in_drawdown else 0,
            in_drawdown=in_drawdown,
        )

    def _commit(self) -> None:
        self._max_days = max(self._max_days, self._current_days)
        self._current_days = 0
