"""
Unit tests for the P&L metrics calculator.

Covers the equity/drawdown curves, the drawdown-duration state machine
(including the open-drawdown flush at the end of the series), win/loss
statistics, streaks, unbounded ratios and period extremes.
"""

import math
from datetime import date, timedelta

import pytest

from pnl_dashboard.analytics import PnLMetricsCalculator, compute_metrics
from pnl_dashboard.models.metrics import DailyEntry, MetricsReport


def _series(*pnls: float, start: date = date(2024, 1, 2)) -> list[DailyEntry]:
    """Consecutive calendar days starting at ``start``."""
    return [DailyEntry(date=start + timedelta(days=i), pnl=pnl) for i, pnl in enumerate(pnls)]


class TestEmptySeries:
    def test_empty_series_returns_zero_report(self):
        report = compute_metrics([], initial_capital=1000.0, reference_date=date(2024, 1, 2))

        assert report == MetricsReport()
        assert report.equity_curve == []
        assert report.drawdown_curve == []

    def test_every_scalar_is_zero(self):
        report = compute_metrics([], initial_capital=1000.0, reference_date=date(2024, 1, 2))

        for name, value in report.model_dump().items():
            if isinstance(value, list):
                assert value == [], name
            else:
                assert value == 0, name


class TestBasicScenario:
    """[+100, -50, +100] on 1000 capital."""

    @pytest.fixture
    def report(self) -> MetricsReport:
        return compute_metrics(
            _series(100.0, -50.0, 100.0),
            initial_capital=1000.0,
            reference_date=date(2024, 1, 4),
        )

    def test_equity_curve(self, report):
        assert [p.equity for p in report.equity_curve] == [1100.0, 1050.0, 1150.0]
        assert [p.pnl for p in report.equity_curve] == [100.0, -50.0, 100.0]
        assert [p.percent_change for p in report.equity_curve] == pytest.approx([10.0, 5.0, 15.0])

    def test_drawdown_curve(self, report):
        assert [p.drawdown for p in report.drawdown_curve] == [0.0, 50.0, 0.0]
        assert report.drawdown_curve[1].drawdown_percent == pytest.approx(50 / 1100 * 100)

    def test_profit(self, report):
        assert report.overall_profit == 150.0
        assert report.overall_profit_percent == pytest.approx(15.0)
        assert report.current_equity == 1150.0
        assert report.peak_equity == 1150.0

    def test_win_loss_statistics(self, report):
        assert report.total_win_days == 2
        assert report.total_loss_days == 1
        assert report.total_no_trade_days == 0
        assert report.total_active_days == 3
        assert report.win_rate == pytest.approx(66.67, abs=0.01)
        assert report.avg_win == 100.0
        assert report.avg_loss == 50.0
        assert report.risk_reward_ratio == pytest.approx(2.0)
        assert report.profit_factor == pytest.approx(4.0)
        assert report.expectancy == pytest.approx(50.0)
        assert report.avg_daily_profit == pytest.approx(50.0)

    def test_drawdown_statistics(self, report):
        assert report.max_drawdown == 50.0
        assert report.max_drawdown_percent == pytest.approx(50 / 1100 * 100)
        assert report.max_days_in_drawdown == 1
        assert report.current_days_in_drawdown == 0
        assert report.current_drawdown == 0.0
        assert report.recovery_factor == pytest.approx(3.0)

    def test_annualized_return_and_calmar(self, report):
        assert report.annualized_return_percent == pytest.approx(15.0 / 3 * 252)
        assert report.calmar_ratio == pytest.approx((15.0 / 3 * 252) / (50 / 1100 * 100))

    def test_reference_day_and_month(self, report):
        assert report.today_profit == 100.0
        assert report.today_profit_percent == pytest.approx(10.0)
        assert report.current_month_profit == 150.0
        assert report.current_month_win_days == 2

    def test_streaks(self, report):
        assert report.current_streak == 1
        assert report.max_win_streak == 1
        assert report.max_losing_streak == 1


class TestDrawdownDuration:
    def test_open_drawdown_is_flushed_at_end(self):
        report = compute_metrics(
            _series(100.0, -200.0),
            initial_capital=1000.0,
            reference_date=date(2024, 1, 3),
        )

        assert report.max_days_in_drawdown == 1
        assert report.current_days_in_drawdown == 1
        assert report.max_drawdown == 200.0
        assert report.current_drawdown == 200.0
        assert report.current_drawdown_percent == pytest.approx(200 / 1100 * 100)

    def test_longest_drawdown_wins(self):
        # 2-day drawdown, recovery, then a 3-day drawdown still open
        report = compute_metrics(
            _series(-10.0, -10.0, 50.0, -5.0, -5.0, -5.0),
            initial_capital=1000.0,
            reference_date=date(2024, 1, 7),
        )

        assert report.max_days_in_drawdown == 3
        assert report.current_days_in_drawdown == 3

    def test_loss_from_initial_capital_enters_drawdown(self):
        report = compute_metrics(
            _series(-100.0),
            initial_capital=1000.0,
            reference_date=date(2024, 1, 2),
        )

        assert report.max_drawdown == 100.0
        assert report.max_drawdown_percent == pytest.approx(10.0)
        assert report.peak_equity == 1000.0

    def test_max_drawdown_percent_comes_from_deepest_dollar_drawdown(self):
        report = compute_metrics(
            _series(-100.0, 1100.0, -150.0),
            initial_capital=1000.0,
            reference_date=date(2024, 1, 4),
        )

        # 100 off 1000 is 10%, but the deeper 150 off 2000 sets the maximum
        assert report.max_drawdown == 150.0
        assert report.max_drawdown_percent == pytest.approx(7.5)
        assert report.calmar_ratio == pytest.approx(952.0)

    def test_recovery_to_exact_peak_keeps_counting(self):
        # Back to 1000 is not a new peak; the drawdown closes on the next high
        report = compute_metrics(
            _series(-100.0, 100.0, 10.0),
            initial_capital=1000.0,
            reference_date=date(2024, 1, 4),
        )

        assert [p.drawdown for p in report.drawdown_curve] == [100.0, 0.0, 0.0]
        assert report.max_days_in_drawdown == 2
        assert report.current_days_in_drawdown == 0


class TestStreaks:
    def test_no_trade_day_between_wins_resets_streaks(self):
        report = compute_metrics(
            _series(100.0, 0.0, 100.0),
            initial_capital=1000.0,
            reference_date=date(2024, 1, 4),
        )

        assert report.current_streak == 1
        assert report.max_win_streak == 1

    def test_no_trade_day_does_not_lower_recorded_max(self):
        report = compute_metrics(
            _series(100.0, 100.0, 0.0, 100.0),
            initial_capital=1000.0,
            reference_date=date(2024, 1, 5),
        )

        assert report.max_win_streak == 2
        assert report.current_streak == 1

    def test_latest_no_trade_day_gives_zero_current_streak(self):
        report = compute_metrics(
            _series(100.0, 100.0, 0.0),
            initial_capital=1000.0,
            reference_date=date(2024, 1, 4),
        )

        assert report.current_streak == 0

    def test_losing_streak_is_negative(self):
        report = compute_metrics(
            _series(100.0, -10.0, -20.0),
            initial_capital=1000.0,
            reference_date=date(2024, 1, 4),
        )

        assert report.current_streak == -2
        assert report.max_losing_streak == 2

    def test_loss_after_wins_keeps_max_win_streak(self):
        report = compute_metrics(
            _series(10.0, 10.0, 10.0, -5.0, 10.0),
            initial_capital=1000.0,
            reference_date=date(2024, 1, 6),
        )

        assert report.max_win_streak == 3
        assert report.current_streak == 1


class TestUnboundedRatios:
    def test_all_wins_gives_infinite_ratios(self):
        report = compute_metrics(
            _series(100.0, 50.0),
            initial_capital=1000.0,
            reference_date=date(2024, 1, 3),
        )

        assert math.isinf(report.risk_reward_ratio)
        assert math.isinf(report.profit_factor)
        assert math.isinf(report.recovery_factor)
        assert report.calmar_ratio == 0.0
        assert report.max_loss_day == 0.0

    def test_all_losses_gives_zero_ratios(self):
        report = compute_metrics(
            _series(-100.0, -50.0),
            initial_capital=1000.0,
            reference_date=date(2024, 1, 3),
        )

        assert report.risk_reward_ratio == 0.0
        assert report.profit_factor == 0.0
        assert report.max_profit_day == 0.0
        assert report.win_rate == 0.0

    def test_only_no_trade_days(self):
        report = compute_metrics(
            _series(0.0, 0.0),
            initial_capital=1000.0,
            reference_date=date(2024, 1, 3),
        )

        assert len(report.equity_curve) == 2
        assert report.total_no_trade_days == 2
        assert report.total_active_days == 0
        assert report.win_rate == 0.0
        assert report.expectancy == 0.0
        assert report.risk_reward_ratio == 0.0
        assert report.profit_factor == 0.0
        assert report.recovery_factor == 0.0
        assert report.annualized_return_percent == 0.0
        assert not any(math.isnan(v) for v in report.model_dump().values() if isinstance(v, float))

    def test_json_renders_infinity_as_string(self):
        report = compute_metrics(
            _series(100.0),
            initial_capital=1000.0,
            reference_date=date(2024, 1, 2),
        )

        payload = report.model_dump(mode="json")
        assert payload["profit_factor"] == "Infinity"
        assert payload["risk_reward_ratio"] == "Infinity"
        assert math.isinf(report.model_dump()["profit_factor"])


class TestPeriodExtremes:
    def test_day_extremes(self):
        report = compute_metrics(
            _series(100.0, -300.0, 250.0),
            initial_capital=10000.0,
            reference_date=date(2024, 1, 4),
        )

        assert report.max_profit_day == 250.0
        assert report.max_loss_day == -300.0

    def test_month_extremes(self):
        series = [
            DailyEntry(date=date(2024, 1, 10), pnl=100.0),
            DailyEntry(date=date(2024, 2, 12), pnl=-200.0),
            DailyEntry(date=date(2024, 2, 13), pnl=-100.0),
        ]
        report = compute_metrics(series, initial_capital=10000.0, reference_date=date(2024, 2, 13))

        assert report.max_profit_month == 100.0
        assert report.max_loss_month == -300.0
        assert report.avg_profit_month == pytest.approx(-100.0)

    def test_calendar_weeks_split_saturday_and_sunday(self):
        # 2024-01-06 is a Saturday, 2024-01-07 a Sunday
        series = [
            DailyEntry(date=date(2024, 1, 6), pnl=100.0),
            DailyEntry(date=date(2024, 1, 7), pnl=50.0),
        ]
        report = PnLMetricsCalculator(week_numbering="calendar").calculate(
            series, initial_capital=10000.0, reference_date=date(2024, 1, 7)
        )

        assert report.max_profit_week == 100.0
        assert report.avg_profit_week == pytest.approx(75.0)

    def test_iso_weeks_keep_saturday_and_sunday_together(self):
        series = [
            DailyEntry(date=date(2024, 1, 6), pnl=100.0),
            DailyEntry(date=date(2024, 1, 7), pnl=50.0),
        ]
        report = PnLMetricsCalculator(week_numbering="iso").calculate(
            series, initial_capital=10000.0, reference_date=date(2024, 1, 7)
        )

        assert report.max_profit_week == 150.0
        assert report.avg_profit_week == pytest.approx(150.0)


class TestReferenceDate:
    def test_reference_date_without_entry(self):
        report = compute_metrics(
            _series(100.0, 200.0),
            initial_capital=1000.0,
            reference_date=date(2024, 3, 15),
        )

        assert report.today_profit == 0.0
        assert report.current_month_profit == 0.0
        assert report.current_month_win_days == 0

    def test_month_boundaries_are_inclusive(self):
        series = [
            DailyEntry(date=date(2024, 1, 31), pnl=-40.0),
            DailyEntry(date=date(2024, 2, 1), pnl=100.0),
            DailyEntry(date=date(2024, 2, 29), pnl=25.0),
            DailyEntry(date=date(2024, 3, 1), pnl=-10.0),
        ]
        report = compute_metrics(series, initial_capital=1000.0, reference_date=date(2024, 2, 10))

        assert report.current_month_profit == 125.0
        assert report.current_month_win_days == 2


class TestInvariants:
    @pytest.fixture
    def series(self) -> list[DailyEntry]:
        return _series(120.0, -80.0, 0.0, -45.5, 300.0, 0.0, -10.0, 60.25, -200.0, 15.0)

    def test_final_equity_matches_sum(self, series):
        report = compute_metrics(series, initial_capital=5000.0, reference_date=date(2024, 1, 11))

        assert report.current_equity == pytest.approx(5000.0 + sum(e.pnl for e in series))
        assert report.current_equity - 5000.0 == pytest.approx(report.overall_profit)

    def test_partition_is_exhaustive(self, series):
        report = compute_metrics(series, initial_capital=5000.0, reference_date=date(2024, 1, 11))

        assert (
            report.total_win_days + report.total_loss_days + report.total_no_trade_days
            == len(series)
        )

    def test_curves_are_index_aligned(self, series):
        report = compute_metrics(series, initial_capital=5000.0, reference_date=date(2024, 1, 11))

        assert len(report.equity_curve) == len(report.drawdown_curve) == len(series)
        assert [p.date for p in report.equity_curve] == [p.date for p in report.drawdown_curve]

    def test_drawdown_never_negative_and_zero_at_peak(self, series):
        report = compute_metrics(series, initial_capital=5000.0, reference_date=date(2024, 1, 11))

        peak = 5000.0
        for equity_point, drawdown_point in zip(report.equity_curve, report.drawdown_curve):
            peak = max(peak, equity_point.equity)
            assert drawdown_point.drawdown >= 0
            if equity_point.equity == peak:
                assert drawdown_point.drawdown == 0

        assert report.max_drawdown == max(p.drawdown for p in report.drawdown_curve)

    def test_input_order_does_not_matter(self, series):
        ordered = compute_metrics(series, initial_capital=5000.0, reference_date=date(2024, 1, 11))
        shuffled = compute_metrics(
            list(reversed(series)), initial_capital=5000.0, reference_date=date(2024, 1, 11)
        )

        assert ordered == shuffled

    def test_recomputation_is_idempotent(self, series):
        first = compute_metrics(series, initial_capital=5000.0, reference_date=date(2024, 1, 11))
        second = compute_metrics(
            [e.model_copy() for e in series],
            initial_capital=5000.0,
            reference_date=date(2024, 1, 11),
        )

        assert first == second
        assert first.model_dump() == second.model_dump()

    def test_input_is_not_mutated(self, series):
        snapshot = list(series)
        compute_metrics(series, initial_capital=5000.0, reference_date=date(2024, 1, 11))

        assert series == snapshot

    def test_appending_only_extends_curves(self, series):
        before = compute_metrics(
            series[:-1], initial_capital=5000.0, reference_date=date(2024, 1, 11)
        )
        after = compute_metrics(series, initial_capital=5000.0, reference_date=date(2024, 1, 11))

        assert after.equity_curve[:-1] == before.equity_curve
        assert after.drawdown_curve[:-1] == before.drawdown_curve


class TestDisplayFilter:
    def test_without_no_trade_days_drops_zero_points(self):
        report = compute_metrics(
            _series(100.0, 0.0, -50.0),
            initial_capital=1000.0,
            reference_date=date(2024, 1, 4),
        )
        filtered = report.without_no_trade_days()

        assert len(report.equity_curve) == 3
        assert [p.date for p in filtered.equity_curve] == [date(2024, 1, 2), date(2024, 1, 4)]
        assert [p.date for p in filtered.drawdown_curve] == [date(2024, 1, 2), date(2024, 1, 4)]
        assert filtered.total_no_trade_days == report.total_no_trade_days
        assert filtered.max_drawdown == report.max_drawdown
