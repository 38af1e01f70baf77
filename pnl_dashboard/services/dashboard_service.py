"""
Dashboard Service

Loads an account's stored daily P&L and settings and feeds them to the
metrics engine and the yearly aggregator. Nothing derived is persisted:
every request recomputes from the raw series.
"""

from datetime import date, datetime
from uuid import UUID
from zoneinfo import ZoneInfo

import structlog

from pnl_dashboard.analytics import aggregate_by_year, compute_metrics
from pnl_dashboard.config import settings
from pnl_dashboard.models.account_settings import AccountSettingsResponse
from pnl_dashboard.models.metrics import DailyEntry, MetricsReport, YearlyPnLReport
from pnl_dashboard.repositories.account_settings_repository import AccountSettingsRepository
from pnl_dashboard.repositories.pnl_repository import DailyPnLRepository

logger = structlog.get_logger(__name__)


def today_in_reporting_timezone() -> date:
    """Today's date in the configured reporting timezone."""
    return datetime.now(ZoneInfo(settings.reporting_timezone)).date()


class DashboardService:
    """
    Service computing dashboard views for one account.

    Provides:
    - Account settings with the configured default applied
    - Full metrics report as of a reference date
    - Month-by-year report with per-year drawdown statistics
    """

    def __init__(
        self,
        pnl_repository: DailyPnLRepository,
        settings_repository: AccountSettingsRepository,
    ):
        self.pnl_repository = pnl_repository
        self.settings_repository = settings_repository

    async def get_account_settings(self, user_id: UUID) -> AccountSettingsResponse:
        row = await self.settings_repository.get(user_id)
        if row is None:
            return AccountSettingsResponse(
                initial_capital=settings.default_initial_capital,
                is_default=True,
            )
        return AccountSettingsResponse.from_model(row)

    async def load_series(self, user_id: UUID) -> list[DailyEntry]:
        rows = await self.pnl_repository.list_entries(user_id)
        return [row.to_entry() for row in rows]

    async def get_metrics(
        self,
        user_id: UUID,
        reference_date: date | None = None,
        include_no_trade_days: bool = False,
    ) -> MetricsReport:
        """
        Compute the metrics report for an account.

        Args:
            user_id: Account UUID
            reference_date: Day treated as "today" (defaults to today in the
                reporting timezone)
            include_no_trade_days: Keep pnl == 0 points in the equity and
                drawdown curves

        Returns:
            MetricsReport
        """
        account = await self.get_account_settings(user_id)
        series = await self.load_series(user_id)
        as_of = reference_date or today_in_reporting_timezone()

        report = compute_metrics(
            series,
            initial_capital=account.initial_capital,
            reference_date=as_of,
            week_numbering=settings.week_numbering,
        )

        logger.info(
            "metrics_computed",
            user_id=str(user_id),
            entries=len(series),
            reference_date=as_of.isoformat(),
            initial_capital=account.initial_capital,
        )

        if include_no_trade_days:
            return report
        return report.without_no_trade_days()

    async def get_monthly_report(self, user_id: UUID) -> YearlyPnLReport:
        """Aggregate traded days (pnl != 0) into month totals per year."""
        series = [entry for entry in await self.load_series(user_id) if entry.pnl != 0]
        report = aggregate_by_year(series)
        logger.info("monthly_report_computed", user_id=str(user_id), years=report.years)
        return report
