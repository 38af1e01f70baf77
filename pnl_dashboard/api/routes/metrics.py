"""
Metrics API Routes

Endpoints:
- GET /api/v1/metrics          - Full metrics report as of a reference date
- GET /api/v1/metrics/monthly  - Month-by-year P&L with per-year drawdown stats

Unbounded ratios (profit factor, risk/reward, recovery) serialize as the
string "Infinity".
"""

from datetime import date
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from pnl_dashboard.api.dependencies import get_current_user_id, get_dashboard_service
from pnl_dashboard.models.metrics import MetricsReport, YearlyPnLReport
from pnl_dashboard.services.dashboard_service import DashboardService

router = APIRouter(prefix="/api/v1/metrics", tags=["metrics"])


@router.get("", response_model=MetricsReport)
async def get_metrics(
    reference_date: Optional[date] = Query(
        None, description="Day treated as today (defaults to today in the reporting timezone)"
    ),
    include_no_trade_days: bool = Query(
        False, description="Keep pnl == 0 days in the equity and drawdown curves"
    ),
    user_id: UUID = Depends(get_current_user_id),
    service: DashboardService = Depends(get_dashboard_service),
) -> MetricsReport:
    return await service.get_metrics(
        user_id,
        reference_date=reference_date,
        include_no_trade_days=include_no_trade_days,
    )


@router.get("/monthly", response_model=YearlyPnLReport)
async def get_monthly_report(
    user_id: UUID = Depends(get_current_user_id),
    service: DashboardService = Depends(get_dashboard_service),
) -> YearlyPnLReport:
    return await service.get_monthly_report(user_id)
