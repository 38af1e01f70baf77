"""
Account Settings API Routes

The initial capital is the equity baseline for every percentage on the
dashboard. Accounts that never saved settings get the configured default.
"""

from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from pnl_dashboard.api.dependencies import get_current_user_id, get_dashboard_service
from pnl_dashboard.database import get_db
from pnl_dashboard.models.account_settings import AccountSettingsResponse, AccountSettingsUpdate
from pnl_dashboard.repositories.account_settings_repository import AccountSettingsRepository
from pnl_dashboard.services.dashboard_service import DashboardService

router = APIRouter(prefix="/api/v1/settings", tags=["settings"])


@router.get("/account", response_model=AccountSettingsResponse)
async def get_account_settings(
    user_id: UUID = Depends(get_current_user_id),
    service: DashboardService = Depends(get_dashboard_service),
) -> AccountSettingsResponse:
    return await service.get_account_settings(user_id)


@router.put("/account", response_model=AccountSettingsResponse)
async def update_account_settings(
    payload: AccountSettingsUpdate,
    db: AsyncSession = Depends(get_db),
    user_id: UUID = Depends(get_current_user_id),
) -> AccountSettingsResponse:
    """Set the account's initial capital (must be positive)."""
    repo = AccountSettingsRepository(db)
    row = await repo.upsert(user_id=user_id, initial_capital=payload.initial_capital)
    await db.commit()
    return AccountSettingsResponse.from_model(row)
