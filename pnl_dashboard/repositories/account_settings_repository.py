"""
Account Settings Repository

One settings row per account. Reads return None when the account never
stored settings; callers fall back to the configured default capital.
"""

from datetime import UTC, datetime
from decimal import Decimal
from uuid import UUID, uuid4

import structlog
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from pnl_dashboard.models.account_settings import AccountSettingsModel

logger = structlog.get_logger(__name__)


class AccountSettingsRepository:
    """Repository for per-account settings."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def get(self, user_id: UUID) -> AccountSettingsModel | None:
        result = await self.db.execute(
            select(AccountSettingsModel).where(AccountSettingsModel.user_id == user_id)
        )
        return result.scalar_one_or_none()

    async def upsert(self, user_id: UUID, initial_capital: Decimal) -> AccountSettingsModel:
        """Create or update the account's initial capital."""
        row = await self.get(user_id)

        if row is None:
            row = AccountSettingsModel(
                id=uuid4(),
                user_id=user_id,
                initial_capital=initial_capital,
            )
            try:
                async with self.db.begin_nested():
                    self.db.add(row)
                    await self.db.flush()
            except IntegrityError:
                row = await self.get(user_id)
                if row is None:
                    raise
                row.initial_capital = initial_capital
                row.updated_at = datetime.now(UTC)
                await self.db.flush()
        else:
            row.initial_capital = initial_capital
            row.updated_at = datetime.now(UTC)
            await self.db.flush()

        await self.db.refresh(row)
        logger.info(
            "account_settings_saved",
            user_id=str(user_id),
            initial_capital=str(initial_capital),
        )
        return row
