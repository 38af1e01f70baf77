"""
Daily P&L Repository - Async CRUD for daily profit-and-loss records

Every query is scoped by user_id. Writes are upserts keyed on
(user_id, trade_date): the last write for a date wins.
"""

from datetime import UTC, date, datetime
from decimal import Decimal
from uuid import UUID, uuid4

import structlog
from sqlalchemy import and_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from pnl_dashboard.models.pnl import DailyPnLModel

logger = structlog.get_logger(__name__)


class DailyPnLRepository:
    """Repository for daily P&L CRUD operations."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def list_entries(
        self,
        user_id: UUID,
        start: date | None = None,
        end: date | None = None,
    ) -> list[DailyPnLModel]:
        """List a user's records ascending by date, optionally bounded (inclusive)."""
        filters = [DailyPnLModel.user_id == user_id]

        if start is not None:
            filters.append(DailyPnLModel.trade_date >= start)

        if end is not None:
            filters.append(DailyPnLModel.trade_date <= end)

        result = await self.db.execute(
            select(DailyPnLModel).where(and_(*filters)).order_by(DailyPnLModel.trade_date.asc())
        )
        return list(result.scalars().all())

    async def get_by_id(self, entry_id: UUID, user_id: UUID) -> DailyPnLModel | None:
        """Fetch a single record by ID, enforcing user isolation."""
        result = await self.db.execute(
            select(DailyPnLModel).where(
                and_(
                    DailyPnLModel.id == entry_id,
                    DailyPnLModel.user_id == user_id,
                )
            )
        )
        return result.scalar_one_or_none()

    async def get_by_date(self, user_id: UUID, trade_date: date) -> DailyPnLModel | None:
        """Fetch the record for a given date."""
        result = await self.db.execute(
            select(DailyPnLModel).where(
                and_(
                    DailyPnLModel.user_id == user_id,
                    DailyPnLModel.trade_date == trade_date,
                )
            )
        )
        return result.scalar_one_or_none()

    async def upsert_by_date(
        self, user_id: UUID, trade_date: date, pnl: Decimal
    ) -> tuple[DailyPnLModel, bool]:
        """
        Insert or overwrite the record for ``trade_date``.

        Returns (entry, created) where ``created`` is False when an existing
        record was overwritten.
        """
        existing = await self.get_by_date(user_id, trade_date)
        if existing is not None:
            return await self._overwrite(existing, pnl), False

        entry = DailyPnLModel(
            id=uuid4(),
            user_id=user_id,
            trade_date=trade_date,
            pnl=pnl,
        )
        try:
            # Savepoint so a lost race only undoes this insert, not the caller's work
            async with self.db.begin_nested():
                self.db.add(entry)
                await self.db.flush()
        except IntegrityError:
            # A concurrent request inserted the same date first; retry as an update
            existing = await self.get_by_date(user_id, trade_date)
            if existing is None:
                raise
            return await self._overwrite(existing, pnl), False

        await self.db.refresh(entry)
        logger.info(
            "daily_pnl_created",
            entry_id=str(entry.id),
            user_id=str(user_id),
            trade_date=trade_date.isoformat(),
        )
        return entry, True

    async def delete(self, entry_id: UUID, user_id: UUID) -> bool:
        """Delete a record. Returns True if deleted, False if not found."""
        entry = await self.get_by_id(entry_id, user_id)
        if not entry:
            return False
        await self.db.delete(entry)
        await self.db.flush()
        logger.info("daily_pnl_deleted", entry_id=str(entry_id), user_id=str(user_id))
        return True

    async def _overwrite(self, entry: DailyPnLModel, pnl: Decimal) -> DailyPnLModel:
        entry.pnl = pnl
        entry.updated_at = datetime.now(UTC)
        await self.db.flush()
        await self.db.refresh(entry)
        logger.info(
            "daily_pnl_overwritten",
            entry_id=str(entry.id),
            user_id=str(entry.user_id),
            trade_date=entry.trade_date.isoformat(),
        )
        return entry
