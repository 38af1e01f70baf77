"""
Daily P&L Data Models

Purpose:
--------
SQLAlchemy ORM model and Pydantic schemas for daily profit-and-loss records.

One row per account per calendar date: ``(user_id, trade_date)`` is unique and
writes are upserts keyed on it, so a second write for the same date overwrites
the first. ``pnl == 0`` records a no-trade day (weekend, holiday, or a day the
trader explicitly marked).
"""

from datetime import UTC, date, datetime
from decimal import Decimal
from typing import Any
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy import Date, DateTime, Numeric, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from pnl_dashboard.database import Base
from pnl_dashboard.models.metrics import DailyEntry

# =====================
# SQLAlchemy ORM Model
# =====================


class DailyPnLModel(Base):
    """
    Daily P&L database model.

    Table: daily_pnl
    Unique: (user_id, trade_date)
    """

    __tablename__ = "daily_pnl"

    id: Mapped[UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid4,
    )

    user_id: Mapped[UUID] = mapped_column(
        Uuid,
        nullable=False,
        index=True,
    )

    trade_date: Mapped[date] = mapped_column(
        Date,
        nullable=False,
    )

    pnl: Mapped[Decimal] = mapped_column(
        Numeric(18, 2),
        nullable=False,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(UTC),
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
    )

    __table_args__ = (UniqueConstraint("user_id", "trade_date", name="uq_daily_pnl_user_date"),)

    def to_entry(self) -> DailyEntry:
        """Convert to the engine's input type."""
        return DailyEntry(date=self.trade_date, pnl=float(self.pnl))


# =====================
# Pydantic Schemas
# =====================


class DailyPnLUpsert(BaseModel):
    """Request schema for writing a day's P&L (date comes from the path)."""

    model_config = ConfigDict(json_schema_extra={"example": {"pnl": "2500.00"}})

    pnl: Decimal = Field(
        ...,
        max_digits=18,
        decimal_places=2,
        description="Signed P&L for the day; 0 marks a no-trade day",
    )


class DailyPnLResponse(BaseModel):
    """Response schema for a single daily P&L record."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    trade_date: date
    pnl: float
    is_no_trade_day: bool = Field(default=False, description="True when pnl is exactly 0")
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_model(cls, model: DailyPnLModel) -> "DailyPnLResponse":
        """Build response from ORM model."""
        return cls(
            id=model.id,
            trade_date=model.trade_date,
            pnl=float(model.pnl),
            is_no_trade_day=model.pnl == 0,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )


class DailyPnLListResponse(BaseModel):
    """List response for daily P&L records, ascending by date."""

    data: list[DailyPnLResponse]
    summary: dict[str, Any]
