"""
Account Settings Data Models

SQLAlchemy ORM model and Pydantic schemas for per-account settings. The only
setting today is the initial capital, the equity baseline every percentage
metric is measured against. Percentages are never stored, so changing the
capital re-bases the whole history on the next metrics request.
"""

from datetime import UTC, datetime
from decimal import Decimal
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy import CheckConstraint, DateTime, Numeric, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from pnl_dashboard.database import Base


class AccountSettingsModel(Base):
    """
    Account settings database model.

    Table: account_settings
    Unique: user_id (one row per account)
    """

    __tablename__ = "account_settings"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    user_id: Mapped[UUID] = mapped_column(Uuid, nullable=False, unique=True, index=True)
    initial_capital: Mapped[Decimal] = mapped_column(Numeric(18, 2), nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(UTC)
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
    )

    __table_args__ = (
        CheckConstraint("initial_capital > 0", name="chk_initial_capital_positive"),
    )


class AccountSettingsUpdate(BaseModel):
    """Request schema for changing the initial capital."""

    model_config = ConfigDict(json_schema_extra={"example": {"initial_capital": "100000"}})

    initial_capital: Decimal = Field(
        ...,
        gt=0,
        max_digits=18,
        decimal_places=2,
        description="Equity baseline before the first recorded day",
    )


class AccountSettingsResponse(BaseModel):
    """Response schema for account settings."""

    initial_capital: float
    is_default: bool = Field(
        default=False, description="True when no settings are stored and the default applies"
    )
    updated_at: datetime | None = None

    @classmethod
    def from_model(cls, model: AccountSettingsModel) -> "AccountSettingsResponse":
        return cls(
            initial_capital=float(model.initial_capital),
            is_default=False,
            updated_at=model.updated_at,
        )
