"""initial P&L dashboard schema

Revision ID: 001_initial_pnl_schema
Revises:
Create Date: 2024-01-15

Creates the three tables of the dashboard:

Table Structure:
- users: account holders (username, email, bcrypt password hash)
- daily_pnl: one signed P&L amount per account per calendar date
  (pnl = 0 marks a no-trade day)
- account_settings: one row per account holding the initial capital

Constraints:
- uq_daily_pnl_user_date: a date is recorded at most once per account
- chk_initial_capital_positive: initial capital must be > 0
"""

from collections.abc import Sequence
from typing import Union

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "001_initial_pnl_schema"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create users, daily_pnl and account_settings tables."""

    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("username", sa.String(50), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("last_login_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_users_username", "users", ["username"], unique=True)
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "daily_pnl",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("trade_date", sa.Date(), nullable=False),
        sa.Column("pnl", sa.Numeric(18, 2), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint("user_id", "trade_date", name="uq_daily_pnl_user_date"),
    )
    op.create_index("ix_daily_pnl_user_id", "daily_pnl", ["user_id"])

    op.create_table(
        "account_settings",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("initial_capital", sa.Numeric(18, 2), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint("initial_capital > 0", name="chk_initial_capital_positive"),
    )
    op.create_index(
        "ix_account_settings_user_id", "account_settings", ["user_id"], unique=True
    )


def downgrade() -> None:
    """Drop the dashboard tables."""
    op.drop_index("ix_account_settings_user_id", table_name="account_settings")
    op.drop_table("account_settings")
    op.drop_index("ix_daily_pnl_user_id", table_name="daily_pnl")
    op.drop_table("daily_pnl")
    op.drop_index("ix_users_email", table_name="users")
    op.drop_index("ix_users_username", table_name="users")
    op.drop_table("users")
