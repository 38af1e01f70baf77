"""
User Repository

Handles database operations for account holders.
"""

from datetime import UTC, datetime
from typing import Optional
from uuid import uuid4

import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from pnl_dashboard.orm.models import User

logger = structlog.get_logger(__name__)


class UserRepository:
    """Repository for user database operations"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_username(self, username: str) -> Optional[User]:
        stmt = select(User).where(User.username == username)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> Optional[User]:
        stmt = select(User).where(User.email == email)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def create(self, username: str, email: str, password_hash: str) -> User:
        """
        Create a new user

        Args:
            username: Unique login name
            email: Unique email address
            password_hash: bcrypt hash of the password

        Returns:
            The persisted User
        """
        user = User(
            id=uuid4(),
            username=username,
            email=email,
            password_hash=password_hash,
        )
        self.session.add(user)
        await self.session.flush()
        await self.session.refresh(user)
        logger.info("user_created", user_id=str(user.id), username=username)
        return user

    async def record_login(self, user: User) -> None:
        user.last_login_at = datetime.now(UTC)
        await self.session.flush()
