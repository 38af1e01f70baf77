"""
Pytest configuration and fixtures for the P&L dashboard tests.

Provides shared fixtures for database sessions, authentication, and the
HTTP test client.
"""

import os

# Settings are read at import time; point them at SQLite before importing the app
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

from collections.abc import AsyncGenerator  # noqa: E402
from uuid import UUID, uuid4  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool  # noqa: E402

import pnl_dashboard.models  # noqa: E402,F401
import pnl_dashboard.orm.models  # noqa: E402,F401
from pnl_dashboard.api.main import app  # noqa: E402
from pnl_dashboard.auth.token_service import TokenService  # noqa: E402
from pnl_dashboard.config import settings  # noqa: E402
from pnl_dashboard.database import Base, get_db  # noqa: E402

# =============================
# Database Fixtures
# =============================


@pytest_asyncio.fixture(scope="function")
async def db_engine():
    """In-memory SQLite engine with every table created."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def db_session(db_engine) -> AsyncGenerator[AsyncSession, None]:
    """Each test gets a fresh session that is rolled back afterwards."""
    session_maker = async_sessionmaker(
        db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
    async with session_maker() as session:
        yield session
        await session.rollback()


# =============================
# HTTP Client Fixtures
# =============================


@pytest_asyncio.fixture(scope="function")
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client with the database dependency overridden."""

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as test_client:
        yield test_client

    app.dependency_overrides.clear()


# =============================
# Authentication Fixtures
# =============================


@pytest.fixture(scope="function")
def token_svc() -> TokenService:
    return TokenService(
        secret_key=settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm,
        access_token_expire_minutes=settings.jwt_access_token_expire_minutes,
        refresh_token_expire_days=settings.jwt_refresh_token_expire_days,
    )


@pytest.fixture(scope="function")
def user_id() -> UUID:
    return uuid4()


@pytest.fixture(scope="function")
def auth_headers(token_svc: TokenService, user_id: UUID) -> dict[str, str]:
    token = token_svc.create_access_token(user_id)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture(scope="function")
def other_auth_headers(token_svc: TokenService) -> dict[str, str]:
    """Headers for a second, unrelated account."""
    token = token_svc.create_access_token(uuid4())
    return {"Authorization": f"Bearer {token}"}
