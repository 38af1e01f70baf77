"""
Database connection and session management.

This module provides SQLAlchemy async engine configuration, connection pooling,
and session factory for the P&L dashboard.

Connection Pool Configuration:
- Pool size: 10 base connections
- Max overflow: 10 (total 20 connections max)
- Pre-ping: Enabled (validates connections before use)
- Recycle: 3600 seconds (prevents stale connections)

SQLite URLs (local development, tests) skip the pool options.
"""

import logging
from collections.abc import AsyncGenerator
from typing import Any

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import declarative_base

from pnl_dashboard.config import settings

logger = logging.getLogger(__name__)

# SQLAlchemy declarative base for ORM models
Base = declarative_base()


def create_engine() -> AsyncEngine:
    """
    Create and configure async SQLAlchemy engine with connection pooling.

    Returns:
        AsyncEngine: Configured async database engine
    """
    engine_kwargs: dict[str, Any] = {"echo": settings.db_echo}
    if not settings.is_sqlite:
        engine_kwargs.update(
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=settings.db_pool_pre_ping,
            pool_recycle=settings.db_pool_recycle,
        )

    engine = create_async_engine(settings.database_url, **engine_kwargs)

    @event.listens_for(engine.sync_engine, "connect")
    def receive_connect(dbapi_conn: Any, connection_record: Any) -> None:
        """Log successful database connections."""
        logger.debug("Database connection established")

    return engine


# Global engine instance
# Defer creation in test environments where the driver may not be installed
try:
    engine: AsyncEngine = create_engine()
except Exception as e:
    # In test environments, the engine will be created by test fixtures
    logger.warning(f"Failed to create database engine at module load time: {e}")
    engine = None  # type: ignore

async_session_maker = (
    async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,  # Prevent lazy-loading issues after commit
        autocommit=False,
        autoflush=False,
    )
    if engine
    else None
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency for database sessions.

    Provides async database session with automatic cleanup. Rolls back on error.

    Yields:
        AsyncSession: Database session
    """
    if async_session_maker is None:
        raise RuntimeError(
            "Database not initialized. Please ensure DATABASE_URL is configured correctly."
        )

    async with async_session_maker() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


async def init_db() -> None:
    """
    Initialize database schema.

    Creates all tables defined in SQLAlchemy models.
    For production, use Alembic migrations instead.
    """
    # Register every model with Base before create_all
    import pnl_dashboard.models  # noqa: F401
    import pnl_dashboard.orm.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database schema initialized")


async def drop_db() -> None:
    """
    Drop all database tables.

    WARNING: This destroys all data. Only use for testing or development.
    """
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    logger.info("Database schema dropped")
