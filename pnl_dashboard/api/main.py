"""FastAPI application entry point for the P&L dashboard."""

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from pnl_dashboard import __version__
from pnl_dashboard.api.routes import account_settings, auth, calendar, metrics, pnl
from pnl_dashboard.config import settings
from pnl_dashboard.database import init_db

logger = structlog.get_logger(__name__)

app = FastAPI(
    title="Trading P&L Dashboard API",
    description="Daily P&L journal with equity, drawdown and performance metrics",
    version=__version__,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth.router)
app.include_router(pnl.router)
app.include_router(account_settings.router)
app.include_router(metrics.router)
app.include_router(calendar.router)


@app.on_event("startup")
async def startup_event():
    """
    FastAPI startup event handler.

    SQLite databases (local development) get their schema created on start;
    PostgreSQL is managed by Alembic migrations.
    """
    if settings.is_sqlite:
        await init_db()
    logger.info("api_started", environment=settings.environment, version=__version__)


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint."""
    return {"message": "Trading P&L Dashboard API", "version": __version__}


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Basic health check endpoint for Docker and monitoring."""
    return {"status": "healthy"}
