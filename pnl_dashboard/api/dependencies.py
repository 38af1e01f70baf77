"""
FastAPI Dependencies

Provides dependency injection for authentication and the per-request services.
"""

from uuid import UUID

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from pnl_dashboard.auth.password_service import PasswordService
from pnl_dashboard.auth.token_service import TokenService
from pnl_dashboard.config import settings
from pnl_dashboard.database import get_db
from pnl_dashboard.repositories.account_settings_repository import AccountSettingsRepository
from pnl_dashboard.repositories.pnl_repository import DailyPnLRepository
from pnl_dashboard.services.dashboard_service import DashboardService

# Security scheme for Bearer token authentication
security = HTTPBearer()

# Token service instance (uses settings for configuration)
token_service = TokenService(
    secret_key=settings.jwt_secret_key,
    algorithm=settings.jwt_algorithm,
    access_token_expire_minutes=settings.jwt_access_token_expire_minutes,
    refresh_token_expire_days=settings.jwt_refresh_token_expire_days,
)


def get_password_service() -> PasswordService:
    return PasswordService(rounds=settings.bcrypt_rounds)


async def get_current_user_id(
    credentials: HTTPAuthorizationCredentials = Depends(security),
) -> UUID:
    """
    FastAPI dependency to extract and validate current user ID from JWT token.

    Raises 401 Unauthorized if the token is invalid, expired, or not an
    access token.

    Returns:
        UUID: Authenticated user's ID (the account every record is scoped by)
    """
    user_id = token_service.verify_access_token(credentials.credentials)

    if user_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return user_id


def get_dashboard_service(db: AsyncSession = Depends(get_db)) -> DashboardService:
    return DashboardService(
        pnl_repository=DailyPnLRepository(db),
        settings_repository=AccountSettingsRepository(db),
    )
