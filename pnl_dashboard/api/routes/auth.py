"""
Authentication API Routes

Endpoints for login, token refresh, and user registration.
"""

import structlog
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from pnl_dashboard.api.dependencies import get_password_service, token_service
from pnl_dashboard.auth.password_service import PasswordService
from pnl_dashboard.config import settings
from pnl_dashboard.database import get_db
from pnl_dashboard.models.auth import (
    AccessTokenResponse,
    LoginRequest,
    RefreshTokenRequest,
    RegisterRequest,
    RegisterResponse,
    TokenPairResponse,
)
from pnl_dashboard.repositories.user_repository import UserRepository

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api/v1/auth", tags=["authentication"])


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


@router.post("/login", response_model=TokenPairResponse)
async def login(
    request: LoginRequest,
    db: AsyncSession = Depends(get_db),
    password_service: PasswordService = Depends(get_password_service),
) -> TokenPairResponse:
    """
    Login with username and password

    Returns access and refresh tokens on successful authentication.

    Example:
        ```bash
        curl -X POST http://localhost:8000/api/v1/auth/login \\
          -H "Content-Type: application/json" \\
          -d '{"username": "trader", "password": "SecurePassword123!"}'
        ```
    """
    users = UserRepository(db)
    user = await users.get_by_username(request.username)

    if user is None or not password_service.verify_password(request.password, user.password_hash):
        logger.warning("login_failed", username=request.username)
        raise _unauthorized("Invalid username or password")

    access_token, refresh_token = token_service.create_token_pair(user.id)

    await users.record_login(user)
    await db.commit()

    logger.info("login_succeeded", user_id=str(user.id))
    return TokenPairResponse(
        access_token=access_token,
        refresh_token=refresh_token,
        expires_in=settings.jwt_access_token_expire_minutes * 60,
    )


@router.post("/refresh", response_model=AccessTokenResponse)
async def refresh_token(request: RefreshTokenRequest) -> AccessTokenResponse:
    """
    Refresh access token using refresh token

    Refresh tokens can only be used to get new access tokens.
    """
    user_id = token_service.verify_refresh_token(request.refresh_token)

    if user_id is None:
        raise _unauthorized("Invalid or expired refresh token")

    return AccessTokenResponse(
        access_token=token_service.create_access_token(user_id),
        expires_in=settings.jwt_access_token_expire_minutes * 60,
    )


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
async def register(
    request: RegisterRequest,
    db: AsyncSession = Depends(get_db),
    password_service: PasswordService = Depends(get_password_service),
) -> RegisterResponse:
    """
    Register a new user

    The password is checked against the policy; every unmet rule comes back in one 400.
    """
    users = UserRepository(db)

    if await users.get_by_username(request.username) is not None:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Username already exists")

    if await users.get_by_email(request.email) is not None:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Email already registered")

    is_valid, message = password_service.validate_password_strength(request.password)
    if not is_valid:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=message)

    user = await users.create(
        username=request.username,
        email=request.email,
        password_hash=password_service.hash_password(request.password),
    )
    await db.commit()

    return RegisterResponse(
        user_id=str(user.id),
        username=user.username,
        email=user.email,
    )
