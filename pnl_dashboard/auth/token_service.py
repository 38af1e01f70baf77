"""
JWT Token Service

Handles generation and validation of JWT access and refresh tokens. The token
subject is the account (user) id that scopes every P&L record.
"""

from datetime import UTC, datetime, timedelta
from typing import Optional
from uuid import UUID

from jose import JWTError, jwt


class TokenService:
    """Service for JWT token operations"""

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        access_token_expire_minutes: int = 30,
        refresh_token_expire_days: int = 7,
    ):
        """
        Initialize token service

        Args:
            secret_key: Secret key for JWT signing
            algorithm: JWT algorithm (default: HS256)
            access_token_expire_minutes: Access token expiration in minutes (default: 30)
            refresh_token_expire_days: Refresh token expiration in days (default: 7)
        """
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.access_token_expire_minutes = access_token_expire_minutes
        self.refresh_token_expire_days = refresh_token_expire_days

    def create_access_token(self, user_id: UUID) -> str:
        """
        Create JWT access token

        Args:
            user_id: User UUID

        Returns:
            Encoded JWT token string
        """
        return self._encode(user_id, "access", timedelta(minutes=self.access_token_expire_minutes))

    def create_refresh_token(self, user_id: UUID) -> str:
        """
        Create JWT refresh token

        Refresh tokens have longer expiration and can only be used to get new access tokens.
        """
        return self._encode(user_id, "refresh", timedelta(days=self.refresh_token_expire_days))

    def create_token_pair(self, user_id: UUID) -> tuple[str, str]:
        """
        Create both access and refresh tokens

        Returns:
            Tuple of (access_token, refresh_token)
        """
        return self.create_access_token(user_id), self.create_refresh_token(user_id)

    def decode_token(self, token: str) -> Optional[dict]:
        """
        Decode and validate JWT token

        Returns:
            Decoded token payload or None if invalid or expired
        """
        try:
            return jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except JWTError:
            return None

    def verify_access_token(self, token: str) -> Optional[UUID]:
        """Return the user id of a valid access token, None otherwise."""
        return self._verify(token, "access")

    def verify_refresh_token(self, token: str) -> Optional[UUID]:
        """Return the user id of a valid refresh token, None otherwise."""
        return self._verify(token, "refresh")

    def _encode(self, user_id: UUID, token_type: str, lifetime: timedelta) -> str:
        now = datetime.now(UTC)
        claims = {
            "sub": str(user_id),
            "type": token_type,
            "iat": now,
            "exp": now + lifetime,
        }
        return jwt.encode(claims, self.secret_key, algorithm=self.algorithm)

    def _verify(self, token: str, token_type: str) -> Optional[UUID]:
        payload = self.decode_token(token)

        if payload is None:
            return None

        # Verify token type
        if payload.get("type") != token_type:
            return None

        user_id_str = payload.get("sub")
        if user_id_str is None:
            return None

        try:
            return UUID(user_id_str)
        except ValueError:
            return None
