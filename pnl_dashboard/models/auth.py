"""
Authentication Models

Pydantic models for authentication requests and responses.
"""

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class LoginRequest(BaseModel):
    """Login request with username and password"""

    model_config = ConfigDict(
        json_schema_extra={"example": {"username": "trader", "password": "SecurePassword123!"}}
    )

    username: str = Field(..., min_length=3, max_length=50, description="Username")
    password: str = Field(..., min_length=1, description="Password")


class TokenPairResponse(BaseModel):
    """Login response with access and refresh tokens"""

    access_token: str = Field(..., description="JWT access token")
    refresh_token: str = Field(..., description="JWT refresh token")
    token_type: str = Field(default="bearer", description="Token type")
    expires_in: int = Field(..., description="Access token expiration in seconds")


class RefreshTokenRequest(BaseModel):
    """Request to refresh access token"""

    refresh_token: str = Field(..., description="JWT refresh token")


class AccessTokenResponse(BaseModel):
    """Response with new access token"""

    access_token: str = Field(..., description="New JWT access token")
    token_type: str = Field(default="bearer", description="Token type")
    expires_in: int = Field(..., description="Access token expiration in seconds")


class RegisterRequest(BaseModel):
    """User registration request"""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "username": "trader",
                "email": "trader@example.com",
                "password": "SecurePassword123!",
            }
        }
    )

    username: str = Field(..., min_length=3, max_length=50, description="Username")
    email: EmailStr = Field(..., description="Email address")
    password: str = Field(..., min_length=1, description="Password (checked against the policy)")


class RegisterResponse(BaseModel):
    """User registration response"""

    user_id: str = Field(..., description="User UUID")
    username: str = Field(..., description="Username")
    email: str = Field(..., description="Email address")
    message: str = Field(default="User registered successfully", description="Success message")
