"""Authentication schemas (DTOs)."""

from datetime import datetime

from pydantic import Field

from src.features.user.schemas import UserResponse
from src.shared.schemas import APIModel


# Request schemas
class LoginRequest(APIModel):
    """Login with either an email address or a username."""

    identifier: str = Field(..., min_length=1, max_length=255, description="Email or username")
    password: str = Field(..., min_length=1, max_length=256)
    # Client-side storage hint only; token lifetimes do not depend on it
    remember_me: bool | None = None


class RefreshTokenRequest(APIModel):
    """Refresh token request."""

    refresh_token: str = Field(..., min_length=1)


# Response schemas
class AuthResponse(APIModel):
    """Token pair plus the authenticated user's projection."""

    access_token: str
    refresh_token: str
    token_type: str = "Bearer"
    expires_in: int  # seconds
    refresh_expires_in: int  # seconds
    issued_at: datetime
    refresh_issued_at: datetime
    user: UserResponse
    authorities: list[str]


class LogoutResponse(APIModel):
    revoked: bool
    message: str
