"""User schemas (DTOs)."""

from datetime import datetime

from pydantic import AliasChoices, EmailStr, Field, field_validator

from src.shared.schemas import APIModel
from src.shared.validators.password import validate_password_strength

from .models import RoleName, UserStatus


# Request schemas
class UserRegisterRequest(APIModel):
    """User registration request."""

    username: str = Field(..., min_length=3, max_length=30, pattern=r"^[a-zA-Z0-9._-]+$")
    email: EmailStr = Field(..., max_length=150)
    password: str = Field(..., min_length=8, max_length=256, description="Password must be at least 8 characters")
    display_name: str | None = Field(None, max_length=150)
    avatar_url: str | None = Field(None, max_length=2048)

    @field_validator("password")
    @classmethod
    def password_strength(cls, value):
        """Validate password strength using shared validator."""
        return validate_password_strength(value)


class UserPatchRequest(APIModel):
    """Partial profile update. Only fields that are sent are applied.

    ``status`` may only be changed by administrators.
    """

    display_name: str | None = Field(None, min_length=2, max_length=50)
    avatar_url: str | None = Field(None, max_length=2048, pattern=r"^https?://.*")
    bio: str | None = Field(None, max_length=500)
    status: UserStatus | None = None

    @field_validator("status")
    @classmethod
    def status_not_null(cls, value):
        # Omitting status leaves it unchanged; an explicit null is never valid
        if value is None:
            raise ValueError("status cannot be null")
        return value


# Response schemas
class UserResponse(APIModel):
    """User projection. Never carries the password hash."""

    id: int
    username: str
    email: str
    display_name: str | None = None
    avatar_url: str | None = None
    bio: str | None = None
    roles: list[str] = Field(validation_alias=AliasChoices("role_authorities", "roles"))
    status: UserStatus
    created_at: datetime
    updated_at: datetime


class RoleResponse(APIModel):
    id: int
    name: RoleName
    permissions: list[str]
