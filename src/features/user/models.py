"""User and role domain models."""

from enum import StrEnum

from pwdlib import PasswordHash
from sqlalchemy import JSON, Column, Enum, ForeignKey, Integer, String, Table, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.database.base import Base, IdMixin, TimestampMixin


class RoleName(StrEnum):
    """Role names for RBAC.

    USER: Default role of every registered account. Can browse podcasts and episodes.
    CREATOR: Granted on first podcast creation. Can publish podcasts and episodes.
    ADMIN: Platform administrator. Manages users and has every content permission.
    """

    USER = "USER"
    CREATOR = "CREATOR"
    ADMIN = "ADMIN"


class Permission(StrEnum):
    """Permission names granted through roles."""

    EPISODE_READ = "EPISODE_READ"
    EPISODE_WRITE = "EPISODE_WRITE"
    PODCAST_READ = "PODCAST_READ"
    PODCAST_WRITE = "PODCAST_WRITE"
    ADMIN_PANEL = "ADMIN_PANEL"
    USER_MANAGE = "USER_MANAGE"


ROLE_PREFIX = "ROLE_"

DEFAULT_ROLE_PERMISSIONS: dict[RoleName, list[Permission]] = {
    RoleName.USER: [Permission.EPISODE_READ, Permission.PODCAST_READ],
    RoleName.CREATOR: [
        Permission.EPISODE_READ,
        Permission.EPISODE_WRITE,
        Permission.PODCAST_READ,
        Permission.PODCAST_WRITE,
    ],
    RoleName.ADMIN: [
        Permission.ADMIN_PANEL,
        Permission.EPISODE_READ,
        Permission.EPISODE_WRITE,
        Permission.PODCAST_READ,
        Permission.PODCAST_WRITE,
        Permission.USER_MANAGE,
    ],
}


def role_authority(name: RoleName | str) -> str:
    """Authority string for a role, e.g. ``ROLE_ADMIN``."""
    return f"{ROLE_PREFIX}{RoleName(name).value}"


class UserStatus(StrEnum):
    """User account status."""

    ACTIVE = "ACTIVE"
    SUSPENDED = "SUSPENDED"


pwd_hasher = PasswordHash.recommended()

user_roles = Table(
    "user_roles",
    Base.metadata,
    Column("user_id", Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
    Column("role_id", Integer, ForeignKey("roles.id", ondelete="CASCADE"), primary_key=True),
)


class Role(Base, IdMixin, TimestampMixin):
    """Named bundle of permission strings. Seeded at startup."""

    __tablename__ = "roles"

    name: Mapped[str] = mapped_column(Enum(RoleName, native_enum=False, length=20), nullable=False, unique=True)
    # Plain strings so permissions can be extended without a code change
    permissions: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)

    @property
    def authorities(self) -> set[str]:
        return {role_authority(self.name), *self.permissions}


class User(Base, IdMixin, TimestampMixin):
    """User model for authentication and authorization."""

    __tablename__ = "users"

    # Identity (globally unique)
    username: Mapped[str] = mapped_column(String(50), nullable=False, unique=True)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)

    # Authentication
    hashed_password: Mapped[str] = mapped_column(String(255), nullable=False)

    # Profile
    display_name: Mapped[str | None] = mapped_column(String(150), nullable=True)
    avatar_url: Mapped[str | None] = mapped_column(String(2048), nullable=True)
    bio: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Authorization
    roles: Mapped[list[Role]] = relationship(secondary=user_roles, lazy="selectin")

    # Status
    status: Mapped[str] = mapped_column(
        Enum(UserStatus, native_enum=False, length=20),
        nullable=False,
        default=UserStatus.ACTIVE.value,
        index=True,
    )

    @property
    def is_active(self) -> bool:
        """Computed property: user is active if status is ACTIVE."""
        return self.status == UserStatus.ACTIVE.value

    @property
    def role_authorities(self) -> list[str]:
        """``ROLE_<name>`` strings, sorted for stable token claims."""
        return sorted(role_authority(role.name) for role in self.roles)

    @property
    def authorities(self) -> set[str]:
        """Union of role authorities and every permission granted by those roles."""
        granted: set[str] = set()
        for role in self.roles:
            granted |= role.authorities
        return granted

    def verify_password(self, plain_password: str) -> bool:
        """Verify a password against the Argon2 hash."""
        return pwd_hasher.verify(plain_password, self.hashed_password)

    @staticmethod
    def hash_password(password: str) -> str:
        """Hash a password using Argon2. Salt is generated and embedded in the hash."""
        return pwd_hasher.hash(password)

    def has_role(self, role: RoleName) -> bool:
        return any(r.name == role for r in self.roles)
