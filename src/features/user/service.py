"""User and role service layer."""

import logging
from datetime import UTC, datetime

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.shared.pagination.cursor_pagination import CursorPagination
from src.shared.pagination.pagination import CursorParams

from .exceptions import (
    CannotModifyField,
    CannotModifyOtherUser,
    EmailAlreadyExists,
    InvalidRoleName,
    UserNotFound,
    UsernameAlreadyExists,
)
from .models import DEFAULT_ROLE_PERMISSIONS, Role, RoleName, User, UserStatus
from .schemas import UserPatchRequest, UserRegisterRequest

logger = logging.getLogger(__name__)


class RoleService:
    """Service for role lookup and startup seeding."""

    @staticmethod
    async def get_role(session: AsyncSession, name: RoleName) -> Role | None:
        stmt = select(Role).where(Role.name == name)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    async def require_role(session: AsyncSession, name: RoleName) -> Role:
        """Get a seeded role; a missing one means startup seeding never ran.

        Raises:
            RuntimeError: If the role does not exist

        """
        role = await RoleService.get_role(session, name)
        if role is None:
            raise RuntimeError(f"Role {name} does not exist; roles must be seeded at startup")
        return role

    @staticmethod
    async def list_roles(session: AsyncSession) -> list[Role]:
        result = await session.execute(select(Role).order_by(Role.id))
        return list(result.scalars().all())

    @staticmethod
    async def seed_roles(session: AsyncSession) -> list[Role]:
        """Create the default roles that do not exist yet. Existing roles are left untouched."""
        created = []
        for name, permissions in DEFAULT_ROLE_PERMISSIONS.items():
            if await RoleService.get_role(session, name) is None:
                role = Role(name=name, permissions=[p.value for p in permissions])
                session.add(role)
                created.append(role)
                logger.info(f"Role created: {name}")
        await session.flush()
        return created

    @staticmethod
    async def seed_admin(session: AsyncSession, email: str, username: str, password: str) -> User | None:
        """Create the default administrator unless a user with that email exists."""
        if await UserService.get_user_by_email(session, email) is not None:
            return None

        admin_role = await RoleService.require_role(session, RoleName.ADMIN)
        admin = User(
            username=username,
            email=email,
            hashed_password=User.hash_password(password),
            display_name="Administrator",
            roles=[admin_role],
            status=UserStatus.ACTIVE.value,
        )
        session.add(admin)
        await session.flush()
        logger.info(f"Admin user created: {email}")
        return admin


class UserService:
    """Service for user operations."""

    @staticmethod
    async def register_user(session: AsyncSession, data: UserRegisterRequest) -> User:
        """Register a new user with the default USER role.

        Args:
            session: Database session
            data: User registration data

        Returns:
            Created User object

        Raises:
            EmailAlreadyExists: If email already exists
            UsernameAlreadyExists: If username already exists

        """
        if await UserService.get_user_by_email(session, data.email) is not None:
            raise EmailAlreadyExists()

        if await UserService.get_user_by_username(session, data.username) is not None:
            raise UsernameAlreadyExists()

        user_role = await RoleService.require_role(session, RoleName.USER)

        # Hash password (salt handled automatically by pwdlib using Argon2)
        user = User(
            username=data.username,
            email=data.email,
            hashed_password=User.hash_password(data.password),
            display_name=data.display_name,
            avatar_url=data.avatar_url,
            roles=[user_role],
            status=UserStatus.ACTIVE.value,
        )

        session.add(user)
        await session.flush()
        logger.info(f"New user registered: {user.username} ({user.email})")

        return user

    @staticmethod
    async def get_user(session: AsyncSession, user_id: int) -> User | None:
        """Get user by ID."""
        stmt = select(User).where(User.id == user_id)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    async def get_user_or_404(session: AsyncSession, user_id: int) -> User:
        user = await UserService.get_user(session, user_id)
        if user is None:
            raise UserNotFound()
        return user

    @staticmethod
    async def get_user_by_email(session: AsyncSession, email: str) -> User | None:
        stmt = select(User).where(User.email == email)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    async def get_user_by_username(session: AsyncSession, username: str) -> User | None:
        stmt = select(User).where(User.username == username)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    async def get_user_by_identifier(session: AsyncSession, identifier: str) -> User | None:
        """Look a user up by email or username."""
        stmt = select(User).where(or_(User.email == identifier, User.username == identifier))
        result = await session.execute(stmt)
        return result.scalars().first()

    @staticmethod
    async def get_users(
        session: AsyncSession,
        params: CursorParams,
        name: str | None = None,
        role: str | None = None,
        status: UserStatus | None = None,
    ) -> tuple[list[User], str | None]:
        """Get a cursor page of users, newest first.

        Args:
            session: Database session
            params: Cursor and limit
            name: Case-insensitive substring of username or display name
            role: Role name (USER, CREATOR, ADMIN)
            status: Account status

        Returns:
            Tuple of (users, next_cursor)

        Raises:
            InvalidRoleName: If role does not name a known role

        """
        filters = []
        if name and name.strip():
            needle = name.strip().lower()
            filters.append(
                or_(
                    func.lower(User.username).contains(needle, autoescape=True),
                    func.lower(User.display_name).contains(needle, autoescape=True),
                )
            )
        if role:
            try:
                role_name = RoleName(role.upper())
            except ValueError as err:
                raise InvalidRoleName(role) from err
            filters.append(User.roles.any(Role.name == role_name))
        if status is not None:
            filters.append(User.status == status)

        return await CursorPagination.paginate(session, User, params, filters=filters)

    @staticmethod
    async def patch_user(session: AsyncSession, actor: User, user_id: int, data: UserPatchRequest) -> User:
        """Apply the fields present in ``data`` to a user profile.

        Users may patch themselves; administrators may patch anyone and are the
        only ones allowed to change ``status``.

        Raises:
            UserNotFound: If the target user does not exist
            CannotModifyOtherUser: If a non-admin targets someone else
            CannotModifyField: If a non-admin sends ``status``

        """
        is_admin = actor.has_role(RoleName.ADMIN)
        if actor.id != user_id and not is_admin:
            raise CannotModifyOtherUser()

        user = await UserService.get_user_or_404(session, user_id)

        changes = data.model_dump(exclude_unset=True)
        if "status" in changes and not is_admin:
            raise CannotModifyField("status")

        for key, value in changes.items():
            setattr(user, key, value)

        if changes:
            user.updated_at = datetime.now(UTC)
            await session.flush()
            logger.info(f"User {user.username} patched by {actor.username}: {sorted(changes)}")

        return user

    @staticmethod
    async def promote_to_creator(session: AsyncSession, user: User) -> bool:
        """Grant the CREATOR role if the user does not have it yet.

        Returns:
            True if the role was added

        """
        if user.has_role(RoleName.CREATOR):
            return False

        creator_role = await RoleService.require_role(session, RoleName.CREATOR)
        user.roles.append(creator_role)
        user.updated_at = datetime.now(UTC)
        logger.info(f"User {user.username} promoted to {RoleName.CREATOR}")
        return True

    @staticmethod
    async def delete_user(session: AsyncSession, user_id: int) -> bool:
        """Delete user by ID."""
        user = await UserService.get_user(session, user_id)

        if user:
            await session.delete(user)
            logger.info(f"User deleted: {user.username}")
            return True
        return False
