"""Authentication dependencies for FastAPI."""

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jwt.exceptions import InvalidTokenError
from sqlalchemy.ext.asyncio import AsyncSession

from src.database.dependencies import get_db_session
from src.features.user.models import Permission, RoleName, User, role_authority
from src.features.user.service import UserService

from .exceptions import InsufficientPermissionException, InvalidTokenException, UserSuspendedException
from .jwt_utils import TokenService, get_token_service

# auto_error=False so a missing header is a 401 in our envelope rather than Starlette's 403
security = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    session: AsyncSession = Depends(get_db_session),
    token_service: TokenService = Depends(get_token_service),
) -> User:
    """Get the current authenticated user from the bearer access token.

    Args:
        credentials: HTTP authorization credentials with bearer token
        session: Database session
        token_service: Application token service

    Returns:
        User object

    Raises:
        InvalidTokenException: If the token is missing, invalid or the user is unknown
        UserSuspendedException: If the account is suspended

    """
    if credentials is None:
        raise InvalidTokenException(detail="Not authenticated")

    try:
        payload = token_service.decode_token(credentials.credentials)
    except InvalidTokenError as err:
        raise InvalidTokenException() from err

    # Verify it's an access token
    if not TokenService.verify_token_type(payload):
        raise InvalidTokenException(detail="Invalid token type")

    email = payload.get("sub")
    if not email:
        raise InvalidTokenException(detail="Invalid token payload")

    user = await UserService.get_user_by_email(session, str(email))
    if user is None:
        raise InvalidTokenException(detail="User not found")

    if not user.is_active:
        raise UserSuspendedException()

    return user


async def get_current_active_user(current_user: User = Depends(get_current_user)) -> User:
    """Get current active user (convenience wrapper)."""
    return current_user


def require_authority(*required: Permission | str):
    """Dependency factory requiring at least one of the given authorities.

    Authorities are ``ROLE_<name>`` strings and permission names. Membership is
    flat: ADMIN passes only because its role lists the permission.

    Usage:
        Depends(require_authority(Permission.EPISODE_WRITE))
        Depends(require_authority(role_authority(RoleName.ADMIN)))
    """
    required_names = [str(authority) for authority in required]

    async def authority_checker(current_user: User = Depends(get_current_user)) -> User:
        granted = current_user.authorities
        if not any(name in granted for name in required_names):
            raise InsufficientPermissionException(required_names)
        return current_user

    return authority_checker


def require_role(*roles: RoleName):
    """Dependency factory requiring one of the given roles."""
    return require_authority(*(role_authority(role) for role in roles))


def require_permission(*permissions: Permission):
    """Dependency factory requiring one of the given permissions."""
    return require_authority(*permissions)


def ensure_self_or_admin(current_user: User, user_id: int) -> None:
    """Allow access to user-scoped resources for the owner or an administrator.

    Raises:
        InsufficientPermissionException: Otherwise

    """
    if current_user.id != user_id and not current_user.has_role(RoleName.ADMIN):
        raise InsufficientPermissionException(["self", role_authority(RoleName.ADMIN)])


async def require_self_or_admin(
    user_id: int,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
) -> User:
    """Path dependency for ``/users/{user_id}/...`` routes.

    Raises:
        InsufficientPermissionException: If the caller is neither the user nor an admin
        UserNotFound: If an admin targets a user that does not exist

    """
    ensure_self_or_admin(current_user, user_id)
    if current_user.id != user_id:
        await UserService.get_user_or_404(session, user_id)
    return current_user
