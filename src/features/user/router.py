"""User management router (API endpoints)."""

import logging

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.database.dependencies import get_db_session
from src.features.auth.dependencies import get_current_active_user, require_permission, require_role
from src.shared.pagination.cursor_pagination import CursorPagination
from src.shared.pagination.pagination import CursorPage, CursorParams, cursor_params

from .exceptions import CannotDeleteOwnAccount, UserNotFound
from .models import Permission, RoleName, User, UserStatus
from .schemas import RoleResponse, UserPatchRequest, UserRegisterRequest, UserResponse
from .service import RoleService, UserService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/users", tags=["User Management"])
roles_router = APIRouter(prefix="/roles", tags=["User Management"])


@router.get("/me", response_model=UserResponse)
async def get_current_user_info(current_user: User = Depends(get_current_active_user)):
    """Get current user information."""
    return UserResponse.model_validate(current_user)


@router.get("", response_model=CursorPage[UserResponse])
async def list_users(
    name: str | None = Query(None, description="Substring of username or display name"),
    role: str | None = Query(None, description="Role name: USER, CREATOR or ADMIN"),
    user_status: UserStatus | None = Query(None, alias="status"),
    params: CursorParams = Depends(cursor_params),
    current_user: User = Depends(get_current_active_user),
    session: AsyncSession = Depends(get_db_session),
):
    """List users, newest first.

    - `cursor`: `nextCursor` from the previous page
    - `limit`: Page size (1-100, default 20)
    """
    users, next_cursor = await UserService.get_users(session, params, name=name, role=role, status=user_status)
    return CursorPagination.to_page(users, next_cursor, UserResponse)


@router.post(
    "",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_permission(Permission.USER_MANAGE))],
)
async def create_user(
    data: UserRegisterRequest,
    current_user: User = Depends(get_current_active_user),
    session: AsyncSession = Depends(get_db_session),
):
    """Create a user (requires USER_MANAGE). The account gets the USER role."""
    user = await UserService.register_user(session, data)
    await session.commit()
    logger.info(f"New user created by {current_user.username}: {user.username}")
    return UserResponse.model_validate(user)


@router.get("/{user_id}", response_model=UserResponse, dependencies=[Depends(get_current_active_user)])
async def get_user(user_id: int, session: AsyncSession = Depends(get_db_session)):
    """Get user by ID."""
    user = await UserService.get_user_or_404(session, user_id)
    return UserResponse.model_validate(user)


@router.patch("/{user_id}", response_model=UserResponse)
async def patch_user(
    user_id: int,
    data: UserPatchRequest,
    current_user: User = Depends(get_current_active_user),
    session: AsyncSession = Depends(get_db_session),
):
    """Update a profile.

    Users may update their own display name, avatar URL and bio. Administrators
    may update anyone, including `status`.
    """
    user = await UserService.patch_user(session, current_user, user_id, data)
    await session.commit()
    return UserResponse.model_validate(user)


@router.delete(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_role(RoleName.ADMIN))],
)
async def delete_user(
    user_id: int,
    current_user: User = Depends(get_current_active_user),
    session: AsyncSession = Depends(get_db_session),
):
    """Delete user (admin only)."""
    if current_user.id == user_id:
        raise CannotDeleteOwnAccount()

    success = await UserService.delete_user(session, user_id)

    if not success:
        raise UserNotFound()

    await session.commit()
    logger.info(f"User deleted by admin {current_user.username}: {user_id}")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@roles_router.get(
    "",
    response_model=list[RoleResponse],
    dependencies=[Depends(require_permission(Permission.ADMIN_PANEL))],
)
async def list_roles(session: AsyncSession = Depends(get_db_session)):
    """List the seeded roles and their permissions."""
    roles = await RoleService.list_roles(session)
    return [RoleResponse.model_validate(role) for role in roles]
