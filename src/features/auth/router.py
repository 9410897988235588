"""Authentication router (login, registration and token rotation)."""

import logging

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.database.dependencies import get_db_session
from src.features.user.models import User
from src.features.user.schemas import UserRegisterRequest, UserResponse

from .dependencies import get_current_active_user
from .jwt_utils import TokenService, get_token_service
from .schemas import AuthResponse, LoginRequest, LogoutResponse, RefreshTokenRequest
from .service import AuthService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/auth", tags=["Authentication"])


def _client_info(request: Request) -> tuple[str | None, str | None]:
    ip_address = request.client.host if request.client else None
    return ip_address, request.headers.get("user-agent")


@router.post("/login", response_model=AuthResponse)
async def login(
    data: LoginRequest,
    request: Request,
    session: AsyncSession = Depends(get_db_session),
    token_service: TokenService = Depends(get_token_service),
):
    """Login with email or username and get a token pair.

    - **identifier**: Email address or username
    - **password**: Password
    """
    ip_address, user_agent = _client_info(request)
    response = await AuthService.login(session, token_service, data.identifier, data.password, ip_address, user_agent)
    await session.commit()
    return response


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def register(data: UserRegisterRequest, session: AsyncSession = Depends(get_db_session)):
    """Create an account with the USER role."""
    user = await AuthService.register(session, data)
    await session.commit()
    return UserResponse.model_validate(user)


@router.post("/refresh", response_model=AuthResponse)
async def refresh_token(
    data: RefreshTokenRequest,
    request: Request,
    session: AsyncSession = Depends(get_db_session),
    token_service: TokenService = Depends(get_token_service),
):
    """Exchange a refresh token for a new token pair. The presented token is consumed.

    - **refreshToken**: Refresh token from login or a previous refresh
    """
    ip_address, user_agent = _client_info(request)
    response = await AuthService.refresh(session, token_service, data.refresh_token, ip_address, user_agent)
    await session.commit()
    return response


@router.post("/logout", response_model=LogoutResponse)
async def logout(
    data: RefreshTokenRequest,
    current_user: User = Depends(get_current_active_user),
    session: AsyncSession = Depends(get_db_session),
):
    """Logout and revoke refresh token.

    - **refreshToken**: Refresh token to revoke
    """
    revoked = await AuthService.revoke_refresh_token(session, data.refresh_token, current_user)

    if revoked:
        await session.commit()
        logger.info(f"User logged out: {current_user.username}")
        return LogoutResponse(revoked=True, message="Successfully logged out")

    return LogoutResponse(revoked=False, message="Token already revoked or not found")
