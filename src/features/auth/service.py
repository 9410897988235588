"""Authentication service layer."""

import logging
from datetime import datetime, timedelta

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from src.config.settings import settings
from src.database.base import utc_now
from src.features.user.models import User
from src.features.user.schemas import UserRegisterRequest, UserResponse
from src.features.user.service import UserService

from .exceptions import InvalidCredentialsException, InvalidRefreshTokenException
from .jwt_utils import TokenService, generate_refresh_token
from .models import RefreshToken
from .schemas import AuthResponse

logger = logging.getLogger(__name__)


class AuthService:
    """Service for login, registration and refresh token rotation."""

    @staticmethod
    async def authenticate_user(session: AsyncSession, identifier: str, password: str) -> User | None:
        """Authenticate a user with either username or email and password.

        Args:
            session: Database session
            identifier: Username or email address
            password: Plain text password

        Returns:
            User object if authentication successful, None otherwise

        """
        user = await UserService.get_user_by_identifier(session, identifier)

        if not user:
            return None

        if not user.verify_password(password):
            return None

        if not user.is_active:
            logger.warning(f"Login attempt for suspended account: {identifier}")
            return None

        return user

    @staticmethod
    async def login(
        session: AsyncSession,
        token_service: TokenService,
        identifier: str,
        password: str,
        ip_address: str | None = None,
        user_agent: str | None = None,
    ) -> AuthResponse:
        """Verify credentials and issue a fresh access/refresh token pair.

        Raises:
            InvalidCredentialsException: For an unknown identifier, a wrong
                password or a suspended account alike

        """
        user = await AuthService.authenticate_user(session, identifier, password)
        if user is None:
            raise InvalidCredentialsException()

        refresh_token = await AuthService._create_refresh_token(session, user, ip_address, user_agent)
        logger.info(f"User logged in: {user.username}")
        return AuthService._build_response(token_service, user, refresh_token)

    @staticmethod
    async def register(session: AsyncSession, data: UserRegisterRequest) -> User:
        """Self-service registration. Same rules as admin creation."""
        return await UserService.register_user(session, data)

    @staticmethod
    async def refresh(
        session: AsyncSession,
        token_service: TokenService,
        raw_token: str,
        ip_address: str | None = None,
        user_agent: str | None = None,
    ) -> AuthResponse:
        """Rotate a refresh token: revoke the presented one and issue its successor.

        Presenting a token that was already rotated revokes every token issued
        after it in the same chain. That revocation is committed before the
        error is raised so the rollback of the failing request cannot undo it.

        Raises:
            InvalidRefreshTokenException: If the token is unknown, revoked,
                expired, belongs to an unusable account, or a concurrent
                refresh consumed it first

        """
        now = utc_now()
        stored = await AuthService.get_refresh_token(session, raw_token)

        if stored is None:
            raise InvalidRefreshTokenException()

        if stored.revoked:
            if stored.replaced_by is not None:
                revoked_count = await AuthService._revoke_descendants(session, stored, now)
                await session.commit()
                logger.warning(
                    f"Rotated refresh token {stored.id} reused; revoked {revoked_count} descendant token(s) "
                    f"of user {stored.user_id}"
                )
            raise InvalidRefreshTokenException()

        if stored.is_expired(now):
            raise InvalidRefreshTokenException()

        user = await UserService.get_user(session, stored.user_id)
        if user is None or not user.is_active:
            raise InvalidRefreshTokenException()

        successor = await AuthService._create_refresh_token(session, user, ip_address, user_agent)

        # Only one concurrent refresh can flip revoked from false to true
        result = await session.execute(
            update(RefreshToken)
            .where(RefreshToken.id == stored.id, RefreshToken.revoked.is_(False))
            .values(revoked=True, revoked_at=now, replaced_by=successor.id)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != 1:
            logger.warning(f"Refresh token {stored.id} lost a rotation race")
            raise InvalidRefreshTokenException()

        stored.revoked = True
        stored.revoked_at = now
        stored.replaced_by = successor.id

        logger.info(f"Refresh token rotated for user {user.username}: {stored.id} -> {successor.id}")
        return AuthService._build_response(token_service, user, successor)

    @staticmethod
    async def revoke_refresh_token(session: AsyncSession, raw_token: str, user: User) -> bool:
        """Revoke a refresh token (logout).

        Returns:
            True if an active token owned by ``user`` was revoked

        """
        stored = await AuthService.get_refresh_token(session, raw_token)

        if stored and stored.user_id == user.id and not stored.revoked:
            stored.revoked = True
            stored.revoked_at = utc_now()
            return True

        return False

    @staticmethod
    async def get_refresh_token(session: AsyncSession, raw_token: str) -> RefreshToken | None:
        stmt = select(RefreshToken).where(RefreshToken.token == raw_token)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    async def _create_refresh_token(
        session: AsyncSession, user: User, ip_address: str | None, user_agent: str | None
    ) -> RefreshToken:
        now = utc_now()
        refresh_token = RefreshToken(
            user_id=user.id,
            token=generate_refresh_token(),
            created_at=now,
            expires_at=now + timedelta(days=settings.refresh_token_expire_days),
            revoked=False,
            ip_address=ip_address,
            user_agent=user_agent[:500] if user_agent else None,
        )
        session.add(refresh_token)
        await session.flush()
        return refresh_token

    @staticmethod
    async def _revoke_descendants(session: AsyncSession, token: RefreshToken, now: datetime) -> int:
        """Walk the replaced_by chain forward from ``token`` and revoke every active successor."""
        revoked = 0
        seen = {token.id}
        next_id = token.replaced_by
        while next_id is not None and next_id not in seen:
            seen.add(next_id)
            successor = await session.get(RefreshToken, next_id)
            if successor is None:
                break
            if not successor.revoked:
                successor.revoked = True
                successor.revoked_at = now
                revoked += 1
            next_id = successor.replaced_by
        return revoked

    @staticmethod
    def _build_response(token_service: TokenService, user: User, refresh_token: RefreshToken) -> AuthResponse:
        issued_at = utc_now()
        roles = user.role_authorities
        access_token = token_service.create_access_token(user.email, roles, issued_at=issued_at)

        return AuthResponse(
            access_token=access_token,
            refresh_token=refresh_token.token,
            expires_in=token_service.access_ttl_seconds,
            refresh_expires_in=settings.refresh_token_expire_seconds,
            issued_at=issued_at,
            refresh_issued_at=refresh_token.created_at,
            user=UserResponse.model_validate(user),
            authorities=sorted(user.authorities),
        )
