"""Test configuration and fixtures.

Each test gets its own in-memory SQLite database:
1. A fresh engine with a single shared connection (StaticPool) is created per test
2. The schema is created and the default roles are seeded
3. The FastAPI session dependency is overridden with the test session
4. The engine is disposed after the test, which discards the database
"""

import os
from collections.abc import AsyncGenerator
from pathlib import Path

from dotenv import load_dotenv

# Settings are read at import time, so the test environment must be loaded first
load_dotenv(Path(__file__).parent.parent / ".env.test", override=True)
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("SECRET_KEY", "test-secret-key-that-is-at-least-32-bytes-long")
os.environ["RATE_LIMIT_ENABLED"] = "false"

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from src.config.settings import settings  # noqa: E402
from src.database.base import Base  # noqa: E402
from src.database.client import enable_sqlite_foreign_keys  # noqa: E402
from src.database.dependencies import get_db_session  # noqa: E402
from src.features.auth.dependencies import get_current_active_user, get_current_user  # noqa: E402
from src.features.auth.jwt_utils import TokenService  # noqa: E402
from src.features.episode.models import Episode  # noqa: E402
from src.features.podcast.models import Podcast  # noqa: E402
from src.features.user.models import RoleName, User, UserStatus  # noqa: E402
from src.features.user.service import RoleService  # noqa: E402
from src.main import app  # noqa: E402

DEFAULT_PASSWORD = "TestPass123!"


# Database Setup - Function Scope (Fresh Database Per Test)


@pytest_asyncio.fixture
async def db_engine() -> AsyncGenerator[AsyncEngine]:
    """Create an in-memory database with the full schema and foreign keys enforced."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    enable_sqlite_foreign_keys(engine)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def session(db_engine: AsyncEngine) -> AsyncGenerator[AsyncSession]:
    """Database session per test, with the default roles already seeded."""
    async_session = AsyncSession(bind=db_engine, expire_on_commit=False)

    try:
        await RoleService.seed_roles(async_session)
        await async_session.commit()
        yield async_session
    finally:
        await async_session.close()


# FastAPI Client & Dependency Overrides


@pytest_asyncio.fixture(autouse=True)
async def override_get_db_session(session: AsyncSession):
    """Override the database session dependency with test session.

    Endpoints and the test body share one session, so objects created by the
    test are visible to requests and vice versa.
    """

    async def _get_test_session():
        yield session

    app.dependency_overrides[get_db_session] = _get_test_session
    yield
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client() -> AsyncGenerator[AsyncClient]:
    """Unauthenticated async HTTP test client.

    Use auth_client or admin_client for authenticated requests, or log in
    through the API to exercise real tokens.
    """
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest.fixture
def token_service() -> TokenService:
    return app.state.token_service


# Test User Factories


@pytest_asyncio.fixture
async def make_user(session: AsyncSession):
    """Factory fixture to create committed test users.

    Usage:
        user = await make_user()                                   # USER role
        admin = await make_user(roles=[RoleName.ADMIN])            # admin
        suspended = await make_user(status=UserStatus.SUSPENDED)  # suspended user
    """
    counter = 0  # Counter for unique email/username generation

    async def _factory(
        email=None,
        username=None,
        display_name="Test User",
        password=DEFAULT_PASSWORD,
        roles=None,
        status=UserStatus.ACTIVE,
        **kwargs,
    ) -> User:
        nonlocal counter
        counter += 1

        # Generate unique email and username if not provided
        if email is None:
            email = f"testuser{counter}@example.com"
        if username is None:
            username = f"testuser{counter}"

        role_objects = [await RoleService.require_role(session, role) for role in (roles or [RoleName.USER])]

        user = User(
            email=email,
            username=username,
            display_name=display_name,
            hashed_password=User.hash_password(password),
            roles=role_objects,
            status=status.value,
            **kwargs,
        )

        session.add(user)
        await session.commit()
        return user

    yield _factory


@pytest_asyncio.fixture
async def make_podcast(session: AsyncSession):
    """Factory fixture to create committed podcasts.

    Usage:
        podcast = await make_podcast(creator)
        public = await make_podcast(creator, is_public=True, title="Daily News")
    """
    counter = 0

    async def _factory(creator: User, title=None, slug=None, **kwargs) -> Podcast:
        nonlocal counter
        counter += 1

        podcast = Podcast(
            creator_id=creator.id,
            title=title or f"Podcast {counter}",
            slug=slug or f"podcast-{counter}",
            **kwargs,
        )
        session.add(podcast)
        await session.commit()
        return podcast

    yield _factory


@pytest_asyncio.fixture
async def make_episode(session: AsyncSession):
    """Factory fixture to create committed episodes of a podcast."""
    counter = 0

    async def _factory(podcast: Podcast, title=None, **kwargs) -> Episode:
        nonlocal counter
        counter += 1

        episode = Episode(podcast_id=podcast.id, title=title or f"Episode {counter}", **kwargs)
        session.add(episode)
        await session.commit()
        return episode

    yield _factory


def _authenticate_as(user: User) -> None:
    async def override_get_current_user():
        return user

    app.dependency_overrides[get_current_user] = override_get_current_user
    app.dependency_overrides[get_current_active_user] = override_get_current_user


@pytest_asyncio.fixture
async def auth_client(client: AsyncClient, make_user):
    """Authenticated client with a regular user.

    Overrides the auth dependency directly - no JWT issued, no login endpoint hit.
    Authority checks still run against the user's real roles.

    Returns:
        tuple: (client, user) - both the HTTP client and the authenticated user

    """
    user = await make_user()
    _authenticate_as(user)

    yield client, user

    # Cleanup is handled by autouse override_get_db_session fixture


@pytest_asyncio.fixture
async def creator_client(client: AsyncClient, make_user):
    """Authenticated client with a user holding the CREATOR role."""
    user = await make_user(roles=[RoleName.USER, RoleName.CREATOR])
    _authenticate_as(user)

    yield client, user


@pytest_asyncio.fixture
async def admin_client(client: AsyncClient, make_user):
    """Authenticated client with an admin user.

    Same as auth_client but the user has ADMIN role.

    Returns:
        tuple: (client, user) - both the HTTP client and the admin user

    """
    user = await make_user(roles=[RoleName.ADMIN])
    _authenticate_as(user)

    yield client, user


@pytest.fixture
def login_as(client: AsyncClient):
    """Log in through the API and return Authorization headers.

    Usage:
        headers = await login_as(user)
    """

    async def _login(user: User, password: str = DEFAULT_PASSWORD) -> dict[str, str]:
        response = await client.post(
            f"{settings.api_prefix}/auth/login", json={"identifier": user.email, "password": password}
        )
        assert response.status_code == 200, response.text
        return {"Authorization": f"Bearer {response.json()['accessToken']}"}

    return _login
