import logging
from contextlib import asynccontextmanager

from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import Limiter
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address

from src.config.cors_config import CORSConfigurationError
from src.config.logging_config import configure_logging
from src.config.settings import settings
from src.database.client import close_db, get_session, init_db
from src.features.auth.jwt_utils import TokenService
from src.features.auth.router import router as auth_router
from src.features.comment.router import router as comment_router
from src.features.episode.router import router as episode_router
from src.features.like.router import router as like_router
from src.features.podcast.router import router as podcast_router
from src.features.progress.router import router as progress_router
from src.features.subscription.router import router as subscription_router
from src.features.user.router import roles_router
from src.features.user.router import router as user_router
from src.features.user.service import RoleService
from src.shared.errors import register_exception_handlers

configure_logging(settings.log_level)
logger = logging.getLogger(__name__)

# Initialize rate limiter
limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[settings.rate_limit_default],
    enabled=settings.rate_limit_enabled,
)


async def seed_database() -> None:
    """Create the default roles and, when configured, the default administrator."""
    async with get_session() as session:
        await RoleService.seed_roles(session)
        if settings.admin_email and settings.admin_password:
            await RoleService.seed_admin(session, settings.admin_email, settings.admin_username, settings.admin_password)


@asynccontextmanager
async def lifespan(_: FastAPI):
    """Handle startup and shutdown events."""
    # Startup
    await init_db()
    await seed_database()
    yield
    # Shutdown
    await close_db()


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
)

# One signing key per process, handed to handlers through get_token_service
app.state.token_service = TokenService(
    secret_key=settings.secret_key,
    algorithm=settings.jwt_algorithm,
    access_ttl_seconds=settings.access_token_expire_seconds,
)

# Add rate limiting middleware
app.state.limiter = limiter
app.add_middleware(SlowAPIMiddleware)

register_exception_handlers(app)

# Configure CORS middleware with environment-aware settings
try:
    cors_config = settings.get_cors_configuration()
    cors_config.log_configuration()

    middleware_config = cors_config.get_middleware_config()
    app.add_middleware(
        CORSMiddleware,
        allow_origins=middleware_config["allow_origins"],
        allow_origin_regex=middleware_config["allow_origin_regex"],
        allow_credentials=middleware_config["allow_credentials"],
        allow_methods=middleware_config["allow_methods"],
        allow_headers=middleware_config["allow_headers"],
        max_age=middleware_config["max_age"],
    )
except CORSConfigurationError as exc:
    logger.error(f"CORS configuration error: {exc}")
    raise

# Router Registration
routers: list[APIRouter] = [
    auth_router,
    user_router,
    roles_router,
    podcast_router,
    episode_router,
    comment_router,
    subscription_router,
    like_router,
    progress_router,
]

for router in routers:
    app.include_router(router, prefix=settings.api_prefix)


@app.get("/")
async def root():
    return {"message": settings.app_name, "status": "running"}


@app.get("/health")
async def health():
    return {"status": "healthy"}
