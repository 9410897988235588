"""Application settings and configuration."""

import logging

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.config.cors_config import CORSConfiguration, CORSConfigurationError

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application (hardcoded constants)
    app_name: str = "PodHub API"
    app_version: str = "0.1.0"

    # Environment-specific settings
    debug: bool = False
    environment: str  # development, staging, production

    # Database
    database_url: str
    database_pool_size: int = 10
    database_max_overflow: int = 20
    database_pool_timeout: int = 30
    database_pool_recycle: int = 3600
    database_echo: bool = False
    database_create_schema: bool = True

    # API
    api_prefix: str = "/api"

    # Cursor pagination
    pagination_default_limit: int = 20
    pagination_max_limit: int = 100

    # CORS Configuration (environment-aware)
    cors_allow_origins: str | None = None
    cors_allow_origin_regex: str | None = None
    cors_allow_credentials: bool = False

    # Rate limiting
    rate_limit_enabled: bool = True
    rate_limit_default: str = "300/minute"

    # Security
    secret_key: str
    jwt_algorithm: str = "HS256"
    access_token_expire_seconds: int = 900
    refresh_token_expire_days: int = 7

    # Seeded administrator (skipped when either value is missing)
    admin_email: str | None = None
    admin_username: str = "admin"
    admin_password: str | None = None

    # Logging
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("environment", mode="before")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate environment value."""
        valid_envs = {"development", "staging", "production"}
        env = str(v).lower()
        if env not in valid_envs:
            raise ValueError(f"Environment must be one of {valid_envs}, got {env}")
        return env

    @field_validator("secret_key")
    @classmethod
    def validate_secret_key(cls, v: str) -> str:
        """HS256 keys shorter than 32 bytes are rejected by PyJWT's key length check."""
        if len(v.encode()) < 32:
            raise ValueError("SECRET_KEY must be at least 32 bytes long")
        return v

    @property
    def refresh_token_expire_seconds(self) -> int:
        return self.refresh_token_expire_days * 24 * 3600

    def get_cors_configuration(self) -> CORSConfiguration:
        """Get CORS configuration based on environment settings.

        Raises:
            CORSConfigurationError: If CORS configuration is invalid or insecure.

        """
        try:
            return CORSConfiguration.for_environment(
                self.environment,
                allow_origins=self.cors_allow_origins,
                allow_origin_regex=self.cors_allow_origin_regex,
                allow_credentials=self.cors_allow_credentials,
            )
        except CORSConfigurationError as exc:
            logger.error(f"Failed to create CORS configuration: {exc}")
            raise


settings = Settings()  # type: ignore[call-arg]
