"""Environment-aware CORS configuration."""

import logging
import re
from urllib.parse import urlparse

logger = logging.getLogger(__name__)

DEVELOPMENT_ORIGINS = [
    "http://localhost:5173",
    "http://localhost:3000",
    "http://127.0.0.1:5173",
    "http://127.0.0.1:3000",
]
DEFAULT_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"]
DEFAULT_HEADERS = ["authorization", "content-type"]


class CORSConfigurationError(Exception):
    """Raised when CORS configuration is invalid or insecure."""


def normalize_origin(origin: str) -> str:
    """Strip whitespace and trailing slashes from an origin, validating its shape.

    Raises:
        CORSConfigurationError: If origin is empty or not a scheme://host URL.

    """
    origin = origin.strip()
    if not origin:
        raise CORSConfigurationError("Origin cannot be empty")
    if origin == "*":
        return origin

    parsed = urlparse(origin)
    if not parsed.scheme or not parsed.netloc:
        raise CORSConfigurationError(f"Invalid origin URL: {origin}")
    return origin.rstrip("/")


def parse_comma_separated_list(value: str | list[str] | None) -> list[str]:
    """Parse a comma-separated string (or list) into a list of stripped values."""
    if value is None:
        return []
    if isinstance(value, str):
        value = value.split(",")
    return [v.strip() for v in value if v.strip()]


class CORSConfiguration:
    """Validated CORS settings for Starlette's CORSMiddleware.

    Credentials are never combined with a wildcard origin, and wildcard origins
    are only accepted in development. Production needs explicit origins or a regex.
    """

    def __init__(
        self,
        allow_origins: str | list[str] | None = None,
        allow_origin_regex: str | None = None,
        allow_credentials: bool = False,
        max_age: int = 600,
        environment: str = "development",
    ):
        self.environment = environment.lower()
        self.allow_credentials = allow_credentials
        self.max_age = max_age
        self.allow_methods = list(DEFAULT_METHODS)
        self.allow_headers = list(DEFAULT_HEADERS)
        self.allow_origins = [normalize_origin(o) for o in parse_comma_separated_list(allow_origins)]

        self.origin_regex: re.Pattern[str] | None = None
        if allow_origin_regex:
            try:
                self.origin_regex = re.compile(allow_origin_regex)
            except re.error as exc:
                raise CORSConfigurationError(f"Invalid regex pattern: {allow_origin_regex}") from exc

        self._validate_security_rules()

    def _validate_security_rules(self) -> None:
        has_wildcard = "*" in self.allow_origins
        has_explicit_origins = bool(self.allow_origins) and not has_wildcard

        if self.allow_credentials and has_wildcard:
            raise CORSConfigurationError("Cannot enable credentials with wildcard origins (*)")

        if has_wildcard and self.environment != "development":
            raise CORSConfigurationError(f"Wildcard origins (*) are not allowed in {self.environment} environment")

        if self.environment == "production" and not has_explicit_origins and self.origin_regex is None:
            raise CORSConfigurationError("Production environment requires explicit allowed origins")

    @classmethod
    def for_environment(
        cls,
        environment: str,
        allow_origins: str | list[str] | None = None,
        allow_origin_regex: str | None = None,
        allow_credentials: bool = False,
    ) -> "CORSConfiguration":
        """Build the configuration for an environment, filling development defaults."""
        environment = environment.lower()
        if environment == "development" and not parse_comma_separated_list(allow_origins):
            allow_origins = DEVELOPMENT_ORIGINS
        max_age = 3600 if environment == "production" else 600
        return cls(
            allow_origins=allow_origins,
            allow_origin_regex=allow_origin_regex,
            allow_credentials=allow_credentials,
            max_age=max_age,
            environment=environment,
        )

    def get_middleware_config(self) -> dict:
        """Get keyword arguments for CORSMiddleware."""
        return {
            "allow_origins": self.allow_origins,
            "allow_origin_regex": self.origin_regex.pattern if self.origin_regex else None,
            "allow_credentials": self.allow_credentials,
            "allow_methods": self.allow_methods,
            "allow_headers": self.allow_headers,
            "max_age": self.max_age,
        }

    def log_configuration(self) -> None:
        logger.info(
            f"CORS configuration: environment={self.environment} origins={self.allow_origins} "
            f"regex={'enabled' if self.origin_regex else 'disabled'} credentials={self.allow_credentials}"
        )
