"""Tests for CORS configuration and security."""

import pytest

from src.config.cors_config import (
    DEVELOPMENT_ORIGINS,
    CORSConfiguration,
    CORSConfigurationError,
    normalize_origin,
    parse_comma_separated_list,
)


class TestOriginNormalization:
    def test_normalize_removes_trailing_slash(self):
        assert normalize_origin("https://example.com/") == "https://example.com"
        assert normalize_origin("https://example.com//") == "https://example.com"

    def test_normalize_strips_whitespace(self):
        assert normalize_origin("  https://example.com  ") == "https://example.com"

    def test_normalize_preserves_valid_origins(self):
        assert normalize_origin("http://localhost:3000") == "http://localhost:3000"

    def test_normalize_keeps_wildcard(self):
        assert normalize_origin("*") == "*"

    def test_normalize_rejects_empty_origin(self):
        with pytest.raises(CORSConfigurationError, match="Origin cannot be empty"):
            normalize_origin("   ")

    @pytest.mark.parametrize("origin", ["not-a-url", "example.com", "^https://.*\\.example\\.com$"])
    def test_normalize_rejects_non_urls(self, origin):
        with pytest.raises(CORSConfigurationError, match="Invalid origin URL"):
            normalize_origin(origin)


class TestParseCommaSeparatedList:
    def test_parse_string_with_whitespace(self):
        result = parse_comma_separated_list(" https://example.com , https://test.com ")
        assert result == ["https://example.com", "https://test.com"]

    def test_parse_list(self):
        assert parse_comma_separated_list(["https://example.com", " ", "https://test.com "]) == [
            "https://example.com",
            "https://test.com",
        ]

    def test_parse_empty_values(self):
        assert parse_comma_separated_list(None) == []
        assert parse_comma_separated_list("") == []
        assert parse_comma_separated_list(" , ") == []


class TestCORSConfigurationDevelopment:
    def test_for_environment_defaults_to_local_origins(self):
        config = CORSConfiguration.for_environment("development")
        assert config.allow_origins == DEVELOPMENT_ORIGINS
        assert config.max_age == 600

    def test_empty_origin_string_counts_as_unset(self):
        config = CORSConfiguration.for_environment("development", allow_origins="")
        assert config.allow_origins == DEVELOPMENT_ORIGINS

    def test_custom_origins_replace_defaults(self):
        config = CORSConfiguration.for_environment("development", allow_origins="http://custom.local")
        assert config.allow_origins == ["http://custom.local"]

    def test_development_allows_wildcard(self):
        config = CORSConfiguration(allow_origins="*", environment="development")
        assert config.allow_origins == ["*"]


class TestCORSSecurityRules:
    def test_credentials_with_wildcard_rejected(self):
        with pytest.raises(CORSConfigurationError, match="credentials"):
            CORSConfiguration(allow_origins="*", allow_credentials=True, environment="development")

    @pytest.mark.parametrize("environment", ["staging", "production"])
    def test_wildcard_outside_development_rejected(self, environment):
        with pytest.raises(CORSConfigurationError, match="not allowed"):
            CORSConfiguration(allow_origins="*", environment=environment)

    def test_production_requires_origins(self):
        with pytest.raises(CORSConfigurationError, match="explicit allowed origins"):
            CORSConfiguration.for_environment("production")

    def test_production_accepts_regex_instead_of_origins(self):
        config = CORSConfiguration.for_environment("production", allow_origin_regex=r"^https://.*\.example\.com$")
        assert config.origin_regex is not None
        assert config.max_age == 3600

    def test_invalid_regex_rejected(self):
        with pytest.raises(CORSConfigurationError, match="Invalid regex"):
            CORSConfiguration(allow_origin_regex="^[invalid(regex$", environment="development")

    def test_staging_without_origins_is_allowed(self):
        config = CORSConfiguration.for_environment("staging")
        assert config.allow_origins == []


class TestCORSMiddlewareConfig:
    def test_middleware_config_structure(self):
        config = CORSConfiguration(
            allow_origins="https://app.example.com",
            allow_credentials=True,
            environment="production",
        )

        middleware_config = config.get_middleware_config()

        assert middleware_config["allow_origins"] == ["https://app.example.com"]
        assert middleware_config["allow_origin_regex"] is None
        assert middleware_config["allow_credentials"] is True
        assert "PATCH" in middleware_config["allow_methods"]
        assert "authorization" in middleware_config["allow_headers"]

    def test_middleware_config_with_regex(self):
        config = CORSConfiguration(allow_origin_regex=r"^https://.*\.example\.com$", environment="production")
        assert config.get_middleware_config()["allow_origin_regex"] == r"^https://.*\.example\.com$"


class TestCORSOnApplication:
    """The application is configured for development in the test environment."""

    async def test_allowed_origin_gets_cors_headers(self, client):
        response = await client.get("/health", headers={"origin": "http://localhost:5173"})

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "http://localhost:5173"

    async def test_unknown_origin_gets_no_cors_headers(self, client):
        response = await client.get("/health", headers={"origin": "https://evil.example.com"})

        assert response.status_code == 200
        assert "access-control-allow-origin" not in response.headers

    async def test_preflight(self, client):
        response = await client.options(
            "/api/auth/login",
            headers={
                "origin": "http://localhost:3000",
                "access-control-request-method": "POST",
                "access-control-request-headers": "content-type",
            },
        )

        assert response.status_code == 200
        assert "POST" in response.headers["access-control-allow-methods"]
