"""JWT utilities for authentication."""

import secrets
from datetime import UTC, datetime, timedelta
from typing import Any

import jwt
from fastapi import Request

ACCESS_TOKEN_TYPE = "access"


class TokenService:
    """Signs and verifies access tokens with one process-wide key.

    Built once at application setup and stored on ``app.state``; request
    handlers reach it through :func:`get_token_service`.
    """

    def __init__(self, secret_key: str, algorithm: str = "HS256", access_ttl_seconds: int = 900):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.access_ttl_seconds = access_ttl_seconds

    def create_access_token(self, subject: str, roles: list[str], issued_at: datetime | None = None) -> str:
        """Create a signed access token.

        Args:
            subject: User email, stored as ``sub``
            roles: ``ROLE_<name>`` strings
            issued_at: Issue time (defaults to now)

        Returns:
            Encoded JWT token string

        """
        issued_at = issued_at or datetime.now(UTC)
        payload = {
            "sub": subject,
            "roles": roles,
            "iat": issued_at,
            "exp": issued_at + timedelta(seconds=self.access_ttl_seconds),
            "type": ACCESS_TOKEN_TYPE,
        }
        return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)

    def decode_token(self, token: str) -> dict[str, Any]:
        """Decode and verify a JWT token (signature and expiry).

        Raises:
            jwt.InvalidTokenError: If token is invalid or expired

        """
        return jwt.decode(token, self.secret_key, algorithms=[self.algorithm])

    @staticmethod
    def verify_token_type(payload: dict[str, Any], expected_type: str = ACCESS_TOKEN_TYPE) -> bool:
        return payload.get("type") == expected_type


def generate_refresh_token() -> str:
    """Opaque refresh token string. Not a JWT: it only means something to the database."""
    return secrets.token_urlsafe(48)


def get_token_service(request: Request) -> TokenService:
    """FastAPI dependency returning the application's TokenService."""
    return request.app.state.token_service
