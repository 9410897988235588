"""Authentication exceptions."""

from fastapi import HTTPException, status


class AuthenticationException(HTTPException):
    """Base authentication exception."""

    def __init__(self, detail: str = "Authentication failed"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


class InvalidCredentialsException(AuthenticationException):
    """Raised when the identifier, password or account state rejects a login.

    The message is the same for every cause.
    """

    def __init__(self):
        super().__init__(detail="Incorrect username or password")


class InvalidTokenException(AuthenticationException):
    """Raised when the access token is missing, invalid or expired."""

    def __init__(self, detail: str = "Invalid or expired token"):
        super().__init__(detail=detail)


class InvalidRefreshTokenException(AuthenticationException):
    """Raised when a refresh token is unknown, revoked, expired or lost a rotation race."""

    def __init__(self):
        super().__init__(detail="Invalid or expired refresh token")


class UserSuspendedException(HTTPException):
    """Raised when a valid token belongs to a suspended account."""

    def __init__(self):
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail="User account is suspended")


class InsufficientPermissionException(HTTPException):
    """Raised when user holds none of the required authorities."""

    def __init__(self, required: list[str]):
        required_str = ", ".join(required)
        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"User does not have required authority: {required_str}",
        )
