"""User-related exceptions."""

from src.shared.exceptions import BadRequestException, ConflictException, ForbiddenException, NotFoundException


class UserNotFound(NotFoundException):
    """Raised when user is not found."""

    def __init__(self):
        super().__init__(detail="User not found")


class UserAlreadyExists(ConflictException):
    """Raised when trying to create a user that already exists."""

    def __init__(self, field: str = "user"):
        super().__init__(detail=f"{field.capitalize()} already registered")


class UsernameAlreadyExists(UserAlreadyExists):
    """Raised when username already exists."""

    def __init__(self):
        super().__init__(field="username")


class EmailAlreadyExists(UserAlreadyExists):
    """Raised when email already exists."""

    def __init__(self):
        super().__init__(field="email")


class CannotDeleteOwnAccount(BadRequestException):
    """Raised when an admin tries to delete their own account."""

    def __init__(self):
        super().__init__(detail="Cannot delete your own account")


class CannotModifyOtherUser(ForbiddenException):
    """Raised when user tries to modify another user without permission."""

    def __init__(self):
        super().__init__(detail="You do not have permission to modify other users")


class CannotModifyField(ForbiddenException):
    """Raised when trying to modify a field that cannot be edited."""

    def __init__(self, field: str):
        super().__init__(detail=f"You do not have permission to modify '{field}' field")


class InvalidRoleName(BadRequestException):
    """Raised when a role filter does not name a known role."""

    def __init__(self, value: str):
        super().__init__(detail=f"Unknown role: {value}")
