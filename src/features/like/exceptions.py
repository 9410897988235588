"""Like-related exceptions."""

from src.shared.exceptions import ConflictException, NotFoundException


class LikeNotFound(NotFoundException):
    def __init__(self):
        super().__init__(detail="Like not found")


class AlreadyLiked(ConflictException):
    def __init__(self):
        super().__init__(detail="User has already liked this episode")
