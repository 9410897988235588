"""Comment-related exceptions."""

from src.shared.exceptions import BadRequestException, ForbiddenException, NotFoundException


class CommentNotFound(NotFoundException):
    """Raised when comment is not found."""

    def __init__(self):
        super().__init__(detail="Comment not found")


class CannotEditComment(ForbiddenException):
    def __init__(self):
        super().__init__(detail="You can only edit your own comments")


class CannotDeleteComment(ForbiddenException):
    def __init__(self):
        super().__init__(detail="You do not have permission to delete this comment")


class InvalidCommentStatus(BadRequestException):
    """Raised when a status filter is not a known comment status."""

    def __init__(self, value: str):
        super().__init__(detail=f"Invalid comment status: {value}")


class ReplyTargetMismatch(BadRequestException):
    """Raised when a reply's parent comment belongs to a different podcast or episode."""

    def __init__(self):
        super().__init__(detail="Parent comment belongs to a different target")
