"""Podcast-related exceptions."""

from src.shared.exceptions import ConflictException, ForbiddenException, NotFoundException


class PodcastNotFound(NotFoundException):
    """Raised when podcast is not found."""

    def __init__(self, identifier: int | str | None = None):
        detail = "Podcast not found" if identifier is None else f"Podcast not found: {identifier}"
        super().__init__(detail=detail)


class SlugAlreadyExists(ConflictException):
    """Raised when another podcast already uses the slug."""

    def __init__(self, slug: str):
        super().__init__(detail=f"Podcast with slug '{slug}' already exists")


class NotPodcastOwner(ForbiddenException):
    """Raised when a user modifies a podcast (or its episodes) they did not create."""

    def __init__(self):
        super().__init__(detail="You do not have permission to modify this podcast")
