"""Episode-related exceptions."""

from src.shared.exceptions import NotFoundException


class EpisodeNotFound(NotFoundException):
    """Raised when episode is not found."""

    def __init__(self, episode_id: int | None = None):
        detail = "Episode not found" if episode_id is None else f"Episode not found: {episode_id}"
        super().__init__(detail=detail)
