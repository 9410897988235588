"""Episode service layer."""

import logging

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession

from src.features.podcast.service import PodcastService
from src.features.user.models import User
from src.shared.pagination.cursor_pagination import CursorPagination
from src.shared.pagination.pagination import CursorParams

from .exceptions import EpisodeNotFound
from .models import Episode
from .schemas import EpisodeCreateRequest, EpisodePatchRequest

logger = logging.getLogger(__name__)


class EpisodeService:
    """Service for episode operations. Writes require owning the parent podcast."""

    @staticmethod
    async def create_episode(session: AsyncSession, user: User, data: EpisodeCreateRequest) -> Episode:
        """Create an episode in one of the caller's podcasts.

        Raises:
            PodcastNotFound: If the podcast does not exist
            NotPodcastOwner: If the caller did not create the podcast

        """
        podcast = await PodcastService.get_podcast_or_404(session, data.podcast_id)
        PodcastService.ensure_owner(podcast, user)

        episode = Episode(**data.model_dump())
        session.add(episode)
        await session.flush()

        logger.info(f"Episode created: {episode.title} (id={episode.id}) in podcast {podcast.id}")
        return episode

    @staticmethod
    async def get_episode(session: AsyncSession, episode_id: int) -> Episode | None:
        """Get episode by ID."""
        return await session.get(Episode, episode_id)

    @staticmethod
    async def get_episode_or_404(session: AsyncSession, episode_id: int) -> Episode:
        episode = await EpisodeService.get_episode(session, episode_id)
        if episode is None:
            raise EpisodeNotFound(episode_id)
        return episode

    @staticmethod
    async def get_episodes(
        session: AsyncSession,
        params: CursorParams,
        title: str | None = None,
        podcast_id: int | None = None,
        is_public: bool | None = None,
    ) -> tuple[list[Episode], str | None]:
        """Get a cursor page of episodes, newest first.

        Filter priority: ``title`` substring, ``podcast_id``, then ``is_public=True``.
        """
        filters = []
        if title and title.strip():
            filters.append(func.lower(Episode.title).contains(title.strip().lower(), autoescape=True))
        elif podcast_id is not None:
            filters.append(Episode.podcast_id == podcast_id)
        elif is_public:
            filters.append(Episode.is_public.is_(True))

        return await CursorPagination.paginate(session, Episode, params, filters=filters)

    @staticmethod
    async def _get_owned_episode(session: AsyncSession, user: User, episode_id: int) -> Episode:
        episode = await EpisodeService.get_episode_or_404(session, episode_id)
        podcast = await PodcastService.get_podcast_or_404(session, episode.podcast_id)
        PodcastService.ensure_owner(podcast, user)
        return episode

    @staticmethod
    async def update_episode(session: AsyncSession, user: User, episode_id: int, data: EpisodePatchRequest) -> Episode:
        episode = await EpisodeService._get_owned_episode(session, user, episode_id)

        changes = data.model_dump(exclude_none=True)
        for key, value in changes.items():
            setattr(episode, key, value)

        await session.flush()
        logger.info(f"Episode {episode.id} updated by {user.username}: {sorted(changes)}")
        return episode

    @staticmethod
    async def delete_episode(session: AsyncSession, user: User, episode_id: int) -> None:
        episode = await EpisodeService._get_owned_episode(session, user, episode_id)

        await session.delete(episode)
        logger.info(f"Episode {episode_id} deleted by {user.username}")
