"""Listening progress service layer."""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.database.base import utc_now
from src.features.episode.service import EpisodeService
from src.shared.pagination.cursor_pagination import CursorPagination
from src.shared.pagination.pagination import CursorParams

from .exceptions import ProgressNotFound
from .models import ListeningProgress
from .schemas import ProgressRequest

logger = logging.getLogger(__name__)


class ProgressService:
    """Service for per-episode playback positions."""

    @staticmethod
    async def get_progress(session: AsyncSession, user_id: int, episode_id: int) -> ListeningProgress | None:
        stmt = select(ListeningProgress).where(
            ListeningProgress.user_id == user_id, ListeningProgress.episode_id == episode_id
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    async def get_progress_or_404(session: AsyncSession, user_id: int, episode_id: int) -> ListeningProgress:
        progress = await ProgressService.get_progress(session, user_id, episode_id)
        if progress is None:
            raise ProgressNotFound()
        return progress

    @staticmethod
    async def save_progress(
        session: AsyncSession, user_id: int, episode_id: int, data: ProgressRequest
    ) -> ListeningProgress:
        """Create or overwrite the user's position in an episode.

        Raises:
            EpisodeNotFound: If the episode does not exist

        """
        await EpisodeService.get_episode_or_404(session, episode_id)

        progress = await ProgressService.get_progress(session, user_id, episode_id)
        if progress is None:
            progress = ListeningProgress(
                user_id=user_id,
                episode_id=episode_id,
                position_seconds=data.position_seconds,
                completed=data.completed,
            )
            session.add(progress)
        else:
            progress.position_seconds = data.position_seconds
            progress.completed = data.completed
            # Bump even when the values are unchanged so the entry moves to the front
            progress.updated_at = utc_now()

        await session.flush()
        logger.debug(f"Progress saved for user {user_id} on episode {episode_id}: {data.position_seconds}s")
        return progress

    @staticmethod
    async def get_user_progress(
        session: AsyncSession, user_id: int, params: CursorParams
    ) -> tuple[list[ListeningProgress], str | None]:
        """Most recently updated first."""
        return await CursorPagination.paginate(
            session,
            ListeningProgress,
            params,
            filters=[ListeningProgress.user_id == user_id],
            order_column=ListeningProgress.updated_at,
        )

    @staticmethod
    async def delete_progress(session: AsyncSession, user_id: int, episode_id: int) -> None:
        progress = await ProgressService.get_progress_or_404(session, user_id, episode_id)
        await session.delete(progress)
        logger.info(f"Progress deleted for user {user_id} on episode {episode_id}")
