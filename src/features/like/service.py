"""Episode like service layer."""

import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.features.episode.service import EpisodeService
from src.shared.pagination.cursor_pagination import CursorPagination
from src.shared.pagination.pagination import CursorParams

from .exceptions import AlreadyLiked, LikeNotFound
from .models import EpisodeLike

logger = logging.getLogger(__name__)


class LikeService:
    """Service for episode likes."""

    @staticmethod
    async def get_like(session: AsyncSession, user_id: int, episode_id: int) -> EpisodeLike | None:
        stmt = select(EpisodeLike).where(EpisodeLike.user_id == user_id, EpisodeLike.episode_id == episode_id)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    async def like_episode(session: AsyncSession, user_id: int, episode_id: int) -> EpisodeLike:
        """Record that a user likes an episode.

        Raises:
            EpisodeNotFound: If the episode does not exist
            AlreadyLiked: If the like already exists

        """
        await EpisodeService.get_episode_or_404(session, episode_id)

        if await LikeService.get_like(session, user_id, episode_id) is not None:
            raise AlreadyLiked()

        like = EpisodeLike(user_id=user_id, episode_id=episode_id)
        session.add(like)
        await session.flush()

        logger.info(f"User {user_id} liked episode {episode_id}")
        return like

    @staticmethod
    async def unlike_episode(session: AsyncSession, user_id: int, episode_id: int) -> None:
        like = await LikeService.get_like(session, user_id, episode_id)
        if like is None:
            raise LikeNotFound()

        await session.delete(like)
        logger.info(f"User {user_id} unliked episode {episode_id}")

    @staticmethod
    async def has_liked(session: AsyncSession, user_id: int, episode_id: int) -> bool:
        return await LikeService.get_like(session, user_id, episode_id) is not None

    @staticmethod
    async def get_user_likes(
        session: AsyncSession, user_id: int, params: CursorParams
    ) -> tuple[list[EpisodeLike], str | None]:
        return await CursorPagination.paginate(session, EpisodeLike, params, filters=[EpisodeLike.user_id == user_id])

    @staticmethod
    async def get_episode_likes(
        session: AsyncSession, episode_id: int, params: CursorParams
    ) -> tuple[list[EpisodeLike], str | None]:
        await EpisodeService.get_episode_or_404(session, episode_id)
        return await CursorPagination.paginate(
            session, EpisodeLike, params, filters=[EpisodeLike.episode_id == episode_id]
        )

    @staticmethod
    async def count_episode_likes(session: AsyncSession, episode_id: int) -> int:
        await EpisodeService.get_episode_or_404(session, episode_id)
        stmt = select(func.count()).select_from(EpisodeLike).where(EpisodeLike.episode_id == episode_id)
        result = await session.execute(stmt)
        return result.scalar_one()
