"""Comment service layer."""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from src.database.base import utc_now
from src.features.episode.service import EpisodeService
from src.features.podcast.models import Podcast
from src.features.podcast.service import PodcastService
from src.features.user.models import User
from src.shared.pagination.cursor_pagination import CursorPagination
from src.shared.pagination.pagination import CursorParams

from .exceptions import (
    CannotDeleteComment,
    CannotEditComment,
    CommentNotFound,
    InvalidCommentStatus,
    ReplyTargetMismatch,
)
from .models import DELETED_COMMENT_CONTENT, Comment, CommentStatus, CommentTargetType
from .schemas import CommentCreateRequest, CommentUpdateRequest

logger = logging.getLogger(__name__)


class CommentService:
    """Service for comments on podcasts and episodes."""

    @staticmethod
    async def _get_target_podcast(session: AsyncSession, target_type: str, target_id: int) -> Podcast:
        """Podcast that owns a comment target (the podcast itself, or the episode's podcast).

        Raises:
            PodcastNotFound: If the podcast does not exist
            EpisodeNotFound: If the episode does not exist

        """
        if target_type == CommentTargetType.EPISODE:
            episode = await EpisodeService.get_episode_or_404(session, target_id)
            return await PodcastService.get_podcast_or_404(session, episode.podcast_id)
        return await PodcastService.get_podcast_or_404(session, target_id)

    @staticmethod
    async def create_comment(session: AsyncSession, author: User, data: CommentCreateRequest) -> Comment:
        """Create a visible comment by ``author``.

        Raises:
            PodcastNotFound: If the target podcast does not exist
            EpisodeNotFound: If the target episode does not exist
            CommentNotFound: If ``parent_id`` names no comment
            ReplyTargetMismatch: If the parent comment is on another target

        """
        await CommentService._get_target_podcast(session, data.target.type, data.target.id)

        if data.parent_id is not None:
            parent = await CommentService.get_comment_or_404(session, data.parent_id)
            if parent.target_type != data.target.type or parent.target_id != data.target.id:
                raise ReplyTargetMismatch()

        comment = Comment(
            user_id=author.id,
            target_type=data.target.type,
            target_id=data.target.id,
            content=data.content,
            parent_id=data.parent_id,
            status=CommentStatus.VISIBLE.value,
        )
        session.add(comment)
        await session.flush()

        logger.info(f"Comment {comment.id} created by {author.username} on {data.target.type} {data.target.id}")
        return comment

    @staticmethod
    async def get_comment(session: AsyncSession, comment_id: int) -> Comment | None:
        return await session.get(Comment, comment_id)

    @staticmethod
    async def get_comment_or_404(session: AsyncSession, comment_id: int) -> Comment:
        comment = await CommentService.get_comment(session, comment_id)
        if comment is None:
            raise CommentNotFound()
        return comment

    @staticmethod
    async def get_comments(
        session: AsyncSession,
        params: CursorParams,
        podcast_id: int | None = None,
        episode_id: int | None = None,
        parent_id: int | None = None,
        status: str | None = None,
    ) -> tuple[list[Comment], str | None]:
        """Get a cursor page of comments, newest first.

        One filter applies, in priority order: ``podcast_id``, ``episode_id``,
        ``parent_id``, ``status``. Listing every comment is not supported, so
        without a filter the page is empty.

        Raises:
            InvalidCommentStatus: If ``status`` is not a known status

        """
        if podcast_id is not None:
            filters = [Comment.target_type == CommentTargetType.PODCAST, Comment.target_id == podcast_id]
        elif episode_id is not None:
            filters = [Comment.target_type == CommentTargetType.EPISODE, Comment.target_id == episode_id]
        elif parent_id is not None:
            filters = [Comment.parent_id == parent_id]
        elif status and status.strip():
            try:
                comment_status = CommentStatus(status.strip().upper())
            except ValueError as err:
                raise InvalidCommentStatus(status) from err
            filters = [Comment.status == comment_status]
        else:
            return [], None

        return await CursorPagination.paginate(session, Comment, params, filters=filters)

    @staticmethod
    async def update_comment(
        session: AsyncSession, user: User, comment_id: int, data: CommentUpdateRequest
    ) -> Comment:
        """Replace the content of the caller's own comment."""
        comment = await CommentService.get_comment_or_404(session, comment_id)
        if comment.user_id != user.id:
            raise CannotEditComment()

        comment.content = data.content
        comment.edited_at = utc_now()
        await session.flush()

        logger.info(f"Comment {comment_id} updated by {user.username}")
        return comment

    @staticmethod
    async def delete_comment(session: AsyncSession, user: User, comment_id: int) -> Comment:
        """Soft-delete a comment.

        Allowed for the author and for the creator of the commented podcast
        (or of the podcast the commented episode belongs to). The row is kept
        so replies still have a parent.
        """
        comment = await CommentService.get_comment_or_404(session, comment_id)

        if comment.user_id != user.id:
            podcast = await CommentService._get_target_podcast(session, comment.target_type, comment.target_id)
            if not podcast.is_owned_by(user.id):
                raise CannotDeleteComment()

        comment.status = CommentStatus.DELETED.value
        comment.content = DELETED_COMMENT_CONTENT
        comment.edited_at = utc_now()
        await session.flush()

        logger.info(f"Comment {comment_id} deleted by {user.username}")
        return comment
