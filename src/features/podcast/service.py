"""Podcast service layer."""

import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.features.user.models import User
from src.features.user.service import UserService
from src.shared.pagination.cursor_pagination import CursorPagination
from src.shared.pagination.pagination import CursorParams

from .exceptions import NotPodcastOwner, PodcastNotFound, SlugAlreadyExists
from .models import Podcast
from .schemas import PodcastCreateRequest, PodcastPatchRequest

logger = logging.getLogger(__name__)


class PodcastService:
    """Service for podcast operations."""

    @staticmethod
    async def create_podcast(session: AsyncSession, creator: User, data: PodcastCreateRequest) -> Podcast:
        """Create a podcast owned by ``creator``.

        The creator is promoted to CREATOR on their first podcast.

        Raises:
            SlugAlreadyExists: If the slug is taken

        """
        if await PodcastService.get_podcast_by_slug(session, data.slug) is not None:
            raise SlugAlreadyExists(data.slug)

        podcast = Podcast(creator_id=creator.id, **data.model_dump())
        session.add(podcast)
        await session.flush()

        await UserService.promote_to_creator(session, creator)

        logger.info(f"Podcast created: {podcast.slug} (id={podcast.id}) by {creator.username}")
        return podcast

    @staticmethod
    async def get_podcast(session: AsyncSession, podcast_id: int) -> Podcast | None:
        """Get podcast by ID."""
        return await session.get(Podcast, podcast_id)

    @staticmethod
    async def get_podcast_or_404(session: AsyncSession, podcast_id: int) -> Podcast:
        podcast = await PodcastService.get_podcast(session, podcast_id)
        if podcast is None:
            raise PodcastNotFound(podcast_id)
        return podcast

    @staticmethod
    async def get_podcast_by_slug(session: AsyncSession, slug: str) -> Podcast | None:
        stmt = select(Podcast).where(Podcast.slug == slug)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    async def get_podcast_by_id_or_slug(session: AsyncSession, id_or_slug: str) -> Podcast:
        """Resolve a numeric id first, then fall back to the slug.

        Raises:
            PodcastNotFound: If neither matches

        """
        podcast = None
        if id_or_slug.isdigit():
            podcast = await PodcastService.get_podcast(session, int(id_or_slug))
        if podcast is None:
            podcast = await PodcastService.get_podcast_by_slug(session, id_or_slug)
        if podcast is None:
            raise PodcastNotFound(id_or_slug)
        return podcast

    @staticmethod
    async def get_podcasts(
        session: AsyncSession,
        params: CursorParams,
        title: str | None = None,
        creator_id: int | None = None,
        is_public: bool | None = None,
    ) -> tuple[list[Podcast], str | None]:
        """Get a cursor page of podcasts, newest first.

        At most one filter applies, in priority order: ``title`` (case-insensitive
        substring), ``creator_id``, then ``is_public=True``. Without any of them
        every podcast is listed.
        """
        filters = []
        if title and title.strip():
            filters.append(func.lower(Podcast.title).contains(title.strip().lower(), autoescape=True))
        elif creator_id is not None:
            filters.append(Podcast.creator_id == creator_id)
        elif is_public:
            filters.append(Podcast.is_public.is_(True))

        return await CursorPagination.paginate(session, Podcast, params, filters=filters)

    @staticmethod
    def ensure_owner(podcast: Podcast, user: User) -> None:
        """Raise NotPodcastOwner unless ``user`` created ``podcast``."""
        if not podcast.is_owned_by(user.id):
            raise NotPodcastOwner()

    @staticmethod
    async def update_podcast(
        session: AsyncSession, user: User, podcast_id: int, data: PodcastPatchRequest
    ) -> Podcast:
        """Apply the non-null fields of ``data``. A changed slug is re-checked for uniqueness."""
        podcast = await PodcastService.get_podcast_or_404(session, podcast_id)
        PodcastService.ensure_owner(podcast, user)

        changes = data.model_dump(exclude_none=True)
        new_slug = changes.get("slug")
        if new_slug and new_slug != podcast.slug:
            if await PodcastService.get_podcast_by_slug(session, new_slug) is not None:
                raise SlugAlreadyExists(new_slug)

        for key, value in changes.items():
            setattr(podcast, key, value)

        await session.flush()
        logger.info(f"Podcast {podcast.id} updated by {user.username}: {sorted(changes)}")
        return podcast

    @staticmethod
    async def delete_podcast(session: AsyncSession, user: User, podcast_id: int) -> None:
        podcast = await PodcastService.get_podcast_or_404(session, podcast_id)
        PodcastService.ensure_owner(podcast, user)

        await session.delete(podcast)
        logger.info(f"Podcast {podcast_id} deleted by {user.username}")
