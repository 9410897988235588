"""Podcast router (API endpoints)."""

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.database.dependencies import get_db_session
from src.features.auth.dependencies import get_current_active_user, require_permission
from src.features.subscription.schemas import SubscriptionResponse
from src.features.subscription.service import SubscriptionService
from src.features.user.models import Permission, User
from src.shared.pagination.cursor_pagination import CursorPagination
from src.shared.pagination.pagination import CountResponse, CursorPage, CursorParams, cursor_params

from .schemas import PodcastCreateRequest, PodcastPatchRequest, PodcastResponse
from .service import PodcastService

router = APIRouter(prefix="/podcasts", tags=["Podcasts"])


@router.post("", response_model=PodcastResponse, status_code=status.HTTP_201_CREATED)
async def create_podcast(
    data: PodcastCreateRequest,
    current_user: User = Depends(get_current_active_user),
    session: AsyncSession = Depends(get_db_session),
):
    """Create a podcast owned by the caller.

    The caller becomes a CREATOR if they were not one already.
    """
    podcast = await PodcastService.create_podcast(session, current_user, data)
    await session.commit()
    return PodcastResponse.model_validate(podcast)


@router.get(
    "",
    response_model=CursorPage[PodcastResponse],
    dependencies=[Depends(require_permission(Permission.PODCAST_READ))],
)
async def list_podcasts(
    title: str | None = Query(None, description="Case-insensitive title substring"),
    creator_id: int | None = Query(None, alias="creatorId"),
    is_public: bool | None = Query(None, alias="isPublic"),
    params: CursorParams = Depends(cursor_params),
    session: AsyncSession = Depends(get_db_session),
):
    """List podcasts, newest first.

    Only one filter applies, in order of priority: `title`, `creatorId`, `isPublic=true`.
    """
    podcasts, next_cursor = await PodcastService.get_podcasts(
        session, params, title=title, creator_id=creator_id, is_public=is_public
    )
    return CursorPagination.to_page(podcasts, next_cursor, PodcastResponse)


@router.get("/{id_or_slug}", response_model=PodcastResponse, dependencies=[Depends(get_current_active_user)])
async def get_podcast(id_or_slug: str, session: AsyncSession = Depends(get_db_session)):
    """Get a podcast by numeric ID or by slug."""
    podcast = await PodcastService.get_podcast_by_id_or_slug(session, id_or_slug)
    return PodcastResponse.model_validate(podcast)


@router.patch(
    "/{podcast_id}",
    response_model=PodcastResponse,
    dependencies=[Depends(require_permission(Permission.PODCAST_WRITE))],
)
async def update_podcast(
    podcast_id: int,
    data: PodcastPatchRequest,
    current_user: User = Depends(get_current_active_user),
    session: AsyncSession = Depends(get_db_session),
):
    """Partially update a podcast (creator only)."""
    podcast = await PodcastService.update_podcast(session, current_user, podcast_id, data)
    await session.commit()
    return PodcastResponse.model_validate(podcast)


@router.delete(
    "/{podcast_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_permission(Permission.PODCAST_WRITE))],
)
async def delete_podcast(
    podcast_id: int,
    current_user: User = Depends(get_current_active_user),
    session: AsyncSession = Depends(get_db_session),
):
    """Delete a podcast (creator only)."""
    await PodcastService.delete_podcast(session, current_user, podcast_id)
    await session.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/{podcast_id}/subscribers",
    response_model=CursorPage[SubscriptionResponse] | CountResponse,
    dependencies=[Depends(get_current_active_user)],
)
async def list_subscribers(
    podcast_id: int,
    count: bool = Query(False, description="Return only the number of subscribers"),
    params: CursorParams = Depends(cursor_params),
    session: AsyncSession = Depends(get_db_session),
):
    """List a podcast's subscriptions, or just count them with `count=true`."""
    if count:
        total = await SubscriptionService.count_podcast_subscribers(session, podcast_id)
        return CountResponse(count=total)

    subscriptions, next_cursor = await SubscriptionService.get_podcast_subscribers(session, podcast_id, params)
    return CursorPagination.to_page(subscriptions, next_cursor, SubscriptionResponse)
