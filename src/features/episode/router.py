"""Episode router (API endpoints)."""

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.database.dependencies import get_db_session
from src.features.auth.dependencies import get_current_active_user, require_permission
from src.features.like.schemas import LikeResponse
from src.features.like.service import LikeService
from src.features.user.models import Permission, User
from src.shared.pagination.cursor_pagination import CursorPagination
from src.shared.pagination.pagination import CountResponse, CursorPage, CursorParams, cursor_params

from .schemas import EpisodeCreateRequest, EpisodePatchRequest, EpisodeResponse
from .service import EpisodeService

router = APIRouter(prefix="/episodes", tags=["Episodes"])

require_episode_read = require_permission(Permission.EPISODE_READ)
require_episode_write = require_permission(Permission.EPISODE_WRITE)


@router.post(
    "",
    response_model=EpisodeResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_episode_write)],
)
async def create_episode(
    data: EpisodeCreateRequest,
    current_user: User = Depends(get_current_active_user),
    session: AsyncSession = Depends(get_db_session),
):
    """Create an episode in a podcast the caller owns."""
    episode = await EpisodeService.create_episode(session, current_user, data)
    await session.commit()
    return EpisodeResponse.model_validate(episode)


@router.get("", response_model=CursorPage[EpisodeResponse], dependencies=[Depends(require_episode_read)])
async def list_episodes(
    title: str | None = Query(None, description="Case-insensitive title substring"),
    podcast_id: int | None = Query(None, alias="podcastId"),
    is_public: bool | None = Query(None, alias="isPublic"),
    params: CursorParams = Depends(cursor_params),
    session: AsyncSession = Depends(get_db_session),
):
    """List episodes, newest first.

    Only one filter applies, in order of priority: `title`, `podcastId`, `isPublic=true`.
    """
    episodes, next_cursor = await EpisodeService.get_episodes(
        session, params, title=title, podcast_id=podcast_id, is_public=is_public
    )
    return CursorPagination.to_page(episodes, next_cursor, EpisodeResponse)


@router.get("/{episode_id}", response_model=EpisodeResponse, dependencies=[Depends(require_episode_read)])
async def get_episode(episode_id: int, session: AsyncSession = Depends(get_db_session)):
    """Get episode by ID."""
    episode = await EpisodeService.get_episode_or_404(session, episode_id)
    return EpisodeResponse.model_validate(episode)


@router.patch("/{episode_id}", response_model=EpisodeResponse, dependencies=[Depends(require_episode_write)])
async def update_episode(
    episode_id: int,
    data: EpisodePatchRequest,
    current_user: User = Depends(get_current_active_user),
    session: AsyncSession = Depends(get_db_session),
):
    """Partially update an episode (podcast creator only)."""
    episode = await EpisodeService.update_episode(session, current_user, episode_id, data)
    await session.commit()
    return EpisodeResponse.model_validate(episode)


@router.delete(
    "/{episode_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_episode_write)],
)
async def delete_episode(
    episode_id: int,
    current_user: User = Depends(get_current_active_user),
    session: AsyncSession = Depends(get_db_session),
):
    """Delete an episode (podcast creator only)."""
    await EpisodeService.delete_episode(session, current_user, episode_id)
    await session.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/{episode_id}/likes",
    response_model=CursorPage[LikeResponse] | CountResponse,
    dependencies=[Depends(get_current_active_user)],
)
async def list_episode_likes(
    episode_id: int,
    count: bool = Query(False, description="Return only the number of likes"),
    params: CursorParams = Depends(cursor_params),
    session: AsyncSession = Depends(get_db_session),
):
    """List an episode's likes, or just count them with `count=true`."""
    if count:
        total = await LikeService.count_episode_likes(session, episode_id)
        return CountResponse(count=total)

    likes, next_cursor = await LikeService.get_episode_likes(session, episode_id, params)
    return CursorPagination.to_page(likes, next_cursor, LikeResponse)
