"""User like router (``/users/{user_id}/likes``)."""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.database.dependencies import get_db_session
from src.features.auth.dependencies import require_self_or_admin
from src.shared.pagination.cursor_pagination import CursorPagination
from src.shared.pagination.pagination import CursorPage, CursorParams, cursor_params

from .exceptions import LikeNotFound
from .schemas import LikeCreateRequest, LikeResponse
from .service import LikeService

router = APIRouter(
    prefix="/users/{user_id}/likes",
    tags=["Likes"],
    dependencies=[Depends(require_self_or_admin)],
)


@router.post("", response_model=LikeResponse, status_code=status.HTTP_201_CREATED)
async def like_episode(user_id: int, data: LikeCreateRequest, session: AsyncSession = Depends(get_db_session)):
    """Like an episode."""
    like = await LikeService.like_episode(session, user_id, data.episode_id)
    await session.commit()
    return LikeResponse.model_validate(like)


@router.get("", response_model=CursorPage[LikeResponse])
async def list_likes(
    user_id: int,
    params: CursorParams = Depends(cursor_params),
    session: AsyncSession = Depends(get_db_session),
):
    """List the episodes the user liked, newest like first."""
    likes, next_cursor = await LikeService.get_user_likes(session, user_id, params)
    return CursorPagination.to_page(likes, next_cursor, LikeResponse)


@router.head("/{episode_id}")
async def check_like(user_id: int, episode_id: int, session: AsyncSession = Depends(get_db_session)):
    """200 if the user liked the episode, 404 otherwise. No body."""
    if not await LikeService.has_liked(session, user_id, episode_id):
        raise LikeNotFound()
    return Response(status_code=status.HTTP_200_OK)


@router.delete("/{episode_id}", status_code=status.HTTP_204_NO_CONTENT)
async def unlike_episode(user_id: int, episode_id: int, session: AsyncSession = Depends(get_db_session)):
    """Remove a like."""
    await LikeService.unlike_episode(session, user_id, episode_id)
    await session.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
