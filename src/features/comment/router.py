"""Comment router (API endpoints)."""

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.database.dependencies import get_db_session
from src.features.auth.dependencies import get_current_active_user
from src.features.user.models import User
from src.shared.pagination.cursor_pagination import CursorPagination
from src.shared.pagination.pagination import CursorPage, CursorParams, cursor_params

from .schemas import CommentCreateRequest, CommentResponse, CommentUpdateRequest
from .service import CommentService

router = APIRouter(prefix="/comments", tags=["Comments"])


@router.post("", response_model=CommentResponse, status_code=status.HTTP_201_CREATED)
async def create_comment(
    data: CommentCreateRequest,
    current_user: User = Depends(get_current_active_user),
    session: AsyncSession = Depends(get_db_session),
):
    """Comment on a podcast or an episode, optionally as a reply (`parentId`)."""
    comment = await CommentService.create_comment(session, current_user, data)
    await session.commit()
    return CommentResponse.model_validate(comment)


@router.get("", response_model=CursorPage[CommentResponse], dependencies=[Depends(get_current_active_user)])
async def list_comments(
    podcast_id: int | None = Query(None, alias="podcastId"),
    episode_id: int | None = Query(None, alias="episodeId"),
    parent_id: int | None = Query(None, alias="parentId"),
    comment_status: str | None = Query(None, alias="status", description="VISIBLE, HIDDEN or DELETED"),
    params: CursorParams = Depends(cursor_params),
    session: AsyncSession = Depends(get_db_session),
):
    """List comments, newest first.

    One filter applies, in order of priority: `podcastId`, `episodeId`, `parentId`, `status`.
    Without a filter the page is empty.
    """
    comments, next_cursor = await CommentService.get_comments(
        session, params, podcast_id=podcast_id, episode_id=episode_id, parent_id=parent_id, status=comment_status
    )
    return CursorPagination.to_page(comments, next_cursor, CommentResponse)


@router.get("/{comment_id}", response_model=CommentResponse, dependencies=[Depends(get_current_active_user)])
async def get_comment(comment_id: int, session: AsyncSession = Depends(get_db_session)):
    comment = await CommentService.get_comment_or_404(session, comment_id)
    return CommentResponse.model_validate(comment)


@router.put("/{comment_id}", response_model=CommentResponse)
async def update_comment(
    comment_id: int,
    data: CommentUpdateRequest,
    current_user: User = Depends(get_current_active_user),
    session: AsyncSession = Depends(get_db_session),
):
    """Edit the content of your own comment."""
    comment = await CommentService.update_comment(session, current_user, comment_id, data)
    await session.commit()
    return CommentResponse.model_validate(comment)


@router.delete("/{comment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_comment(
    comment_id: int,
    current_user: User = Depends(get_current_active_user),
    session: AsyncSession = Depends(get_db_session),
):
    """Soft-delete a comment (author or creator of the commented content)."""
    await CommentService.delete_comment(session, current_user, comment_id)
    await session.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
