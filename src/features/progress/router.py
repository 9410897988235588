"""User listening progress router (``/users/{user_id}/progress``)."""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.database.dependencies import get_db_session
from src.features.auth.dependencies import require_self_or_admin
from src.shared.pagination.cursor_pagination import CursorPagination
from src.shared.pagination.pagination import CursorPage, CursorParams, cursor_params

from .schemas import ProgressRequest, ProgressResponse
from .service import ProgressService

router = APIRouter(
    prefix="/users/{user_id}/progress",
    tags=["Listening Progress"],
    dependencies=[Depends(require_self_or_admin)],
)


@router.put("/{episode_id}", response_model=ProgressResponse)
async def save_progress(
    user_id: int,
    episode_id: int,
    data: ProgressRequest,
    session: AsyncSession = Depends(get_db_session),
):
    """Create or update the playback position for an episode."""
    progress = await ProgressService.save_progress(session, user_id, episode_id, data)
    await session.commit()
    return ProgressResponse.model_validate(progress)


@router.get("", response_model=CursorPage[ProgressResponse])
async def list_progress(
    user_id: int,
    params: CursorParams = Depends(cursor_params),
    session: AsyncSession = Depends(get_db_session),
):
    """List the user's progress entries, most recently updated first."""
    entries, next_cursor = await ProgressService.get_user_progress(session, user_id, params)
    return CursorPagination.to_page(entries, next_cursor, ProgressResponse)


@router.get("/{episode_id}", response_model=ProgressResponse)
async def get_progress(user_id: int, episode_id: int, session: AsyncSession = Depends(get_db_session)):
    progress = await ProgressService.get_progress_or_404(session, user_id, episode_id)
    return ProgressResponse.model_validate(progress)


@router.delete("/{episode_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_progress(user_id: int, episode_id: int, session: AsyncSession = Depends(get_db_session)):
    await ProgressService.delete_progress(session, user_id, episode_id)
    await session.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
