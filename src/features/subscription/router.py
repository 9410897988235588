"""User subscription router (``/users/{user_id}/subscriptions``)."""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.database.dependencies import get_db_session
from src.features.auth.dependencies import require_self_or_admin
from src.shared.pagination.cursor_pagination import CursorPagination
from src.shared.pagination.pagination import CursorPage, CursorParams, cursor_params

from .schemas import SubscriptionCreateRequest, SubscriptionResponse
from .service import SubscriptionService

router = APIRouter(
    prefix="/users/{user_id}/subscriptions",
    tags=["Subscriptions"],
    dependencies=[Depends(require_self_or_admin)],
)


@router.post("", response_model=SubscriptionResponse, status_code=status.HTTP_201_CREATED)
async def subscribe(user_id: int, data: SubscriptionCreateRequest, session: AsyncSession = Depends(get_db_session)):
    """Subscribe to a podcast."""
    subscription = await SubscriptionService.subscribe(session, user_id, data)
    await session.commit()
    return SubscriptionResponse.model_validate(subscription)


@router.get("", response_model=CursorPage[SubscriptionResponse])
async def list_subscriptions(
    user_id: int,
    params: CursorParams = Depends(cursor_params),
    session: AsyncSession = Depends(get_db_session),
):
    """List the user's subscriptions, newest first."""
    subscriptions, next_cursor = await SubscriptionService.get_user_subscriptions(session, user_id, params)
    return CursorPagination.to_page(subscriptions, next_cursor, SubscriptionResponse)


@router.delete("/{podcast_id}", status_code=status.HTTP_204_NO_CONTENT)
async def unsubscribe(user_id: int, podcast_id: int, session: AsyncSession = Depends(get_db_session)):
    """Remove a subscription."""
    await SubscriptionService.unsubscribe(session, user_id, podcast_id)
    await session.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
