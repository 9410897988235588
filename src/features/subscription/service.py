"""Subscription service layer."""

import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.features.podcast.service import PodcastService
from src.shared.pagination.cursor_pagination import CursorPagination
from src.shared.pagination.pagination import CursorParams

from .exceptions import AlreadySubscribed, SubscriptionNotFound
from .models import Subscription
from .schemas import SubscriptionCreateRequest

logger = logging.getLogger(__name__)


class SubscriptionService:
    """Service for podcast subscriptions."""

    @staticmethod
    async def get_subscription(session: AsyncSession, user_id: int, podcast_id: int) -> Subscription | None:
        stmt = select(Subscription).where(Subscription.user_id == user_id, Subscription.podcast_id == podcast_id)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    async def subscribe(session: AsyncSession, user_id: int, data: SubscriptionCreateRequest) -> Subscription:
        """Subscribe a user to a podcast.

        Raises:
            PodcastNotFound: If the podcast does not exist
            AlreadySubscribed: If the subscription already exists

        """
        await PodcastService.get_podcast_or_404(session, data.podcast_id)

        if await SubscriptionService.get_subscription(session, user_id, data.podcast_id) is not None:
            raise AlreadySubscribed()

        subscription = Subscription(user_id=user_id, podcast_id=data.podcast_id, notifications=data.notifications)
        session.add(subscription)
        await session.flush()

        logger.info(f"User {user_id} subscribed to podcast {data.podcast_id}")
        return subscription

    @staticmethod
    async def unsubscribe(session: AsyncSession, user_id: int, podcast_id: int) -> None:
        subscription = await SubscriptionService.get_subscription(session, user_id, podcast_id)
        if subscription is None:
            raise SubscriptionNotFound()

        await session.delete(subscription)
        logger.info(f"User {user_id} unsubscribed from podcast {podcast_id}")

    @staticmethod
    async def get_user_subscriptions(
        session: AsyncSession, user_id: int, params: CursorParams
    ) -> tuple[list[Subscription], str | None]:
        return await CursorPagination.paginate(
            session, Subscription, params, filters=[Subscription.user_id == user_id]
        )

    @staticmethod
    async def get_podcast_subscribers(
        session: AsyncSession, podcast_id: int, params: CursorParams
    ) -> tuple[list[Subscription], str | None]:
        await PodcastService.get_podcast_or_404(session, podcast_id)
        return await CursorPagination.paginate(
            session, Subscription, params, filters=[Subscription.podcast_id == podcast_id]
        )

    @staticmethod
    async def count_podcast_subscribers(session: AsyncSession, podcast_id: int) -> int:
        await PodcastService.get_podcast_or_404(session, podcast_id)
        stmt = select(func.count()).select_from(Subscription).where(Subscription.podcast_id == podcast_id)
        result = await session.execute(stmt)
        return result.scalar_one()
