"""Podcast subscription model."""

from sqlalchemy import Boolean, ForeignKey, Integer, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from src.database.base import Base, CreatedAtMixin, IdMixin


class Subscription(Base, IdMixin, CreatedAtMixin):
    """A user following a podcast. At most one per (user, podcast)."""

    __tablename__ = "subscriptions"
    __table_args__ = (UniqueConstraint("user_id", "podcast_id", name="uq_subscriptions_user_podcast"),)

    user_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    podcast_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("podcasts.id", ondelete="CASCADE"), nullable=False, index=True
    )
    notifications: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
