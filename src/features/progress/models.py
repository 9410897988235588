"""Listening progress model."""

from sqlalchemy import Boolean, ForeignKey, Integer, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from src.database.base import Base, IdMixin, TimestampMixin


class ListeningProgress(Base, IdMixin, TimestampMixin):
    """Playback position of one user in one episode. Paginated by ``updated_at``."""

    __tablename__ = "listening_progress"
    __table_args__ = (UniqueConstraint("user_id", "episode_id", name="uq_listening_progress_user_episode"),)

    user_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    episode_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("episodes.id", ondelete="CASCADE"), nullable=False, index=True
    )
    position_seconds: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    completed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
