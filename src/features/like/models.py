"""Episode like model."""

from sqlalchemy import ForeignKey, Integer, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from src.database.base import Base, CreatedAtMixin, IdMixin


class EpisodeLike(Base, IdMixin, CreatedAtMixin):
    """A user liking an episode. At most one per (user, episode)."""

    __tablename__ = "episode_likes"
    __table_args__ = (UniqueConstraint("user_id", "episode_id", name="uq_episode_likes_user_episode"),)

    user_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    episode_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("episodes.id", ondelete="CASCADE"), nullable=False, index=True
    )
