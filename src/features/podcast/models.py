"""Podcast domain model."""

from sqlalchemy import Boolean, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from src.database.base import Base, IdMixin, TimestampMixin


class Podcast(Base, IdMixin, TimestampMixin):
    """A show owned by its creator. Episodes, comments and subscriptions hang off it."""

    __tablename__ = "podcasts"
    __table_args__ = (Index("ix_podcasts_creator_created", "creator_id", "created_at"),)

    creator_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)

    title: Mapped[str] = mapped_column(String(200), nullable=False)
    slug: Mapped[str] = mapped_column(String(200), nullable=False, unique=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    language: Mapped[str | None] = mapped_column(String(10), nullable=True)
    category: Mapped[str | None] = mapped_column(String(50), nullable=True)
    cover_image_url: Mapped[str | None] = mapped_column(String(2048), nullable=True)

    is_public: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, index=True)

    def is_owned_by(self, user_id: int) -> bool:
        return self.creator_id == user_id
