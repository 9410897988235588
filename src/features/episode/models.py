"""Episode domain model."""

from datetime import datetime

from sqlalchemy import Boolean, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from src.database.base import Base, IdMixin, TimestampMixin, UTCDateTime


class Episode(Base, IdMixin, TimestampMixin):
    """One audio episode of a podcast. Writable only by the podcast's creator."""

    __tablename__ = "episodes"
    __table_args__ = (Index("ix_episodes_podcast_publish", "podcast_id", "publish_at"),)

    podcast_id: Mapped[int] = mapped_column(Integer, ForeignKey("podcasts.id", ondelete="CASCADE"), nullable=False)

    title: Mapped[str] = mapped_column(String(200), nullable=False)
    season: Mapped[int | None] = mapped_column(Integer, nullable=True)
    number: Mapped[int | None] = mapped_column(Integer, nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    audio_url: Mapped[str | None] = mapped_column(String(2048), nullable=True)
    duration_sec: Mapped[int | None] = mapped_column(Integer, nullable=True)
    explicit: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_public: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, index=True)
    publish_at: Mapped[datetime | None] = mapped_column(UTCDateTime, nullable=True)
    transcript: Mapped[str | None] = mapped_column(Text, nullable=True)
