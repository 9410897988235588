"""Comment domain model."""

from datetime import datetime
from enum import StrEnum

from sqlalchemy import Enum, ForeignKey, Index, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from src.database.base import Base, CreatedAtMixin, IdMixin, UTCDateTime


class CommentTargetType(StrEnum):
    PODCAST = "PODCAST"
    EPISODE = "EPISODE"


class CommentStatus(StrEnum):
    """Moderation state. DELETED comments stay in place as tombstones for their replies."""

    VISIBLE = "VISIBLE"
    HIDDEN = "HIDDEN"
    DELETED = "DELETED"


DELETED_COMMENT_CONTENT = "[comment deleted]"


class Comment(Base, IdMixin, CreatedAtMixin):
    """A comment on a podcast or an episode, optionally replying to another comment."""

    __tablename__ = "comments"
    __table_args__ = (Index("ix_comments_target_created", "target_type", "target_id", "created_at"),)

    user_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    # Polymorphic target, so no foreign key
    target_type: Mapped[str] = mapped_column(Enum(CommentTargetType, native_enum=False, length=20), nullable=False)
    target_id: Mapped[int] = mapped_column(Integer, nullable=False)

    content: Mapped[str] = mapped_column(Text, nullable=False)
    parent_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("comments.id", ondelete="SET NULL"), nullable=True, index=True
    )
    status: Mapped[str] = mapped_column(
        Enum(CommentStatus, native_enum=False, length=20),
        nullable=False,
        default=CommentStatus.VISIBLE.value,
        index=True,
    )
    edited_at: Mapped[datetime | None] = mapped_column(UTCDateTime, nullable=True)

    @property
    def target(self) -> dict:
        return {"type": self.target_type, "id": self.target_id}
