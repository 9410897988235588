"""Authentication models (refresh token rotation)."""

from datetime import datetime

from sqlalchemy import Boolean, ForeignKey, Integer, String, false
from sqlalchemy.orm import Mapped, mapped_column

from src.database.base import Base, IdMixin, UTCDateTime, utc_now


class RefreshToken(Base, IdMixin):
    """Opaque refresh token.

    Rotation revokes the presented token and points ``replaced_by`` at its
    successor, so every login starts a chain that only ever grows forward.
    """

    __tablename__ = "refresh_tokens"

    # Token data
    user_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    token: Mapped[str] = mapped_column(String(128), unique=True, nullable=False, index=True)
    expires_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False, index=True)
    revoked: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, server_default=false(), index=True)

    # Rotation chain
    replaced_by: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("refresh_tokens.id", ondelete="SET NULL"), nullable=True
    )

    # Audit trail
    created_at: Mapped[datetime] = mapped_column(UTCDateTime, default=utc_now, nullable=False)
    revoked_at: Mapped[datetime | None] = mapped_column(UTCDateTime, nullable=True)
    ip_address: Mapped[str | None] = mapped_column(String(45), nullable=True)  # IPv6 max length is 45
    user_agent: Mapped[str | None] = mapped_column(String(500), nullable=True)

    def is_expired(self, now: datetime) -> bool:
        return self.expires_at <= now
