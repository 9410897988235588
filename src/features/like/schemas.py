"""Like schemas (DTOs)."""

from datetime import datetime

from pydantic import Field

from src.shared.schemas import APIModel


class LikeCreateRequest(APIModel):
    episode_id: int = Field(..., ge=1)


class LikeResponse(APIModel):
    id: int
    user_id: int
    episode_id: int
    created_at: datetime
