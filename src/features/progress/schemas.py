"""Listening progress schemas (DTOs)."""

from datetime import datetime

from pydantic import Field

from src.shared.schemas import APIModel


class ProgressRequest(APIModel):
    position_seconds: int = Field(..., ge=0)
    completed: bool = False


class ProgressResponse(APIModel):
    id: int
    user_id: int
    episode_id: int
    position_seconds: int
    completed: bool
    created_at: datetime
    updated_at: datetime
