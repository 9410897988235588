"""Subscription schemas (DTOs)."""

from datetime import datetime

from pydantic import Field

from src.shared.schemas import APIModel


class SubscriptionCreateRequest(APIModel):
    podcast_id: int = Field(..., ge=1)
    notifications: bool = True


class SubscriptionResponse(APIModel):
    id: int
    user_id: int
    podcast_id: int
    notifications: bool
    created_at: datetime
