"""Comment schemas (DTOs)."""

from datetime import datetime

from pydantic import Field

from src.shared.schemas import APIModel

from .models import CommentStatus, CommentTargetType


class CommentTarget(APIModel):
    type: CommentTargetType
    id: int = Field(..., ge=1)


# Request schemas
class CommentCreateRequest(APIModel):
    target: CommentTarget
    content: str = Field(..., min_length=1, max_length=2000)
    parent_id: int | None = Field(None, ge=1)


class CommentUpdateRequest(APIModel):
    content: str = Field(..., min_length=1, max_length=2000)


# Response schemas
class CommentResponse(APIModel):
    id: int
    user_id: int
    target: CommentTarget
    content: str
    parent_id: int | None = None
    status: CommentStatus
    created_at: datetime
    edited_at: datetime | None = None
