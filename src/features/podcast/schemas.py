"""Podcast schemas (DTOs)."""

from datetime import datetime

from pydantic import Field

from src.shared.schemas import APIModel

SLUG_PATTERN = r"^[a-z0-9]+(?:-[a-z0-9]+)*$"
HTTP_URL_PATTERN = r"^https?://.*"


# Request schemas
class PodcastCreateRequest(APIModel):
    title: str = Field(..., min_length=1, max_length=200)
    slug: str = Field(..., min_length=1, max_length=200, pattern=SLUG_PATTERN)
    description: str | None = Field(None, max_length=2000)
    language: str | None = Field(None, max_length=10)
    category: str | None = Field(None, max_length=50)
    cover_image_url: str | None = Field(None, max_length=2048, pattern=HTTP_URL_PATTERN)
    is_public: bool = False


class PodcastPatchRequest(APIModel):
    """Partial podcast update. Only fields that are sent are applied."""

    title: str | None = Field(None, min_length=1, max_length=200)
    slug: str | None = Field(None, min_length=1, max_length=200, pattern=SLUG_PATTERN)
    description: str | None = Field(None, max_length=2000)
    language: str | None = Field(None, max_length=10)
    category: str | None = Field(None, max_length=50)
    cover_image_url: str | None = Field(None, max_length=2048, pattern=HTTP_URL_PATTERN)
    is_public: bool | None = None


# Response schemas
class PodcastResponse(APIModel):
    id: int
    creator_id: int
    title: str
    slug: str
    description: str | None = None
    language: str | None = None
    category: str | None = None
    cover_image_url: str | None = None
    is_public: bool
    created_at: datetime
    updated_at: datetime
