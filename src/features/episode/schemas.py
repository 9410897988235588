"""Episode schemas (DTOs)."""

from datetime import datetime

from pydantic import Field

from src.features.podcast.schemas import HTTP_URL_PATTERN
from src.shared.schemas import APIModel


# Request schemas
class EpisodeCreateRequest(APIModel):
    podcast_id: int = Field(..., ge=1)
    title: str = Field(..., min_length=1, max_length=200)
    season: int | None = Field(None, ge=0)
    number: int | None = Field(None, ge=0)
    description: str | None = Field(None, max_length=5000)
    audio_url: str | None = Field(None, max_length=2048, pattern=HTTP_URL_PATTERN)
    duration_sec: int | None = Field(None, ge=0)
    explicit: bool = False
    is_public: bool = False
    publish_at: datetime | None = None
    transcript: str | None = Field(None, max_length=50000)


class EpisodePatchRequest(APIModel):
    """Partial episode update. Only fields that are sent are applied; the podcast cannot change."""

    title: str | None = Field(None, min_length=1, max_length=200)
    season: int | None = Field(None, ge=0)
    number: int | None = Field(None, ge=0)
    description: str | None = Field(None, max_length=5000)
    audio_url: str | None = Field(None, max_length=2048, pattern=HTTP_URL_PATTERN)
    duration_sec: int | None = Field(None, ge=0)
    explicit: bool | None = None
    is_public: bool | None = None
    publish_at: datetime | None = None
    transcript: str | None = Field(None, max_length=50000)


# Response schemas
class EpisodeResponse(APIModel):
    id: int
    podcast_id: int
    title: str
    season: int | None = None
    number: int | None = None
    description: str | None = None
    audio_url: str | None = None
    duration_sec: int | None = None
    explicit: bool
    is_public: bool
    publish_at: datetime | None = None
    transcript: str | None = None
    created_at: datetime
    updated_at: datetime
