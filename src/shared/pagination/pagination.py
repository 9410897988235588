"""Cursor pagination models and cursor codec.

A cursor marks the last item of a page as ``<ISO-8601 UTC timestamp>_<id>``,
for example ``2026-01-01T10:00:00.000000Z_42``. The id breaks ties between rows
sharing a timestamp. A bare ISO-8601 timestamp is also accepted and then only
rows strictly older than it are returned.
"""

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Generic, TypeVar

from fastapi import Query
from pydantic import Field

from src.config.settings import settings
from src.shared.exceptions import BadRequestException
from src.shared.schemas import APIModel

CURSOR_SEPARATOR = "_"
MAX_CURSOR_ID = 2**31 - 1

T = TypeVar("T")


class InvalidCursorException(BadRequestException):
    """Raised when a cursor cannot be parsed."""

    def __init__(self, cursor: str):
        super().__init__(detail=f"Invalid cursor: {cursor!r}")


@dataclass(frozen=True)
class Cursor:
    """Position of the last item already returned."""

    timestamp: datetime
    id: int | None = None


def _format_timestamp(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.astimezone(UTC).strftime("%Y-%m-%dT%H:%M:%S.%fZ")


def encode_cursor(timestamp: datetime, item_id: int) -> str:
    return f"{_format_timestamp(timestamp)}{CURSOR_SEPARATOR}{item_id}"


def decode_cursor(raw: str) -> Cursor:
    """Parse a cursor string.

    Raises:
        InvalidCursorException: If the timestamp or id part is malformed or out of range.

    """
    timestamp_part, separator, id_part = raw.strip().partition(CURSOR_SEPARATOR)
    try:
        timestamp = datetime.fromisoformat(timestamp_part)
        if timestamp.tzinfo is None:
            timestamp = timestamp.replace(tzinfo=UTC)
        timestamp = timestamp.astimezone(UTC)
        item_id = int(id_part) if separator else None
    except (ValueError, OverflowError) as err:
        raise InvalidCursorException(raw) from err

    # Ids are 32-bit INTEGER columns
    if item_id is not None and not 1 <= item_id <= MAX_CURSOR_ID:
        raise InvalidCursorException(raw)
    return Cursor(timestamp=timestamp, id=item_id)


@dataclass(frozen=True)
class CursorParams:
    """Decoded cursor + page size for a list request."""

    cursor: Cursor | None = None
    limit: int = settings.pagination_default_limit


def cursor_params(
    cursor: str | None = Query(None, description="Cursor returned as nextCursor by the previous page"),
    limit: int = Query(
        settings.pagination_default_limit,
        ge=1,
        le=settings.pagination_max_limit,
        description="Maximum number of items in the page",
    ),
) -> CursorParams:
    """FastAPI dependency turning ``?cursor=&limit=`` into CursorParams.

    Usage:
        @router.get("/items", response_model=CursorPage[ItemResponse])
        async def list_items(params: CursorParams = Depends(cursor_params)): ...
    """
    return CursorParams(cursor=decode_cursor(cursor) if cursor else None, limit=limit)


class CursorPage(APIModel, Generic[T]):
    """Envelope for a page: ``{data, nextCursor, hasMore, count}``."""

    data: list[T]
    next_cursor: str | None = None
    has_more: bool = False
    count: int = Field(0, ge=0)


class CountResponse(APIModel):
    count: int


__all__ = [
    "CountResponse",
    "Cursor",
    "CursorPage",
    "CursorParams",
    "InvalidCursorException",
    "cursor_params",
    "decode_cursor",
    "encode_cursor",
]
