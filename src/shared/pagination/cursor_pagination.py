"""SQLAlchemy keyset pagination over a timestamp column."""

from datetime import datetime
from typing import Any, TypeVar

from sqlalchemy import and_, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import InstrumentedAttribute

from src.database.base import Base

from .pagination import CursorPage, CursorParams, encode_cursor

ModelType = TypeVar("ModelType", bound=Base)


class CursorPagination:
    """Helper class for cursor-paginating SQLAlchemy queries, newest first."""

    @staticmethod
    async def paginate(
        session: AsyncSession,
        model: type[ModelType],
        params: CursorParams,
        filters: list | None = None,
        order_column: InstrumentedAttribute[datetime] | None = None,
    ) -> tuple[list[ModelType], str | None]:
        """Fetch one page of ``model`` rows.

        Rows are ordered by ``order_column`` (default ``created_at``) descending,
        then by id descending. One extra row is fetched to learn whether another
        page exists without a count query.

        Args:
            session: Database session
            model: SQLAlchemy model class (must have an ``id`` column)
            params: Decoded cursor and limit
            filters: Optional list of SQLAlchemy filter conditions, AND-ed together
            order_column: Timestamp column used as the cursor key

        Returns:
            Tuple of (items, next_cursor); next_cursor is None on the last page

        Example:
            ```python
            items, next_cursor = await CursorPagination.paginate(
                session,
                Podcast,
                params,
                filters=[Podcast.is_public.is_(True)],
            )
            ```

        """
        column: Any = order_column if order_column is not None else model.created_at  # type: ignore[attr-defined]
        id_column: Any = model.id  # type: ignore[attr-defined]

        stmt = select(model)
        for filter_condition in filters or []:
            stmt = stmt.where(filter_condition)

        cursor = params.cursor
        if cursor is not None:
            if cursor.id is None:
                stmt = stmt.where(column < cursor.timestamp)
            else:
                stmt = stmt.where(
                    or_(column < cursor.timestamp, and_(column == cursor.timestamp, id_column < cursor.id))
                )

        stmt = stmt.order_by(column.desc(), id_column.desc()).limit(params.limit + 1)
        result = await session.execute(stmt)
        rows = list(result.scalars().all())

        items = rows[: params.limit]
        next_cursor = None
        if len(rows) > params.limit:
            last = items[-1]
            next_cursor = encode_cursor(getattr(last, column.key), last.id)

        return items, next_cursor

    @staticmethod
    def to_page(items: list, next_cursor: str | None, response_model: type | None = None) -> CursorPage:
        """Wrap a page in the ``{data, nextCursor, hasMore, count}`` envelope.

        Example:
            ```python
            users, next_cursor = await UserService.get_users(session, params)
            return CursorPagination.to_page(users, next_cursor, UserResponse)
            ```

        """
        if response_model:
            data = [response_model.model_validate(item) for item in items]  # type: ignore[attr-defined]
            page_model: type[CursorPage] = CursorPage[response_model]  # type: ignore[valid-type]
        else:
            data = items
            page_model = CursorPage

        return page_model(data=data, next_cursor=next_cursor, has_more=next_cursor is not None, count=len(data))


__all__ = ["CursorPagination"]
