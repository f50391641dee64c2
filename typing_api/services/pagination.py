"""Newest-first pagination over any model with ``id`` and ``created_at`` columns."""

import logging
from collections.abc import Callable, Sequence
from datetime import datetime
from typing import Any, TypeVar

from sqlalchemy import ColumnElement, select
from sqlalchemy.ext.asyncio import AsyncSession

from typing_api.config import settings
from typing_api.schemas.pagination import Connection, Edge, PageInfo

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def paginate(
    session: AsyncSession,
    model: Any,
    criteria: Sequence[ColumnElement[bool]],
    *,
    take: int,
    skip: int = 0,
    after: datetime | None = None,
    transform: Callable[[Any], T],
) -> Connection[T]:
    """
    Return one page of ``model`` rows matching ``criteria``, newest first.

    ``take`` is clamped to settings.max_page_size. ``after`` restricts the page to
    rows created strictly before that cursor; ``skip`` is applied after it.
    has_more is answered by a second query (same criteria, created_at strictly
    before the last row), so it reflects the store at the time of that query.
    An empty page looks the same whether nothing matched or skip ran past the end.
    """
    if take < 1:
        raise ValueError("take must be a positive integer")
    if skip < 0:
        raise ValueError("skip must be non-negative")
    if take > settings.max_page_size:
        logger.debug("paginate: clamping take=%s to %s", take, settings.max_page_size)
        take = settings.max_page_size

    conditions = list(criteria)
    if after is not None:
        conditions.append(model.created_at < after)
    q = (
        select(model)
        .where(*conditions)
        .order_by(model.created_at.desc(), model.id.desc())
        .offset(skip)
        .limit(take)
    )
    rows = (await session.execute(q)).scalars().all()
    if not rows:
        return Connection(count=0, edges=[], page_info=PageInfo())

    last_cursor = rows[-1].created_at
    more = await session.execute(
        select(model.id).where(*criteria, model.created_at < last_cursor).limit(1)
    )
    has_more = more.first() is not None

    edges = [Edge(cursor=row.created_at, node=transform(row)) for row in rows]
    return Connection(
        count=len(edges),
        edges=edges,
        page_info=PageInfo(
            has_more=has_more,
            start_cursor=edges[0].cursor,
            end_cursor=edges[-1].cursor,
        ),
    )
