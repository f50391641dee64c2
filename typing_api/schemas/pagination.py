"""Shared pagination schemas for list endpoints."""

from datetime import datetime
from typing import Generic, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class Edge(BaseModel, Generic[T]):
    """One paginated result: the node and its cursor (creation timestamp)."""

    cursor: datetime
    node: T


class PageInfo(BaseModel):
    has_more: bool = False
    start_cursor: datetime | None = None
    end_cursor: datetime | None = None


class Connection(BaseModel, Generic[T]):
    """Page of edges, newest first. Empty page has null cursors and has_more=False."""

    count: int = 0
    edges: list[Edge[T]] = Field(default_factory=list)
    page_info: PageInfo = Field(default_factory=PageInfo)
