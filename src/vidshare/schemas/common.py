# src/vidshare/schemas/common.py
"""Shared Pydantic schemas for common API elements."""
from __future__ import annotations

from typing import Generic, Literal, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class Pagination(BaseModel):
    """Page metadata returned alongside every listing."""

    page: int
    limit: int
    total: int
    total_pages: int


class Page(BaseModel, Generic[T]):
    """A single page of results."""

    items: list[T]
    pagination: Pagination


class StatusPage(Page[T], Generic[T]):
    """A page of moderation items plus counts for every status."""

    status_counts: dict[str, int] = Field(default_factory=dict)


class MessageResponse(BaseModel):
    """Plain acknowledgement."""

    success: bool = True
    message: str | None = None


SortOrder = Literal["asc", "desc"]
