"""Feed-related Pydantic schemas."""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

from clip_feed.db.time import as_utc


class SortMode(str, Enum):
    """Orderings supported by the feed."""

    RANKED = "ranked"
    NEWEST = "newest"


class CategoryResponse(BaseModel):
    """Category embedded in feed items."""

    id: int
    name: str

    model_config = ConfigDict(from_attributes=True)


class ItemResponse(BaseModel):
    """Schema for a feed item returned by the API."""

    id: int
    title: str
    rank_score: int
    created_at: datetime
    category_id: int | None
    category: CategoryResponse | None = None
    video_url: str | None = None
    thumbnail_url: str | None = None
    platform: str | None = None

    model_config = ConfigDict(from_attributes=True)

    @field_validator("created_at")
    @classmethod
    def _normalize_timezone(cls, value: datetime) -> datetime:
        return as_utc(value)


class FeedPage(BaseModel):
    """One page of the feed plus the token for the next page, if any."""

    items: list[ItemResponse]
    next_cursor: str | None = Field(
        None,
        description="Opaque continuation token; null when this page ends the feed.",
    )
