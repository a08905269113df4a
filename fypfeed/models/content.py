"""Content item model for videos eligible for ranking."""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import Field, field_validator

from .base import StoreRecord


class ContentItem(StoreRecord):
    """A piece of user-generated content. Read-only to the ranking pipeline."""

    id: str = Field(..., description="Content ID")
    creator_id: str = Field(..., description="ID of the creating user")
    created_at: datetime = Field(..., description="Upload timestamp")
    view_count: int = Field(0, description="Number of views", ge=0)
    like_count: int = Field(0, description="Number of likes", ge=0)
    comment_count: int = Field(0, description="Number of comments", ge=0)
    tags: List[str] = Field(default_factory=list, description="Topic tags / hashtags")
    caption: Optional[str] = Field(None, description="Video caption")
    creator_name: Optional[str] = Field(None, description="Creator username, when joined")

    @field_validator("id", "creator_id", mode="before")
    @classmethod
    def coerce_id(cls, v: Any) -> Any:
        """Accept integer and UUID primary keys."""
        if v is not None and not isinstance(v, str):
            return str(v)
        return v

    @field_validator("tags", mode="before")
    @classmethod
    def coerce_tags(cls, v: Any) -> Any:
        """Treat a NULL hashtag column as no tags."""
        return v or []

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "ContentItem":
        """
        Build an item from a raw ``videos`` row.

        Counters fall back across the column names used by the app's
        tables and its camel-cased API payloads.
        """
        creator = row.get("users") or {}
        return cls(
            id=row["id"],
            creator_id=row.get("user_id") or row.get("userId") or row.get("creator_id"),
            created_at=row["created_at"],
            view_count=row.get("views") or row.get("viewsCount") or 0,
            like_count=row.get("likes") or row.get("likesCount") or 0,
            comment_count=row.get("comments_count") or row.get("commentsCount") or 0,
            tags=row.get("hashtags") or row.get("tags") or [],
            caption=row.get("caption"),
            creator_name=row.get("username") or creator.get("username"),
        )
