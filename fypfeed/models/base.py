"""Base model class for records read from the content store."""

from datetime import datetime, timezone
from typing import Any, Optional

import pendulum
from pydantic import BaseModel, ConfigDict, Field, field_validator


def to_utc(value: Any) -> Any:
    """Coerce store timestamps to timezone-aware UTC datetimes."""
    if isinstance(value, str):
        return pendulum.parse(value).in_timezone("UTC")
    if isinstance(value, datetime) and value.tzinfo is None:
        # Naive timestamps from the store are UTC
        return value.replace(tzinfo=timezone.utc)
    return value


class StoreRecord(BaseModel):
    """Base model for all rows read from the store."""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    created_at: Optional[datetime] = Field(None, description="Creation timestamp")

    @field_validator("created_at", mode="before")
    @classmethod
    def parse_created_at(cls, v: Any) -> Any:
        """Parse ISO strings and attach UTC to naive datetimes."""
        return to_utc(v)
