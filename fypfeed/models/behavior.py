"""User behavior log model."""

from datetime import datetime

from pydantic import Field, field_validator

from .base import StoreRecord

VIEW_ACTION = "view"


class BehaviorEvent(StoreRecord):
    """One row of the ``user_behavior`` log."""

    user_id: str = Field(..., description="Acting user")
    video_id: str = Field(..., description="Content the action targeted")
    action_type: str = Field(..., description="Action type (view, like, share)")
    created_at: datetime = Field(..., description="When the action happened")

    @field_validator("user_id", "video_id", mode="before")
    @classmethod
    def coerce_id(cls, v):
        if v is not None and not isinstance(v, str):
            return str(v)
        return v

    @property
    def is_view(self) -> bool:
        return self.action_type == VIEW_ACTION
