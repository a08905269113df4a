"""Per-request user preference snapshot."""

from typing import Any, Dict, List, Set

from pydantic import BaseModel, Field


class UserPreferences(BaseModel):
    """
    Preferences of the requesting user.

    Built fresh for every feed request and discarded afterwards.
    ``watch_history`` is ordered most recent first.
    """

    user_id: str = Field(..., description="Requesting user ID")
    interests: List[str] = Field(default_factory=list, description="Interest tags")
    followed_creator_ids: Set[str] = Field(default_factory=set, description="Followed creators")
    liked_content_ids: Set[str] = Field(default_factory=set, description="Liked content")
    watch_history: List[str] = Field(default_factory=list, description="Watched content IDs")
    engagement_patterns: Dict[str, Any] = Field(
        default_factory=dict,
        description="Reserved engagement analysis, unused in scoring",
    )

    @classmethod
    def degraded(cls, user_id: str) -> "UserPreferences":
        """Empty snapshot used when nothing could be read for the user."""
        return cls(user_id=user_id)

    def follows(self, creator_id: str) -> bool:
        return creator_id in self.followed_creator_ids

    def recent_watches(self, window: int) -> List[str]:
        """The ``window`` most recently watched content IDs."""
        return self.watch_history[:window]
