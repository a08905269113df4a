"""Read-only query interface to the content, behavior and social-graph store."""

from abc import ABC, abstractmethod
from typing import List, Sequence

from ..models import BehaviorEvent, ContentItem


class ContentStore(ABC):
    """
    Query interface the ranking pipeline reads from.

    Implementations only ever read. Every method may raise; callers in the
    pipeline decide how a failing query degrades.
    """

    @abstractmethod
    async def query_behavior(self, user_id: str, limit: int) -> List[BehaviorEvent]:
        """
        Most recent behavior rows for a user.

        Args:
            user_id: Requesting user
            limit: Maximum number of rows

        Returns:
            Rows ordered by ``created_at`` descending
        """

    @abstractmethod
    async def query_follows(self, user_id: str) -> List[str]:
        """IDs of creators the user follows."""

    @abstractmethod
    async def query_likes(self, user_id: str) -> List[str]:
        """IDs of content the user liked."""

    @abstractmethod
    async def query_content_by_creators(
        self, creator_ids: Sequence[str], limit: int
    ) -> List[ContentItem]:
        """Newest items uploaded by any of the given creators."""

    @abstractmethod
    async def query_content_newest(self, limit: int) -> List[ContentItem]:
        """Newest items across all creators."""

    async def query_content_by_tags(
        self, tags: Sequence[str], limit: int
    ) -> List[ContentItem]:
        """Items whose tags intersect ``tags``. Stores without tag search return nothing."""
        return []

    async def close(self) -> None:
        """Release any held connections."""
