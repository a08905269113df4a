"""Build the per-request preference snapshot."""

import asyncio
from typing import Any, Awaitable, List, Optional

from rich.console import Console

from ..config import SourcingConfig
from ..models import UserPreferences
from ..store import ContentStore
from .strategies import (
    EngagementAnalyzer,
    FixedInterestExtractor,
    InterestExtractor,
    NullEngagementAnalyzer,
)

console = Console()


class PreferenceExtractor:
    """Read behavior, follows and likes for a user and derive preferences."""

    def __init__(
        self,
        store: ContentStore,
        config: Optional[SourcingConfig] = None,
        interest_extractor: Optional[InterestExtractor] = None,
        engagement_analyzer: Optional[EngagementAnalyzer] = None,
    ) -> None:
        """
        Initialize preference extractor.

        Args:
            store: Content store to read from
            config: Query caps (``behavior_limit``)
            interest_extractor: Interest derivation strategy
            engagement_analyzer: Engagement analysis strategy
        """
        self.store = store
        self.config = config or SourcingConfig()
        self.interest_extractor = interest_extractor or FixedInterestExtractor()
        self.engagement_analyzer = engagement_analyzer or NullEngagementAnalyzer()

    async def _safe_fetch(self, name: str, fetch: Awaitable[List[Any]]) -> List[Any]:
        """Await one fetch, degrading to an empty result on failure."""
        try:
            return list(await fetch)
        except Exception as e:
            console.print(f"[yellow]Warning: {name} query failed, using empty result: {e}[/yellow]")
            return []

    async def extract(self, user_id: str) -> UserPreferences:
        """Build preferences for ``user_id``. Never raises on store failures."""
        behavior, followed, liked = await asyncio.gather(
            self._safe_fetch(
                "behavior", self.store.query_behavior(user_id, self.config.behavior_limit)
            ),
            self._safe_fetch("follows", self.store.query_follows(user_id)),
            self._safe_fetch("likes", self.store.query_likes(user_id)),
        )

        return UserPreferences(
            user_id=user_id,
            interests=self.interest_extractor.extract(behavior),
            followed_creator_ids={str(c) for c in followed},
            liked_content_ids={str(c) for c in liked},
            watch_history=[row.video_id for row in behavior if row.is_view],
            engagement_patterns=self.engagement_analyzer.analyze(behavior),
        )
