"""Candidate generation from followed, interest, trending and discovery sources."""

import asyncio
from typing import Awaitable, Dict, Iterable, List, Optional

from rich.console import Console

from ..config import SourcingConfig
from ..models import ContentItem, UserPreferences
from ..store import ContentStore

console = Console()

SOURCE_ORDER = ("followed", "interest", "trending", "discovery")


def dedupe_by_id(items: Iterable[ContentItem]) -> List[ContentItem]:
    """Remove duplicate items by ID, keeping the first occurrence."""
    seen = set()
    unique = []
    for item in items:
        if item.id in seen:
            continue
        seen.add(item.id)
        unique.append(item)
    return unique


class CandidateSourcer:
    """Gather the candidate pool for one feed request."""

    def __init__(self, store: ContentStore, config: Optional[SourcingConfig] = None) -> None:
        self.store = store
        self.config = config or SourcingConfig()

    async def _safe_query(self, name: str, query: Awaitable[List[ContentItem]]) -> List[ContentItem]:
        """Await one source query, degrading to no candidates on failure."""
        try:
            return list(await query)
        except Exception as e:
            console.print(f"[yellow]Warning: {name} source failed, skipping: {e}[/yellow]")
            return []

    def _queries(self, prefs: UserPreferences) -> Dict[str, Awaitable[List[ContentItem]]]:
        queries = {}

        # Skipped entirely for users who follow nobody
        if prefs.followed_creator_ids:
            queries["followed"] = self.store.query_content_by_creators(
                sorted(prefs.followed_creator_ids), self.config.followed_limit
            )

        if prefs.interests:
            queries["interest"] = self.store.query_content_by_tags(
                prefs.interests, self.config.interest_limit
            )

        # Trending uses recency as its signal
        queries["trending"] = self.store.query_content_newest(self.config.trending_limit)
        queries["discovery"] = self.store.query_content_newest(self.config.discovery_limit)
        return queries

    async def fetch_sources(self, prefs: UserPreferences) -> Dict[str, List[ContentItem]]:
        """Run all source queries concurrently and return results per source."""
        queries = self._queries(prefs)
        names = list(queries)
        results = await asyncio.gather(
            *(self._safe_query(name, queries[name]) for name in names)
        )
        by_source = dict(zip(names, results))
        return {name: by_source.get(name, []) for name in SOURCE_ORDER}

    async def source(self, prefs: UserPreferences) -> List[ContentItem]:
        """
        Build the deduplicated candidate pool.

        Returns:
            Unique items in first-seen order: followed, interest, trending, discovery
        """
        by_source = await self.fetch_sources(prefs)
        return dedupe_by_id(item for name in SOURCE_ORDER for item in by_source[name])
