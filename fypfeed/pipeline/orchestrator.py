"""Pipeline orchestrator that runs the personalized feed stages."""

import asyncio
import time
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional

import pendulum
from rich.console import Console

from ..config import ConfigModel
from ..models import ContentItem
from ..preferences import EngagementAnalyzer, InterestExtractor, PreferenceExtractor
from ..ranking import FeedRanker, select_diverse
from ..sourcing import CandidateSourcer
from ..store import ContentStore
from .models import FeedResult, PipelineState, StageReport

console = Console()


class StageTracker:
    """Records which stages one request entered, how long each took and how it ended."""

    def __init__(self) -> None:
        self.reports: List[StageReport] = []

    @property
    def current(self) -> Optional[str]:
        """Name of the most recently entered stage."""
        return self.reports[-1].name if self.reports else None

    @contextmanager
    def stage(self, state: PipelineState) -> Iterator[Dict[str, Any]]:
        """
        Time a stage; the yielded dict collects its stats.

        An exception marks the stage failed and propagates to the caller.
        """
        report = StageReport(name=state.value)
        self.reports.append(report)
        started = time.perf_counter()
        try:
            yield report.stats
        except Exception as e:
            report.error = str(e)
            raise
        else:
            report.success = True
        finally:
            report.duration = time.perf_counter() - started


class FeedPipeline:
    """
    Personalized feed pipeline.

    Stateless between requests: every call builds its own preferences,
    candidate pool and stage records, so one instance can serve concurrent
    requests for different users.
    """

    def __init__(
        self,
        store: ContentStore,
        config: Optional[ConfigModel] = None,
        interest_extractor: Optional[InterestExtractor] = None,
        engagement_analyzer: Optional[EngagementAnalyzer] = None,
    ):
        """Initialize pipeline with an injected content store."""
        self.store = store
        self.config = config or ConfigModel()
        self.extractor = PreferenceExtractor(
            store,
            self.config.sourcing,
            interest_extractor=interest_extractor,
            engagement_analyzer=engagement_analyzer,
        )
        self.sourcer = CandidateSourcer(store, self.config.sourcing)
        self.ranker = FeedRanker(self.config.ranking)

    async def get_trending(self, limit: int) -> List[ContentItem]:
        """Unpersonalized feed: newest items, most recent first."""
        items = await self.store.query_content_newest(limit)
        return sorted(items, key=lambda item: item.created_at, reverse=True)[:limit]

    async def _fallback(self, limit: int) -> List[ContentItem]:
        try:
            return await self.get_trending(limit)
        except Exception as e:
            console.print(f"[red]Fallback feed failed, returning empty feed: {e}[/red]")
            return []

    async def run(self, user_id: str, limit: Optional[int] = None) -> FeedResult:
        """
        Run the pipeline for one request.

        Any exception while extracting preferences, sourcing or scoring moves
        the request to ``FALLBACK``. Never raises.
        """
        if limit is None:
            limit = self.config.feed.limit

        tracker = StageTracker()

        try:
            with tracker.stage(PipelineState.EXTRACTING_PREFS) as stats:
                prefs = await self.extractor.extract(user_id)
                stats.update({
                    "interests": len(prefs.interests),
                    "followed": len(prefs.followed_creator_ids),
                    "watch_history": len(prefs.watch_history),
                })

            with tracker.stage(PipelineState.SOURCING_CANDIDATES) as stats:
                candidates = await self.sourcer.source(prefs)
                stats["candidates"] = len(candidates)

            # One evaluation instant for the whole scoring pass
            with tracker.stage(PipelineState.SCORING) as stats:
                now = pendulum.now("UTC")
                ranked = self.ranker.rank(candidates, prefs, now)
                stats["scored"] = len(ranked)

        except Exception as e:
            console.print(
                f"[red]Feed ranking failed during {tracker.current}: {e}[/red] "
                f"[yellow]Serving trending feed instead.[/yellow]"
            )
            return FeedResult(
                user_id=user_id,
                limit=limit,
                items=await self._fallback(limit),
                state=PipelineState.FALLBACK,
                error=str(e),
                stages=tracker.reports,
                generated_at=pendulum.now("UTC"),
            )

        with tracker.stage(PipelineState.SELECTING) as stats:
            selected = select_diverse(ranked, limit, self.config.feed.max_per_creator)
            stats["selected"] = len(selected)

        return FeedResult(
            user_id=user_id,
            limit=limit,
            items=[candidate.item for candidate in selected],
            state=PipelineState.DONE,
            stages=tracker.reports,
            candidates=ranked,
            generated_at=now,
        )

    async def get_personalized_feed(self, user_id: str, limit: int = 20) -> List[ContentItem]:
        """Ranked feed for ``user_id``; falls back to trending on failure."""
        result = await self.run(user_id, limit)
        return result.items

    def get_personalized_feed_sync(self, user_id: str, limit: int = 20) -> List[ContentItem]:
        """Synchronous wrapper for get_personalized_feed."""
        return asyncio.run(self.get_personalized_feed(user_id, limit))
