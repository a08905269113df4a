"""Feed ranker that combines multiple scoring components."""

from datetime import datetime
from typing import Dict, Iterable, List, Optional

import pendulum
from rich.console import Console
from rich.table import Table

from ..config import RankingConfig
from ..models import ContentItem, UserPreferences
from .models import ScoreBreakdown, ScoredCandidate
from .scorers import (
    ContentRelevanceScorer,
    DiversityScorer,
    FreshnessScorer,
    PerformanceScorer,
    RelationshipScorer,
)

console = Console()


class FeedRanker:
    """Score and order candidates using the weighted sub-scores."""

    def __init__(self, config: Optional[RankingConfig] = None) -> None:
        """
        Initialize feed ranker.

        Args:
            config: Ranking weights; defaults to the standard weighting
        """
        self.config = config or RankingConfig()
        self.weights = self.config.weights

        # Initialize scorers
        self.scorers = {
            "relevance": ContentRelevanceScorer(),
            "performance": PerformanceScorer(),
            "relationship": RelationshipScorer(),
            "freshness": FreshnessScorer(),
            "diversity": DiversityScorer(window=self.config.recent_watch_window),
        }

    def _generate_reason(self, scores: Dict[str, float], item: ContentItem) -> str:
        """Generate human-readable reason for score."""
        reasons = []

        if scores["relationship"] >= 0.8:
            reasons.append("from a followed creator")
        if scores["relevance"] >= 0.6:
            reasons.append("matches interests")
        if scores["performance"] >= 0.5:
            reasons.append("strong engagement")
        if scores["freshness"] >= 0.8:
            reasons.append("very recent")
        elif scores["freshness"] <= 0.1:
            reasons.append("older upload")
        if scores["diversity"] <= 0.1:
            reasons.append("recently watched")

        if not reasons:
            reasons.append("balanced scoring across factors")

        return "; ".join(reasons) + f" (@{item.creator_name or item.creator_id})"

    def score_candidate(
        self,
        item: ContentItem,
        prefs: UserPreferences,
        now: datetime,
    ) -> ScoredCandidate:
        """Score a single item with its breakdown."""
        scores = {
            name: scorer.score(item, prefs, now) for name, scorer in self.scorers.items()
        }

        total = sum(scores[name] * weight for name, weight in self.weights.items())

        return ScoredCandidate(
            item=item,
            score=max(0.0, min(1.0, total)),
            breakdown=ScoreBreakdown(**scores),
            reason=self._generate_reason(scores, item),
        )

    def score(self, item: ContentItem, prefs: UserPreferences, now: datetime) -> float:
        """Composite score in [0.0, 1.0]."""
        return self.score_candidate(item, prefs, now).score

    def rank(
        self,
        items: Iterable[ContentItem],
        prefs: UserPreferences,
        now: Optional[datetime] = None,
    ) -> List[ScoredCandidate]:
        """
        Score and sort items.

        Args:
            items: Candidate pool
            prefs: Preferences of the requesting user
            now: Evaluation instant; captured once here when not given

        Returns:
            Scored candidates by score descending, ties kept in input order
        """
        if now is None:
            now = pendulum.now("UTC")

        scored = [self.score_candidate(item, prefs, now) for item in items]
        return sorted(scored, key=lambda c: c.score, reverse=True)


def print_ranking_summary(candidates: List[ScoredCandidate], limit: int = 20) -> None:
    """Print scored candidates with their breakdown."""
    table = Table(title="Score Breakdown")
    table.add_column("#", style="dim")
    table.add_column("Video", style="cyan")
    table.add_column("Score", style="bold green")
    table.add_column("R / P / Rel / F / D", style="yellow")
    table.add_column("Reason", style="dim")

    for i, candidate in enumerate(candidates[:limit], 1):
        b = candidate.breakdown
        table.add_row(
            str(i),
            candidate.item.id,
            f"{candidate.score:.3f}",
            f"{b.relevance:.2f} / {b.performance:.2f} / {b.relationship:.2f} / "
            f"{b.freshness:.2f} / {b.diversity:.2f}",
            candidate.reason,
        )

    console.print(table)
