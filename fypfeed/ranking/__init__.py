"""Feed scoring, ranking and diversity selection."""

from .models import ScoreBreakdown, ScoredCandidate
from .ranker import FeedRanker, print_ranking_summary
from .scorers import (
    BaseScorer,
    ContentRelevanceScorer,
    DiversityScorer,
    FreshnessScorer,
    PerformanceScorer,
    RelationshipScorer,
)
from .selector import MAX_PER_CREATOR, select_diverse

__all__ = [
    "BaseScorer",
    "ContentRelevanceScorer",
    "DiversityScorer",
    "FeedRanker",
    "FreshnessScorer",
    "MAX_PER_CREATOR",
    "PerformanceScorer",
    "RelationshipScorer",
    "ScoreBreakdown",
    "ScoredCandidate",
    "print_ranking_summary",
    "select_diverse",
]
