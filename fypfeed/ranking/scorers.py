"""Individual scoring components for feed ranking."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Sequence

from ..models import ContentItem, UserPreferences


def hours_since(created_at: datetime, now: datetime) -> float:
    """Age of an item in hours at ``now``."""
    return (now - created_at).total_seconds() / 3600


class BaseScorer(ABC):
    """Base class for scoring components."""

    @abstractmethod
    def score(self, item: ContentItem, prefs: UserPreferences, now: datetime) -> float:
        """
        Score an item from 0.0 to 1.0.

        Args:
            item: Candidate content item
            prefs: Preferences of the requesting user
            now: Evaluation instant, shared by every item in one ranking pass

        Returns:
            Score between 0.0 and 1.0
        """
        pass


def interest_match(tags: Sequence[str], interests: Sequence[str]) -> float:
    """1.0 if any tag is among the interests, else 0.0."""
    return 1.0 if set(tags) & set(interests) else 0.0


class ContentRelevanceScorer(BaseScorer):
    """Interest overlap and followed creators, penalizing already watched items."""

    def score(self, item: ContentItem, prefs: UserPreferences, now: datetime) -> float:
        relevance = interest_match(item.tags, prefs.interests) * 0.6

        if prefs.follows(item.creator_id):
            relevance += 0.3

        if item.id in prefs.watch_history:
            relevance -= 0.2

        return max(0.0, min(1.0, relevance))


class PerformanceScorer(BaseScorer):
    """Engagement rate plus view velocity."""

    def score(self, item: ContentItem, prefs: UserPreferences, now: datetime) -> float:
        views = item.view_count
        engagement_rate = (item.like_count + item.comment_count) / max(views, 1)
        views_per_hour = views / max(hours_since(item.created_at, now), 1.0)

        performance = min(engagement_rate * 10, 0.4) + min(views_per_hour * 0.001, 0.3)
        return max(0.0, min(1.0, performance))


class RelationshipScorer(BaseScorer):
    """Boost for followed creators on top of a base credit for everyone."""

    def score(self, item: ContentItem, prefs: UserPreferences, now: datetime) -> float:
        relationship = 0.2  # potential new connection
        if prefs.follows(item.creator_id):
            relationship += 0.6
        return relationship


class FreshnessScorer(BaseScorer):
    """Step function of content age."""

    STEPS = ((1, 1.0), (6, 0.8), (24, 0.5), (72, 0.2))
    FLOOR = 0.1

    def score(self, item: ContentItem, prefs: UserPreferences, now: datetime) -> float:
        hours_old = hours_since(item.created_at, now)
        for max_hours, value in self.STEPS:
            if hours_old < max_hours:
                return value
        return self.FLOOR


class DiversityScorer(BaseScorer):
    """Reward content outside the user's recent watch window."""

    def __init__(self, window: int = 10) -> None:
        """
        Initialize diversity scorer.

        Args:
            window: Number of most recent watches treated as a repeat
        """
        self.window = window

    def score(self, item: ContentItem, prefs: UserPreferences, now: datetime) -> float:
        if item.id in prefs.recent_watches(self.window):
            return 0.1
        return 0.9
