"""Pluggable strategies for deriving preferences from the behavior log."""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Sequence

from ..models import BehaviorEvent

DEFAULT_INTERESTS = ["viral", "trending"]


class InterestExtractor(ABC):
    """Derive interest tags from behavior rows."""

    @abstractmethod
    def extract(self, behavior: Sequence[BehaviorEvent]) -> List[str]:
        """
        Extract interest tags.

        Args:
            behavior: Behavior rows, most recent first

        Returns:
            Ordered, de-duplicated interest tags
        """
        pass


class FixedInterestExtractor(InterestExtractor):
    """Minimal policy: a fixed tag set for any user with activity."""

    def __init__(self, interests: Optional[Sequence[str]] = None) -> None:
        self.interests = list(interests if interests is not None else DEFAULT_INTERESTS)

    def extract(self, behavior: Sequence[BehaviorEvent]) -> List[str]:
        if not behavior:
            return []
        return list(dict.fromkeys(self.interests))


class EngagementAnalyzer(ABC):
    """Summarize how a user engages. Reserved; not read by the scorers."""

    @abstractmethod
    def analyze(self, behavior: Sequence[BehaviorEvent]) -> Dict[str, Any]:
        pass


class NullEngagementAnalyzer(EngagementAnalyzer):
    def analyze(self, behavior: Sequence[BehaviorEvent]) -> Dict[str, Any]:
        return {}
