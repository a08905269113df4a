"""User preference extraction."""

from .extractor import PreferenceExtractor
from .strategies import (
    DEFAULT_INTERESTS,
    EngagementAnalyzer,
    FixedInterestExtractor,
    InterestExtractor,
    NullEngagementAnalyzer,
)

__all__ = [
    "DEFAULT_INTERESTS",
    "EngagementAnalyzer",
    "FixedInterestExtractor",
    "InterestExtractor",
    "NullEngagementAnalyzer",
    "PreferenceExtractor",
]
