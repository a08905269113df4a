"""Data models for the feed ranking engine."""

from .behavior import BehaviorEvent
from .content import ContentItem
from .preferences import UserPreferences

__all__ = ["BehaviorEvent", "ContentItem", "UserPreferences"]
