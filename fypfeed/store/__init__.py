"""Content store implementations."""

from .base import ContentStore
from .memory import InMemoryContentStore, load_fixture
from .supabase import SupabaseContentStore

__all__ = [
    "ContentStore",
    "InMemoryContentStore",
    "SupabaseContentStore",
    "load_fixture",
]
