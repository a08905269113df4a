"""In-memory content store, loadable from a YAML fixture."""

from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence

import yaml
from pydantic import ValidationError

from ..models import BehaviorEvent, ContentItem
from .base import ContentStore


def _newest_first(items: Iterable[ContentItem]) -> List[ContentItem]:
    return sorted(items, key=lambda item: item.created_at, reverse=True)


class InMemoryContentStore(ContentStore):
    """Store backed by plain lists and dicts."""

    def __init__(
        self,
        items: Optional[Iterable[ContentItem]] = None,
        behavior: Optional[Iterable[BehaviorEvent]] = None,
        follows: Optional[Dict[str, List[str]]] = None,
        likes: Optional[Dict[str, List[str]]] = None,
    ) -> None:
        self.items = list(items or [])
        self.behavior = list(behavior or [])
        self.follows = dict(follows or {})
        self.likes = dict(likes or {})

    async def query_behavior(self, user_id: str, limit: int) -> List[BehaviorEvent]:
        rows = [row for row in self.behavior if row.user_id == user_id]
        rows.sort(key=lambda row: row.created_at, reverse=True)
        return rows[:limit]

    async def query_follows(self, user_id: str) -> List[str]:
        return list(self.follows.get(user_id, []))

    async def query_likes(self, user_id: str) -> List[str]:
        return list(self.likes.get(user_id, []))

    async def query_content_by_creators(
        self, creator_ids: Sequence[str], limit: int
    ) -> List[ContentItem]:
        wanted = set(creator_ids)
        return _newest_first(i for i in self.items if i.creator_id in wanted)[:limit]

    async def query_content_newest(self, limit: int) -> List[ContentItem]:
        return _newest_first(self.items)[:limit]

    async def query_content_by_tags(
        self, tags: Sequence[str], limit: int
    ) -> List[ContentItem]:
        wanted = set(tags)
        return _newest_first(i for i in self.items if wanted.intersection(i.tags))[:limit]


def load_fixture(fixture_path: Path) -> InMemoryContentStore:
    """
    Load a store from a YAML fixture.

    The fixture holds ``videos`` (rows in ``videos`` table shape),
    ``behavior``, and ``follows`` / ``likes`` maps keyed by user ID.
    """
    if not fixture_path.exists():
        raise FileNotFoundError(f"Fixture file not found: {fixture_path}")

    try:
        with open(fixture_path) as f:
            data = yaml.safe_load(f)

        if data is None:
            data = {}

        return InMemoryContentStore(
            items=[ContentItem.from_row(row) for row in data.get("videos", [])],
            behavior=[BehaviorEvent(**row) for row in data.get("behavior", [])],
            follows={str(k): [str(v) for v in vs] for k, vs in (data.get("follows") or {}).items()},
            likes={str(k): [str(v) for v in vs] for k, vs in (data.get("likes") or {}).items()},
        )
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in fixture file: {e}")
    except (KeyError, ValidationError) as e:
        raise ValueError(f"Invalid fixture data: {e}")
