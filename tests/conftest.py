from datetime import timedelta
from typing import List, Sequence

import pendulum
import pytest

from fypfeed.models import BehaviorEvent, ContentItem, UserPreferences
from fypfeed.store import InMemoryContentStore

NOW = pendulum.datetime(2026, 10, 19, 12, 0, 0)


def make_item(
    item_id: str,
    creator_id: str = "creator",
    hours_old: float = 2.0,
    views: int = 100,
    likes: int = 10,
    comments: int = 0,
    tags: Sequence[str] = (),
) -> ContentItem:
    return ContentItem(
        id=item_id,
        creator_id=creator_id,
        created_at=NOW - timedelta(hours=hours_old),
        view_count=views,
        like_count=likes,
        comment_count=comments,
        tags=list(tags),
    )


def make_view(user_id: str, video_id: str, minutes_ago: int, action: str = "view") -> BehaviorEvent:
    return BehaviorEvent(
        user_id=user_id,
        video_id=video_id,
        action_type=action,
        created_at=NOW - timedelta(minutes=minutes_ago),
    )


class ScriptedStore(InMemoryContentStore):
    """Memory store whose trending and discovery queries return separate lists."""

    def __init__(self, trending: List[ContentItem], discovery: List[ContentItem], **kwargs):
        super().__init__(items=trending + discovery, **kwargs)
        self.trending = trending
        self.discovery = discovery
        self.newest_calls: List[int] = []

    async def query_content_newest(self, limit: int) -> List[ContentItem]:
        self.newest_calls.append(limit)
        if limit == 5:
            return self.discovery[:limit]
        return self.trending[:limit]


class BrokenStore(InMemoryContentStore):
    """Every query fails as if the network were down."""

    async def query_behavior(self, user_id, limit):
        raise ConnectionError("store unreachable")

    async def query_follows(self, user_id):
        raise ConnectionError("store unreachable")

    async def query_likes(self, user_id):
        raise ConnectionError("store unreachable")

    async def query_content_by_creators(self, creator_ids, limit):
        raise ConnectionError("store unreachable")

    async def query_content_newest(self, limit):
        raise ConnectionError("store unreachable")

    async def query_content_by_tags(self, tags, limit):
        raise ConnectionError("store unreachable")


@pytest.fixture
def prefs() -> UserPreferences:
    return UserPreferences(
        user_id="alice",
        interests=["skate", "food"],
        followed_creator_ids={"bob"},
        watch_history=["w1", "w2"],
    )
