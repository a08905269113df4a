"""Content store over the Postgres schema in ``SCHEMA_SQL``."""

from typing import Any, Dict, List, Sequence

from ..models import BehaviorEvent, ContentItem
from ..store.base import ContentStore
from .connection import close_connection_pool, get_connection

VIDEO_COLUMNS = """
    v.id, v.user_id, v.caption, v.hashtags, v.views, v.likes,
    v.comments_count, v.created_at, u.username
"""


class PostgresContentStore(ContentStore):
    """Read queries against the ``videos``, ``user_behavior``, ``follows`` and ``likes`` tables."""

    def __init__(self, db_config: Dict[str, Any]) -> None:
        """Initialize store with a ``Config.get_db_config()`` dict."""
        self.db_config = db_config

    async def _fetch(self, query: str, params: Sequence[Any]) -> List[Dict[str, Any]]:
        async with get_connection(self.db_config) as conn:
            async with conn.cursor() as cur:
                await cur.execute(query, params)
                return await cur.fetchall()

    async def query_behavior(self, user_id: str, limit: int) -> List[BehaviorEvent]:
        rows = await self._fetch(
            """
            SELECT user_id, video_id, action_type, created_at
            FROM user_behavior
            WHERE user_id = %s
            ORDER BY created_at DESC
            LIMIT %s
            """,
            (user_id, limit),
        )
        return [BehaviorEvent(**row) for row in rows]

    async def query_follows(self, user_id: str) -> List[str]:
        rows = await self._fetch(
            "SELECT following_id FROM follows WHERE follower_id = %s",
            (user_id,),
        )
        return [row["following_id"] for row in rows]

    async def query_likes(self, user_id: str) -> List[str]:
        rows = await self._fetch(
            "SELECT video_id FROM likes WHERE user_id = %s",
            (user_id,),
        )
        return [row["video_id"] for row in rows]

    async def query_content_by_creators(
        self, creator_ids: Sequence[str], limit: int
    ) -> List[ContentItem]:
        if not creator_ids:
            return []
        rows = await self._fetch(
            f"""
            SELECT {VIDEO_COLUMNS}
            FROM videos v
            LEFT JOIN users u ON u.id = v.user_id
            WHERE v.user_id = ANY(%s)
            ORDER BY v.created_at DESC
            LIMIT %s
            """,
            (list(creator_ids), limit),
        )
        return [ContentItem.from_row(row) for row in rows]

    async def query_content_newest(self, limit: int) -> List[ContentItem]:
        rows = await self._fetch(
            f"""
            SELECT {VIDEO_COLUMNS}
            FROM videos v
            LEFT JOIN users u ON u.id = v.user_id
            ORDER BY v.created_at DESC
            LIMIT %s
            """,
            (limit,),
        )
        return [ContentItem.from_row(row) for row in rows]

    async def query_content_by_tags(
        self, tags: Sequence[str], limit: int
    ) -> List[ContentItem]:
        if not tags:
            return []
        rows = await self._fetch(
            f"""
            SELECT {VIDEO_COLUMNS}
            FROM videos v
            LEFT JOIN users u ON u.id = v.user_id
            WHERE v.hashtags && %s::text[]
            ORDER BY v.created_at DESC
            LIMIT %s
            """,
            (list(tags), limit),
        )
        return [ContentItem.from_row(row) for row in rows]

    async def close(self) -> None:
        await close_connection_pool()
