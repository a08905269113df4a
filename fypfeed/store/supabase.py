"""Content store over the Supabase PostgREST API."""

from typing import Any, Dict, List, Optional, Sequence

import httpx

from ..models import BehaviorEvent, ContentItem
from .base import ContentStore


def _quote(value: str) -> str:
    """Double-quote a filter value, backslash-escaping quotes and backslashes."""
    escaped = str(value).replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def _in_list(values: Sequence[str]) -> str:
    """PostgREST ``in`` filter value."""
    return "in.(" + ",".join(_quote(v) for v in values) + ")"


def _array_literal(values: Sequence[str]) -> str:
    """Postgres array literal used by the ``ov`` (overlap) operator."""
    return "{" + ",".join(_quote(v) for v in values) + "}"


class SupabaseContentStore(ContentStore):
    """Read the app's tables through ``/rest/v1``."""

    def __init__(
        self,
        url: str,
        api_key: str,
        timeout: float = 10.0,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        """
        Initialize the store.

        Args:
            url: Supabase project URL
            api_key: Project API key, sent as ``apikey`` and bearer token
            timeout: Request timeout in seconds
            client: Pre-built client, mainly for tests
        """
        self.base_url = url.rstrip("/") + "/rest/v1"
        self._client = client or httpx.AsyncClient(
            timeout=timeout,
            headers={
                "apikey": api_key,
                "Authorization": f"Bearer {api_key}",
            },
        )

    async def _select(self, table: str, params: Dict[str, Any]) -> List[Dict[str, Any]]:
        response = await self._client.get(f"{self.base_url}/{table}", params=params)
        response.raise_for_status()
        return response.json() or []

    async def _select_videos(self, params: Dict[str, Any]) -> List[ContentItem]:
        rows = await self._select(
            "videos",
            {"select": "*,users(username)", "order": "created_at.desc", **params},
        )
        return [ContentItem.from_row(row) for row in rows]

    async def query_behavior(self, user_id: str, limit: int) -> List[BehaviorEvent]:
        rows = await self._select(
            "user_behavior",
            {
                "select": "*",
                "user_id": f"eq.{user_id}",
                "order": "created_at.desc",
                "limit": limit,
            },
        )
        return [BehaviorEvent(**row) for row in rows]

    async def query_follows(self, user_id: str) -> List[str]:
        rows = await self._select(
            "follows", {"select": "following_id", "follower_id": f"eq.{user_id}"}
        )
        return [str(row["following_id"]) for row in rows]

    async def query_likes(self, user_id: str) -> List[str]:
        rows = await self._select(
            "likes", {"select": "video_id", "user_id": f"eq.{user_id}"}
        )
        return [str(row["video_id"]) for row in rows]

    async def query_content_by_creators(
        self, creator_ids: Sequence[str], limit: int
    ) -> List[ContentItem]:
        if not creator_ids:
            return []
        return await self._select_videos({"user_id": _in_list(creator_ids), "limit": limit})

    async def query_content_newest(self, limit: int) -> List[ContentItem]:
        return await self._select_videos({"limit": limit})

    async def query_content_by_tags(
        self, tags: Sequence[str], limit: int
    ) -> List[ContentItem]:
        if not tags:
            return []
        return await self._select_videos({"hashtags": f"ov.{_array_literal(tags)}", "limit": limit})

    async def close(self) -> None:
        await self._client.aclose()
