import asyncio
from pathlib import Path

import httpx
import pytest

from fypfeed.config import Config, ConfigModel, save_config
from fypfeed.db import PostgresContentStore
from fypfeed.store import InMemoryContentStore, SupabaseContentStore, load_fixture
from fypfeed.store.factory import build_store
from tests.conftest import make_item, make_view

DEMO_FIXTURE = Path(__file__).resolve().parents[1] / "fixtures" / "demo.yaml"


def test_memory_store_queries():
    items = [
        make_item("old", creator_id="a", hours_old=30, tags=["x"]),
        make_item("new", creator_id="b", hours_old=1, tags=["y"]),
        make_item("mid", creator_id="a", hours_old=5),
    ]
    store = InMemoryContentStore(
        items=items,
        behavior=[make_view("alice", "old", 10), make_view("alice", "new", 1)],
        follows={"alice": ["a"]},
        likes={"alice": ["new"]},
    )

    assert [i.id for i in asyncio.run(store.query_content_newest(2))] == ["new", "mid"]
    assert [i.id for i in asyncio.run(store.query_content_by_creators(["a"], 10))] == ["mid", "old"]
    assert [i.id for i in asyncio.run(store.query_content_by_tags(["x", "z"], 10))] == ["old"]
    assert [r.video_id for r in asyncio.run(store.query_behavior("alice", 1))] == ["new"]
    assert asyncio.run(store.query_follows("alice")) == ["a"]
    assert asyncio.run(store.query_likes("nobody")) == []


def test_load_demo_fixture():
    store = load_fixture(DEMO_FIXTURE)
    assert len(store.items) == 8
    assert store.follows["alice"] == ["bob"]
    assert store.items[0].creator_name == "bob"


def test_load_fixture_errors(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_fixture(tmp_path / "missing.yaml")

    bad = tmp_path / "bad.yaml"
    bad.write_text("videos:\n  - {user_id: a}\n")
    with pytest.raises(ValueError):
        load_fixture(bad)


def _supabase_store(handler):
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return SupabaseContentStore("https://demo.supabase.co/", "anon-key", client=client)


def test_supabase_newest_and_tags():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(
            200,
            json=[{
                "id": "v1",
                "user_id": "bob",
                "created_at": "2026-10-19T10:00:00+00:00",
                "views": 10,
                "likes": 2,
                "comments_count": 1,
                "hashtags": ["skate"],
                "users": {"username": "bob"},
            }],
        )

    store = _supabase_store(handler)
    newest = asyncio.run(store.query_content_newest(5))
    tagged = asyncio.run(store.query_content_by_tags(["skate", "food"], 15))

    assert newest[0].id == "v1" and newest[0].creator_name == "bob"
    assert tagged[0].tags == ["skate"]
    assert seen[0].url.path == "/rest/v1/videos"
    assert seen[0].url.params["order"] == "created_at.desc"
    assert seen[0].url.params["limit"] == "5"
    assert seen[1].url.params["hashtags"] == 'ov.{"skate","food"}'


def test_supabase_behavior_follows_likes():
    def handler(request: httpx.Request) -> httpx.Response:
        table = request.url.path.rsplit("/", 1)[-1]
        rows = {
            "user_behavior": [
                {"user_id": "alice", "video_id": "v1", "action_type": "view",
                 "created_at": "2026-10-19T10:00:00Z"},
            ],
            "follows": [{"following_id": "bob"}],
            "likes": [{"video_id": 7}],
        }[table]
        return httpx.Response(200, json=rows)

    store = _supabase_store(handler)
    assert asyncio.run(store.query_behavior("alice", 50))[0].is_view
    assert asyncio.run(store.query_follows("alice")) == ["bob"]
    assert asyncio.run(store.query_likes("alice")) == ["7"]
    assert asyncio.run(store.query_content_by_creators([], 10)) == []


def test_supabase_http_error_raises():
    store = _supabase_store(lambda request: httpx.Response(503))
    with pytest.raises(httpx.HTTPStatusError):
        asyncio.run(store.query_content_newest(10))


def test_build_store_backends(tmp_path, monkeypatch):
    path = tmp_path / "config.yaml"

    save_config(ConfigModel(), path)
    assert isinstance(build_store(Config(path)), InMemoryContentStore)
    assert len(build_store(Config(path), DEMO_FIXTURE).items) == 8

    save_config(ConfigModel(store={"backend": "postgres"}), path)
    assert isinstance(build_store(Config(path)), PostgresContentStore)

    save_config(ConfigModel(store={"backend": "supabase"}), path)
    with pytest.raises(ValueError):
        build_store(Config(path))

    save_config(
        ConfigModel(
            store={"backend": "supabase"},
            supabase={"url": "https://demo.supabase.co", "api_key_env": "TEST_SB_KEY"},
        ),
        path,
    )
    monkeypatch.setenv("TEST_SB_KEY", "anon-key")
    assert isinstance(build_store(Config(path)), SupabaseContentStore)


def test_fixture_behavior_row_without_timestamp_rejected(tmp_path):
    fixture = tmp_path / "fixture.yaml"
    fixture.write_text(
        "behavior:\n"
        "  - {user_id: alice, video_id: v1, action_type: view, created_at: '2026-10-19T10:00:00Z'}\n"
        "  - {user_id: alice, video_id: v2, action_type: view}\n"
    )
    with pytest.raises(ValueError, match="Invalid fixture data"):
        load_fixture(fixture)


def test_supabase_filters_escape_quotes_and_backslashes():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=[])

    store = _supabase_store(handler)
    asyncio.run(store.query_content_by_tags(['say "hi"', "back\\slash"], 15))
    asyncio.run(store.query_content_by_creators(['o"brien'], 10))

    assert seen[0].url.params["hashtags"] == 'ov.{"say \\"hi\\"","back\\\\slash"}'
    assert seen[1].url.params["user_id"] == 'in.("o\\"brien")'
