import asyncio
from collections import Counter
from datetime import timedelta

import pendulum
import pytest

from fypfeed.config import ConfigModel
from fypfeed.pipeline import FeedPipeline, PipelineState, StageTracker
from fypfeed.store import InMemoryContentStore
from tests.conftest import BrokenStore, ScriptedStore, make_item, make_view


def _recent(item_id, creator_id, hours_old, **kwargs):
    # Pipeline scoring reads the real clock; keep items relative to it
    item = make_item(item_id, creator_id, **kwargs)
    created = pendulum.now("UTC") - timedelta(hours=hours_old)
    return item.model_copy(update={"created_at": created})


def test_new_user_feed():
    trending = [_recent(f"t{i}", f"c{i}", hours_old=i + 1) for i in range(8)]
    discovery = [_recent(f"n{i}", f"d{i}", hours_old=i + 20) for i in range(3)]
    pipeline = FeedPipeline(ScriptedStore(trending, discovery))

    result = asyncio.run(pipeline.run("new-user", 20))

    assert result.state == PipelineState.DONE
    assert not result.fallback_used
    assert len(result.items) == 11
    scores = [c.score for c in result.candidates]
    assert scores == sorted(scores, reverse=True)
    assert [c.item.id for c in result.candidates] == [i.id for i in result.items]
    assert [s.name for s in result.stages] == [
        "extracting_prefs",
        "sourcing_candidates",
        "scoring",
        "selecting",
    ]
    assert all(s.success for s in result.stages)


def test_followed_creator_ranks_first():
    items = [_recent(f"v{i}", f"c{i}", hours_old=3) for i in range(5)]
    items.append(_recent("fav", "bob", hours_old=3))
    store = InMemoryContentStore(items=items, follows={"alice": ["bob"]})

    feed = FeedPipeline(store).get_personalized_feed_sync("alice")

    assert feed[0].id == "fav"


def test_prolific_creator_capped():
    star = [_recent(f"s{i}", "star", hours_old=0.1, views=10_000, likes=5_000) for i in range(5)]
    others = [_recent(f"o{i}", f"c{i}", hours_old=80, views=10, likes=0) for i in range(30)]
    store = InMemoryContentStore(items=star + others, follows={"alice": ["star"]})
    config = ConfigModel(sourcing={"trending_limit": 40, "discovery_limit": 5})

    feed = asyncio.run(FeedPipeline(store, config).get_personalized_feed("alice", limit=20))

    counts = Counter(i.creator_id for i in feed)
    assert len(feed) == 20
    assert counts["star"] == 2
    assert max(counts.values()) == 2


def test_watch_history_survives_behavior_failure():
    class NoBehaviorStore(InMemoryContentStore):
        async def query_behavior(self, user_id, limit):
            raise ConnectionError("network error")

    store = NoBehaviorStore(items=[_recent("v1", "bob", 1)], follows={"alice": ["bob"]})
    result = asyncio.run(FeedPipeline(store).run("alice", 20))

    assert result.state == PipelineState.DONE
    assert [i.id for i in result.items] == ["v1"]


def test_scoring_failure_falls_back_to_trending(monkeypatch):
    items = [_recent(f"v{i}", f"c{i}", hours_old=i) for i in range(6)]
    pipeline = FeedPipeline(InMemoryContentStore(items=items))

    def broken_rank(*args, **kwargs):
        raise RuntimeError("scoring blew up")

    monkeypatch.setattr(pipeline.ranker, "rank", broken_rank)
    result = asyncio.run(pipeline.run("alice", 4))

    assert result.state == PipelineState.FALLBACK
    assert result.error == "scoring blew up"
    assert [i.id for i in result.items] == ["v0", "v1", "v2", "v3"]
    assert result.stages[-1].name == "scoring"
    assert not result.stages[-1].success


def test_extraction_failure_falls_back(monkeypatch):
    items = [_recent("v1", "a", 5), _recent("v2", "b", 1)]
    pipeline = FeedPipeline(InMemoryContentStore(items=items))

    async def broken_extract(user_id):
        raise ValueError("bad preferences")

    monkeypatch.setattr(pipeline.extractor, "extract", broken_extract)
    feed = asyncio.run(pipeline.get_personalized_feed("alice", 20))

    assert [i.id for i in feed] == ["v2", "v1"]


def test_sourcing_failure_falls_back(monkeypatch):
    pipeline = FeedPipeline(InMemoryContentStore(items=[_recent("v1", "a", 1)]))

    async def broken_source(prefs):
        raise KeyError("candidates")

    monkeypatch.setattr(pipeline.sourcer, "source", broken_source)
    result = asyncio.run(pipeline.run("alice", 20))

    assert result.fallback_used
    assert [i.id for i in result.items] == ["v1"]


def test_fallback_failure_returns_empty_list(monkeypatch):
    pipeline = FeedPipeline(BrokenStore())

    def broken_rank(*args, **kwargs):
        raise RuntimeError("scoring blew up")

    monkeypatch.setattr(pipeline.ranker, "rank", broken_rank)
    assert asyncio.run(pipeline.get_personalized_feed("alice")) == []


def test_unreachable_store_gives_empty_feed():
    result = asyncio.run(FeedPipeline(BrokenStore()).run("alice", 20))
    assert result.state == PipelineState.DONE
    assert result.items == []


def test_empty_store_gives_empty_feed():
    result = asyncio.run(FeedPipeline(InMemoryContentStore()).run("alice"))
    assert result.state == PipelineState.DONE
    assert result.items == []
    assert result.limit == 20


def test_get_trending_sorted_and_capped():
    items = [_recent("old", "a", 50), _recent("new", "b", 1), _recent("mid", "c", 10)]
    pipeline = FeedPipeline(InMemoryContentStore(items=items))
    trending = asyncio.run(pipeline.get_trending(2))
    assert [i.id for i in trending] == ["new", "mid"]


def test_watched_items_rank_lower():
    items = [_recent("seen", "a", 2), _recent("unseen", "b", 2)]
    store = InMemoryContentStore(
        items=items,
        behavior=[make_view("alice", "seen", minutes_ago=1)],
    )
    feed = FeedPipeline(store).get_personalized_feed_sync("alice")
    assert [i.id for i in feed] == ["unseen", "seen"]


def test_stage_tracker_records_success_and_failure():
    tracker = StageTracker()
    with tracker.stage(PipelineState.EXTRACTING_PREFS) as stats:
        stats["interests"] = 2
    with pytest.raises(RuntimeError):
        with tracker.stage(PipelineState.SCORING):
            raise RuntimeError("boom")

    first, second = tracker.reports
    assert (first.name, first.success, first.stats) == ("extracting_prefs", True, {"interests": 2})
    assert first.error is None
    assert (second.name, second.success, second.error) == ("scoring", False, "boom")
    assert second.duration >= 0
    assert tracker.current == "scoring"
