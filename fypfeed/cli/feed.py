"""Feed and trending command implementations."""

import asyncio
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

from ..config import Config
from ..models import ContentItem
from ..pipeline import FeedPipeline, FeedResult
from ..ranking import print_ranking_summary
from ..store import ContentStore
from ..store.factory import build_store

console = Console()


def _load_store(config: Config, fixture: Optional[Path]) -> ContentStore:
    try:
        return build_store(config, fixture)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]Could not open content store: {e}[/red]")
        raise typer.Exit(1)


def _print_items(items: List[ContentItem], title: str) -> None:
    table = Table(title=title)
    table.add_column("#", style="dim")
    table.add_column("Video", style="cyan")
    table.add_column("Creator", style="magenta")
    table.add_column("Views", style="green")
    table.add_column("Likes", style="green")
    table.add_column("Uploaded", style="yellow")
    table.add_column("Tags", style="blue")

    for i, item in enumerate(items, 1):
        table.add_row(
            str(i),
            item.id,
            item.creator_name or item.creator_id,
            str(item.view_count),
            str(item.like_count),
            item.created_at.strftime("%Y-%m-%d %H:%M"),
            " ".join(f"#{t}" for t in item.tags),
        )

    console.print(table)


def _print_stages(result: FeedResult) -> None:
    table = Table(title="Pipeline Stages")
    table.add_column("Stage", style="cyan")
    table.add_column("Status", style="bold")
    table.add_column("Duration", style="yellow")
    table.add_column("Details", style="dim")

    for stage in result.stages:
        status = "[green]✓[/green]" if stage.success else "[red]✗[/red]"
        details = stage.error or ", ".join(f"{k}={v}" for k, v in stage.stats.items())
        table.add_row(stage.name, status, f"{stage.duration * 1000:.1f}ms", details)

    console.print(table)


async def _run_feed(store: ContentStore, config: Config, user_id: str, limit: int) -> FeedResult:
    try:
        pipeline = FeedPipeline(store, config.config)
        return await pipeline.run(user_id, limit)
    finally:
        await store.close()


async def _run_trending(store: ContentStore, config: Config, limit: int) -> List[ContentItem]:
    try:
        return await FeedPipeline(store, config.config).get_trending(limit)
    finally:
        await store.close()


def feed_command(
    user_id: str = typer.Argument(..., help="User to build the feed for"),
    limit: Optional[int] = typer.Option(None, "--limit", "-n", help="Feed size"),
    explain: bool = typer.Option(False, "--explain", help="Show score breakdown and stages"),
    fixture: Optional[Path] = typer.Option(
        None, "--fixture", "-f", help="Use a YAML fixture instead of the configured store"
    ),
) -> None:
    """Build the personalized For You feed for a user."""
    config = Config()
    if limit is None:
        limit = config.config.feed.limit

    store = _load_store(config, fixture)
    result = asyncio.run(_run_feed(store, config, user_id, limit))

    if result.fallback_used:
        console.print(f"[yellow]Personalization failed ({result.error}); showing trending feed.[/yellow]")

    if not result.items:
        console.print("[yellow]No videos available.[/yellow]")
        return

    _print_items(result.items, f"For You: {user_id}")

    if explain:
        print_ranking_summary(result.candidates, limit=max(limit, len(result.candidates)))
        _print_stages(result)


def trending_command(
    limit: Optional[int] = typer.Option(None, "--limit", "-n", help="Feed size"),
    fixture: Optional[Path] = typer.Option(
        None, "--fixture", "-f", help="Use a YAML fixture instead of the configured store"
    ),
) -> None:
    """Show the unpersonalized trending feed."""
    config = Config()
    if limit is None:
        limit = config.config.feed.limit

    store = _load_store(config, fixture)
    try:
        items = asyncio.run(_run_trending(store, config, limit))
    except Exception as e:
        console.print(f"[red]Failed to load trending feed: {e}[/red]")
        raise typer.Exit(1)

    if not items:
        console.print("[yellow]No videos available.[/yellow]")
        return

    _print_items(items, "Trending")
