"""Init command implementation."""

import asyncio
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel

from ..config import ConfigModel, save_config
from ..db import close_connection_pool, init_database, validate_connection

console = Console()


async def _setup_postgres(db_config: dict) -> bool:
    try:
        if not await validate_connection(db_config):
            return False
        await init_database(db_config)
        return True
    finally:
        await close_connection_pool()


def init_command(
    config_dir: Path = typer.Option(
        Path.home() / ".config" / "fypfeed",
        "--config-dir",
        "-c",
        help="Configuration directory",
    ),
    backend: str = typer.Option(
        "memory",
        "--backend",
        "-b",
        help="Content store backend (memory, postgres, supabase)",
    ),
    fixture: Optional[Path] = typer.Option(
        None,
        "--fixture",
        help="YAML fixture for the memory backend",
    ),
    db_host: str = typer.Option("localhost", "--db-host", help="Postgres host"),
    db_port: int = typer.Option(5432, "--db-port", help="Postgres port"),
    db_name: str = typer.Option("fypfeed", "--db-name", help="Database name"),
    db_user: str = typer.Option("fypfeed_user", "--db-user", help="Database user"),
    supabase_url: Optional[str] = typer.Option(None, "--supabase-url", help="Supabase project URL"),
) -> None:
    """Initialize fypfeed configuration (and the Postgres schema when selected)."""
    console.print(Panel.fit("fypfeed - Initialization", style="bold blue"))

    if backend not in ("memory", "postgres", "supabase"):
        console.print(f"[red]Unknown backend: {backend}[/red]")
        raise typer.Exit(1)

    config_dir.mkdir(parents=True, exist_ok=True)
    config_path = config_dir / "config.yaml"

    config = ConfigModel(
        store={
            "backend": backend,
            "fixture_path": str(fixture) if fixture else None,
        },
        postgres={
            "host": db_host,
            "port": db_port,
            "database": db_name,
            "user": db_user,
            "password_env": "FYPFEED_DB_PASSWORD",
        },
        supabase={"url": supabase_url, "api_key_env": "SUPABASE_KEY"},
    )

    save_config(config, config_path)
    console.print(f"✅ Created config: {config_path}")

    if backend == "postgres":
        console.print("\n[bold]Testing database connection and initializing schema...[/bold]")
        if not asyncio.run(_setup_postgres(config.postgres.model_dump())):
            console.print(
                "[red]❌ Database connection failed![/red]\n"
                "Please ensure Postgres is running and credentials are correct.\n"
                "Set the password via environment variable: "
                "[bold]export FYPFEED_DB_PASSWORD=your_password[/bold]"
            )
            raise typer.Exit(1)
        console.print("✅ Database schema initialized")

    console.print(
        Panel(
            f"[green]✅ fypfeed initialized![/green]\n\n"
            f"Configuration: {config_path}\n"
            f"Backend: {backend}\n\n"
            f"Next: [bold]fypfeed feed <user_id>[/bold]",
            style="green",
        )
    )
