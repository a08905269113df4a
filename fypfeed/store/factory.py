"""Build the configured content store."""

from pathlib import Path
from typing import Optional

from ..config import Config
from ..db import PostgresContentStore
from .base import ContentStore
from .memory import InMemoryContentStore, load_fixture
from .supabase import SupabaseContentStore


def build_store(config: Config, fixture_path: Optional[Path] = None) -> ContentStore:
    """
    Create the store selected by ``store.backend``.

    An explicit ``fixture_path`` forces the in-memory backend.
    """
    store_config = config.config.store

    if fixture_path is not None or store_config.backend == "memory":
        path = fixture_path or (
            Path(store_config.fixture_path).expanduser() if store_config.fixture_path else None
        )
        if path is None:
            return InMemoryContentStore()
        return load_fixture(path)

    if store_config.backend == "postgres":
        return PostgresContentStore(config.get_db_config())

    if store_config.backend == "supabase":
        supabase_config = config.get_supabase_config()
        if not supabase_config.get("url"):
            raise ValueError("Supabase backend requires supabase.url")
        if not supabase_config.get("api_key"):
            raise ValueError(
                f"Supabase backend requires an API key "
                f"(set {supabase_config.get('api_key_env') or 'supabase.api_key'})"
            )
        return SupabaseContentStore(
            url=supabase_config["url"],
            api_key=supabase_config["api_key"],
            timeout=supabase_config["timeout"],
        )

    raise ValueError(f"Unknown store backend: {store_config.backend}")
