"""Configuration management for the feed ranking engine."""

from .loader import Config, load_config, save_config
from .models import (
    ConfigModel,
    FeedConfig,
    PostgresConfig,
    RankingConfig,
    SourcingConfig,
    StoreConfig,
    SupabaseConfig,
)

__all__ = [
    "Config",
    "ConfigModel",
    "FeedConfig",
    "PostgresConfig",
    "RankingConfig",
    "SourcingConfig",
    "StoreConfig",
    "SupabaseConfig",
    "load_config",
    "save_config",
]
