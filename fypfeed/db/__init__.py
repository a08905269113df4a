"""Postgres storage for the feed ranking engine."""

from .connection import close_connection_pool, get_connection, get_connection_pool
from .init import init_database, validate_connection
from .store import PostgresContentStore

__all__ = [
    "PostgresContentStore",
    "close_connection_pool",
    "get_connection",
    "get_connection_pool",
    "init_database",
    "validate_connection",
]
