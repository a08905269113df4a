"""Database connection management."""

import os
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict, Optional

import psycopg
from psycopg.conninfo import make_conninfo
from psycopg.rows import dict_row
from psycopg_pool import AsyncConnectionPool


def build_conninfo(config: Dict[str, Any]) -> str:
    """
    libpq connection string for a ``Config.get_db_config()`` dict.

    The password comes from the variable named by ``password_env`` when it
    is set there, else from ``password``. Omitted when neither has one.
    """
    password = None
    if config.get("password_env"):
        password = os.environ.get(config["password_env"])
    password = password or config.get("password")

    params = {
        "host": config.get("host", "localhost"),
        "port": config.get("port", 5432),
        "dbname": config.get("database", "fypfeed"),
        "user": config.get("user", "fypfeed_user"),
    }
    if password:
        params["password"] = password
    return make_conninfo(**params)


_connection_pool: Optional[AsyncConnectionPool] = None


async def get_connection_pool(config: Dict[str, Any]) -> AsyncConnectionPool:
    """Get or create the shared connection pool."""
    global _connection_pool
    if _connection_pool is None:
        _connection_pool = AsyncConnectionPool(
            build_conninfo(config),
            min_size=1,
            max_size=10,
            kwargs={"row_factory": dict_row},
            open=False,
        )
        await _connection_pool.open()
    return _connection_pool


async def close_connection_pool() -> None:
    """Close the shared pool if it was opened."""
    global _connection_pool
    if _connection_pool is not None:
        await _connection_pool.close()
        _connection_pool = None


@asynccontextmanager
async def get_connection(config: Dict[str, Any]) -> AsyncGenerator[psycopg.AsyncConnection, None]:
    """Get a database connection from the pool."""
    pool = await get_connection_pool(config)
    async with pool.connection() as conn:
        yield conn
