"""
Database access for the bot_settings table.

The only persisted state is the user limit, so one small async pool is shared
by every command. Alembic reads the same DATABASE_URL through a sync driver.
"""

import os
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine, create_async_engine

ASYNC_SCHEME = "postgresql+asyncpg://"
SYNC_SCHEME = "postgresql://"

_engine: AsyncEngine | None = None


def _database_url(scheme: str) -> str:
    """DATABASE_URL rewritten to use the driver named by scheme."""
    url = os.environ.get("DATABASE_URL", "")
    for prefix in (ASYNC_SCHEME, SYNC_SCHEME):
        if url.startswith(prefix):
            return scheme + url[len(prefix):]
    raise ValueError("DATABASE_URL must be a postgresql:// URL to store bot settings")


def get_sync_database_url() -> str:
    """URL for Alembic, which runs migrations through psycopg2."""
    return _database_url(SYNC_SCHEME)


def get_engine() -> AsyncEngine:
    """Create the settings engine on first use."""
    global _engine
    if _engine is None:
        _engine = create_async_engine(
            _database_url(ASYNC_SCHEME),
            echo=os.environ.get("SQL_ECHO", "").lower() == "true",
            pool_size=1,
            max_overflow=2,
            pool_pre_ping=True,
        )
    return _engine


@asynccontextmanager
async def get_connection() -> AsyncGenerator[AsyncConnection, None]:
    """Read-only access: async with get_connection() as conn: ..."""
    async with get_engine().connect() as conn:
        yield conn


@asynccontextmanager
async def get_transaction() -> AsyncGenerator[AsyncConnection, None]:
    """Connection inside a transaction that commits on exit."""
    async with get_engine().begin() as conn:
        yield conn


async def close_engine() -> None:
    """Dispose of the pool. Called from the app lifespan."""
    global _engine
    if _engine is not None:
        await _engine.dispose()
        _engine = None
