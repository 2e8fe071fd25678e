"""Async Postgres connection pool.

The bot loads the client roster through an async pool (psycopg3) on every message, so rosters
edited in the web application are picked up without a restart.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from dotenv import load_dotenv
from psycopg import AsyncConnection
from psycopg_pool import AsyncConnectionPool

from src.db.connection import require_database_url


def create_pool(
        database_url: str | None = None,
        *,
        min_size: int = 1,
        max_size: int | None = None,
        timeout: float = 30.0,
        application_name: str | None = None,
) -> AsyncConnectionPool:
    """Create a closed async pool for roster reads.

    If `database_url` is omitted, `.env` is loaded and `DATABASE_URL` is read. `application_name`
    is forwarded to every connection so the bot's sessions are identifiable in `pg_stat_activity`.
    """

    if database_url is None:
        load_dotenv(".env")
        database_url = require_database_url()

    kwargs = {"application_name": application_name} if application_name else None
    return AsyncConnectionPool(
        conninfo=database_url,
        min_size=min_size,
        max_size=max_size,
        timeout=timeout,
        kwargs=kwargs,
        name="roster",
        open=False,
    )


@asynccontextmanager
async def get_conn(pool: AsyncConnectionPool) -> AsyncIterator[AsyncConnection]:
    async with pool.connection() as conn:
        yield conn
