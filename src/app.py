"""Application composition root for the bot runtime."""

from __future__ import annotations

from dataclasses import dataclass

from psycopg_pool import AsyncConnectionPool

from src.config.settings import Settings
from src.db.pool import create_pool

APPLICATION_NAME = "devis-intent-bot"


@dataclass(frozen=True)
class App:
    """Settings and the roster DB pool, injected into handlers by the dispatcher."""

    settings: Settings
    pool: AsyncConnectionPool


def create_app(settings: Settings) -> App:
    """Build the container; the pool is created closed and opened by the polling entrypoint."""

    pool = create_pool(
        settings.database_url,
        max_size=settings.db_pool_max_size,
        application_name=APPLICATION_NAME,
    )
    return App(settings=settings, pool=pool)
