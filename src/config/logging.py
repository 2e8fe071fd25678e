"""Logging configuration for the bot service and CLI."""

from __future__ import annotations

import logging
import os

# aiogram logs every update, the pool logs every checkout.
_QUIET_LOGGERS = ("aiogram.event", "psycopg.pool")


def configure_logging(level: str | None = None) -> None:
    """Configure process-wide logging.

    Handler and parser logs are internal diagnostics; chat replies never include them.
    """

    log_level = (level or os.getenv("LOG_LEVEL") or "INFO").upper()
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
    )

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
