"""aiogram message handlers.

Contract: every incoming message gets exactly one French text reply. On any internal error the
user gets a generic error text and the details are only logged.
"""

from __future__ import annotations

import asyncio
import logging
from time import monotonic

from aiogram.types import Message

from src.app import App
from src.bot.replies import ERROR_TEXT, HELP_TEXT, format_intent_reply
from src.db.clients import fetch_clients
from src.db.pool import get_conn
from src.intent.parser import parse_user_intent_with_source

logger = logging.getLogger(__name__)


def _is_command_text(text: str) -> bool:
    return text.lstrip().startswith("/")


async def handle_help(message: Message) -> None:
    """Reply to `/start` and `/help`."""

    await message.answer(HELP_TEXT)


async def handle_message(message: Message, app: App) -> None:
    """Parse any incoming text message against the company roster and summarize the intent."""

    started = monotonic()
    reply = ERROR_TEXT

    # noinspection PyBroadException
    try:
        raw_text = (message.text or message.caption or "")
        if not raw_text.strip() or _is_command_text(raw_text):
            await message.answer(HELP_TEXT)
            return

        async with get_conn(app.pool) as conn:
            clients = await fetch_clients(conn, app.settings.company_id)

        # The optional LLM call is blocking HTTP; keep it off the event loop.
        parse_result = await asyncio.to_thread(
            parse_user_intent_with_source,
            raw_text,
            clients,
            llm_enabled=app.settings.llm_enabled,
            llm_api_key=app.settings.llm_api_key,
        )
        reply = format_intent_reply(parse_result.intent)

        latency_ms = int((monotonic() - started) * 1000)
        logger.info(
            "handled source=%s document_type=%s has_client=%s has_title=%s roster=%d latency_ms=%d",
            parse_result.source,
            parse_result.intent.document_type,
            parse_result.intent.has_client,
            parse_result.intent.project_title is not None,
            len(clients),
            latency_ms,
        )
    except Exception:
        # Handler boundary: any internal error results in a generic reply without leaking details.
        logger.exception("handler failed")

    await message.answer(reply)
