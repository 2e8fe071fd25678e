"""Bot process entrypoint: `python -m src.bot.main`."""

from __future__ import annotations

import asyncio
import logging

from aiogram import Bot, Dispatcher
from aiogram.client.default import DefaultBotProperties
from aiogram.types import BotCommand

from src.app import create_app
from src.bot.router import router
from src.config.logging import configure_logging
from src.config.settings import load_settings

logger = logging.getLogger(__name__)

BOT_COMMANDS = [
    BotCommand(command="start", description="Présentation du bot"),
    BotCommand(command="help", description="Exemple de demande de devis ou de facture"),
]


async def main() -> None:
    """Open the roster DB pool and run the Telegram polling loop until stopped."""

    settings = load_settings()
    configure_logging()

    app = create_app(settings)
    await app.pool.open(wait=True)

    bot = Bot(token=settings.telegram_bot_token, default=DefaultBotProperties(parse_mode=None))
    dp = Dispatcher()
    dp.include_router(router)

    logger.info("starting company_id=%s llm_enabled=%s", settings.company_id, settings.llm_enabled)
    try:
        await bot.set_my_commands(BOT_COMMANDS)
        await dp.start_polling(bot, app=app)
    finally:
        logger.info("shutting down")
        await app.pool.close()
        await bot.session.close()


if __name__ == "__main__":
    asyncio.run(main())
