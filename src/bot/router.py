"""Bot router: help commands first, then every other message goes to the intent handler."""

from __future__ import annotations

from aiogram import Router
from aiogram.filters import Command, CommandStart

from src.bot.handlers import handle_help, handle_message

router = Router(name="intent")
router.message.register(handle_help, CommandStart())
router.message.register(handle_help, Command("help"))
router.message.register(handle_message)
