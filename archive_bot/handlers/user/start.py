import logging

from aiogram import types, Router
from aiogram.filters import Command, CommandStart

from archive_bot.utils.error_handler import safe_handler
from archive_bot.utils.lang.language import text

logger = logging.getLogger(__name__)


@safe_handler("Start Command")
async def start(message: types.Message):
    await message.answer(text("start_text"))


@safe_handler("Help Command")
async def help_command(message: types.Message):
    await message.answer(
        text("help:header") + "\n\n" + text("help:commands"),
        parse_mode="HTML",
    )


def get_router():
    router = Router()
    router.message.register(start, CommandStart())
    router.message.register(help_command, Command("help"))
    return router
