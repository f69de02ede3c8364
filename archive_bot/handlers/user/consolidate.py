"""
Объединение постов, разбитых Telegram на несколько сообщений.
"""
import logging

from aiogram import types, Router
from aiogram.filters import Command

from archive_bot.utils.consolidation import consolidate_media
from archive_bot.utils.error_handler import safe_handler
from archive_bot.utils.errors import ArchiveError
from archive_bot.utils.file_utils import run_blocking
from archive_bot.utils.functions import error_text, log_error
from archive_bot.utils.lang.language import text
from archive_bot.utils.settings import ArchiveSettings

logger = logging.getLogger(__name__)


@safe_handler("Consolidate All")
async def consolidate_all(message: types.Message, settings: ArchiveSettings):
    user_id = message.chat.id

    try:
        report = await run_blocking(consolidate_media, user_id, settings)
    except ArchiveError as e:
        log_error("consolidate_all()", user_id, e)
        await message.answer(error_text(e))
        return

    await message.answer(
        text("consolidate:success").format(
            before=report.posts_before,
            after=report.posts_after,
        )
    )


def get_router():
    router = Router()
    router.message.register(consolidate_all, Command("consolidateall"))
    return router
