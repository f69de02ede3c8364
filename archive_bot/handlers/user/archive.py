"""
Прием пересланных постов.

Любое сообщение, не являющееся командой, добавляется в архив пользователя.
Обработчик регистрируется последним, после всех команд.
"""
import logging

from aiogram import types, Router

from archive_bot.utils.error_handler import safe_handler
from archive_bot.utils.errors import ArchiveError
from archive_bot.utils.functions import error_text, log_error
from archive_bot.utils.ingestion import IncomingPost, add_post
from archive_bot.utils.lang.language import text
from archive_bot.utils.settings import ArchiveSettings

logger = logging.getLogger(__name__)


@safe_handler("Archive Message")
async def archive_message(message: types.Message, settings: ArchiveSettings):
    if message.text and message.text.startswith("/"):
        await message.answer(text("invalid_command"))
        return

    waiting_msg = await message.answer(text("waiting"))
    user_id = message.chat.id

    try:
        await add_post(IncomingPost.from_message(message), message.bot, settings)
    except ArchiveError as e:
        log_error("archive_message()", user_id, e)
        reply_text = error_text(e)
    else:
        reply_text = text("add_post:success")

    await waiting_msg.delete()
    await message.reply(reply_text)


def get_router():
    router = Router()
    router.message.register(archive_message)
    return router
