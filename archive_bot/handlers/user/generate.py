"""
Генерация альбомов и отправка архива пользователю.

Архив больше MAX_SEND_ARCHIVE_SIZE не отправляется и остается в папке
результатов для владельцев бота. После успешной отправки удаляются
галереи пользователя и отправленный архив; результаты других пользователей
не затрагиваются.
"""
import html
import logging
from typing import Optional

from aiogram import types, Router, F
from aiogram.filters import Command, CommandObject
from aiogram.types import FSInputFile

from config import Config
from archive_bot.utils.error_handler import safe_handler
from archive_bot.utils.errors import ArchiveError
from archive_bot.utils.file_utils import run_blocking
from archive_bot.utils.functions import error_text, log_error
from archive_bot.utils.generation import GenerationResult, clear_user_results, generate_albums
from archive_bot.utils.lang.language import text
from archive_bot.utils.settings import ArchiveSettings, megabytes_to_bytes

logger = logging.getLogger(__name__)


async def send_archive(
    message: types.Message,
    user_id: int,
    result: GenerationResult,
    success_text: str,
    settings: ArchiveSettings,
):
    """
    Отправляет zip-архив ответом на сообщение об успехе.

    Аргументы:
        message (types.Message): Сообщение, в чат которого идет ответ.
        user_id (int): ID пользователя (для логов).
        result (GenerationResult): Результат генерации.
        success_text (str): Текст об успешной генерации.
        settings (ArchiveSettings): Пути (папка результатов).
    """
    success_msg = await message.answer(success_text)

    archive_size = result.archive_path.stat().st_size
    if archive_size > megabytes_to_bytes(Config.MAX_SEND_ARCHIVE_SIZE):
        logger.warning(
            f"Архив {result.archive_path.name} пользователя #{user_id} больше "
            f"{Config.MAX_SEND_ARCHIVE_SIZE} MB и не отправлен"
        )
        await success_msg.reply(
            text("generate:too_big").format(limit=Config.MAX_SEND_ARCHIVE_SIZE)
        )
        return

    waiting_msg = await message.answer(text("waiting"))
    await success_msg.reply_document(FSInputFile(result.archive_path))
    await waiting_msg.delete()
    logger.info(f"Архив {result.archive_path.name} отправлен пользователю #{user_id}")

    try:
        await run_blocking(clear_user_results, user_id, result.archive_path, settings)
    except ArchiveError as e:
        log_error("send_archive()", user_id, e)


async def _generate(
    message: types.Message,
    user_id: int,
    settings: ArchiveSettings,
    album_key: Optional[str] = None,
):
    try:
        result = await run_blocking(generate_albums, user_id, settings, album_key)
    except ArchiveError as e:
        log_error("generate()", user_id, e)
        await message.answer(error_text(e), parse_mode="HTML")
        return

    if album_key is None:
        success_text = text("generate:all:success").format(count=result.count)
    else:
        success_text = text("generate:single:success").format(key=html.escape(album_key))

    await send_archive(message, user_id, result, success_text, settings)


@safe_handler("Generate All")
async def generate_all(message: types.Message, settings: ArchiveSettings):
    await _generate(message, message.chat.id, settings)


@safe_handler("Generate Album Command")
async def generate_command(message: types.Message, command: CommandObject, settings: ArchiveSettings):
    album_key = (command.args or "").strip()
    if not album_key:
        await message.answer(text("generate:key_required"), parse_mode="HTML")
        return

    await _generate(message, message.chat.id, settings, album_key)


@safe_handler("Generate Album Button")
async def generate_button(call: types.CallbackQuery, settings: ArchiveSettings):
    album_key = call.data.split("|", 1)[1]
    await call.answer()
    await _generate(call.message, call.from_user.id, settings, album_key)


def get_router():
    router = Router()
    router.message.register(generate_all, Command("generateall"))
    router.message.register(generate_command, Command("generate"))
    router.callback_query.register(generate_button, F.data.split("|")[0] == "GenerateAlbum")
    return router
