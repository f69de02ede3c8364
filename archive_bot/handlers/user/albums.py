"""
Просмотр и удаление альбомов.

Модуль реализует:
- /showalbums со списком альбомов, занятым местом и кнопками действий
- /delete <key> и кнопку удаления альбома
- /deleteall с подтверждением
"""
import html
import logging

from aiogram import types, Router, F
from aiogram.filters import Command, CommandObject

from archive_bot.keyboards import keyboards
from archive_bot.utils.albums import delete_album, delete_user_folders, list_albums, user_usage
from archive_bot.utils.error_handler import safe_handler
from archive_bot.utils.errors import ArchiveError
from archive_bot.utils.file_utils import run_blocking
from archive_bot.utils.functions import albums_text, error_text, log_error
from archive_bot.utils.lang.language import text
from archive_bot.utils.settings import ArchiveSettings

logger = logging.getLogger(__name__)


@safe_handler("Show Albums")
async def show_albums(message: types.Message, settings: ArchiveSettings):
    user_id = message.chat.id

    try:
        albums = await run_blocking(list_albums, user_id, settings)
    except ArchiveError as e:
        log_error("show_albums()", user_id, e)
        await message.answer(error_text(e))
        return

    used = await run_blocking(user_usage, user_id, settings)
    await message.answer(
        albums_text(albums, used, settings.max_user_folder_size),
        reply_markup=keyboards.albums(albums),
        parse_mode="HTML",
    )


async def _delete_album(message: types.Message, user_id: int, album_key: str, settings: ArchiveSettings):
    try:
        await run_blocking(delete_album, user_id, album_key, settings)
    except ArchiveError as e:
        log_error("delete_album()", user_id, e)
        await message.answer(error_text(e), parse_mode="HTML")
        return

    await message.answer(text("delete:success").format(key=html.escape(album_key)))


@safe_handler("Delete Album Command")
async def delete_command(message: types.Message, command: CommandObject, settings: ArchiveSettings):
    album_key = (command.args or "").strip()
    if not album_key:
        await message.answer(text("delete:key_required"), parse_mode="HTML")
        return

    await _delete_album(message, message.chat.id, album_key, settings)


@safe_handler("Delete Album Button")
async def delete_button(call: types.CallbackQuery, settings: ArchiveSettings):
    album_key = call.data.split("|", 1)[1]
    await call.answer()
    await _delete_album(call.message, call.from_user.id, album_key, settings)


@safe_handler("Delete All Command")
async def delete_all_command(message: types.Message):
    await message.answer(
        text("delete_all:confirm"),
        reply_markup=keyboards.delete_all_confirm(),
    )


@safe_handler("Delete All Confirm")
async def delete_all_confirm(call: types.CallbackQuery, settings: ArchiveSettings):
    user_id = call.from_user.id
    answer = call.data.split("|", 1)[1]

    await call.answer()
    await call.message.delete()

    if answer != "yes":
        await call.message.answer(text("delete_all:cancelled"))
        return

    try:
        await run_blocking(delete_user_folders, user_id, settings)
    except ArchiveError as e:
        log_error("delete_all()", user_id, e)
        await call.message.answer(error_text(e))
        return

    await call.message.answer(text("delete_all:success"))


def get_router():
    router = Router()
    router.message.register(show_albums, Command("showalbums"))
    router.message.register(delete_command, Command("delete"))
    router.message.register(delete_all_command, Command("deleteall"))
    router.callback_query.register(delete_button, F.data.split("|")[0] == "DeleteAlbum")
    router.callback_query.register(delete_all_confirm, F.data.split("|")[0] == "DeleteAll")
    return router
