"""
Просмотр и удаление альбомов пользователя.
"""

import logging
import shutil
from typing import List, NamedTuple

from archive_bot.database.db import Database
from archive_bot.utils.errors import AlbumNotFoundError, ArchiveIOError, NoAlbumsError, NotFoundError
from archive_bot.utils.file_utils import convert_to_mb
from archive_bot.utils.settings import ArchiveSettings

logger = logging.getLogger(__name__)


class AlbumInfo(NamedTuple):
    key: str
    title: str
    post_count: int
    folder_size_in_mb: float


def list_albums(user_id: int, settings: ArchiveSettings) -> List[AlbumInfo]:
    """
    Возвращает описания всех альбомов пользователя.

    Исключения:
        NotFoundError: У пользователя нет данных.
        NoAlbumsError: Нет ни одного альбома.
    """
    db = Database(settings)
    archive = db.load(user_id)

    albums = [
        AlbumInfo(
            key=channel.key,
            title=channel.title,
            post_count=channel.post_count,
            folder_size_in_mb=convert_to_mb(db.album_folder_size(user_id, channel.key)),
        )
        for channel in archive.channels
    ]

    if not albums:
        raise NoAlbumsError(f"No albums found for user #{user_id}")

    return albums


def user_usage(user_id: int, settings: ArchiveSettings) -> int:
    """Занятое место пользователя в байтах."""
    return Database(settings).user_folder_size(user_id)


def delete_album(user_id: int, album_key: str, settings: ArchiveSettings) -> None:
    """
    Удаляет альбом из документа и его папку с медиа.

    Исключения:
        NotFoundError: У пользователя нет данных.
        AlbumNotFoundError: Альбома с таким ключом нет (в т.ч. пустой ключ).
        ArchiveIOError: Не удалось удалить папку альбома.
    """
    if not album_key:
        raise AlbumNotFoundError(album_key)

    db = Database(settings)
    archive = db.load(user_id)

    if db.channel.delete_channel(archive, album_key) is None:
        logger.warning(f"Альбом \"{album_key}\" не найден у пользователя #{user_id}")
        raise AlbumNotFoundError(album_key)

    db.save(user_id, archive)
    logger.info(f"Альбом \"{album_key}\" пользователя #{user_id} удален из файла данных")

    album_folder = settings.album_folder(user_id, album_key)
    # У альбома только с текстом папки нет
    if not album_folder.exists():
        return

    try:
        shutil.rmtree(album_folder)
    except OSError as e:
        logger.error(
            f"Ошибка удаления папки альбома \"{album_key}\" пользователя #{user_id}: {e}",
            exc_info=True,
        )
        raise ArchiveIOError(f"Error deleting album folder {album_folder}") from e

    logger.info(f"Папка альбома \"{album_key}\" пользователя #{user_id} удалена")


def delete_user_folders(user_id: int, settings: ArchiveSettings) -> None:
    """
    Удаляет все данные пользователя.

    Исключения:
        NotFoundError: Папки пользователя нет.
        ArchiveIOError: Ошибка удаления.
    """
    user_folder = settings.user_folder(user_id)

    if not user_folder.exists():
        logger.warning(f"Данные пользователя #{user_id} не найдены")
        raise NotFoundError(f"No data found for user #{user_id}")

    try:
        shutil.rmtree(user_folder)
    except OSError as e:
        logger.error(f"Ошибка удаления данных пользователя #{user_id}: {e}", exc_info=True)
        raise ArchiveIOError(f"Error deleting data folder {user_folder}") from e

    logger.info(f"Все данные пользователя #{user_id} удалены")
