"""
Вспомогательные функции слоя представления: тексты ответов по исходам операций.
"""

import html
import logging
from typing import List

from archive_bot.utils.albums import AlbumInfo
from archive_bot.utils.errors import (
    AlbumNotFoundError,
    ArchiveError,
    MediaTooLargeError,
    QuotaExceededError,
)
from archive_bot.utils.file_utils import convert_to_mb, truncate_string
from archive_bot.utils.lang.language import text

logger = logging.getLogger(__name__)

MAX_TITLE_LENGTH = 40


def error_text(error: Exception) -> str:
    """
    Текст ответа пользователю для исхода операции.

    Ошибки для оператора (и любые неизвестные исключения) превращаются
    в общую фразу; подробности должны быть залогированы вызывающим кодом.
    """
    if not isinstance(error, ArchiveError) or not error.user_facing:
        return text("error:operator")

    template = text(error.lang_key)
    if isinstance(error, MediaTooLargeError):
        return template.format(kind=error.kind.capitalize(), limit=round(convert_to_mb(error.limit)))
    if isinstance(error, QuotaExceededError):
        return template.format(limit=round(convert_to_mb(error.limit)))
    if isinstance(error, AlbumNotFoundError):
        return template.format(album_key=html.escape(error.album_key))
    return template


def albums_text(albums: List[AlbumInfo], used_bytes: int, limit_bytes: int) -> str:
    rows = [
        text("albums:row").format(
            index=index,
            key=html.escape(album.key),
            title=html.escape(truncate_string(album.title, MAX_TITLE_LENGTH)),
            posts=album.post_count,
            size=album.folder_size_in_mb,
        )
        for index, album in enumerate(albums, start=1)
    ]
    usage = text("albums:usage").format(
        used=convert_to_mb(used_bytes),
        limit=round(convert_to_mb(limit_bytes)),
    )
    return "\n".join([text("albums:header"), "", *rows, "", usage])


def log_error(stage: str, user_id: int, error: Exception) -> None:
    """Ожидаемые исходы пишутся как warning, сбои для оператора с трейсбэком."""
    if isinstance(error, ArchiveError) and error.user_facing:
        logger.warning(f"{stage}: пользователь #{user_id}: {error}")
    else:
        logger.error(f"{stage}: пользователь #{user_id}: {error}", exc_info=error)
