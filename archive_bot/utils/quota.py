"""
Контроль дисковой квоты пользователя.

Проверка выполняется до скачивания файла по размеру папки на текущий
момент. Это проверка "на момент запроса": параллельные загрузки одного
пользователя ее не учитывают.
"""

import logging

from archive_bot.database.types import MediaKind
from archive_bot.utils.errors import MediaTooLargeError, QuotaExceededError
from archive_bot.utils.file_utils import get_folder_size
from archive_bot.utils.settings import ArchiveSettings

logger = logging.getLogger(__name__)


def max_file_size(kind: MediaKind, settings: ArchiveSettings) -> int:
    if kind == MediaKind.PHOTO:
        return settings.max_photo_size
    return settings.max_video_size


def check_sizes(
    user_id: int,
    kind: MediaKind,
    file_id: str,
    file_size: int,
    user_folder_size: int,
    settings: ArchiveSettings,
) -> None:
    """
    Проверяет файл против лимита своего типа и общей квоты пользователя.

    Аргументы:
        user_id (int): ID пользователя (для логов).
        kind (MediaKind): Тип файла.
        file_id (str): ID файла в Telegram (для логов).
        file_size (int): Размер файла в байтах.
        user_folder_size (int): Текущий размер папки пользователя в байтах.
        settings (ArchiveSettings): Лимиты.

    Исключения:
        MediaTooLargeError: Файл больше лимита своего типа.
        QuotaExceededError: После сохранения папка превысит квоту.
    """
    limit = max_file_size(kind, settings)
    if file_size > limit:
        logger.warning(
            f"Файл {kind.value} \"{file_id}\" превышает лимит: {file_size} > {limit}"
        )
        raise MediaTooLargeError(kind.value, file_size, limit)

    new_user_folder_size = user_folder_size + file_size
    if new_user_folder_size > settings.max_user_folder_size:
        logger.warning(
            f"Папка пользователя #{user_id} превысит лимит: "
            f"{new_user_folder_size} > {settings.max_user_folder_size}"
        )
        raise QuotaExceededError(new_user_folder_size, settings.max_user_folder_size)


def check_user_quota(
    user_id: int,
    kind: MediaKind,
    file_id: str,
    file_size: int,
    settings: ArchiveSettings,
) -> None:
    """Измеряет папку пользователя и выполняет check_sizes."""
    user_folder_size = get_folder_size(settings.user_folder(user_id))
    check_sizes(user_id, kind, file_id, file_size, user_folder_size, settings)
