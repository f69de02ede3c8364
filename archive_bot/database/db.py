"""
Модуль хранилища архива.

Владеет раскладкой на диске:
    {data}/{user_id}/data.json          документ UserArchive
    {data}/{user_id}/{album_key}/*      медиафайлы альбома

Каждая мутация выполняется как чтение -> изменение в памяти -> полная
перезапись документа. Запись атомарна: документ пишется во временный
файл рядом и подменяется через os.replace.
"""

import json
import logging
import os
import tempfile

from pydantic import ValidationError

from archive_bot.database.archive.model import UserArchive
from archive_bot.database.channel.crud import ChannelCrud
from archive_bot.utils.errors import ArchiveIOError, CorruptDataError, NotFoundError
from archive_bot.utils.file_utils import get_folder_size
from archive_bot.utils.settings import ArchiveSettings

logger = logging.getLogger(__name__)


class Database:
    """
    Хранилище JSON-документов пользователей.

    Пример: db.load(user_id), db.channel.get_channel(archive, channel_id)
    Предполагается один писатель на пользователя (см. сериализацию в диспетчере).
    """

    def __init__(self, settings: ArchiveSettings):
        self.settings = settings
        self.channel = ChannelCrud()

    def exists(self, user_id: int) -> bool:
        return self.settings.data_file(user_id).is_file()

    def load(self, user_id: int) -> UserArchive:
        """
        Читает документ пользователя.

        Аргументы:
            user_id (int): ID пользователя.

        Возвращает:
            UserArchive: Документ с каналами и постами.

        Исключения:
            NotFoundError: Файл data.json отсутствует.
            CorruptDataError: Файл не соответствует схеме.
            ArchiveIOError: Ошибка чтения.
        """
        file_path = self.settings.data_file(user_id)
        if not file_path.is_file():
            raise NotFoundError(f"No data found for user #{user_id}")

        try:
            raw = file_path.read_text(encoding="utf-8")
        except OSError as e:
            logger.error(f"Ошибка чтения {file_path} для пользователя #{user_id}: {e}", exc_info=True)
            raise ArchiveIOError(f"Cannot read {file_path}") from e

        try:
            return UserArchive.model_validate_json(raw)
        except ValidationError as e:
            logger.error(f"Поврежден файл данных пользователя #{user_id}: {e}")
            raise CorruptDataError(f"Cannot parse {file_path}") from e

    def load_or_create(self, user_id: int) -> UserArchive:
        """Читает документ или создает пустой вместе с папкой пользователя."""
        if self.exists(user_id):
            return self.load(user_id)

        try:
            self.settings.user_folder(user_id).mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ArchiveIOError(f"Cannot create folder for user #{user_id}") from e

        logger.info(f"Создан новый архив для пользователя #{user_id}")
        return UserArchive()

    def save(self, user_id: int, archive: UserArchive) -> None:
        """
        Полностью перезаписывает документ пользователя.

        Исключения:
            ArchiveIOError: Ошибка записи (старый файл остается нетронутым).
        """
        file_path = self.settings.data_file(user_id)
        data = json.dumps(archive.model_dump(mode="json"), indent=2, ensure_ascii=False)

        tmp_name = None
        try:
            file_path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=file_path.parent,
                prefix=".data-",
                suffix=".tmp",
                delete=False,
            ) as tmp:
                tmp_name = tmp.name
                tmp.write(data)
            os.replace(tmp_name, file_path)
        except OSError as e:
            if tmp_name and os.path.exists(tmp_name):
                os.remove(tmp_name)
            logger.error(f"Ошибка записи {file_path} для пользователя #{user_id}: {e}", exc_info=True)
            raise ArchiveIOError(f"Cannot write {file_path}") from e

    def user_folder_size(self, user_id: int) -> int:
        return get_folder_size(self.settings.user_folder(user_id))

    def album_folder_size(self, user_id: int, album_key: str) -> int:
        return get_folder_size(self.settings.album_folder(user_id, album_key))
