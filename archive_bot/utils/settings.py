"""
Настройки ядра архива.

Ядро не читает глобальную конфигурацию: каждая операция получает
экземпляр ArchiveSettings явным параметром.
"""

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

BYTES_IN_MB = 1024 * 1024

DATA_FILE_NAME = "data.json"
DEFAULT_ALBUM_KEY = "(default)"
DEFAULT_ALBUM_TITLE = "Default album"


def megabytes_to_bytes(megabytes: int | float) -> int:
    return int(megabytes * BYTES_IN_MB)


class ArchiveSettings(BaseModel):
    """
    Пути хранилища и лимиты размеров.

    Атрибуты:
        data_folder (Path): Корень пользовательских данных ({data}/{user_id}/...).
        result_folder (Path): Корень сгенерированных альбомов и архивов.
        templates_folder (Path): Каталог с content.html и статикой (css/, img/).
        max_photo_size (int): Лимит одного фото в байтах.
        max_video_size (int): Лимит одного видео в байтах.
        max_user_folder_size (int): Лимит папки пользователя в байтах.
    """

    model_config = ConfigDict(frozen=True)

    data_folder: Path
    result_folder: Path
    templates_folder: Path
    max_photo_size: int = Field(default=5 * BYTES_IN_MB, ge=0)
    max_video_size: int = Field(default=20 * BYTES_IN_MB, ge=0)
    max_user_folder_size: int = Field(default=100 * BYTES_IN_MB, ge=0)

    def user_folder(self, user_id: int) -> Path:
        return self.data_folder / str(user_id)

    def data_file(self, user_id: int) -> Path:
        return self.user_folder(user_id) / DATA_FILE_NAME

    def album_folder(self, user_id: int, album_key: str) -> Path:
        return self.user_folder(user_id) / album_key

    def user_result_folder(self, user_id: int) -> Path:
        return self.result_folder / str(user_id)
