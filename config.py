import os
from pathlib import Path

from dotenv import load_dotenv

from archive_bot.utils.settings import ArchiveSettings, megabytes_to_bytes

load_dotenv()


def _bool_env(name: str, default: bool = False) -> bool:
    return os.getenv(name, str(default)).lower() in ("1", "true", "yes")


class Config:
    VERSION = "1.2.0"

    # Bot
    BOT_TOKEN = os.getenv('BOT_TOKEN')
    WEBHOOK_DOMAIN = os.getenv("WEBHOOK_DOMAIN")
    LOG_PATH = os.getenv("LOG_PATH")

    # Storage
    DATA_FOLDER = os.getenv("DATA_FOLDER", "data")
    RESULT_FOLDER = os.getenv("RESULT_FOLDER", "result")
    TEMPLATES_FOLDER = os.getenv(
        "TEMPLATES_FOLDER",
        str(Path(__file__).parent.resolve() / "archive_bot" / "templates"),
    )

    # Limits (MB)
    MAX_USER_FOLDER_SIZE = int(os.getenv("MAX_USER_FOLDER_SIZE", 100))
    # Bot API не отдает ботам фото больше 5 MB и видео больше 20 MB
    MAX_PHOTO_FILE_SIZE = int(os.getenv("MAX_PHOTO_FILE_SIZE", 5))
    MAX_VIDEO_FILE_SIZE = int(os.getenv("MAX_VIDEO_FILE_SIZE", 20))
    MAX_SEND_ARCHIVE_SIZE = int(os.getenv("MAX_SEND_ARCHIVE_SIZE", 20))

    # Access
    RESTRICT_ACCESS = _bool_env("RESTRICT_ACCESS")
    ALLOWED_USERS = [int(i) for i in os.getenv("ALLOWED_USERS", "").split(",") if i.strip()]

    @classmethod
    def archive_settings(cls) -> ArchiveSettings:
        """Собирает неизменяемые настройки ядра архива из переменных окружения."""
        return ArchiveSettings(
            data_folder=Path(cls.DATA_FOLDER),
            result_folder=Path(cls.RESULT_FOLDER),
            templates_folder=Path(cls.TEMPLATES_FOLDER),
            max_photo_size=megabytes_to_bytes(cls.MAX_PHOTO_FILE_SIZE),
            max_video_size=megabytes_to_bytes(cls.MAX_VIDEO_FILE_SIZE),
            max_user_folder_size=megabytes_to_bytes(cls.MAX_USER_FOLDER_SIZE),
        )


config = Config()
