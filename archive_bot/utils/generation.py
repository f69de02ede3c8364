"""
Генерация статических галерей альбомов и упаковка результата.

Для каждого выбранного альбома создается каталог
    {result}/{user_id}/{album_key}/index.html + css/ + img/ + gallery/
после чего весь {result}/{user_id} упаковывается в один zip-архив.
Каждый запрос генерирует выбранные альбомы заново.
"""

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import NamedTuple, Optional, Protocol

from jinja2 import Environment, FileSystemLoader, select_autoescape

from archive_bot.database.channel.model import Channel
from archive_bot.database.db import Database
from archive_bot.utils.errors import AlbumNotFoundError, ArchiveIOError, NothingGeneratedError
from archive_bot.utils.file_utils import copy_dir_all
from archive_bot.utils.packaging import clear_folder, generate_archive_name, zip_folder
from archive_bot.utils.settings import ArchiveSettings

logger = logging.getLogger(__name__)

CONTENT_TEMPLATE = "content.html"
STATIC_FOLDERS = ("css", "img")
GALLERY_FOLDER = "gallery"
INDEX_FILE = "index.html"
MAX_ARCHIVE_NAME_ATTEMPTS = 100


class ChannelRenderer(Protocol):
    def render(self, channel: Channel) -> str: ...


class GenerationResult(NamedTuple):
    count: int
    archive_path: Path


class AlbumRenderer:
    """Рендер альбома через шаблон content.html из каталога шаблонов."""

    def __init__(self, templates_folder: Path, template_name: str = CONTENT_TEMPLATE):
        self.templates_folder = Path(templates_folder)
        self.template_name = template_name
        self._env = Environment(
            loader=FileSystemLoader(str(self.templates_folder)),
            autoescape=select_autoescape(["html"]),
        )

    def render(self, channel: Channel) -> str:
        template = self._env.get_template(self.template_name)
        return template.render(
            channel=channel,
            gallery_folder=GALLERY_FOLDER,
            generated_at=datetime.now(timezone.utc),
        )


def create_html_file(
    album_folder: Path,
    src_media_folder: Path,
    templates_folder: Path,
    data: str,
) -> Path:
    """
    Собирает каталог галереи: статика, медиа альбома и index.html.

    Возвращает:
        Path: Путь к index.html.
    """
    album_folder.mkdir(parents=True, exist_ok=True)

    # Копируем папки 'css' и 'img'
    for folder in STATIC_FOLDERS:
        copy_dir_all(templates_folder / folder, album_folder / folder)

    copy_dir_all(src_media_folder, album_folder / GALLERY_FOLDER)

    file_name = album_folder / INDEX_FILE
    file_name.write_text(data, encoding="utf-8")
    return file_name


def generate_single_album(
    renderer: ChannelRenderer,
    channel: Channel,
    user_id: int,
    settings: ArchiveSettings,
) -> Path:
    data = renderer.render(channel)
    album_folder = settings.user_result_folder(user_id) / channel.key
    src_media_folder = settings.album_folder(user_id, channel.key)
    return create_html_file(album_folder, src_media_folder, settings.templates_folder, data)


def generate_albums(
    user_id: int,
    settings: ArchiveSettings,
    album_key: Optional[str] = None,
    renderer: Optional[ChannelRenderer] = None,
) -> GenerationResult:
    """
    Генерирует один альбом или все альбомы пользователя и упаковывает их.

    Аргументы:
        user_id (int): ID пользователя.
        settings (ArchiveSettings): Пути.
        album_key (str, optional): Ключ альбома; None означает все альбомы.
        renderer (ChannelRenderer, optional): Рендер разметки (по умолчанию AlbumRenderer).

    Возвращает:
        GenerationResult: Число созданных альбомов и путь к zip-архиву.

    Исключения:
        NotFoundError: У пользователя нет данных.
        AlbumNotFoundError: Запрошенного альбома нет.
        NothingGeneratedError: Не создано ни одного альбома.
        ArchiveIOError: Ошибка очистки или упаковки результатов.
    """
    db = Database(settings)
    archive = db.load(user_id)

    if album_key is not None:
        channel = archive.get_channel_by_key(album_key)
        if channel is None:
            raise AlbumNotFoundError(album_key)
        selected = [channel]
    else:
        selected = list(archive.channels)

    renderer = renderer or AlbumRenderer(settings.templates_folder)

    # Галереи прошлых запросов не должны попасть в новый архив
    user_result_folder = settings.user_result_folder(user_id)
    try:
        clear_folder(user_result_folder)
    except OSError as e:
        logger.error(f"Ошибка очистки {user_result_folder}: {e}", exc_info=True)
        raise ArchiveIOError(f"Cannot clear {user_result_folder}") from e

    counter = 0
    for channel in selected:
        try:
            generate_single_album(renderer, channel, user_id, settings)
        except Exception as e:
            # Ошибка одного альбома не прерывает генерацию остальных
            logger.error(
                f"Ошибка генерации альбома \"{channel.key}\" для пользователя #{user_id}: {e}",
                exc_info=True,
            )
            continue
        logger.info(f"Альбом \"{channel.key}\" для пользователя #{user_id} сгенерирован")
        counter += 1

    if counter == 0:
        raise NothingGeneratedError(f"No albums have been generated for user #{user_id}")

    archive_path = pack_user_results(user_id, settings)
    return GenerationResult(count=counter, archive_path=archive_path)


def pack_user_results(user_id: int, settings: ArchiveSettings) -> Path:
    """
    Упаковывает {result}/{user_id} в новый архив в корне папки результатов.

    Существующий архив с тем же именем никогда не перезаписывается:
    берется следующее свободное имя (папка результатов общая для всех).

    Исключения:
        ArchiveIOError: Архив не удалось создать.
    """
    now = datetime.now(timezone.utc)
    for attempt in range(MAX_ARCHIVE_NAME_ATTEMPTS):
        result_file = settings.result_folder / generate_archive_name(now, attempt)
        try:
            return zip_folder(settings.user_result_folder(user_id), result_file)
        except FileExistsError:
            continue
        except OSError as e:
            logger.error(f"Ошибка упаковки альбомов пользователя #{user_id}: {e}", exc_info=True)
            raise ArchiveIOError(f"Cannot create {result_file}") from e

    raise ArchiveIOError(f"No free archive name in {settings.result_folder}")


def clear_user_results(user_id: int, archive_path: Path, settings: ArchiveSettings) -> None:
    """
    Удаляет галереи пользователя и отправленный ему архив.
    Результаты других пользователей не затрагиваются.

    Исключения:
        ArchiveIOError: Ошибка удаления.
    """
    try:
        clear_folder(settings.user_result_folder(user_id))
        Path(archive_path).unlink(missing_ok=True)
    except OSError as e:
        logger.error(f"Ошибка очистки результатов пользователя #{user_id}: {e}", exc_info=True)
        raise ArchiveIOError(f"Cannot clear results of user #{user_id}") from e
