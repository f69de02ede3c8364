"""
Прием пересланных постов в архив.

Порядок операции add_post:
1. Определить альбом по источнику пересылки ("(default)" без источника).
2. Загрузить документ (или создать пустой вместе с папкой пользователя).
3. Найти альбом по ID источника или создать новый (с ключом channel-{id},
   если username уже занят альбомом другого канала).
4. Отклонить дубликат по ID поста до любых скачиваний и проверок квоты.
5. Выбрать медиа: самое большое фото или одно видео video/mp4.
6. Проверить лимиты, скачать файл в папку альбома.
7. Добавить пост и перезаписать документ целиком.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Optional, Protocol, Tuple

from aiogram import types
from aiogram.types import MessageOriginChannel, MessageOriginChat
from pydantic import BaseModel, ConfigDict

from archive_bot.database.channel.model import Post
from archive_bot.database.db import Database
from archive_bot.database.types import MediaKind
from archive_bot.utils.errors import DuplicatePostError, MediaDownloadError
from archive_bot.utils.file_utils import run_blocking
from archive_bot.utils.quota import check_user_quota
from archive_bot.utils.settings import DEFAULT_ALBUM_KEY, ArchiveSettings

logger = logging.getLogger(__name__)

SUPPORTED_VIDEO_MIME_TYPE = "video/mp4"

MEDIA_EXTENSIONS = {
    MediaKind.PHOTO: "jpg",
    MediaKind.VIDEO: "mp4",
}


class MediaTransport(Protocol):
    """Часть aiogram.Bot, нужная для скачивания файлов."""

    async def get_file(self, file_id: str) -> Any: ...

    async def download_file(self, file_path: str, destination: Any) -> Any: ...


class OriginChat(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    title: Optional[str] = None
    description: Optional[str] = None
    username: Optional[str] = None

    @property
    def id_key(self) -> str:
        return f"channel-{abs(self.id)}"

    @property
    def album_key(self) -> str:
        # У приватных каналов нет username, ключ строится из ID
        return self.username or self.id_key


class IncomingPhoto(BaseModel):
    model_config = ConfigDict(frozen=True)

    file_id: str
    width: int
    height: int
    file_size: int = 0


class IncomingVideo(BaseModel):
    model_config = ConfigDict(frozen=True)

    file_id: str
    mime_type: Optional[str] = None
    file_size: int = 0


class SelectedMedia(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: MediaKind
    file_id: str
    file_size: int

    @property
    def file_name(self) -> str:
        return f"{self.file_id}.{MEDIA_EXTENSIONS[self.kind]}"


class IncomingPost(BaseModel):
    """
    Входящее сообщение в виде, независимом от транспорта.

    Атрибуты:
        user_id (int): ID пользователя (чата с ботом).
        message_id (int): ID сообщения в чате с ботом.
        origin (OriginChat, optional): Канал/чат, из которого переслан пост.
        origin_message_id (int, optional): ID поста в исходном канале.
        date (datetime): Дата сообщения.
        forward_date (datetime, optional): Дата исходного поста.
        text (str): Текст или подпись.
        photos (Tuple[IncomingPhoto, ...]): Размеры одного фото.
        video (IncomingVideo, optional): Видео.
    """

    model_config = ConfigDict(frozen=True)

    user_id: int
    message_id: int
    origin: Optional[OriginChat] = None
    origin_message_id: Optional[int] = None
    date: datetime
    forward_date: Optional[datetime] = None
    text: str = ""
    photos: Tuple[IncomingPhoto, ...] = ()
    video: Optional[IncomingVideo] = None

    @property
    def post_id(self) -> int:
        if self.origin_message_id is not None:
            return self.origin_message_id
        return self.message_id

    @property
    def album_id(self) -> int:
        return self.origin.id if self.origin else 0

    @property
    def album_key(self) -> str:
        return self.origin.album_key if self.origin else DEFAULT_ALBUM_KEY

    @classmethod
    def from_message(cls, message: types.Message) -> "IncomingPost":
        """
        Собирает IncomingPost из сообщения aiogram.

        Источником альбома считается только канал или чат (forward_origin
        типа channel/chat). Пересылки от пользователей попадают в альбом
        по умолчанию.
        """
        origin = None
        origin_message_id = None
        forward_date = None

        forward_origin = message.forward_origin
        if forward_origin is not None:
            forward_date = forward_origin.date
            chat = None
            if isinstance(forward_origin, MessageOriginChannel):
                chat = forward_origin.chat
                origin_message_id = forward_origin.message_id
            elif isinstance(forward_origin, MessageOriginChat):
                chat = forward_origin.sender_chat

            if chat is not None:
                origin = OriginChat(
                    id=chat.id,
                    title=chat.title,
                    description=getattr(chat, "description", None),
                    username=chat.username,
                )

        photos = tuple(
            IncomingPhoto(
                file_id=photo.file_id,
                width=photo.width,
                height=photo.height,
                file_size=photo.file_size or 0,
            )
            for photo in message.photo or []
        )

        video = None
        if message.video:
            video = IncomingVideo(
                file_id=message.video.file_id,
                mime_type=message.video.mime_type,
                file_size=message.video.file_size or 0,
            )

        return cls(
            user_id=message.chat.id,
            message_id=message.message_id,
            origin=origin,
            origin_message_id=origin_message_id,
            date=message.date,
            forward_date=forward_date,
            text=message.text or message.caption or "",
            photos=photos,
            video=video,
        )


def select_media(incoming: IncomingPost) -> Optional[SelectedMedia]:
    """
    Выбирает единственный сохраняемый файл.

    Возвращает:
        Optional[SelectedMedia]: Фото с максимальным width*height (при равенстве
        первое), либо видео video/mp4, либо None для текстового поста.
    """
    if incoming.photos:
        largest_photo = max(incoming.photos, key=lambda photo: photo.width * photo.height)
        return SelectedMedia(
            kind=MediaKind.PHOTO,
            file_id=largest_photo.file_id,
            file_size=largest_photo.file_size,
        )

    if incoming.video is not None:
        if incoming.video.mime_type == SUPPORTED_VIDEO_MIME_TYPE:
            return SelectedMedia(
                kind=MediaKind.VIDEO,
                file_id=incoming.video.file_id,
                file_size=incoming.video.file_size,
            )
        logger.info(
            f"Видео {incoming.video.file_id} типа {incoming.video.mime_type} не поддерживается, "
            f"пост сохраняется без медиа"
        )

    return None


async def download_media_file(
    bot: MediaTransport,
    album_path: Path,
    media: SelectedMedia,
) -> str:
    """
    Скачивает файл в папку альбома.

    Возвращает:
        str: Имя сохраненного файла ({file_id}.{ext}).

    Исключения:
        MediaDownloadError: Любая ошибка Telegram API или файловой системы.
            Частично записанный файл может остаться; пост при этом не записывается.
    """
    file_name = media.file_name
    try:
        file = await bot.get_file(media.file_id)
        album_path.mkdir(parents=True, exist_ok=True)
        await bot.download_file(file.file_path, destination=album_path / file_name)
    except Exception as e:
        logger.error(f"Ошибка скачивания файла {media.file_id}: {e}", exc_info=True)
        raise MediaDownloadError(f"Error downloading media file {media.file_id}") from e

    return file_name


async def add_post(
    incoming: IncomingPost,
    bot: MediaTransport,
    settings: ArchiveSettings,
) -> Post:
    """
    Добавляет входящий пост в архив пользователя.

    Аргументы:
        incoming (IncomingPost): Входящее сообщение.
        bot (MediaTransport): Транспорт для скачивания медиа.
        settings (ArchiveSettings): Пути и лимиты.

    Возвращает:
        Post: Сохраненный пост.

    Исключения:
        DuplicatePostError, MediaTooLargeError, QuotaExceededError: Данные не изменены.
        MediaDownloadError, ArchiveIOError, CorruptDataError: Сбой приема.
    """
    db = Database(settings)
    user_id = incoming.user_id
    album_key = incoming.album_key
    post_id = incoming.post_id

    archive = await run_blocking(db.load_or_create, user_id)

    channel = db.channel.get_channel(archive, incoming.album_id)
    if channel is None:
        origin = incoming.origin
        if origin is not None and archive.get_channel_by_key(album_key) is not None:
            # username перешел к другому каналу: ключ занят старым альбомом
            logger.info(
                f"Ключ \"{album_key}\" уже занят у пользователя #{user_id}, "
                f"альбом канала {origin.id} получает ключ \"{origin.id_key}\""
            )
            album_key = origin.id_key
        channel = db.channel.new_channel(
            channel_id=incoming.album_id,
            username=album_key,
            title=origin.title if origin else None,
            description=origin.description if origin else None,
        )
    # Папка существующего альбома определяется сохраненным ключом
    album_key = channel.key

    if channel.has_post(post_id):
        logger.warning(
            f"Пост #{post_id} уже есть в альбоме \"{album_key}\" пользователя #{user_id}"
        )
        raise DuplicatePostError(post_id, album_key)

    photos: list[str] = []
    videos: list[str] = []

    media = select_media(incoming)
    if media is not None:
        await run_blocking(
            check_user_quota,
            user_id,
            media.kind,
            media.file_id,
            media.file_size,
            settings,
        )

        file_name = await download_media_file(
            bot, settings.album_folder(user_id, album_key), media
        )
        if media.kind == MediaKind.PHOTO:
            photos.append(file_name)
        else:
            videos.append(file_name)

    post = Post(
        id=post_id,
        date=incoming.date,
        forward_date=incoming.forward_date or incoming.date,
        text=incoming.text,
        photos=tuple(photos),
        videos=tuple(videos),
    )

    db.channel.add_post(archive, channel, post)
    await run_blocking(db.save, user_id, archive)

    logger.info(
        f"Пост #{post_id} добавлен в альбом \"{album_key}\" пользователя #{user_id}"
    )
    return post
