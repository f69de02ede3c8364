"""
Операции над альбомами (Channel) внутри загруженного документа.
"""

import logging
from typing import Optional

from archive_bot.database.archive.model import UserArchive
from archive_bot.database.channel.model import Channel, Post
from archive_bot.utils.settings import DEFAULT_ALBUM_KEY, DEFAULT_ALBUM_TITLE

logger = logging.getLogger(__name__)


class ChannelCrud:
    """
    Класс для управления альбомами (Channel) в UserArchive.
    """

    @staticmethod
    def get_channel(archive: UserArchive, channel_id: int) -> Optional[Channel]:
        return archive.get_channel_by_id(channel_id)

    @staticmethod
    def new_channel(
        channel_id: int,
        username: Optional[str] = None,
        title: Optional[str] = None,
        description: Optional[str] = None,
    ) -> Channel:
        """
        Создает запись альбома, подставляя значения по умолчанию.

        Аргументы:
            channel_id (int): ID исходного чата (0 для альбома по умолчанию).
            username (str, optional): Ключ альбома.
            title (str, optional): Название.
            description (str, optional): Описание.

        Возвращает:
            Channel: Новый альбом без постов.
        """
        return Channel(
            id=channel_id,
            title=title or DEFAULT_ALBUM_TITLE,
            description=description or "",
            username=username or DEFAULT_ALBUM_KEY,
        )

    @staticmethod
    def add_post(archive: UserArchive, channel: Channel, post: Post) -> None:
        """Добавляет пост в альбом; новый альбом попадает в конец списка."""
        if archive.get_channel_by_id(channel.id) is None:
            archive.channels.append(channel)
        channel.posts.append(post)

    @staticmethod
    def delete_channel(archive: UserArchive, key: str) -> Optional[Channel]:
        """Удаляет альбом по ключу. Возвращает удаленный альбом или None."""
        for index, channel in enumerate(archive.channels):
            if channel.key == key:
                return archive.channels.pop(index)
        return None
