"""
Объединение постов, разбитых Telegram на несколько сообщений.

Альбом из нескольких фото/видео пересылается боту как серия сообщений
с одинаковыми датами. Посты одного альбома группируются по паре
(date, forward_date), округленной вниз до минуты, и сворачиваются в один.
"""

import logging
from datetime import datetime
from typing import Dict, Iterable, List, NamedTuple, Tuple

from archive_bot.database.channel.model import Channel, Post
from archive_bot.database.db import Database
from archive_bot.utils.errors import NoAlbumsError
from archive_bot.utils.settings import ArchiveSettings

logger = logging.getLogger(__name__)


class ConsolidationReport(NamedTuple):
    albums: int
    posts_before: int
    posts_after: int

    @property
    def merged(self) -> int:
        return self.posts_before - self.posts_after


def round_down_to_minute(date: datetime) -> datetime:
    return date.replace(second=0, microsecond=0)


def merge_posts(posts: Iterable[Post]) -> Post:
    """
    Сворачивает группу в один пост.

    Медиа конкатенируются в порядке обхода, подписью становится последний
    непустой текст. ID и даты берутся у первого поста группы.
    """
    merged = None
    for post in posts:
        if merged is None:
            merged = post
            continue
        merged = merged.model_copy(
            update={
                "photos": merged.photos + post.photos,
                "videos": merged.videos + post.videos,
                "text": post.text if post.text else merged.text,
            }
        )

    if merged is None:
        raise ValueError("Cannot merge an empty group of posts")
    return merged


def consolidate_posts(posts: List[Post]) -> List[Post]:
    groups: Dict[Tuple[datetime, datetime], List[Post]] = {}
    for post in posts:
        group_key = (
            round_down_to_minute(post.date),
            round_down_to_minute(post.forward_date),
        )
        groups.setdefault(group_key, []).append(post)

    updated_posts = [merge_posts(group) for group in groups.values()]
    # Порядок результата задается только датой, а не порядком групп
    updated_posts.sort(key=lambda post: post.date)
    return updated_posts


def consolidate_channel(channel: Channel) -> int:
    """Объединяет посты альбома на месте. Возвращает число удаленных постов."""
    before = len(channel.posts)
    channel.posts = consolidate_posts(channel.posts)
    return before - len(channel.posts)


def consolidate_media(user_id: int, settings: ArchiveSettings) -> ConsolidationReport:
    """
    Объединяет разбитые посты во всех альбомах пользователя.

    Исключения:
        NotFoundError: У пользователя нет данных.
        NoAlbumsError: Нет ни одного альбома.
    """
    db = Database(settings)
    archive = db.load(user_id)

    if not archive.channels:
        raise NoAlbumsError(f"No albums found for user #{user_id}")

    posts_before = 0
    posts_after = 0
    for channel in archive.channels:
        posts_before += len(channel.posts)
        removed = consolidate_channel(channel)
        posts_after += len(channel.posts)
        if removed:
            logger.debug(f"Альбом \"{channel.key}\": объединено {removed} постов")

    db.save(user_id, archive)
    logger.info(
        f"Посты во всех альбомах пользователя #{user_id} объединены: "
        f"{posts_before} -> {posts_after}"
    )

    return ConsolidationReport(
        albums=len(archive.channels),
        posts_before=posts_before,
        posts_after=posts_after,
    )
