"""Shared fixtures for the ArchiveGram test suite."""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from types import SimpleNamespace
from typing import Optional

import pytest

import archive_bot
from archive_bot.database.archive.model import UserArchive
from archive_bot.database.channel.model import Channel, Post
from archive_bot.database.db import Database
from archive_bot.utils.ingestion import IncomingPhoto, IncomingPost, IncomingVideo, OriginChat
from archive_bot.utils.settings import ArchiveSettings, megabytes_to_bytes

TEMPLATES_FOLDER = Path(archive_bot.__file__).parent / "templates"

USER_ID = 4242


class FakeTransport:
    """Stands in for aiogram.Bot: records calls and writes ``file_size`` bytes."""

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.sizes: dict[str, int] = {}
        self.get_file_calls: list[str] = []
        self.downloads: list[Path] = []

    async def get_file(self, file_id: str):
        self.get_file_calls.append(file_id)
        if self.fail:
            raise RuntimeError("Telegram is unreachable")
        return SimpleNamespace(file_id=file_id, file_path=f"photos/{file_id}")

    async def download_file(self, file_path: str, destination):
        destination = Path(destination)
        file_id = file_path.rsplit("/", 1)[-1]
        destination.write_bytes(b"\0" * self.sizes.get(file_id, 16))
        self.downloads.append(destination)


@pytest.fixture()
def settings(tmp_path: Path) -> ArchiveSettings:
    return ArchiveSettings(
        data_folder=tmp_path / "data",
        result_folder=tmp_path / "result",
        templates_folder=TEMPLATES_FOLDER,
        max_photo_size=megabytes_to_bytes(5),
        max_video_size=megabytes_to_bytes(20),
        max_user_folder_size=megabytes_to_bytes(10),
    )


@pytest.fixture()
def db(settings: ArchiveSettings) -> Database:
    return Database(settings)


@pytest.fixture()
def transport() -> FakeTransport:
    return FakeTransport()


def utc(*args) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


def make_incoming(
    message_id: int = 1,
    *,
    origin: Optional[OriginChat] = None,
    origin_message_id: Optional[int] = None,
    date: Optional[datetime] = None,
    text: str = "",
    photos: tuple = (),
    video: Optional[IncomingVideo] = None,
    user_id: int = USER_ID,
) -> IncomingPost:
    date = date or utc(2024, 5, 1, 12, 0, 5)
    return IncomingPost(
        user_id=user_id,
        message_id=message_id,
        origin=origin,
        origin_message_id=origin_message_id,
        date=date,
        forward_date=date if origin else None,
        text=text,
        photos=photos,
        video=video,
    )


def photo(file_id: str, width: int = 800, height: int = 600, size: int = 1024) -> IncomingPhoto:
    return IncomingPhoto(file_id=file_id, width=width, height=height, file_size=size)


@pytest.fixture()
def channel_origin() -> OriginChat:
    return OriginChat(id=-1001234567890, title="Nature", description="Pictures of nature", username="nature")


@pytest.fixture()
def sample_archive() -> UserArchive:
    """Two albums, the second one text-only."""
    return UserArchive(
        channels=[
            Channel(
                id=-1001,
                title="Nature",
                description="Pictures of nature",
                username="nature",
                posts=[
                    Post(
                        id=10,
                        date=utc(2024, 5, 1, 12, 0, 5),
                        forward_date=utc(2024, 4, 30, 9, 15, 0),
                        text="Forest",
                        photos=("AgAD1.jpg",),
                    ),
                    Post(
                        id=11,
                        date=utc(2024, 5, 1, 12, 3, 0),
                        forward_date=utc(2024, 4, 30, 9, 20, 0),
                        videos=("BAAD2.mp4",),
                    ),
                ],
            ),
            Channel(
                id=0,
                title="Default album",
                username="(default)",
                posts=[
                    Post(
                        id=3,
                        date=utc(2024, 5, 2, 8, 0, 0),
                        forward_date=utc(2024, 5, 2, 8, 0, 0),
                        text="A note to self",
                    ),
                ],
            ),
        ]
    )


@pytest.fixture()
def stored_archive(db: Database, settings: ArchiveSettings, sample_archive: UserArchive) -> UserArchive:
    """``sample_archive`` saved for USER_ID together with its media files."""
    db.save(USER_ID, sample_archive)
    album = settings.album_folder(USER_ID, "nature")
    album.mkdir(parents=True)
    (album / "AgAD1.jpg").write_bytes(b"\xff\xd8photo-bytes")
    (album / "BAAD2.mp4").write_bytes(b"video-bytes" * 10)
    return sample_archive
