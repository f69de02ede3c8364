import json

import pytest

from archive_bot.database.archive.model import UserArchive
from archive_bot.database.channel.crud import ChannelCrud
from archive_bot.database.db import Database
from archive_bot.utils.errors import CorruptDataError, NotFoundError
from archive_bot.utils.settings import DEFAULT_ALBUM_KEY, DEFAULT_ALBUM_TITLE

from .conftest import USER_ID


def test_load_missing_user_raises_not_found(db: Database):
    with pytest.raises(NotFoundError):
        db.load(USER_ID)


def test_load_or_create_returns_empty_archive_and_creates_folder(db: Database, settings):
    archive = db.load_or_create(USER_ID)

    assert archive.channels == []
    assert settings.user_folder(USER_ID).is_dir()
    assert not db.exists(USER_ID)


def test_corrupt_document_raises_corrupt_data(db: Database, settings):
    data_file = settings.data_file(USER_ID)
    data_file.parent.mkdir(parents=True)
    data_file.write_text('{"channels": [{"id": "not-a-number"}]}', encoding="utf-8")

    with pytest.raises(CorruptDataError):
        db.load(USER_ID)


def test_save_and_load_keep_the_document(db: Database, settings, sample_archive: UserArchive):
    db.save(USER_ID, sample_archive)
    first = settings.data_file(USER_ID).read_text(encoding="utf-8")

    loaded = db.load(USER_ID)
    assert loaded == sample_archive

    db.save(USER_ID, loaded)
    assert settings.data_file(USER_ID).read_text(encoding="utf-8") == first


def test_saved_dates_use_utc_suffix(db: Database, settings, sample_archive: UserArchive):
    db.save(USER_ID, sample_archive)

    raw = json.loads(settings.data_file(USER_ID).read_text(encoding="utf-8"))
    post = raw["channels"][0]["posts"][0]
    assert post["date"] == "2024-05-01 12:00:05 UTC"
    assert post["forward_date"] == "2024-04-30 09:15:00 UTC"
    assert post["photos"] == ["AgAD1.jpg"]


def test_save_leaves_no_temporary_files(db: Database, settings, sample_archive: UserArchive):
    db.save(USER_ID, sample_archive)
    db.save(USER_ID, sample_archive)

    assert [p.name for p in settings.user_folder(USER_ID).iterdir()] == ["data.json"]


def test_folder_sizes(db: Database, settings):
    assert db.user_folder_size(USER_ID) == 0

    album = settings.album_folder(USER_ID, "nature")
    (album / "nested").mkdir(parents=True)
    (album / "a.jpg").write_bytes(b"x" * 100)
    (album / "nested" / "b.jpg").write_bytes(b"x" * 50)

    assert db.album_folder_size(USER_ID, "nature") == 150
    assert db.user_folder_size(USER_ID) == 150


def test_new_channel_defaults():
    channel = ChannelCrud.new_channel(channel_id=0)

    assert channel.key == DEFAULT_ALBUM_KEY
    assert channel.title == DEFAULT_ALBUM_TITLE
    assert channel.description == ""
    assert channel.posts == []


def test_delete_channel_by_key(sample_archive: UserArchive):
    removed = ChannelCrud.delete_channel(sample_archive, "nature")

    assert removed is not None and removed.id == -1001
    assert [c.key for c in sample_archive.channels] == [DEFAULT_ALBUM_KEY]
    assert ChannelCrud.delete_channel(sample_archive, "nature") is None
