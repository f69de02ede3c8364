import pytest

from archive_bot.database.archive.model import UserArchive
from archive_bot.utils.albums import delete_album, delete_user_folders, list_albums, user_usage
from archive_bot.utils.errors import AlbumNotFoundError, NoAlbumsError, NotFoundError

from .conftest import USER_ID


def test_list_albums(settings, stored_archive):
    albums = list_albums(USER_ID, settings)

    assert [a.key for a in albums] == ["nature", "(default)"]
    assert [a.post_count for a in albums] == [2, 1]
    assert albums[0].title == "Nature"
    assert albums[1].folder_size_in_mb == 0


def test_list_albums_without_data(settings):
    with pytest.raises(NotFoundError):
        list_albums(USER_ID, settings)


def test_list_albums_empty(db, settings):
    db.save(USER_ID, UserArchive())

    with pytest.raises(NoAlbumsError):
        list_albums(USER_ID, settings)


def test_user_usage_counts_document_and_media(settings, stored_archive):
    folder = settings.user_folder(USER_ID)
    expected = sum(p.stat().st_size for p in folder.rglob("*") if p.is_file())

    assert user_usage(USER_ID, settings) == expected
    assert user_usage(USER_ID + 1, settings) == 0


def test_delete_album_removes_entry_and_folder(db, settings, stored_archive):
    delete_album(USER_ID, "nature", settings)

    assert [c.key for c in db.load(USER_ID).channels] == ["(default)"]
    assert not settings.album_folder(USER_ID, "nature").exists()


def test_delete_text_only_album(db, settings, stored_archive):
    delete_album(USER_ID, "(default)", settings)

    assert [c.key for c in db.load(USER_ID).channels] == ["nature"]


@pytest.mark.parametrize("album_key", ["", "missing"])
def test_delete_unknown_album(db, settings, stored_archive, album_key):
    before = settings.data_file(USER_ID).read_bytes()

    with pytest.raises(AlbumNotFoundError):
        delete_album(USER_ID, album_key, settings)

    assert settings.data_file(USER_ID).read_bytes() == before


def test_delete_user_folders(settings, stored_archive):
    delete_user_folders(USER_ID, settings)

    assert not settings.user_folder(USER_ID).exists()
    with pytest.raises(NotFoundError):
        delete_user_folders(USER_ID, settings)
