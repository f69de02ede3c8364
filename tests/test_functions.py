import pytest

from archive_bot.keyboards import keyboards
from archive_bot.utils.albums import AlbumInfo
from archive_bot.utils.errors import (
    AlbumNotFoundError,
    ArchiveIOError,
    CorruptDataError,
    DuplicatePostError,
    MediaDownloadError,
    MediaTooLargeError,
    NoAlbumsError,
    NotFoundError,
    NothingGeneratedError,
    QuotaExceededError,
)
from archive_bot.utils.functions import albums_text, error_text
from archive_bot.utils.lang.language import text
from archive_bot.utils.settings import megabytes_to_bytes

MB = megabytes_to_bytes(1)


@pytest.mark.parametrize(
    "error, lang_key",
    [
        (NotFoundError(), "error:not_found"),
        (NoAlbumsError(), "error:no_albums"),
        (DuplicatePostError(1, "nature"), "error:duplicate_post"),
        (NothingGeneratedError(), "error:nothing_generated"),
    ],
)
def test_error_text_uses_the_error_class(error, lang_key):
    assert error_text(error) == text(lang_key)
    assert error_text(error) != lang_key


@pytest.mark.parametrize(
    "error",
    [CorruptDataError("bad json"), ArchiveIOError("disk"), MediaDownloadError("net"), RuntimeError("boom")],
)
def test_operator_errors_hide_details(error):
    assert error_text(error) == text("error:operator")


def test_media_too_large_text():
    message = error_text(MediaTooLargeError("photo", 6 * MB, 5 * MB))

    assert message.startswith("❗ Photo file size")
    assert "5 MB" in message


def test_quota_text():
    assert "100 MB" in error_text(QuotaExceededError(101 * MB, 100 * MB))


def test_album_not_found_text_escapes_the_key():
    message = error_text(AlbumNotFoundError("<b>"))

    assert "&lt;b&gt;" in message
    assert "<b>" not in message


def test_albums_text():
    albums = [
        AlbumInfo(key="nature", title="Nature", post_count=2, folder_size_in_mb=1.5),
        AlbumInfo(key="(default)", title="Default album", post_count=1, folder_size_in_mb=0),
    ]

    message = albums_text(albums, 3 * MB, 100 * MB)

    assert message.startswith(text("albums:header"))
    assert "1) <code>nature</code> Nature (2 posts, 1.5 MB)" in message
    assert "2) <code>(default)</code>" in message
    assert "3.0/100 MB" in message


def test_albums_keyboard():
    markup = keyboards.albums([AlbumInfo(key="nature", title="Nature", post_count=2, folder_size_in_mb=1.5)])

    (row,) = markup.inline_keyboard
    assert [button.callback_data for button in row] == ["GenerateAlbum|nature", "DeleteAlbum|nature"]


def test_delete_all_keyboard():
    markup = keyboards.delete_all_confirm()

    assert [b.callback_data for b in markup.inline_keyboard[0]] == ["DeleteAll|yes", "DeleteAll|no"]
