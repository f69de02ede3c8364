"""
Inline-клавиатуры управления альбомами.
"""
from typing import List

from aiogram.utils.keyboard import InlineKeyboardBuilder

from archive_bot.utils.albums import AlbumInfo
from archive_bot.utils.file_utils import truncate_string
from archive_bot.utils.lang.language import text

BUTTON_TITLE_LENGTH = 24


class InlineAlbums(InlineKeyboardBuilder):
    """Кнопки генерации и удаления альбомов"""

    @classmethod
    def albums(cls, albums: List[AlbumInfo]):
        kb = cls()

        for album in albums:
            title = truncate_string(album.title or album.key, BUTTON_TITLE_LENGTH)
            kb.button(
                text=text('albums:generate:button').format(title=title),
                callback_data=f'GenerateAlbum|{album.key}'
            )
            kb.button(
                text=text('albums:delete:button').format(title=title),
                callback_data=f'DeleteAlbum|{album.key}'
            )

        # Две кнопки на альбом в ряд
        kb.adjust(2)
        return kb.as_markup()

    @classmethod
    def delete_all_confirm(cls):
        kb = cls()

        kb.button(
            text=text('delete_all:yes:button'),
            callback_data='DeleteAll|yes'
        )
        kb.button(
            text=text('delete_all:no:button'),
            callback_data='DeleteAll|no'
        )

        kb.adjust(2)
        return kb.as_markup()
