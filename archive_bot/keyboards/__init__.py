"""
Модуль клавиатур для Telegram-бота.
"""

from .albums import InlineAlbums


class Keyboards(
    InlineAlbums,
):
    """Главный класс клавиатур"""
    pass


# Создаем единственный экземпляр для использования в хендлерах
keyboards = Keyboards()


__all__ = [
    'InlineAlbums',
    'Keyboards',
    'keyboards',
]
