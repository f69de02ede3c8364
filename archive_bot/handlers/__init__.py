"""
Настройка роутеров и диспетчера бота.
"""

from typing import Iterable

from aiogram import Dispatcher
from aiogram.fsm.storage.memory import MemoryStorage

from archive_bot.utils.middlewares import (
    AccessMiddleware,
    ErrorMiddleware,
    SetSettings,
    UserLockMiddleware,
)
from archive_bot.utils.settings import ArchiveSettings
from .user import get_router as user_router


def set_routers(
    settings: ArchiveSettings,
    restrict_access: bool = False,
    allowed_users: Iterable[int] = (),
) -> Dispatcher:
    """
    Создает и настраивает диспетчер (Dispatcher).

    Регистрирует middleware (доступ, очередь пользователя, настройки, ошибки)
    и подключает роутеры.

    Аргументы:
        settings (ArchiveSettings): Настройки ядра архива.
        restrict_access (bool): Включить список разрешенных пользователей.
        allowed_users (Iterable[int]): Разрешенные ID пользователей.

    Returns:
        Dispatcher: Настроенный диспетчер.
    """
    dp = Dispatcher(storage=MemoryStorage())
    user_lock = UserLockMiddleware()

    for observer in (dp.message, dp.callback_query):
        observer.outer_middleware(ErrorMiddleware())
        observer.outer_middleware(AccessMiddleware(restrict_access, allowed_users))
        observer.outer_middleware(user_lock)
        observer.middleware(SetSettings(settings))

    dp.include_routers(user_router())
    return dp
