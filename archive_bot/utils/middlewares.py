"""
Middleware для обработки событий в aiogram.

Этот модуль содержит middleware для:
- Ограничения доступа по списку разрешенных пользователей
- Передачи настроек архива в хендлеры
- Последовательной обработки запросов одного пользователя
- Глобальной обработки ошибок
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Dict, Iterable, Optional

from aiogram import BaseMiddleware, types
from aiogram.types import TelegramObject

from archive_bot.utils.lang.language import text
from archive_bot.utils.settings import ArchiveSettings

logger = logging.getLogger(__name__)


def _event_user_id(event: TelegramObject) -> Optional[int]:
    if isinstance(event, types.Message):
        return event.chat.id
    if isinstance(event, types.CallbackQuery):
        return event.from_user.id
    return None


class AccessMiddleware(BaseMiddleware):
    """
    Middleware ограничения доступа.

    Если restrict_access включен, пользователи вне allowed_users получают
    отказ, и хендлер не вызывается.
    """

    def __init__(self, restrict_access: bool, allowed_users: Iterable[int]):
        self.restrict_access = restrict_access
        self.allowed_users = set(allowed_users)

    async def __call__(
        self,
        handler: Callable[[TelegramObject, Dict[str, Any]], Awaitable[Any]],
        event: TelegramObject,
        data: Dict[str, Any],
    ) -> Any:
        if not self.restrict_access:
            return await handler(event, data)

        user_id = _event_user_id(event)
        if user_id in self.allowed_users:
            return await handler(event, data)

        logger.warning(f"Пользователь #{user_id} не авторизован")
        if isinstance(event, types.Message):
            await event.answer(text("error:not_authorized"))
        elif isinstance(event, types.CallbackQuery):
            await event.answer(text("error:not_authorized"), show_alert=True)
        return None


class SetSettings(BaseMiddleware):
    """
    Middleware, добавляющая ArchiveSettings в data хендлера.
    """

    def __init__(self, settings: ArchiveSettings):
        self.settings = settings

    async def __call__(
        self,
        handler: Callable[[TelegramObject, Dict[str, Any]], Awaitable[Any]],
        event: TelegramObject,
        data: Dict[str, Any],
    ) -> Any:
        data["settings"] = self.settings
        return await handler(event, data)


class UserLockMiddleware(BaseMiddleware):
    """
    Сериализует обработку событий одного пользователя.

    Операции ядра читают и перезаписывают data.json целиком и должны
    выполняться для одного пользователя строго по очереди. Блокировка
    хранится, пока есть хотя бы одно событие пользователя в обработке
    или в очереди.
    """

    def __init__(self):
        self._locks: Dict[int, asyncio.Lock] = {}
        self._pending: Dict[int, int] = {}

    async def __call__(
        self,
        handler: Callable[[TelegramObject, Dict[str, Any]], Awaitable[Any]],
        event: TelegramObject,
        data: Dict[str, Any],
    ) -> Any:
        user_id = _event_user_id(event)
        if user_id is None:
            return await handler(event, data)

        lock = self._locks.get(user_id)
        if lock is None:
            lock = self._locks[user_id] = asyncio.Lock()
        self._pending[user_id] = self._pending.get(user_id, 0) + 1

        try:
            async with lock:
                return await handler(event, data)
        finally:
            self._pending[user_id] -= 1
            if not self._pending[user_id]:
                del self._pending[user_id]
                del self._locks[user_id]


class ErrorMiddleware(BaseMiddleware):
    """
    Глобальный обработчик ошибок (Middleware).

    Ловит необработанные исключения в хендлерах и логирует их.
    """

    async def __call__(
        self,
        handler: Callable[[TelegramObject, Dict[str, Any]], Awaitable[Any]],
        event: TelegramObject,
        data: Dict[str, Any],
    ) -> Any:
        try:
            return await handler(event, data)
        except Exception as e:
            handler_name = getattr(handler, "__name__", "unknown_handler")
            logger.error(f"Ошибка в обработчике {handler_name}: {e}", exc_info=True)
