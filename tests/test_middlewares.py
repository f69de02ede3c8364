import asyncio
from datetime import datetime, timezone

from aiogram import types

from archive_bot.utils.middlewares import UserLockMiddleware

from .conftest import USER_ID


def _message(user_id, message_id=1):
    return types.Message(
        message_id=message_id,
        date=datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc),
        chat=types.Chat(id=user_id, type="private"),
        text="hi",
    )


def test_events_of_one_user_run_one_at_a_time():
    middleware = UserLockMiddleware()
    log = []

    async def handler(event, data):
        log.append(("start", event.message_id))
        await asyncio.sleep(0.01)
        log.append(("end", event.message_id))

    async def run():
        await asyncio.gather(
            middleware(handler, _message(USER_ID, 1), {}),
            middleware(handler, _message(USER_ID, 2), {}),
        )

    asyncio.run(run())

    assert log == [("start", 1), ("end", 1), ("start", 2), ("end", 2)]


def test_different_users_are_not_serialized():
    middleware = UserLockMiddleware()
    started = []

    async def handler(event, data):
        started.append(event.chat.id)
        await asyncio.sleep(0.01)
        return len(started)

    async def run():
        return await asyncio.gather(
            middleware(handler, _message(USER_ID), {}),
            middleware(handler, _message(USER_ID + 1), {}),
        )

    # both handlers started before either finished
    assert asyncio.run(run()) == [2, 2]


def test_locks_are_released_after_processing():
    middleware = UserLockMiddleware()

    async def handler(event, data):
        if event.message_id == 2:
            raise RuntimeError("handler failed")
        return "ok"

    async def run():
        return await asyncio.gather(
            middleware(handler, _message(USER_ID, 1), {}),
            middleware(handler, _message(USER_ID, 2), {}),
            middleware(handler, _message(USER_ID + 1, 3), {}),
            return_exceptions=True,
        )

    first, second, third = asyncio.run(run())

    assert first == "ok" and third == "ok"
    assert isinstance(second, RuntimeError)
    assert middleware._locks == {}
    assert middleware._pending == {}
