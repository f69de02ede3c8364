"""
Запуск бота в режиме long polling (без вебхука).

    python -m archive_bot
"""

import asyncio
import logging

from config import Config
from instance_bot import bot
from archive_bot.handlers import set_routers
from archive_bot.utils.logger import setup_logging

logger = logging.getLogger(__name__)


async def main() -> None:
    setup_logging(Config.LOG_PATH)
    logger.info(f"Запуск ArchiveGram {Config.VERSION} (polling)")

    dp = set_routers(
        Config.archive_settings(),
        restrict_access=Config.RESTRICT_ACCESS,
        allowed_users=Config.ALLOWED_USERS,
    )

    await bot.delete_webhook(drop_pending_updates=True)
    try:
        await dp.start_polling(bot, allowed_updates=["message", "callback_query"])
    finally:
        await bot.session.close()
        logger.info("Остановка ArchiveGram")


if __name__ == "__main__":
    asyncio.run(main())
