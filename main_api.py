import logging
from contextlib import asynccontextmanager

from aiogram import types
from fastapi import FastAPI, Request

from config import Config
from instance_bot import bot
from archive_bot.handlers import set_routers
from archive_bot.utils.logger import setup_logging

setup_logging(Config.LOG_PATH)

logger = logging.getLogger(__name__)

dp = set_routers(
    Config.archive_settings(),
    restrict_access=Config.RESTRICT_ACCESS,
    allowed_users=Config.ALLOWED_USERS,
)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    logger.info(f"Запуск ArchiveGram {Config.VERSION}")
    if not Config.WEBHOOK_DOMAIN:
        logger.warning("WEBHOOK_DOMAIN не задан, обновления не будут приходить!")

    # Bot Setting
    await bot.delete_webhook(
        drop_pending_updates=True
    )
    await bot.set_webhook(
        url=f"{Config.WEBHOOK_DOMAIN}/webhook/main",
        allowed_updates=[
            'message',
            'callback_query',
        ]
    )

    yield

    await bot.delete_webhook(
        drop_pending_updates=True
    )
    await bot.session.close()
    logger.info("Остановка ArchiveGram")


app = FastAPI(
    lifespan=lifespan
)


@app.get('/health')
async def health_check():
    return {"status": "ok", "message": "Service is running"}


@app.post('/webhook/main')
async def main_update(request: Request):
    data = await request.json()
    update = types.Update.model_validate(data, context={"bot": bot})

    await dp.feed_update(
        bot=bot,
        update=update
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
