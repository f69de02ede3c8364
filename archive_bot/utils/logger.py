"""
Модуль настройки логирования.
"""

import logging
import sys
from typing import Optional


def setup_logging(log_path: Optional[str] = None) -> None:
    """
    Настройка центральной конфигурации логирования.

    Устанавливает формат логов, обработчики (stdout и, если указан путь, файл)
    и уровни логирования для сторонних библиотек, чтобы уменьшить шум.

    Аргументы:
        log_path (str, optional): Путь к файлу лога.
    """
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_path:
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))

    # Конфигурация корневого логгера
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=handlers,
    )

    # Установка уровней для сторонних библиотек, чтобы уменьшить шум
    logging.getLogger("aiogram").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

    logger = logging.getLogger(__name__)
    logger.info("Конфигурация логирования успешно настроена.")
