"""
Утилиты для работы с файлами архива.

Этот модуль содержит функции для:
- Подсчета размера папки пользователя или альбома
- Рекурсивного копирования каталогов (статика, медиа альбома)
- Перевода байтов в мегабайты для отображения
- Запуска блокирующих операций в отдельном потоке (executor), чтобы не блокировать event loop
"""

import asyncio
import functools
import logging
import os
import shutil
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Any, Callable, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Пул потоков для файловых операций
_executor = ThreadPoolExecutor(max_workers=4)


def get_folder_size(folder_path: Path) -> int:
    """
    Рекурсивно суммирует размеры файлов в каталоге.

    Аргументы:
        folder_path (Path): Каталог.

    Возвращает:
        int: Размер в байтах; 0, если каталога нет.
    """
    folder_path = Path(folder_path)
    if not folder_path.is_dir():
        return 0

    total_size = 0
    for root, _dirs, files in os.walk(folder_path):
        for name in files:
            try:
                total_size += os.path.getsize(os.path.join(root, name))
            except OSError:
                # Файл мог быть удален во время обхода
                continue
    return total_size


def convert_to_mb(size_in_bytes: int) -> float:
    return round(size_in_bytes / (1024 * 1024), 2)


def copy_dir_all(src: Path, dst: Path) -> None:
    """
    Копирует содержимое src в dst, создавая dst при необходимости.
    Отсутствующий src пропускается молча (например, альбом без медиа).
    """
    src = Path(src)
    if not src.is_dir():
        return
    shutil.copytree(src, dst, dirs_exist_ok=True)


def truncate_string(value: str, max_length: int) -> str:
    if len(value) > max_length:
        return value[:max_length] + "..."
    return value


async def run_blocking(func: Callable[..., T], *args: Any, **kwargs: Any) -> T:
    """
    Асинхронная обертка для синхронных операций ядра.
    Запускает функцию в executor'е.
    """
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(_executor, functools.partial(func, *args, **kwargs))
