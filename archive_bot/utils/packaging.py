"""
Упаковка сгенерированных альбомов в zip и очистка папки результатов.
"""

import logging
import shutil
import zipfile
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

ARCHIVE_PREFIX = "ArchiveGramBot-Archive"


def generate_archive_name(now: Optional[datetime] = None, attempt: int = 0) -> str:
    """
    Имя архива с меткой времени генерации.

    Формат: ArchiveGramBot-Archive-{YYYY-MM-DD_HH-MM-SS}.zip, для attempt > 0
    к метке добавляется -{attempt} (несколько архивов за одну секунду).
    """
    now = now or datetime.now(timezone.utc)
    suffix = f"-{attempt}" if attempt else ""
    return f"{ARCHIVE_PREFIX}-{now.strftime('%Y-%m-%d_%H-%M-%S')}{suffix}.zip"


def zip_folder(folder_path: Path, result_file: Path) -> Path:
    """
    Упаковывает дерево каталогов в zip без сжатия.

    Фото и видео уже сжаты, поэтому используется ZIP_STORED. Пути внутри
    архива повторяют пути относительно folder_path.

    Аргументы:
        folder_path (Path): Корень упаковываемого дерева.
        result_file (Path): Путь создаваемого архива (файла еще не должно быть).

    Возвращает:
        Path: result_file.

    Исключения:
        FileExistsError: result_file уже существует.
    """
    folder_path = Path(folder_path)
    result_file = Path(result_file)
    result_file.parent.mkdir(parents=True, exist_ok=True)

    files_archived = 0
    with zipfile.ZipFile(result_file, "x", zipfile.ZIP_STORED) as zf:
        for file_path in sorted(folder_path.rglob("*")):
            if not file_path.is_file():
                continue
            zf.write(file_path, file_path.relative_to(folder_path).as_posix())
            files_archived += 1

    logger.info(f"Архив {result_file.name} создан: {files_archived} файлов")
    return result_file


def clear_folder(folder_path: Path) -> None:
    """
    Удаляет все файлы и подкаталоги внутри folder_path, сам каталог остается.
    Отсутствующий каталог не считается ошибкой.
    """
    folder_path = Path(folder_path)
    if not folder_path.is_dir():
        return

    for entry in folder_path.iterdir():
        if entry.is_dir() and not entry.is_symlink():
            shutil.rmtree(entry)
        else:
            entry.unlink()
