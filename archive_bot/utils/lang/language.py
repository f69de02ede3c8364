import json
import logging
import pathlib

logger = logging.getLogger(__name__)

# Определяем путь к директории с языковыми файлами относительно текущего файла
CURRENT_DIR = pathlib.Path(__file__).parent.resolve()
EN_JSON_PATH = CURRENT_DIR / 'en.json'

try:
    with open(EN_JSON_PATH, 'r', encoding='utf-8') as r_f:
        en_text = json.load(r_f)
except FileNotFoundError:
    logger.critical(f"Файл локализации не найден: {EN_JSON_PATH}")
    en_text = {}
except json.JSONDecodeError as e:
    logger.critical(f"Ошибка парсинга файла локализации {EN_JSON_PATH}: {e}")
    en_text = {}


languages = {
    'EN': en_text,
}


def text(key: str, user_lang: str = 'EN') -> str:
    """
    Получить текст по ключу.
    Если ключ не найден, возвращает сам ключ.
    """
    lang_data = languages.get(user_lang, languages['EN'])
    return lang_data.get(key, key)
