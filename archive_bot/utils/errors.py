"""
Иерархия ошибок ядра архива.

Каждый класс соответствует одному исходу операции. Слой представления
сопоставляет класс с ключом текста (lang_key) и не разбирает строки
сообщений. Ошибки с user_facing = False показываются пользователю только
общей фразой "обратитесь к владельцу бота", а подробности уходят в лог.
"""


class ArchiveError(Exception):
    """Базовая ошибка архива."""

    user_facing: bool = True
    lang_key: str = "error:unknown"

    def __init__(self, message: str = "", **details):
        super().__init__(message or self.__class__.__name__)
        self.details = details


class NotFoundError(ArchiveError):
    """У пользователя нет сохраненных данных."""

    lang_key = "error:not_found"


class NoAlbumsError(NotFoundError):
    """Файл данных есть, но в нем нет ни одного альбома."""

    lang_key = "error:no_albums"


class DuplicatePostError(ArchiveError):
    lang_key = "error:duplicate_post"

    def __init__(self, post_id: int, album_key: str):
        super().__init__(
            f"Post #{post_id} already exists in album \"{album_key}\"",
            post_id=post_id,
            album_key=album_key,
        )
        self.post_id = post_id
        self.album_key = album_key


class MediaTooLargeError(ArchiveError):
    """Файл превышает лимит для своего типа (photo/video)."""

    lang_key = "error:media_too_large"

    def __init__(self, kind: str, size: int, limit: int):
        super().__init__(
            f"{kind} file size {size} exceeds the limit of {limit} bytes",
            kind=kind,
            size=size,
            limit=limit,
        )
        self.kind = kind
        self.size = size
        self.limit = limit


class QuotaExceededError(ArchiveError):
    lang_key = "error:quota_exceeded"

    def __init__(self, required: int, limit: int):
        super().__init__(
            f"User folder cannot exceed the size limit: {required} > {limit}",
            required=required,
            limit=limit,
        )
        self.required = required
        self.limit = limit


class AlbumNotFoundError(ArchiveError):
    lang_key = "error:album_not_found"

    def __init__(self, album_key: str):
        super().__init__(f"Album \"{album_key}\" not found", album_key=album_key)
        self.album_key = album_key


class NothingGeneratedError(ArchiveError):
    lang_key = "error:nothing_generated"


class CorruptDataError(ArchiveError):
    """Файл data.json не соответствует схеме."""

    user_facing = False
    lang_key = "error:operator"


class ArchiveIOError(ArchiveError):
    """Сбой файловой системы или сети."""

    user_facing = False
    lang_key = "error:operator"


class MediaDownloadError(ArchiveIOError):
    pass
