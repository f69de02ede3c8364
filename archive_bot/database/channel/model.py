from typing import List, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from archive_bot.database.types import UtcDateTime, to_utc


class Post(BaseModel):
    """Архивный пост: подпись и не более одного фото или видео на момент приема."""

    model_config = ConfigDict(frozen=True)

    id: int
    date: UtcDateTime
    forward_date: UtcDateTime
    text: str = ""
    photos: Tuple[str, ...] = ()
    videos: Tuple[str, ...] = ()

    @field_validator("date", "forward_date")
    @classmethod
    def _as_utc(cls, value):
        return to_utc(value)


class Channel(BaseModel):
    """
    Альбом пользователя.

    id = 0 для постов без исходного канала, в этом случае
    username = "(default)". username служит именем папки и внешним ключом.
    """

    id: int
    title: str = ""
    description: str = ""
    username: str
    posts: List[Post] = Field(default_factory=list)

    @property
    def key(self) -> str:
        return self.username

    @property
    def post_count(self) -> int:
        return len(self.posts)

    def has_post(self, post_id: int) -> bool:
        return any(post.id == post_id for post in self.posts)
