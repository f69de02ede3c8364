from datetime import datetime, timezone
from enum import Enum
from typing import Annotated

from pydantic import BeforeValidator, PlainSerializer

# Формат дат в data.json: "2024-05-01 12:00:05 UTC"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S UTC"


class MediaKind(str, Enum):
    PHOTO = "photo"
    VIDEO = "video"


def parse_date(value):
    if isinstance(value, str) and value.endswith(" UTC"):
        return datetime.strptime(value, DATE_FORMAT).replace(tzinfo=timezone.utc)
    return value


def format_date(value: datetime) -> str:
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return value.strftime(DATE_FORMAT)


def to_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


UtcDateTime = Annotated[
    datetime,
    BeforeValidator(parse_date),
    PlainSerializer(format_date, return_type=str),
]
