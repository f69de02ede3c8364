from typing import List, Optional

from pydantic import BaseModel, Field

from archive_bot.database.channel.model import Channel


class UserArchive(BaseModel):
    """Документ data.json одного пользователя. Порядок каналов = порядок обнаружения."""

    channels: List[Channel] = Field(default_factory=list)

    def get_channel_by_id(self, channel_id: int) -> Optional[Channel]:
        for channel in self.channels:
            if channel.id == channel_id:
                return channel
        return None

    def get_channel_by_key(self, key: str) -> Optional[Channel]:
        for channel in self.channels:
            if channel.key == key:
                return channel
        return None
