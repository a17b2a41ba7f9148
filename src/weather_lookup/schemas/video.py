from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class Video(BaseModel):
    """Summary of a YouTube search hit."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    title: str
    description: str = ""
    thumbnail: str = ""
    channel_title: str = ""
    published_at: str = ""
    url: str = ""

    @classmethod
    def from_search_item(cls, item: Dict[str, Any]) -> Optional["Video"]:
        video_id = (item.get("id") or {}).get("videoId")
        if not video_id:
            return None

        snippet = item.get("snippet") or {}
        thumbnails = snippet.get("thumbnails") or {}
        thumbnail = (
            thumbnails.get("medium") or thumbnails.get("default") or {}
        ).get("url", "")

        return cls(
            id=video_id,
            title=snippet.get("title", ""),
            description=snippet.get("description", ""),
            thumbnail=thumbnail,
            channel_title=snippet.get("channelTitle", ""),
            published_at=snippet.get("publishedAt", ""),
        )
