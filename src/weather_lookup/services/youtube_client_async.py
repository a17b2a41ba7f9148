import logging
from typing import List
from urllib.parse import urlencode

from src.weather_lookup.exceptions import ConfigError
from src.weather_lookup.schemas.video import Video
from src.weather_lookup.services.http_client_async import (
    DEFAULT_TIMEOUT_SECONDS,
    AsyncJSONClient,
)

logger = logging.getLogger(__name__)

YOUTUBE_API_URL = "https://www.googleapis.com/youtube/v3"
SEARCH_SUFFIX = "weather"


class YouTubeClient(AsyncJSONClient):
    """Async client for YouTube Data API v3 video search."""

    provider = "youtube"

    def __init__(
        self,
        api_key: str,
        api_url: str = YOUTUBE_API_URL,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
    ):
        if not api_key:
            raise ConfigError("YouTube API key not configured")
        super().__init__(timeout_seconds)
        self.api_key = api_key
        self.api_url = api_url.rstrip("/")

    def build_search_url(self, location_name: str, max_results: int) -> str:
        params = {
            "part": "snippet",
            "q": f"{location_name} {SEARCH_SUFFIX}",
            "type": "video",
            "maxResults": max_results,
            "key": self.api_key,
        }
        return f"{self.api_url}/search?{urlencode(params)}"

    async def search_weather_videos(
        self, location_name: str, max_results: int = 3
    ) -> List[Video]:
        """Search for weather videos about a location.

        Args:
            location_name (str): Place name; "weather" is appended to it.
            max_results (int): Upper bound on returned videos.

        Returns:
            List[Video]: Videos in provider order; empty when none matched.

        Raises:
            UpstreamError: If the provider call fails.
        """
        data = await self.get_json(
            self.build_search_url(location_name, max_results)
        )
        videos: List[Video] = []
        for item in data.get("items") or []:
            video = Video.from_search_item(item)
            if video is not None:
                videos.append(
                    video.model_copy(
                        update={"url": self.get_video_url(video.id)}
                    )
                )

        logger.info(f"🎬 Found {len(videos)} videos for '{location_name}'")
        return videos

    @staticmethod
    def get_video_url(video_id: str) -> str:
        return f"https://www.youtube.com/watch?v={video_id}"
