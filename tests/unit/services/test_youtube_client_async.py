from typing import Tuple
from unittest.mock import Mock
from urllib.parse import parse_qs, urlparse

import pytest

from src.weather_lookup.exceptions import ConfigError
from src.weather_lookup.services.youtube_client_async import YouTubeClient


def _item(video_id: str, title: str) -> dict:
    return {
        "id": {"kind": "youtube#video", "videoId": video_id},
        "snippet": {
            "title": title,
            "description": "Daily forecast",
            "channelTitle": "Weather Channel",
            "publishedAt": "2024-05-01T10:00:00Z",
            "thumbnails": {
                "default": {"url": "https://i.ytimg.com/default.jpg"},
                "medium": {"url": "https://i.ytimg.com/medium.jpg"},
            },
        },
    }


def test_init_without_api_key_raises_config_error() -> None:
    # Act / Assert
    with pytest.raises(ConfigError, match="YouTube API key not configured"):
        YouTubeClient("")


def test_build_search_url_appends_weather_to_query() -> None:
    # Arrange
    client = YouTubeClient("yt-key")

    # Act
    params = parse_qs(urlparse(client.build_search_url("Oslo", 4)).query)

    # Assert
    assert params["q"] == ["Oslo weather"]
    assert params["part"] == ["snippet"]
    assert params["type"] == ["video"]
    assert params["maxResults"] == ["4"]
    assert params["key"] == ["yt-key"]


@pytest.mark.asyncio  # type: ignore[misc]
async def test_search_weather_videos_maps_items_and_skips_non_videos(
    aiohttp_client_session_mock: Tuple[Mock, Mock],
) -> None:
    # Arrange
    _, response = aiohttp_client_session_mock
    channel = {"id": {"kind": "youtube#channel"}, "snippet": {}}
    response.json.return_value = {
        "items": [_item("abc123", "Oslo forecast"), channel]
    }
    client = YouTubeClient("yt-key")

    # Act
    videos = await client.search_weather_videos("Oslo", 3)

    # Assert
    assert len(videos) == 1
    video = videos[0]
    assert video.id == "abc123"
    assert video.title == "Oslo forecast"
    assert video.thumbnail == "https://i.ytimg.com/medium.jpg"
    assert video.channel_title == "Weather Channel"
    assert video.url == "https://www.youtube.com/watch?v=abc123"


@pytest.mark.asyncio  # type: ignore[misc]
async def test_search_weather_videos_without_items_returns_empty(
    aiohttp_client_session_mock: Tuple[Mock, Mock],
) -> None:
    # Arrange
    _, response = aiohttp_client_session_mock
    response.json.return_value = {}
    client = YouTubeClient("yt-key")

    # Act
    videos = await client.search_weather_videos("Nowhere")

    # Assert
    assert videos == []


def test_get_video_url() -> None:
    # Act / Assert
    assert (
        YouTubeClient.get_video_url("abc123")
        == "https://www.youtube.com/watch?v=abc123"
    )
