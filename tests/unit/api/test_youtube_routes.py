from unittest.mock import Mock

import pytest
from fastapi.testclient import TestClient

from src.weather_lookup.api.routes.youtube import parse_max_results
from src.weather_lookup.schemas.video import Video


def test_search_returns_camel_case_videos(
    api_client: TestClient, mock_video_client: Mock
) -> None:
    # Arrange
    mock_video_client.search_weather_videos.return_value = [
        Video(
            id="abc123",
            title="Tokyo weather today",
            thumbnail="https://i.ytimg.com/medium.jpg",
            channel_title="NHK",
            published_at="2024-05-01T10:00:00Z",
            url="https://www.youtube.com/watch?v=abc123",
        )
    ]

    # Act
    response = api_client.get(
        "/youtube/search", params={"location": "Tokyo"}
    )

    # Assert
    assert response.status_code == 200
    video = response.json()["data"][0]
    assert video["id"] == "abc123"
    assert video["channelTitle"] == "NHK"
    assert video["publishedAt"] == "2024-05-01T10:00:00Z"
    assert video["url"] == "https://www.youtube.com/watch?v=abc123"
    mock_video_client.search_weather_videos.assert_awaited_once_with(
        "Tokyo", 3
    )


def test_search_without_location_is_rejected(
    api_client: TestClient, mock_video_client: Mock
) -> None:
    # Act
    response = api_client.get("/youtube/search")

    # Assert
    assert response.status_code == 400
    assert response.json()["error"] == "Location parameter is required"
    mock_video_client.search_weather_videos.assert_not_awaited()


def test_search_provider_failure_returns_fixed_message(
    api_client: TestClient, mock_video_client: Mock
) -> None:
    # Arrange
    mock_video_client.search_weather_videos.side_effect = RuntimeError(
        "quota exceeded"
    )

    # Act
    response = api_client.get("/youtube/search", params={"location": "Oslo"})

    # Assert
    assert response.status_code == 500
    assert response.json()["error"] == "Failed to search YouTube videos"


@pytest.mark.parametrize(  # type: ignore[misc]
    "raw, expected",
    [(None, 3), ("", 3), ("5", 5), ("0", 1), ("500", 50), ("many", 3)],
)
def test_parse_max_results(raw: object, expected: int) -> None:
    # Act / Assert
    assert parse_max_results(raw) == expected  # type: ignore[arg-type]
