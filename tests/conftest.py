import logging
import os
import sys
from pathlib import Path
from typing import Any, Callable, Dict, Generator, Tuple
from unittest.mock import AsyncMock, Mock

import pytest
from _pytest.monkeypatch import MonkeyPatch
from fastapi.testclient import TestClient
from pytest_mock import MockerFixture

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from src.weather_lookup.api.app import create_app  # noqa: E402
from src.weather_lookup.api.dependencies import ServiceContainer  # noqa: E402
from src.weather_lookup.config import Settings  # noqa: E402
from src.weather_lookup.services.db_service_async import (  # noqa: E402
    AsyncDBService,
)


@pytest.fixture(scope="session", autouse=True)  # type: ignore[misc]
def configure_logging() -> None:
    """Configure root logging for tests if not already set up.

    Side effects:
        Ensures DEBUG level logging is configured once for the session.
    """
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(level=logging.DEBUG)


@pytest.fixture  # type: ignore[misc]
def mock_weather_client() -> Mock:
    """Provide an Open-Meteo client mock with async fetch methods."""
    wc = Mock()
    wc.get_current_weather = AsyncMock(return_value={})
    wc.get_forecast = AsyncMock(return_value={})
    wc.get_historical_weather = AsyncMock(return_value={})
    return wc


@pytest.fixture  # type: ignore[misc]
def mock_geocoder() -> Mock:
    """Provide a geocoder mock returning no candidates by default."""
    g = Mock()
    g.geocode = AsyncMock(return_value=[])
    g.reverse_geocode = AsyncMock(return_value=None)
    return g


@pytest.fixture  # type: ignore[misc]
def mock_video_client() -> Mock:
    """Provide a YouTube client mock returning no videos by default."""
    v = Mock()
    v.search_weather_videos = AsyncMock(return_value=[])
    return v


@pytest.fixture  # type: ignore[misc]
def mock_store() -> Mock:
    """Provide a saved-query store mock with async CRUD methods.

    Returns:
        Mock: Object exposing the `AsyncDBService` operations used by the
        routes, all stubbed with AsyncMock.
    """
    m = Mock()
    m.create_query = AsyncMock()
    m.list_queries = AsyncMock(return_value=[])
    m.get_query = AsyncMock()
    m.update_label = AsyncMock()
    m.delete_query = AsyncMock(return_value=None)
    m.init_schema = AsyncMock(return_value=None)
    m.dispose = AsyncMock(return_value=None)
    return m


@pytest.fixture  # type: ignore[misc]
def mock_secrets_manager() -> Mock:
    """Provide a Secrets Manager service mock with async get_secret."""
    sm = Mock()
    sm.get_secret = AsyncMock(return_value={})
    return sm


@pytest.fixture  # type: ignore[misc]
def services(
    mock_weather_client: Mock,
    mock_store: Mock,
    mock_geocoder: Mock,
    mock_video_client: Mock,
) -> ServiceContainer:
    """Service container wired entirely with mocks."""
    return ServiceContainer(
        weather=mock_weather_client,
        store=mock_store,
        geocoder=mock_geocoder,
        videos=mock_video_client,
    )


@pytest.fixture  # type: ignore[misc]
def api_client(
    services: ServiceContainer,
) -> Generator[TestClient, None, None]:
    """TestClient for an app using the mocked service container."""
    app = create_app(settings=Settings(), services=services)
    with TestClient(app) as client:
        yield client


@pytest.fixture  # type: ignore[misc]
def query_store(tmp_path: Path) -> AsyncDBService:
    """Real store backed by a throwaway SQLite file.

    A file is used instead of `:memory:` because every operation runs on a
    worker thread with its own connection.
    """
    return AsyncDBService(f"sqlite:///{tmp_path / 'queries.db'}")


@pytest.fixture  # type: ignore[misc]
def env_vars(monkeypatch: MonkeyPatch) -> Callable[[Dict[str, Any]], None]:
    """Fixture to set environment variables for the duration of a test.

    Args:
        monkeypatch (MonkeyPatch): Pytest monkeypatch fixture used internally.

    Returns:
        Callable[[Dict[str, Any]], None]: Function that accepts a mapping of
        names to values and sets them in os.environ for the test.
    """

    def _setter(mapping: Dict[str, Any]) -> None:
        for k, v in mapping.items():
            monkeypatch.setenv(k, str(v))

    return _setter


@pytest.fixture  # type: ignore[misc]
def aiohttp_client_session_mock(mocker: MockerFixture) -> Tuple[Mock, Mock]:
    """Patch aiohttp.ClientSession to return a session with a mocked GET.

    Returns:
        Tuple[Mock, Mock]: (session_obj, response) where response.status is
        200 and response.json/response.text are AsyncMocks.
    """
    session_obj = Mock()

    get_ctx = Mock()
    response = Mock()
    response.status = 200
    response.json = AsyncMock(return_value={})
    response.text = AsyncMock(return_value="")
    get_ctx.__aenter__ = AsyncMock(return_value=response)
    get_ctx.__aexit__ = AsyncMock(return_value=None)

    session_obj.get.return_value = get_ctx

    client_session_ctx = Mock()
    client_session_ctx.__aenter__ = AsyncMock(return_value=session_obj)
    client_session_ctx.__aexit__ = AsyncMock(return_value=None)

    mocker.patch(
        "src.weather_lookup.services.http_client_async"
        ".aiohttp.ClientSession",
        return_value=client_session_ctx,
    )

    return session_obj, response
