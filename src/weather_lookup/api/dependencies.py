from dataclasses import dataclass, field
from typing import Dict, Optional

from fastapi import Request

from src.weather_lookup.config import Settings
from src.weather_lookup.exceptions import ConfigError
from src.weather_lookup.services.db_service_async import AsyncDBService
from src.weather_lookup.services.geoapify_client_async import GeoapifyClient
from src.weather_lookup.services.logger_service import get_logger
from src.weather_lookup.services.open_meteo_client_async import (
    OpenMeteoClient,
)
from src.weather_lookup.services.youtube_client_async import YouTubeClient

logger = get_logger(__name__)


@dataclass
class ServiceContainer:
    """Provider clients and the query store, built once per process.

    Clients whose credential is missing are left as None and the reason is
    kept in `config_errors`; the endpoints that need them fail with
    `ConfigError` while the rest of the API keeps working.
    """

    weather: OpenMeteoClient
    store: AsyncDBService
    geocoder: Optional[GeoapifyClient] = None
    videos: Optional[YouTubeClient] = None
    config_errors: Dict[str, str] = field(default_factory=dict)

    def require_geocoder(self) -> GeoapifyClient:
        if self.geocoder is None:
            raise ConfigError(
                self.config_errors.get("geocoder", "Geocoding not configured")
            )
        return self.geocoder

    def require_videos(self) -> YouTubeClient:
        if self.videos is None:
            raise ConfigError(
                self.config_errors.get("videos", "Video search not configured")
            )
        return self.videos


def build_services(settings: Settings) -> ServiceContainer:
    """Construct every service from settings.

    Args:
        settings (Settings): Resolved process configuration.

    Returns:
        ServiceContainer: Initialised clients and store.
    """
    timeout = settings.http_timeout_seconds
    container = ServiceContainer(
        weather=OpenMeteoClient(
            settings.open_meteo_api_url,
            settings.open_meteo_archive_url,
            timeout_seconds=timeout,
        ),
        store=AsyncDBService(settings.database_url),
    )

    try:
        container.geocoder = GeoapifyClient(
            settings.geoapify_api_key,
            settings.geoapify_api_url,
            timeout_seconds=timeout,
        )
    except ConfigError as e:
        logger.warning(f"⚠️ Geocoding disabled: {e.message}")
        container.config_errors["geocoder"] = e.message

    try:
        container.videos = YouTubeClient(
            settings.youtube_api_key,
            settings.youtube_api_url,
            timeout_seconds=timeout,
        )
    except ConfigError as e:
        logger.warning(f"⚠️ Video search disabled: {e.message}")
        container.config_errors["videos"] = e.message

    logger.info("✅ All services initialized")
    return container


def get_services(request: Request) -> ServiceContainer:
    services: ServiceContainer = request.app.state.services
    return services
