import logging
from datetime import date
from typing import Any, Dict, Union
from urllib.parse import urlencode

from src.weather_lookup.schemas.weather import (
    DAILY_FORECAST_FIELDS,
    DAILY_HISTORICAL_FIELDS,
)
from src.weather_lookup.services.http_client_async import (
    DEFAULT_TIMEOUT_SECONDS,
    AsyncJSONClient,
)

logger = logging.getLogger(__name__)

OPEN_METEO_API_URL = "https://api.open-meteo.com/v1"
OPEN_METEO_ARCHIVE_URL = "https://archive-api.open-meteo.com/v1"
FORECAST_DAYS = 7

DateLike = Union[date, str]


class OpenMeteoClient(AsyncJSONClient):
    """Async client for the Open-Meteo forecast and archive APIs.

    Open-Meteo needs no API key. The archive endpoint lags real time by
    several days, so callers should not ask it for the most recent week.

    Attributes:
        api_url (str): Base URL of the forecast API.
        archive_url (str): Base URL of the historical archive API.
    """

    provider = "open-meteo"

    def __init__(
        self,
        api_url: str = OPEN_METEO_API_URL,
        archive_url: str = OPEN_METEO_ARCHIVE_URL,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
    ):
        super().__init__(timeout_seconds)
        self.api_url = api_url.rstrip("/")
        self.archive_url = archive_url.rstrip("/")

    def build_current_url(self, lat: float, lon: float) -> str:
        params = {
            "latitude": lat,
            "longitude": lon,
            "current_weather": "true",
        }
        return f"{self.api_url}/forecast?{urlencode(params)}"

    def build_forecast_url(self, lat: float, lon: float) -> str:
        params = {
            "latitude": lat,
            "longitude": lon,
            "daily": ",".join(DAILY_FORECAST_FIELDS),
            "forecast_days": FORECAST_DAYS,
            "timezone": "auto",
        }
        return f"{self.api_url}/forecast?{urlencode(params)}"

    def build_historical_url(
        self, lat: float, lon: float, start_date: DateLike, end_date: DateLike
    ) -> str:
        params = {
            "latitude": lat,
            "longitude": lon,
            "start_date": str(start_date),
            "end_date": str(end_date),
            "daily": ",".join(DAILY_HISTORICAL_FIELDS),
            "timezone": "auto",
        }
        return f"{self.archive_url}/archive?{urlencode(params)}"

    async def get_current_weather(
        self, lat: float, lon: float
    ) -> Dict[str, Any]:
        """Fetch the current weather snapshot (`current_weather` key)."""
        return await self.get_json(self.build_current_url(lat, lon))

    async def get_forecast(self, lat: float, lon: float) -> Dict[str, Any]:
        """Fetch the daily forecast starting today (`daily` key)."""
        return await self.get_json(self.build_forecast_url(lat, lon))

    async def get_historical_weather(
        self,
        lat: float,
        lon: float,
        start_date: DateLike,
        end_date: DateLike,
    ) -> Dict[str, Any]:
        """Fetch observed daily weather for an inclusive date range.

        Args:
            lat (float): Latitude of the location.
            lon (float): Longitude of the location.
            start_date (date | str): First day, `YYYY-MM-DD`.
            end_date (date | str): Last day, `YYYY-MM-DD`.

        Returns:
            Dict[str, Any]: Provider payload whose `daily` arrays cover every
            day in the range.

        Raises:
            UpstreamError: If the archive API call fails.
        """
        logger.info(
            f"📅 Fetching archive for ({lat}, {lon}) "
            f"{start_date}..{end_date}"
        )
        return await self.get_json(
            self.build_historical_url(lat, lon, start_date, end_date)
        )
