import logging
from typing import List, Optional
from urllib.parse import urlencode

from src.weather_lookup.exceptions import ConfigError, ValidationError
from src.weather_lookup.schemas.location import Location
from src.weather_lookup.services.http_client_async import (
    DEFAULT_TIMEOUT_SECONDS,
    AsyncJSONClient,
)

logger = logging.getLogger(__name__)

GEOAPIFY_API_URL = "https://api.geoapify.com/v1/geocode"
DEFAULT_LIMIT = 5


class GeoapifyClient(AsyncJSONClient):
    """Async client for the Geoapify geocoding API.

    Turns free text into ranked candidate locations and coordinates back
    into a place name. The API key is checked once, when the client is
    built, so a missing credential surfaces at startup.

    Attributes:
        api_key (str): Geoapify API key.
        api_url (str): Base URL of the geocoding endpoints.
    """

    provider = "geoapify"

    def __init__(
        self,
        api_key: str,
        api_url: str = GEOAPIFY_API_URL,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
    ):
        if not api_key:
            raise ConfigError(
                "GEOAPIFY_API_KEY is not set. "
                "Get a free key from https://www.geoapify.com"
            )
        super().__init__(timeout_seconds)
        self.api_key = api_key
        self.api_url = api_url.rstrip("/")

    def build_search_url(self, text: str, limit: int = DEFAULT_LIMIT) -> str:
        params = {
            "text": text,
            "limit": limit,
            "apiKey": self.api_key,
            "format": "json",
        }
        return f"{self.api_url}/search?{urlencode(params)}"

    def build_reverse_url(self, latitude: float, longitude: float) -> str:
        params = {
            "lat": latitude,
            "lon": longitude,
            "apiKey": self.api_key,
            "format": "json",
        }
        return f"{self.api_url}/reverse?{urlencode(params)}"

    async def geocode(
        self, text: str, limit: int = DEFAULT_LIMIT
    ) -> List[Location]:
        """Resolve a free-text query into candidate locations.

        Args:
            text (str): Place name, address or postal code.
            limit (int): Maximum number of candidates to return.

        Returns:
            List[Location]: Candidates ordered best first; empty when the
            provider found nothing.

        Raises:
            ValidationError: If `text` is blank.
            UpstreamError: If the provider call fails.
        """
        query = (text or "").strip()
        if not query:
            raise ValidationError("Location is required")

        data = await self.get_json(self.build_search_url(query, limit))
        results = data.get("results") or []
        locations = [Location.from_geoapify(r) for r in results[:limit]]

        logger.info(f"🌍 Geocoded '{query}' to {len(locations)} candidates")
        return locations

    async def reverse_geocode(
        self, latitude: float, longitude: float
    ) -> Optional[Location]:
        """Return the place at the given coordinates, or None if unknown.

        Coordinates are expected to be validated by the caller.
        """
        data = await self.get_json(
            self.build_reverse_url(latitude, longitude)
        )
        results = data.get("results") or []
        if not results:
            return None
        return Location.from_geoapify(results[0])
