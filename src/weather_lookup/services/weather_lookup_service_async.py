import asyncio
import logging
from datetime import date
from typing import Any, Dict, List, Tuple

import pydantic

from src.weather_lookup.exceptions import UpstreamError
from src.weather_lookup.schemas.location import Location
from src.weather_lookup.schemas.weather import CurrentWeather, DailyWeather
from src.weather_lookup.services.geoapify_client_async import (
    DEFAULT_LIMIT,
    GeoapifyClient,
)
from src.weather_lookup.services.open_meteo_client_async import (
    OpenMeteoClient,
)
from src.weather_lookup.utils.disambiguation import (
    LocationSelection,
    select_location,
)

logger = logging.getLogger(__name__)


async def resolve_location(
    geocoder: GeoapifyClient, text: str, limit: int = DEFAULT_LIMIT
) -> Tuple[List[Location], LocationSelection]:
    """Geocode free text and apply the auto-select policy.

    Args:
        geocoder (GeoapifyClient): Location resolver.
        text (str): Raw user query.
        limit (int): Maximum number of candidates.

    Returns:
        Tuple[List[Location], LocationSelection]: Candidates (best first)
        and the disambiguation outcome for them.
    """
    locations = await geocoder.geocode(text, limit=limit)
    return locations, select_location(text, locations)


def _invalid_payload(key: str, detail: str) -> UpstreamError:
    logger.error(f"❌ Unexpected open-meteo `{key}` payload: {detail[:500]}")
    return UpstreamError(
        OpenMeteoClient.provider,
        status=200,
        body=f"Invalid `{key}` payload: {detail}",
    )


def normalize_current(payload: Dict[str, Any]) -> Dict[str, Any]:
    """Validate and extract the `current_weather` snapshot.

    Raises:
        UpstreamError: If the snapshot is missing or malformed.
    """
    try:
        current = CurrentWeather.model_validate(payload["current_weather"])
    except KeyError:
        raise _invalid_payload("current_weather", "missing") from None
    except pydantic.ValidationError as e:
        raise _invalid_payload("current_weather", str(e)) from e
    return current.model_dump()


def normalize_daily(payload: Dict[str, Any]) -> Dict[str, Any]:
    """Validate and extract the `daily` parallel-array series.

    Optional series the provider did not return are left out.

    Raises:
        UpstreamError: If the series is missing, malformed or its arrays
            differ in length.
    """
    try:
        daily = DailyWeather.model_validate(payload["daily"])
    except KeyError:
        raise _invalid_payload("daily", "missing") from None
    except pydantic.ValidationError as e:
        raise _invalid_payload("daily", str(e)) from e
    return {
        name: values
        for name, values in daily.model_dump().items()
        if values is not None
    }


async def fetch_current_and_forecast(
    weather_client: OpenMeteoClient, lat: float, lon: float
) -> Dict[str, Any]:
    """Fetch current weather and the daily forecast concurrently.

    Both requests are issued at once and the result is only built when both
    succeed. The first failure propagates and the other call's outcome is
    discarded, so callers never see a partial view. The result has the shape
    saved queries store as `weatherData`.

    Args:
        weather_client (OpenMeteoClient): Weather gateway.
        lat (float): Validated latitude.
        lon (float): Validated longitude.

    Returns:
        Dict[str, Any]: `{"current": <current_weather>, "forecast": <daily>}`.

    Raises:
        UpstreamError: If either provider call fails or returns a payload
            that does not validate.
    """
    current, forecast = await asyncio.gather(
        weather_client.get_current_weather(lat, lon),
        weather_client.get_forecast(lat, lon),
    )
    logger.info(f"⛅ Fetched current and forecast for ({lat}, {lon})")
    return {
        "current": normalize_current(current),
        "forecast": normalize_daily(forecast),
    }


async def fetch_historical(
    weather_client: OpenMeteoClient,
    lat: float,
    lon: float,
    start_date: date,
    end_date: date,
) -> Dict[str, Any]:
    """Fetch a historical daily series and echo the requested range.

    The provider payload is returned as is once its `daily` series has
    validated.
    """
    data = await weather_client.get_historical_weather(
        lat, lon, start_date, end_date
    )
    normalize_daily(data)
    return {
        "data": data,
        "dateRange": {
            "start": start_date.isoformat(),
            "end": end_date.isoformat(),
        },
    }
