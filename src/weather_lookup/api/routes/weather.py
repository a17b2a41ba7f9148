from typing import Any, Dict, Optional, Union

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from src.weather_lookup.api.dependencies import ServiceContainer, get_services
from src.weather_lookup.api.responses import handle_error
from src.weather_lookup.exceptions import ValidationError
from src.weather_lookup.services.weather_lookup_service_async import (
    fetch_current_and_forecast,
    fetch_historical,
)
from src.weather_lookup.utils.validation import (
    parse_coordinates,
    parse_date_range,
)

router = APIRouter(prefix="/weather", tags=["weather"])

WeatherResponse = Union[Dict[str, Any], JSONResponse]


@router.get("/current", response_model=None)
async def current_weather(
    lat: Optional[str] = Query(default=None),
    lon: Optional[str] = Query(default=None),
    services: ServiceContainer = Depends(get_services),
) -> WeatherResponse:
    try:
        latitude, longitude = parse_coordinates(lat, lon)
        data = await services.weather.get_current_weather(latitude, longitude)
        return {"success": True, "data": data}
    except Exception as e:
        return handle_error(
            e, "Failed to fetch weather data. Please try again."
        )


@router.get("/forecast", response_model=None)
async def forecast(
    lat: Optional[str] = Query(default=None),
    lon: Optional[str] = Query(default=None),
    services: ServiceContainer = Depends(get_services),
) -> WeatherResponse:
    try:
        latitude, longitude = parse_coordinates(lat, lon)
        data = await services.weather.get_forecast(latitude, longitude)
        return {"success": True, "data": data}
    except Exception as e:
        return handle_error(
            e, "Failed to fetch forecast data. Please try again."
        )


@router.get("/overview", response_model=None)
async def overview(
    lat: Optional[str] = Query(default=None),
    lon: Optional[str] = Query(default=None),
    services: ServiceContainer = Depends(get_services),
) -> WeatherResponse:
    """Current weather and forecast in one response, fetched in parallel."""
    try:
        latitude, longitude = parse_coordinates(lat, lon)
        data = await fetch_current_and_forecast(
            services.weather, latitude, longitude
        )
        return {"success": True, "data": data}
    except Exception as e:
        return handle_error(
            e, "Failed to fetch weather data. Please try again."
        )


@router.get("/historical", response_model=None)
async def historical(
    lat: Optional[str] = Query(default=None),
    lon: Optional[str] = Query(default=None),
    start_date: Optional[str] = Query(default=None, alias="startDate"),
    end_date: Optional[str] = Query(default=None, alias="endDate"),
    services: ServiceContainer = Depends(get_services),
) -> WeatherResponse:
    """Observed daily weather for an inclusive, past date range."""
    try:
        if not (lat and lon and start_date and end_date):
            raise ValidationError(
                "Missing required parameters: lat, lon, startDate, endDate"
            )
        latitude, longitude = parse_coordinates(lat, lon)
        start, end = parse_date_range(start_date, end_date)

        result = await fetch_historical(
            services.weather, latitude, longitude, start, end
        )
        return {"success": True, **result}
    except Exception as e:
        return handle_error(e, "Failed to fetch historical weather data")
