from typing import Any, Dict, Optional, Union

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from src.weather_lookup.api.dependencies import ServiceContainer, get_services
from src.weather_lookup.api.responses import error_response, handle_error
from src.weather_lookup.exceptions import ValidationError
from src.weather_lookup.services.weather_lookup_service_async import (
    resolve_location,
)
from src.weather_lookup.utils.validation import validate_coordinates

router = APIRouter(tags=["geocode"])


class GeocodeRequest(BaseModel):
    """Either `{location}` or `{latitude, longitude, reverse: true}`."""

    location: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    reverse: bool = False


@router.post("/geocode", response_model=None)
async def geocode(
    body: GeocodeRequest, services: ServiceContainer = Depends(get_services)
) -> Union[Dict[str, Any], JSONResponse]:
    """Resolve text to candidate locations, or coordinates to a place."""
    try:
        latitude, longitude = body.latitude, body.longitude
        if body.reverse and latitude is not None and longitude is not None:
            validate_coordinates(latitude, longitude)
            geocoder = services.require_geocoder()
            location = await geocoder.reverse_geocode(latitude, longitude)
            if location is None:
                return error_response(
                    404, "Location not found for these coordinates."
                )
            return {"success": True, "locations": [location.to_response()]}

        text = (body.location or "").strip()
        if not text:
            raise ValidationError("Location is required")

        geocoder = services.require_geocoder()
        locations, selection = await resolve_location(geocoder, text)
        if not locations:
            return error_response(
                404, "Location not found. Please try a different search term."
            )

        auto_selected = selection.auto_selected
        return {
            "success": True,
            "locations": [loc.to_response() for loc in locations],
            "autoSelected": (
                auto_selected.to_response() if auto_selected else None
            ),
            "suggestions": [s.to_response() for s in selection.suggestions],
        }
    except Exception as e:
        return handle_error(
            e, "Failed to geocode location. Please try again."
        )
