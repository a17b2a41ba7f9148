from typing import Any, Dict, Optional, Union

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from src.weather_lookup.api.dependencies import ServiceContainer, get_services
from src.weather_lookup.api.responses import handle_error
from src.weather_lookup.exceptions import ValidationError

router = APIRouter(prefix="/youtube", tags=["youtube"])

DEFAULT_MAX_RESULTS = 3
MAX_RESULTS_LIMIT = 50


def parse_max_results(raw: Optional[str]) -> int:
    """Parse `maxResults`, falling back to the default when not a number."""
    try:
        value = int(raw) if raw else DEFAULT_MAX_RESULTS
    except ValueError:
        value = DEFAULT_MAX_RESULTS
    return max(1, min(value, MAX_RESULTS_LIMIT))


@router.get("/search", response_model=None)
async def search_videos(
    location: Optional[str] = Query(default=None),
    max_results: Optional[str] = Query(default=None, alias="maxResults"),
    services: ServiceContainer = Depends(get_services),
) -> Union[Dict[str, Any], JSONResponse]:
    try:
        name = (location or "").strip()
        if not name:
            raise ValidationError("Location parameter is required")

        videos = await services.require_videos().search_weather_videos(
            name, parse_max_results(max_results)
        )
        return {
            "success": True,
            "data": [v.model_dump(by_alias=True) for v in videos],
        }
    except Exception as e:
        return handle_error(e, "Failed to search YouTube videos")
