import csv
import io
import json
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional

from src.weather_lookup.exceptions import ValidationError
from src.weather_lookup.models import SavedQuery
from src.weather_lookup.schemas.weather import (
    CurrentAndForecast,
    classify_weather_data,
)
from src.weather_lookup.utils.common import sanitize_filename_part

logger = logging.getLogger(__name__)

EXPORT_FORMATS = ("json", "csv")
NO_WEATHER_DATA = "No weather data available"
FORECAST_ROWS = 5

CURRENT_COLUMNS = [
    "Temperature (°C)",
    "Wind Speed (km/h)",
    "Wind Direction (°)",
    "Time",
]
FORECAST_COLUMNS = [
    "Date",
    "Max Temp (°C)",
    "Min Temp (°C)",
    "Precipitation (mm)",
    "Wind Speed (km/h)",
]


@dataclass(frozen=True)
class ExportFile:
    """A rendered export ready to be sent as a download."""

    content: str
    media_type: str
    filename: str


def _isoformat(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


def export_filename(query: SavedQuery, fmt: str) -> str:
    name = sanitize_filename_part(query.location_name)
    return f"weather-{name}-{query.id}.{fmt}"


def build_json_export(query: SavedQuery) -> Dict[str, Any]:
    """Return the full export document for a saved query.

    The `weatherData` value is the stored payload, unchanged.
    """
    return {
        "id": query.id,
        "label": query.label,
        "location": {
            "name": query.location_name,
            "latitude": query.latitude,
            "longitude": query.longitude,
        },
        "dates": {
            "start": _isoformat(query.start_date),
            "end": _isoformat(query.end_date),
            "created": _isoformat(query.created_at),
        },
        "weatherData": query.weather_data,
        "metadata": {
            "geocodingConfidence": query.geocoding_confidence,
            "locationType": query.location_type,
        },
    }


def _column(series: Dict[str, Any], key: str, index: int) -> Any:
    values = series.get(key) or []
    return values[index] if index < len(values) else ""


def _render_current_and_forecast(
    query: SavedQuery, payload: CurrentAndForecast
) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")

    created = query.created_at.date().isoformat() if query.created_at else ""
    writer.writerow(["Query Information"])
    writer.writerow(["Label", query.label or "Untitled"])
    writer.writerow(["Location", query.location_name])
    writer.writerow(["Latitude", query.latitude])
    writer.writerow(["Longitude", query.longitude])
    writer.writerow(["Date", created])
    writer.writerow([])

    current = payload.current
    writer.writerow(["Current Weather"])
    writer.writerow(CURRENT_COLUMNS)
    writer.writerow(
        [
            current.get("temperature", ""),
            current.get("windspeed", ""),
            current.get("winddirection", ""),
            current.get("time", ""),
        ]
    )
    writer.writerow([])

    forecast = payload.forecast
    days: List[Any] = forecast.get("time") or []
    if days:
        writer.writerow([f"{FORECAST_ROWS}-Day Forecast"])
        writer.writerow(FORECAST_COLUMNS)
        for i in range(min(FORECAST_ROWS, len(days))):
            writer.writerow(
                [
                    days[i],
                    _column(forecast, "temperature_2m_max", i),
                    _column(forecast, "temperature_2m_min", i),
                    _column(forecast, "precipitation_sum", i),
                    _column(forecast, "windspeed_10m_max", i),
                ]
            )

    return buffer.getvalue().rstrip("\n")


def build_csv_export(query: SavedQuery) -> str:
    """Render a saved query as the fixed CSV layout.

    Only current+forecast payloads have a CSV layout; any other payload
    renders as the `NO_WEATHER_DATA` placeholder.
    """
    payload = classify_weather_data(query.weather_data)
    if isinstance(payload, CurrentAndForecast):
        return _render_current_and_forecast(query, payload)
    return NO_WEATHER_DATA


def validate_export_format(fmt: Optional[str]) -> str:
    """Normalise the requested format, defaulting to JSON.

    Raises:
        ValidationError: If the format is not one of `EXPORT_FORMATS`.
    """
    value = (fmt or "json").strip().lower()
    if value not in EXPORT_FORMATS:
        raise ValidationError(
            "Invalid format. Use ?format=json or ?format=csv"
        )
    return value


def export_query(query: SavedQuery, fmt: str) -> ExportFile:
    """Render a saved query in the requested export format.

    Args:
        query (SavedQuery): Record loaded with its weather payload.
        fmt (str): `json` or `csv`.

    Returns:
        ExportFile: Body, media type and download filename.

    Raises:
        ValidationError: If `fmt` is not supported.
    """
    fmt = validate_export_format(fmt)
    if fmt == "json":
        content = json.dumps(
            build_json_export(query), indent=2, ensure_ascii=False
        )
        media_type = "application/json"
    else:
        content = build_csv_export(query)
        media_type = "text/csv"

    logger.info(f"📦 Exported query id={query.id} as {fmt}")
    return ExportFile(
        content=content,
        media_type=media_type,
        filename=export_filename(query, fmt),
    )
