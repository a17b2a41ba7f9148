import math
import re
from datetime import date
from typing import Any, Optional, Tuple

from src.weather_lookup.exceptions import ValidationError

DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")

LATITUDE_RANGE = (-90.0, 90.0)
LONGITUDE_RANGE = (-180.0, 180.0)


def validate_coordinates(latitude: float, longitude: float) -> None:
    """Raise ValidationError unless both values are within WGS84 bounds."""
    lat_min, lat_max = LATITUDE_RANGE
    lon_min, lon_max = LONGITUDE_RANGE
    if not (lat_min <= latitude <= lat_max) or not (
        lon_min <= longitude <= lon_max
    ):
        raise ValidationError(
            "Latitude must be between -90 and 90, "
            "longitude between -180 and 180"
        )


def _to_float(value: Any) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError("Invalid latitude or longitude") from None
    if not math.isfinite(number):
        raise ValidationError("Invalid latitude or longitude")
    return number


def parse_coordinates(lat: Any, lon: Any) -> Tuple[float, float]:
    """Parse raw latitude/longitude input into validated floats.

    Args:
        lat (Any): Raw latitude, usually a query-string value.
        lon (Any): Raw longitude, usually a query-string value.

    Returns:
        Tuple[float, float]: `(latitude, longitude)` within bounds.

    Raises:
        ValidationError: If a value is missing, not numeric or out of range.
    """
    if lat is None or lon is None or lat == "" or lon == "":
        raise ValidationError("Latitude and longitude are required")

    latitude = _to_float(lat)
    longitude = _to_float(lon)
    validate_coordinates(latitude, longitude)
    return latitude, longitude


def parse_iso_date(value: str) -> date:
    if not DATE_PATTERN.match(value):
        raise ValidationError("Dates must be in YYYY-MM-DD format")
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise ValidationError("Dates must be in YYYY-MM-DD format") from None


def parse_date_range(
    start: Optional[str], end: Optional[str], today: Optional[date] = None
) -> Tuple[date, date]:
    """Validate a historical date range.

    Both dates must be real calendar days in `YYYY-MM-DD` form, the start
    must not come after the end, and the end must not be later than `today`
    (the server's local date unless given).

    Args:
        start (Optional[str]): Raw start date.
        end (Optional[str]): Raw end date.
        today (Optional[date]): Reference day, defaults to `date.today()`.

    Returns:
        Tuple[date, date]: Parsed `(start, end)`.

    Raises:
        ValidationError: On any format or ordering violation.
    """
    if not start or not end:
        raise ValidationError(
            "Missing required parameters: lat, lon, startDate, endDate"
        )

    start_date = parse_iso_date(start)
    end_date = parse_iso_date(end)

    if start_date > end_date:
        raise ValidationError("Start date must be before or equal to end date")

    if end_date > (today or date.today()):
        raise ValidationError("End date cannot be in the future")

    return start_date, end_date
