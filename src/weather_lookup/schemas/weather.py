from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field, model_validator

DAILY_FORECAST_FIELDS = [
    "temperature_2m_max",
    "temperature_2m_min",
    "weathercode",
    "precipitation_sum",
    "windspeed_10m_max",
]

DAILY_HISTORICAL_FIELDS = [
    "temperature_2m_max",
    "temperature_2m_min",
    "temperature_2m_mean",
    "precipitation_sum",
    "rain_sum",
    "snowfall_sum",
    "windspeed_10m_max",
    "windgusts_10m_max",
    "weathercode",
]


class CurrentWeather(BaseModel):
    """Open-Meteo `current_weather` snapshot."""

    temperature: float
    windspeed: float
    winddirection: float = Field(..., ge=0, le=360)
    weathercode: int
    is_day: int = Field(..., ge=0, le=1)
    time: str


class DailyWeather(BaseModel):
    """Parallel-array daily series as returned by Open-Meteo.

    Index `i` of every array describes the same date `time[i]`, so all
    arrays present on one instance must have the same length. Provider
    values can be null for days without observations.
    """

    time: List[str]
    temperature_2m_max: List[Optional[float]]
    temperature_2m_min: List[Optional[float]]
    weathercode: List[Optional[int]]
    precipitation_sum: List[Optional[float]]
    windspeed_10m_max: List[Optional[float]]
    temperature_2m_mean: Optional[List[Optional[float]]] = None
    rain_sum: Optional[List[Optional[float]]] = None
    snowfall_sum: Optional[List[Optional[float]]] = None
    windgusts_10m_max: Optional[List[Optional[float]]] = None

    @model_validator(mode="after")
    def _check_equal_lengths(self) -> "DailyWeather":
        lengths = {
            name: len(values)
            for name, values in self
            if isinstance(values, list)
        }
        if len(set(lengths.values())) > 1:
            raise ValueError(f"Daily series lengths differ: {lengths}")
        return self


# Stored `weatherData` blobs have no fixed schema; exporters dispatch on
# these variants instead of probing keys.
@dataclass(frozen=True)
class CurrentAndForecast:
    current: Dict[str, Any]
    forecast: Dict[str, Any]


@dataclass(frozen=True)
class DailySeries:
    daily: Dict[str, Any]


@dataclass(frozen=True)
class UnknownPayload:
    raw: Any


WeatherPayload = Union[CurrentAndForecast, DailySeries, UnknownPayload]


def classify_weather_data(data: Any) -> WeatherPayload:
    """Tag a stored `weatherData` blob with its shape.

    Args:
        data (Any): Payload as persisted with a saved query.

    Returns:
        WeatherPayload: `CurrentAndForecast` when both sub-objects are
        present, `DailySeries` for historical payloads, otherwise
        `UnknownPayload`.
    """
    if isinstance(data, dict):
        current = data.get("current")
        forecast = data.get("forecast")
        if isinstance(current, dict) and isinstance(forecast, dict):
            return CurrentAndForecast(current=current, forecast=forecast)

        daily = data.get("daily")
        if isinstance(daily, dict):
            return DailySeries(daily=daily)

    return UnknownPayload(raw=data)
