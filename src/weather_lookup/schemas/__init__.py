from .location import Location
from .saved_query import (
    SavedQueryCreate,
    SavedQueryOut,
    SavedQuerySummary,
    SavedQueryUpdate,
    dump_camel,
)
from .video import Video
from .weather import (
    CurrentAndForecast,
    CurrentWeather,
    DailySeries,
    DailyWeather,
    UnknownPayload,
    WeatherPayload,
    classify_weather_data,
)

__all__ = [
    "CurrentAndForecast",
    "CurrentWeather",
    "DailySeries",
    "DailyWeather",
    "Location",
    "SavedQueryCreate",
    "SavedQueryOut",
    "SavedQuerySummary",
    "SavedQueryUpdate",
    "UnknownPayload",
    "Video",
    "WeatherPayload",
    "classify_weather_data",
    "dump_camel",
]
