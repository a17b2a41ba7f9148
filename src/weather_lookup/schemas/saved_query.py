from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

_CAMEL = ConfigDict(
    alias_generator=to_camel, populate_by_name=True, from_attributes=True
)


class SavedQueryCreate(BaseModel):
    """Body of `POST /queries`.

    Every field is optional at the schema level; required-field checks live
    in the query store so that a missing field yields a 400 with a fixed
    message rather than a framework validation dump.
    """

    model_config = _CAMEL

    label: Optional[str] = None
    location_name: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    weather_data: Optional[Dict[str, Any]] = None
    geocoding_confidence: Optional[float] = None
    location_type: Optional[str] = None


class SavedQueryUpdate(BaseModel):
    model_config = _CAMEL

    label: Optional[str] = None


class SavedQuerySummary(BaseModel):
    """List view of a saved query, without the weather payload."""

    model_config = _CAMEL

    id: int
    label: Optional[str] = None
    location_name: str
    latitude: float
    longitude: float
    start_date: datetime
    end_date: datetime
    created_at: datetime
    updated_at: datetime


class SavedQueryOut(SavedQuerySummary):
    weather_data: Any = None
    geocoding_confidence: Optional[float] = None
    location_type: Optional[str] = None


def dump_camel(model: BaseModel) -> Dict[str, Any]:
    return model.model_dump(by_alias=True, mode="json")
