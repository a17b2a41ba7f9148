from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class Location(BaseModel):
    """A candidate place returned by the geocoding provider.

    Locations live only for a request/response cycle; they are embedded into
    a saved query when the user saves one.
    """

    model_config = ConfigDict(extra="ignore")

    name: str
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)
    confidence: Optional[float] = Field(default=None, ge=0, le=1)
    type: Optional[str] = None
    country: Optional[str] = None
    city: Optional[str] = None

    @classmethod
    def from_geoapify(cls, result: Dict[str, Any]) -> "Location":
        rank = result.get("rank") or {}
        return cls(
            name=result.get("formatted") or "",
            latitude=result["lat"],
            longitude=result["lon"],
            confidence=rank.get("confidence"),
            type=result.get("result_type"),
            country=result.get("country"),
            city=result.get("city"),
        )

    def to_response(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)
