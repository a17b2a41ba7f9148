from datetime import datetime, timezone
from typing import Any, Optional

from sqlalchemy import JSON, DateTime, Float, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from src.weather_lookup.models.base import Base


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class SavedQuery(Base):
    """A weather lookup the user chose to keep.

    Stores the resolved location, the requested date range and the weather
    payload exactly as it was fetched. After creation only the label is
    editable. Maps to the `saved_queries` table.

    Attributes:
        id (int): Primary key.
        label (Optional[str]): User-supplied name.
        location_name (str): Display name of the location.
        latitude (float): Latitude in decimal degrees.
        longitude (float): Longitude in decimal degrees.
        start_date (datetime): Start of the requested range.
        end_date (datetime): End of the requested range.
        weather_data (Any): Provider payload, `{current, forecast}` or
            `{daily}`.
        geocoding_confidence (Optional[float]): Geocoder ranking score.
        location_type (Optional[str]): Geocoder classification, e.g. "city".
        created_at (datetime): Record creation timestamp (UTC).
        updated_at (datetime): Last modification timestamp (UTC).
    """

    __tablename__ = "saved_queries"

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True
    )
    label: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    location_name: Mapped[str] = mapped_column(String(255), nullable=False)
    latitude: Mapped[float] = mapped_column(Float, nullable=False)
    longitude: Mapped[float] = mapped_column(Float, nullable=False)
    start_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False
    )
    end_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False
    )
    weather_data: Mapped[Any] = mapped_column(JSON, nullable=False)
    geocoding_confidence: Mapped[Optional[float]] = mapped_column(
        Float, nullable=True
    )
    location_type: Mapped[Optional[str]] = mapped_column(
        String(50), nullable=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        nullable=False,
        index=True,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        onupdate=utc_now,
        nullable=False,
    )
