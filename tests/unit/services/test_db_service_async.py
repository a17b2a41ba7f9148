from datetime import datetime, timezone
from typing import Any, Dict

import pytest

from src.weather_lookup.exceptions import NotFoundError, ValidationError
from src.weather_lookup.services.db_service_async import (
    AsyncDBService,
    parse_timestamp,
)


def _fields(**overrides: Any) -> Dict[str, Any]:
    fields: Dict[str, Any] = {
        "label": "Trip",
        "location_name": "Paris, France",
        "latitude": 48.8566,
        "longitude": 2.3522,
        "start_date": "2024-01-01",
        "end_date": "2024-01-05",
        "weather_data": {"current": {"temperature": 5}, "forecast": {}},
        "geocoding_confidence": 0.95,
        "location_type": "city",
    }
    fields.update(overrides)
    return fields


def test_parse_timestamp_accepts_zulu_suffix() -> None:
    # Act
    parsed = parse_timestamp("2024-03-01T12:30:00Z", "startDate")

    # Assert
    assert parsed == datetime(2024, 3, 1, 12, 30, tzinfo=timezone.utc)


def test_parse_timestamp_defaults_to_now_and_rejects_garbage() -> None:
    # Act
    before = datetime.now(timezone.utc)
    parsed = parse_timestamp(None, "startDate")

    # Assert
    assert parsed >= before
    with pytest.raises(ValidationError, match="Invalid endDate"):
        parse_timestamp("next tuesday", "endDate")


@pytest.mark.asyncio  # type: ignore[misc]
async def test_create_query_persists_and_returns_record(
    query_store: AsyncDBService,
) -> None:
    # Arrange
    await query_store.init_schema()

    # Act
    record = await query_store.create_query(_fields())

    # Assert
    assert record.id is not None
    assert record.label == "Trip"
    assert record.created_at is not None
    assert record.updated_at is not None
    loaded = await query_store.get_query(record.id)
    assert loaded.weather_data == {
        "current": {"temperature": 5},
        "forecast": {},
    }
    assert loaded.start_date.date().isoformat() == "2024-01-01"


@pytest.mark.asyncio  # type: ignore[misc]
async def test_create_query_missing_required_field_raises(
    query_store: AsyncDBService,
) -> None:
    # Arrange
    await query_store.init_schema()

    # Act / Assert
    with pytest.raises(ValidationError, match="Missing required fields"):
        await query_store.create_query(_fields(weather_data=None))
    assert await query_store.list_queries() == []


@pytest.mark.asyncio  # type: ignore[misc]
async def test_create_query_accepts_zero_coordinates(
    query_store: AsyncDBService,
) -> None:
    # Arrange
    await query_store.init_schema()

    # Act
    record = await query_store.create_query(
        _fields(location_name="Null Island", latitude=0, longitude=0)
    )

    # Assert
    assert record.latitude == 0.0
    assert record.longitude == 0.0


@pytest.mark.asyncio  # type: ignore[misc]
async def test_create_query_out_of_range_latitude_raises(
    query_store: AsyncDBService,
) -> None:
    # Arrange
    await query_store.init_schema()

    # Act / Assert
    with pytest.raises(ValidationError, match="Latitude must be between"):
        await query_store.create_query(_fields(latitude=91))


@pytest.mark.asyncio  # type: ignore[misc]
async def test_list_queries_returns_newest_first(
    query_store: AsyncDBService,
) -> None:
    # Arrange
    await query_store.init_schema()
    first = await query_store.create_query(_fields(label="first"))
    second = await query_store.create_query(_fields(label="second"))

    # Act
    records = await query_store.list_queries()

    # Assert
    assert [r.id for r in records] == [second.id, first.id]


@pytest.mark.asyncio  # type: ignore[misc]
async def test_update_label_changes_only_label(
    query_store: AsyncDBService,
) -> None:
    # Arrange
    await query_store.init_schema()
    created = await query_store.create_query(_fields())

    # Act
    updated = await query_store.update_label(created.id, "Renamed")
    cleared = await query_store.update_label(created.id, "")

    # Assert
    assert updated.label == "Renamed"
    assert updated.location_name == created.location_name
    assert updated.weather_data == created.weather_data
    assert cleared.label is None


@pytest.mark.asyncio  # type: ignore[misc]
async def test_update_label_unknown_id_raises_not_found(
    query_store: AsyncDBService,
) -> None:
    # Arrange
    await query_store.init_schema()

    # Act / Assert
    with pytest.raises(NotFoundError):
        await query_store.update_label(999, "x")


@pytest.mark.asyncio  # type: ignore[misc]
async def test_delete_query_removes_record_then_reports_not_found(
    query_store: AsyncDBService,
) -> None:
    # Arrange
    await query_store.init_schema()
    created = await query_store.create_query(_fields())

    # Act
    await query_store.delete_query(created.id)

    # Assert
    assert await query_store.find_query(created.id) is None
    with pytest.raises(NotFoundError):
        await query_store.get_query(created.id)
    with pytest.raises(NotFoundError):
        await query_store.delete_query(created.id)
