import asyncio
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Sequence

from sqlalchemy import create_engine, select
from sqlalchemy.orm import defer, sessionmaker

from src.weather_lookup.exceptions import NotFoundError, ValidationError
from src.weather_lookup.models import Base, SavedQuery
from src.weather_lookup.utils.validation import validate_coordinates

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("location_name", "latitude", "longitude", "weather_data")


def parse_timestamp(value: Any, field: str) -> datetime:
    """Parse an ISO date or datetime string into an aware datetime.

    Missing values default to the current UTC time. Naive values are taken
    to be UTC.

    Raises:
        ValidationError: If the value is not an ISO 8601 date/datetime.
    """
    if value is None or value == "":
        return datetime.now(timezone.utc)
    if isinstance(value, datetime):
        parsed = value
    else:
        text = str(value).strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            raise ValidationError(f"Invalid {field}") from None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


class AsyncDBService:
    """Async store for saved weather queries.

    This service exposes create/list/get/update-label/delete over the
    `saved_queries` table using SQLAlchemy's synchronous engine, delegating
    blocking calls to a threadpool via `asyncio.to_thread`. Each operation
    runs in its own session and transaction; there is no optimistic locking,
    so concurrent writes to one record are last-write-wins.

    Attributes:
        db_url (str): Database connection URL.
        _engine: SQLAlchemy Engine instance.
        _SessionLocal: Session factory.
    """

    def __init__(self, db_url: str) -> None:
        self.db_url: str = db_url
        connect_args: Dict[str, Any] = {}
        if db_url.startswith("sqlite"):
            connect_args["check_same_thread"] = False
        self._engine = create_engine(
            db_url, echo=False, future=True, connect_args=connect_args
        )
        self._SessionLocal = sessionmaker(
            bind=self._engine, expire_on_commit=False
        )

    async def init_schema(self) -> None:
        """Create the saved-query tables if they do not exist yet."""

        def _create() -> None:
            Base.metadata.create_all(self._engine)

        await asyncio.to_thread(_create)
        logger.info("✅ Database schema ready")

    async def dispose(self) -> None:
        await asyncio.to_thread(self._engine.dispose)

    async def create_query(self, fields: Dict[str, Any]) -> SavedQuery:
        """Insert a saved query and return the persisted record.

        Args:
            fields (Dict[str, Any]): Snake-case column values. The keys
                `location_name`, `latitude`, `longitude` and `weather_data`
                are required; `start_date`/`end_date` default to now.

        Returns:
            SavedQuery: The created record with generated id and timestamps.

        Raises:
            ValidationError: If a required field is missing or a value is
                malformed.
        """
        missing = [
            name for name in REQUIRED_FIELDS if fields.get(name) in (None, "")
        ]
        if missing:
            raise ValidationError("Missing required fields")

        try:
            latitude = float(fields["latitude"])
            longitude = float(fields["longitude"])
        except (TypeError, ValueError):
            raise ValidationError("Invalid latitude or longitude") from None
        validate_coordinates(latitude, longitude)

        confidence = fields.get("geocoding_confidence")
        record = SavedQuery(
            label=fields.get("label") or None,
            location_name=str(fields["location_name"]),
            latitude=latitude,
            longitude=longitude,
            start_date=parse_timestamp(fields.get("start_date"), "startDate"),
            end_date=parse_timestamp(fields.get("end_date"), "endDate"),
            weather_data=fields["weather_data"],
            geocoding_confidence=(
                float(confidence) if confidence is not None else None
            ),
            location_type=fields.get("location_type") or None,
        )

        def _query() -> SavedQuery:
            with self._SessionLocal() as session:
                session.add(record)
                session.commit()
                session.refresh(record)
                return record

        saved = await asyncio.to_thread(_query)
        logger.info(
            f"🆕 Saved query id={saved.id} for {saved.location_name}"
        )
        return saved

    async def list_queries(self) -> Sequence[SavedQuery]:
        """Return all saved queries, newest first.

        The weather payload column is deferred and must not be accessed on
        the returned objects.
        """

        def _query() -> Sequence[SavedQuery]:
            with self._SessionLocal() as session:
                result = session.execute(
                    select(SavedQuery)
                    .options(defer(SavedQuery.weather_data))
                    .order_by(
                        SavedQuery.created_at.desc(), SavedQuery.id.desc()
                    )
                )
                return result.scalars().all()

        return await asyncio.to_thread(_query)

    async def find_query(self, query_id: int) -> Optional[SavedQuery]:
        def _query() -> Optional[SavedQuery]:
            with self._SessionLocal() as session:
                return session.get(SavedQuery, query_id)

        return await asyncio.to_thread(_query)

    async def get_query(self, query_id: int) -> SavedQuery:
        """Fetch a saved query by id.

        Raises:
            NotFoundError: If no record has this id.
        """
        record = await self.find_query(query_id)
        if record is None:
            raise NotFoundError(f"Query {query_id} not found")
        return record

    async def update_label(
        self, query_id: int, label: Optional[str]
    ) -> SavedQuery:
        """Set the label of a saved query; blank labels are stored as null.

        Raises:
            NotFoundError: If no record has this id.
        """

        def _query() -> Optional[SavedQuery]:
            with self._SessionLocal() as session:
                record = session.get(SavedQuery, query_id)
                if record is None:
                    return None
                record.label = label or None
                session.commit()
                session.refresh(record)
                return record

        updated = await asyncio.to_thread(_query)
        if updated is None:
            raise NotFoundError(f"Query {query_id} not found")
        logger.info(f"✏️ Relabelled query id={query_id}")
        return updated

    async def delete_query(self, query_id: int) -> None:
        """Delete a saved query.

        Raises:
            NotFoundError: If no record has this id.
        """

        def _query() -> bool:
            with self._SessionLocal() as session:
                record = session.get(SavedQuery, query_id)
                if record is None:
                    return False
                session.delete(record)
                session.commit()
                return True

        deleted = await asyncio.to_thread(_query)
        if not deleted:
            raise NotFoundError(f"Query {query_id} not found")
        logger.info(f"🗑️ Deleted query id={query_id}")
