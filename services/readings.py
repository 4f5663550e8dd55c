"""CRUD orchestration for power readings."""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import List, Optional, Sequence

from app.schemas import PowerReadingDto
from datastore.database import ReadingDatabase, build_default_database
from models.records import PowerReading, ReadingFilter
from services.mapping import apply_update, to_dto, to_entity
from services.query import query_readings

logger = logging.getLogger(__name__)


class ReadingValidationError(ValueError):
    """Raised before any storage access when a request cannot be served."""


class MissingReadingsError(ReadingValidationError):
    """No collection of readings was supplied at all."""


class EmptyReadingsError(ReadingValidationError):
    """A collection was supplied but it holds no readings."""


class PowerReadingService:
    """Mediates between wire DTOs and the reading store.

    Every write runs in exactly one transaction. Lookups that find nothing
    return ``None`` or ``False`` rather than raising, and storage errors are
    left to propagate.
    """

    def __init__(self, database: ReadingDatabase) -> None:
        self.database = database

    def list_readings(self, reading_filter: Optional[ReadingFilter] = None) -> List[PowerReadingDto]:
        reading_filter = reading_filter or ReadingFilter()
        with self.database.session() as session:
            readings = query_readings(session, reading_filter)
            return [to_dto(reading) for reading in readings]

    def get_reading(self, reading_id: int) -> Optional[PowerReadingDto]:
        with self.database.session() as session:
            reading = session.get(PowerReading, reading_id)
            if reading is None:
                logger.debug("Reading not found", extra={"reading_id": reading_id})
                return None
            return to_dto(reading)

    def create_readings(
        self, readings: Optional[Sequence[PowerReadingDto]]
    ) -> List[PowerReadingDto]:
        if readings is None:
            raise MissingReadingsError("Power readings should not be null.")
        readings = list(readings)
        if not readings:
            raise EmptyReadingsError("Power readings should not be empty.")

        # Identity always comes from the store.
        entities = [to_entity(dto.model_copy(update={"id": None})) for dto in readings]
        with self.database.session() as session:
            session.add_all(entities)
            session.flush()
            created = [to_dto(entity) for entity in entities]

        logger.info("Created power readings", extra={"row_count": len(created)})
        return created

    def update_reading(self, reading: PowerReadingDto) -> Optional[PowerReadingDto]:
        if reading.id is None:
            return None
        with self.database.session() as session:
            entity = session.get(PowerReading, reading.id)
            if entity is None:
                logger.debug("Nothing to update", extra={"reading_id": reading.id})
                return None
            apply_update(reading, entity)
            session.flush()
            updated = to_dto(entity)

        logger.info("Updated power reading", extra={"reading_id": updated.id})
        return updated

    def delete_reading(self, reading_id: int) -> bool:
        with self.database.session() as session:
            entity = session.get(PowerReading, reading_id)
            if entity is None:
                logger.debug("Nothing to delete", extra={"reading_id": reading_id})
                return False
            session.delete(entity)

        logger.info("Deleted power reading", extra={"reading_id": reading_id})
        return True


@lru_cache
def build_default_service() -> PowerReadingService:
    """Factory that wires the service to the configured database."""
    return PowerReadingService(database=build_default_database())
