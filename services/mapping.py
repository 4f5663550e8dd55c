"""Field-for-field mapping between stored readings and wire DTOs."""

from __future__ import annotations

from app.schemas import PowerReadingDto
from models.records import PowerReading


def to_dto(entity: PowerReading) -> PowerReadingDto:
    return PowerReadingDto(id=entity.id, value=entity.value, logged_at=entity.logged_at)


def to_entity(dto: PowerReadingDto) -> PowerReading:
    entity = PowerReading(value=dto.value, logged_at=dto.logged_at)
    if dto.id is not None:
        entity.id = dto.id
    return entity


def apply_update(dto: PowerReadingDto, entity: PowerReading) -> PowerReading:
    """Copy the dto's fields onto ``entity`` in place, keeping its id if the dto has none."""
    if dto.id is not None:
        entity.id = dto.id
    entity.value = dto.value
    entity.logged_at = dto.logged_at
    return entity
