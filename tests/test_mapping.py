"""Unit tests for the entity/DTO mapping layer."""

from __future__ import annotations

from datetime import datetime, timezone

from app.schemas import PowerReadingDto
from models.records import PowerReading
from services.mapping import apply_update, to_dto, to_entity


def _dto(reading_id: int | None = 7, value: int = 123) -> PowerReadingDto:
    return PowerReadingDto(
        id=reading_id,
        value=value,
        logged_at=datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc),
    )


def test_round_trip_preserves_every_field() -> None:
    original = _dto()

    assert to_dto(to_entity(original)) == original


def test_to_entity_leaves_id_unset_when_dto_has_none() -> None:
    entity = to_entity(_dto(reading_id=None))

    assert entity.id is None
    assert entity.value == 123


def test_apply_update_mutates_existing_entity_in_place() -> None:
    entity = PowerReading(
        id=3, value=1, logged_at=datetime(2023, 6, 1, tzinfo=timezone.utc)
    )
    dto = PowerReadingDto(
        id=3, value=999, logged_at=datetime(2024, 2, 2, 8, 30, tzinfo=timezone.utc)
    )

    result = apply_update(dto, entity)

    assert result is entity
    assert entity.id == 3
    assert entity.value == 999
    assert entity.logged_at == datetime(2024, 2, 2, 8, 30, tzinfo=timezone.utc)


def test_apply_update_keeps_identity_when_dto_lacks_id() -> None:
    entity = PowerReading(
        id=11, value=1, logged_at=datetime(2023, 6, 1, tzinfo=timezone.utc)
    )

    apply_update(_dto(reading_id=None, value=5), entity)

    assert entity.id == 11
    assert entity.value == 5


def test_dto_accepts_wire_alias_and_normalizes_to_utc() -> None:
    dto = PowerReadingDto.model_validate(
        {"value": 10, "loggedAt": "2024-01-01T02:00:00+02:00"}
    )

    assert dto.id is None
    assert dto.logged_at == datetime(2024, 1, 1, 0, 0, tzinfo=timezone.utc)
    assert dto.model_dump(by_alias=True, mode="json")["loggedAt"].startswith(
        "2024-01-01T00:00:00"
    )


def test_dto_treats_naive_timestamp_as_utc() -> None:
    dto = PowerReadingDto.model_validate({"value": 10, "loggedAt": "2024-01-01T05:00:00"})

    assert dto.logged_at.tzinfo is timezone.utc
    assert dto.logged_at.hour == 5
