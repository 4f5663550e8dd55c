"""Unit tests for the CRUD orchestration service."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Iterator

import pytest
from sqlalchemy.exc import OperationalError

from app.schemas import PowerReadingDto
from datastore.database import ReadingDatabase
from models.records import ReadingFilter
from services.readings import (
    EmptyReadingsError,
    MissingReadingsError,
    PowerReadingService,
    ReadingValidationError,
)

LOGGED_AT = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def database(tmp_path) -> Iterator[ReadingDatabase]:
    database = ReadingDatabase(f"sqlite:///{tmp_path / 'service.db'}")
    database.create_schema()
    yield database
    database.dispose()


@pytest.fixture
def service(database: ReadingDatabase) -> PowerReadingService:
    return PowerReadingService(database=database)


def _dto(value: int, logged_at: datetime = LOGGED_AT, reading_id: int | None = None) -> PowerReadingDto:
    return PowerReadingDto(id=reading_id, value=value, logged_at=logged_at)


def test_list_returns_empty_list_when_store_is_empty(service: PowerReadingService) -> None:
    assert service.list_readings(ReadingFilter()) == []
    assert service.list_readings() == []


def test_create_none_raises_missing_readings_error(
    service: PowerReadingService, database: ReadingDatabase
) -> None:
    with pytest.raises(MissingReadingsError, match="null"):
        service.create_readings(None)

    assert database.count() == 0


def test_create_empty_raises_empty_readings_error(
    service: PowerReadingService, database: ReadingDatabase
) -> None:
    with pytest.raises(EmptyReadingsError, match="empty"):
        service.create_readings([])

    assert database.count() == 0


def test_missing_and_empty_errors_are_distinct_kinds() -> None:
    assert issubclass(MissingReadingsError, ReadingValidationError)
    assert issubclass(EmptyReadingsError, ReadingValidationError)
    assert issubclass(ReadingValidationError, ValueError)
    assert not issubclass(MissingReadingsError, EmptyReadingsError)
    assert not issubclass(EmptyReadingsError, MissingReadingsError)


def test_create_assigns_distinct_ids_and_persists(service: PowerReadingService) -> None:
    created = service.create_readings([_dto(100), _dto(200, LOGGED_AT + timedelta(hours=1))])

    ids = [reading.id for reading in created]
    assert all(reading_id is not None for reading_id in ids)
    assert len(set(ids)) == 2
    assert [reading.value for reading in created] == [100, 200]

    listed = service.list_readings()
    assert {(r.id, r.value, r.logged_at) for r in listed} == {
        (r.id, r.value, r.logged_at) for r in created
    }


def test_create_ignores_caller_supplied_ids(service: PowerReadingService) -> None:
    first = service.create_readings([_dto(1)])[0]

    created = service.create_readings([_dto(2, reading_id=first.id)])

    assert created[0].id != first.id
    assert len(service.list_readings()) == 2


def test_create_accepts_any_iterable_sequence(service: PowerReadingService) -> None:
    created = service.create_readings(tuple([_dto(5), _dto(6)]))

    assert len(created) == 2


def test_get_returns_none_for_missing_id(service: PowerReadingService) -> None:
    assert service.get_reading(12345) is None


def test_get_returns_stored_reading(service: PowerReadingService) -> None:
    created = service.create_readings([_dto(42)])[0]

    fetched = service.get_reading(created.id)

    assert fetched == created
    assert fetched.logged_at.tzinfo is not None


def test_update_missing_returns_none_without_writing(
    service: PowerReadingService, database: ReadingDatabase
) -> None:
    existing = service.create_readings([_dto(1)])[0]

    result = service.update_reading(_dto(50, reading_id=existing.id + 100))

    assert result is None
    assert database.count() == 1
    assert service.get_reading(existing.id) == existing


def test_update_without_id_returns_none(service: PowerReadingService) -> None:
    assert service.update_reading(_dto(50)) is None


def test_update_overwrites_fields_and_preserves_id(service: PowerReadingService) -> None:
    existing = service.create_readings([_dto(1)])[0]
    new_time = LOGGED_AT + timedelta(days=3)

    updated = service.update_reading(_dto(77, new_time, reading_id=existing.id))

    assert updated is not None
    assert updated.id == existing.id
    assert updated.value == 77
    assert updated.logged_at == new_time
    assert service.get_reading(existing.id) == updated


def test_delete_existing_removes_only_that_row(service: PowerReadingService) -> None:
    keep, drop = service.create_readings([_dto(1), _dto(2)])

    assert service.delete_reading(drop.id) is True

    assert service.get_reading(drop.id) is None
    assert [r.id for r in service.list_readings()] == [keep.id]


def test_delete_missing_returns_false_and_leaves_store(
    service: PowerReadingService, database: ReadingDatabase
) -> None:
    service.create_readings([_dto(1)])

    assert service.delete_reading(999) is False
    assert database.count() == 1


def test_deleted_ids_are_not_reused(service: PowerReadingService) -> None:
    first = service.create_readings([_dto(1)])[0]
    service.delete_reading(first.id)

    second = service.create_readings([_dto(2)])[0]

    assert second.id != first.id


def test_storage_failures_propagate(
    service: PowerReadingService, database: ReadingDatabase
) -> None:
    database.drop_schema()

    with pytest.raises(OperationalError):
        service.list_readings()
    with pytest.raises(OperationalError):
        service.create_readings([_dto(1)])
