"""Unit tests for the SQLAlchemy-backed reading store."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import select

from datastore.database import ReadingDatabase
from models.records import PowerReading


def test_session_commits_and_reloads_from_disk(tmp_path) -> None:
    url = f"sqlite:///{tmp_path / 'nested' / 'readings.db'}"
    database = ReadingDatabase(url)
    database.create_schema()
    logged_at = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)

    with database.session() as session:
        session.add(PowerReading(value=5, logged_at=logged_at))
    database.dispose()

    assert (tmp_path / "nested" / "readings.db").exists()
    reopened = ReadingDatabase(url)
    try:
        with reopened.session() as session:
            loaded = session.scalars(select(PowerReading)).one()
        assert loaded.value == 5
        assert loaded.logged_at == logged_at
        assert loaded.logged_at.tzinfo is not None
    finally:
        reopened.dispose()


def test_session_rolls_back_on_error(tmp_path) -> None:
    database = ReadingDatabase(f"sqlite:///{tmp_path / 'rollback.db'}")
    database.create_schema()

    with pytest.raises(RuntimeError):
        with database.session() as session:
            session.add(PowerReading(value=1, logged_at=datetime.now(timezone.utc)))
            session.flush()
            raise RuntimeError("boom")

    assert database.count() == 0
    database.dispose()


def test_timestamps_are_stored_as_utc(tmp_path) -> None:
    database = ReadingDatabase("sqlite://")
    database.create_schema()
    plus_five = timezone(timedelta(hours=5))

    with database.session() as session:
        session.add(PowerReading(value=1, logged_at=datetime(2024, 3, 1, 5, 0, tzinfo=plus_five)))

    with database.session() as session:
        loaded = session.scalars(select(PowerReading)).one()

    assert loaded.logged_at == datetime(2024, 3, 1, 0, 0, tzinfo=timezone.utc)
    assert loaded.logged_at.utcoffset() == timedelta(0)
    database.dispose()


def test_in_memory_database_shares_one_connection() -> None:
    database = ReadingDatabase("sqlite://")
    database.create_schema()

    with database.session() as session:
        session.add(PowerReading(value=3, logged_at=datetime.now(timezone.utc)))

    assert database.count() == 1
    database.dispose()
