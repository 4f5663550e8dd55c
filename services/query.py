"""Filter engine for power reading listings."""

from __future__ import annotations

from typing import List

from sqlalchemy import ColumnElement, Select, select
from sqlalchemy.orm import Session

from models.records import PowerReading, ReadingFilter


def filter_conditions(reading_filter: ReadingFilter) -> List[ColumnElement[bool]]:
    """Translate each present bound into an inclusive SQL predicate."""
    conditions: List[ColumnElement[bool]] = []
    if reading_filter.start_date is not None:
        conditions.append(PowerReading.logged_at >= reading_filter.start_date)
    if reading_filter.end_date is not None:
        conditions.append(PowerReading.logged_at <= reading_filter.end_date)
    if reading_filter.min_value is not None:
        conditions.append(PowerReading.value >= reading_filter.min_value)
    if reading_filter.max_value is not None:
        conditions.append(PowerReading.value <= reading_filter.max_value)
    return conditions


def build_query(reading_filter: ReadingFilter) -> Select[tuple[PowerReading]]:
    statement = select(PowerReading)
    if reading_filter.is_empty:
        return statement
    return statement.where(*filter_conditions(reading_filter))


def query_readings(session: Session, reading_filter: ReadingFilter) -> List[PowerReading]:
    # No ORDER BY: rows come back in whatever order the store yields them.
    return list(session.scalars(build_query(reading_filter)).all())
