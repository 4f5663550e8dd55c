"""Persistence models and query records shared across services."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime, Integer
from sqlalchemy.engine import Dialect
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.types import TypeDecorator


def as_utc(value: datetime) -> datetime:
    """Return ``value`` as an aware UTC datetime; naive values are taken as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class UtcDateTime(TypeDecorator):
    """Stores naive UTC and hands back aware UTC, whatever the backend."""

    impl = DateTime
    cache_ok = True

    def process_bind_param(self, value: Optional[datetime], dialect: Dialect) -> Optional[datetime]:
        if value is None:
            return None
        return as_utc(value).replace(tzinfo=None)

    def process_result_value(self, value: Optional[datetime], dialect: Dialect) -> Optional[datetime]:
        if value is None:
            return None
        return as_utc(value)


class Base(DeclarativeBase):
    pass


class PowerReading(Base):
    """A single timestamped power measurement as stored in the database."""

    __tablename__ = "power_readings"
    # Without AUTOINCREMENT, SQLite hands out the id of a deleted max row again.
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    value: Mapped[int] = mapped_column(Integer, nullable=False)
    logged_at: Mapped[datetime] = mapped_column(UtcDateTime(), nullable=False)

    def __repr__(self) -> str:
        return f"PowerReading(id={self.id!r}, value={self.value!r}, logged_at={self.logged_at!r})"


@dataclass(frozen=True)
class ReadingFilter:
    """Inclusive, conjunctive bounds used to narrow a listing query."""

    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    min_value: Optional[int] = None
    max_value: Optional[int] = None

    def __post_init__(self) -> None:
        # Frozen dataclass: bypass __setattr__ to normalise the date bounds.
        if self.start_date is not None:
            object.__setattr__(self, "start_date", as_utc(self.start_date))
        if self.end_date is not None:
            object.__setattr__(self, "end_date", as_utc(self.end_date))

    @property
    def is_empty(self) -> bool:
        return (
            self.start_date is None
            and self.end_date is None
            and self.min_value is None
            and self.max_value is None
        )
