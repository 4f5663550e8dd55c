from __future__ import annotations

import logging
from contextlib import contextmanager
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Iterator, Optional

from sqlalchemy import create_engine, func, select
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from models.records import Base, PowerReading
from settings import get_settings

logger = logging.getLogger(__name__)


class ReadingDatabase:
    """Owns the SQLAlchemy engine and hands out one session per transaction."""

    def __init__(self, url: str) -> None:
        self.url = url
        # SQL echo goes through the "sqlalchemy.engine" logger level only.
        self.engine: Engine = create_engine(url, **_engine_options(url))
        self._session_factory = sessionmaker(bind=self.engine, expire_on_commit=False)

    def create_schema(self) -> None:
        Base.metadata.create_all(self.engine)

    def drop_schema(self) -> None:
        Base.metadata.drop_all(self.engine)

    @contextmanager
    def session(self) -> Iterator[Session]:
        """Yield a session; commit on success, roll back and re-raise on failure."""
        session = self._session_factory()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def count(self) -> int:
        with self.session() as session:
            return session.scalar(select(func.count()).select_from(PowerReading)) or 0

    def dispose(self) -> None:
        self.engine.dispose()


def _engine_options(url: str) -> Dict[str, Any]:
    parsed = make_url(url)
    if parsed.get_backend_name() != "sqlite":
        return {"pool_pre_ping": True}

    # Route handlers run in a threadpool, so connections cross threads.
    options: Dict[str, Any] = {"connect_args": {"check_same_thread": False}}
    database = parsed.database
    if database and database != ":memory:":
        Path(database).parent.mkdir(parents=True, exist_ok=True)
    else:
        options["poolclass"] = StaticPool
    return options


@lru_cache
def build_default_database(url: Optional[str] = None) -> ReadingDatabase:
    settings = get_settings()
    database_url = settings.database_url if url is None else url
    database = ReadingDatabase(database_url)
    database.create_schema()
    logger.info("Database ready", extra={"status": database.engine.url.get_backend_name()})
    return database
