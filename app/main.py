from __future__ import annotations
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from app.api import health_router, router
from datastore.database import build_default_database
from logging_config import configure_logging
from services.readings import build_default_service


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    database = build_default_database()
    try:
        yield
    finally:
        database.dispose()
        build_default_service.cache_clear()
        build_default_database.cache_clear()


def create_app() -> FastAPI:
    configure_logging()
    app = FastAPI(
        title="Power Analytics",
        description="CRUD service for timestamped power readings.",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.include_router(health_router, tags=["health"])
    app.include_router(router, tags=["readings"])
    return app

app = create_app()
