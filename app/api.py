"""HTTP route definitions for the service."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Path, Query, Response, status

from app.auth import get_current_identity
from app.schemas import MAX_STORED_INT, MIN_STORED_INT, PowerReadingDto
from models.records import ReadingFilter
from services.readings import (
    PowerReadingService,
    ReadingValidationError,
    build_default_service,
)

router = APIRouter(dependencies=[Depends(get_current_identity)])
health_router = APIRouter()


def get_service() -> PowerReadingService:
    return build_default_service()


def get_reading_filter(
    start_date: Optional[datetime] = Query(
        default=None, alias="startDate", description="Inclusive lower bound on loggedAt."
    ),
    end_date: Optional[datetime] = Query(
        default=None, alias="endDate", description="Inclusive upper bound on loggedAt."
    ),
    min_value: Optional[int] = Query(
        default=None,
        alias="minValue",
        ge=MIN_STORED_INT,
        le=MAX_STORED_INT,
        description="Inclusive lower bound on value.",
    ),
    max_value: Optional[int] = Query(
        default=None,
        alias="maxValue",
        ge=MIN_STORED_INT,
        le=MAX_STORED_INT,
        description="Inclusive upper bound on value.",
    ),
) -> ReadingFilter:
    return ReadingFilter(
        start_date=start_date,
        end_date=end_date,
        min_value=min_value,
        max_value=max_value,
    )


def _not_found(reading_id: int) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Power reading {reading_id} not found.",
    )


@health_router.get(
    "/health",
    summary="Health check endpoint.",
    status_code=status.HTTP_200_OK,
)
def healthcheck() -> dict[str, str]:
    return {"status": "ok"}


@router.get(
    "/",
    response_model=List[PowerReadingDto],
    summary="List power readings matching the optional filter.",
)
def list_readings(
    reading_filter: ReadingFilter = Depends(get_reading_filter),
    service: PowerReadingService = Depends(get_service),
) -> List[PowerReadingDto]:
    return service.list_readings(reading_filter)


@router.get(
    "/{reading_id}",
    response_model=PowerReadingDto,
    summary="Fetch a single power reading.",
)
def get_reading(
    reading_id: int = Path(..., ge=MIN_STORED_INT, le=MAX_STORED_INT),
    service: PowerReadingService = Depends(get_service),
) -> PowerReadingDto:
    reading = service.get_reading(reading_id)
    if reading is None:
        raise _not_found(reading_id)
    return reading


@router.post(
    "/",
    status_code=status.HTTP_201_CREATED,
    response_model=List[PowerReadingDto],
    summary="Create one or more power readings.",
)
def create_readings(
    readings: Optional[List[PowerReadingDto]] = Body(
        default=None, description="Readings to create; ids are assigned by the store."
    ),
    service: PowerReadingService = Depends(get_service),
) -> List[PowerReadingDto]:
    try:
        return service.create_readings(readings)
    except ReadingValidationError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc


@router.put(
    "/{reading_id}",
    response_model=PowerReadingDto,
    summary="Replace the value and timestamp of a power reading.",
)
def update_reading(
    reading: PowerReadingDto,
    reading_id: int = Path(..., ge=MIN_STORED_INT, le=MAX_STORED_INT),
    service: PowerReadingService = Depends(get_service),
) -> PowerReadingDto:
    if reading.id != reading_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Path id {reading_id} does not match body id {reading.id}.",
        )
    updated = service.update_reading(reading)
    if updated is None:
        raise _not_found(reading_id)
    return updated


@router.delete(
    "/{reading_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a power reading.",
)
def delete_reading(
    reading_id: int = Path(..., ge=MIN_STORED_INT, le=MAX_STORED_INT),
    service: PowerReadingService = Depends(get_service),
) -> Response:
    if not service.delete_reading(reading_id):
        raise _not_found(reading_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
