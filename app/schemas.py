"""Pydantic schemas for the HTTP API layer."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from models.records import as_utc

# Bounds of a signed 64-bit INTEGER column.
MIN_STORED_INT = -(2**63)
MAX_STORED_INT = 2**63 - 1


class PowerReadingDto(BaseModel):
    """Wire representation of a power reading."""

    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: Optional[int] = Field(
        default=None,
        ge=MIN_STORED_INT,
        le=MAX_STORED_INT,
        description="Store-assigned identifier; absent until created.",
    )
    value: int = Field(
        ..., ge=MIN_STORED_INT, le=MAX_STORED_INT, description="Measured power value."
    )
    logged_at: datetime = Field(
        ..., alias="loggedAt", description="Time the value was logged (UTC)."
    )

    @field_validator("logged_at")
    @classmethod
    def _normalize_logged_at(cls, value: datetime) -> datetime:
        return as_utc(value)
