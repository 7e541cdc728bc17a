"""Pydantic schemas for energy mix and charging window data."""
from datetime import date, datetime
from typing import Dict

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base schema serialized with camelCase field names."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class DailyMixResponse(CamelModel):
    """Average generation mix for one UTC day."""

    date: date
    mix: Dict[str, float]  # {"gas": 20.5, "wind": 31.2, ...}
    clean_percentage: float = Field(ge=0, le=100)


class ChargingWindowResponse(CamelModel):
    """Optimal charging window."""

    start: datetime
    end: datetime
    clean_energy_share: float = Field(ge=0, le=100)


class ErrorResponse(CamelModel):
    """Standard error body for API failures."""

    timestamp: datetime
    status: int
    error: str
    message: str
