"""Pydantic schemas for availability slots and dashboard statistics."""

import re
from datetime import date, datetime
from typing import Optional, Dict
from uuid import UUID

from pydantic import BaseModel, Field, validator

from hereoz_backend.models.availability import Recurrence

TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


class AvailabilityCreate(BaseModel):
    """Schema for creating an availability slot."""

    weekday: int = Field(..., ge=0, le=6, description="0 = Sunday")
    start_time: str = Field(..., description="HH:MM")
    end_time: str = Field(..., description="HH:MM")
    recurrence: Recurrence = Field(default=Recurrence.WEEKLY)
    specific_date: Optional[date] = None
    timezone: str = Field(default="Europe/Paris", max_length=64)

    @validator('start_time', 'end_time')
    def validate_time_format(cls, v):
        if not TIME_PATTERN.match(v):
            raise ValueError('Time must use the HH:MM format')
        return v

    @validator('end_time')
    def validate_time_order(cls, v, values):
        start = values.get('start_time')
        # zero-padded HH:MM compares correctly as text
        if start is not None and v <= start:
            raise ValueError('end_time must be after start_time')
        return v

    @validator('specific_date', always=True)
    def validate_specific_date(cls, v, values):
        if values.get('recurrence') == Recurrence.ONCE and v is None:
            raise ValueError('specific_date is required for one-off slots')
        return v


class AvailabilityResponse(BaseModel):
    id: UUID
    user_id: UUID
    weekday: int
    start_time: str
    end_time: str
    recurrence: str
    specific_date: Optional[date] = None
    timezone: str
    is_active: bool
    created_at: datetime

    class Config:
        from_attributes = True


class CandidateStats(BaseModel):
    applications_by_status: Dict[str, int]
    swipes_by_action: Dict[str, int]
    upcoming_interviews: int


class RecruiterStats(BaseModel):
    offers_by_status: Dict[str, int]
    applications_by_status: Dict[str, int]
    total_views: int


class OfferStats(BaseModel):
    offer_id: UUID
    views: int
    favorites: int
    applications_by_status: Dict[str, int]
