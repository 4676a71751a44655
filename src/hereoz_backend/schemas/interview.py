"""Pydantic schemas for Interview model."""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field, validator

from hereoz_backend.models.interview import InterviewMode


class InterviewCreate(BaseModel):
    """Schema for scheduling an interview."""

    application_id: UUID
    scheduled_at: datetime
    duration_minutes: int = Field(default=30, ge=5, le=480)
    mode: InterviewMode = Field(default=InterviewMode.VIDEO)
    location: Optional[str] = Field(None, max_length=255)
    notes: Optional[str] = Field(None, max_length=5000)

    @validator('location', always=True)
    def validate_location(cls, v, values):
        """Onsite interviews need a place to meet."""
        if values.get('mode') == InterviewMode.ONSITE and not (v and v.strip()):
            raise ValueError('location is required for onsite interviews')
        return v


class InterviewUpdate(BaseModel):
    scheduled_at: Optional[datetime] = None
    duration_minutes: Optional[int] = Field(None, ge=5, le=480)
    mode: Optional[InterviewMode] = None
    location: Optional[str] = Field(None, max_length=255)
    notes: Optional[str] = Field(None, max_length=5000)

    @validator('scheduled_at', 'duration_minutes', 'mode', pre=True)
    def reject_null(cls, v):
        """These fields may be left out but never cleared."""
        if v is None:
            raise ValueError('may be omitted but not set to null')
        return v


class InterviewCancel(BaseModel):
    reason: str = Field(..., min_length=1, max_length=1000)


class InterviewResponse(BaseModel):
    id: UUID
    application_id: UUID
    scheduled_at: datetime
    duration_minutes: int
    mode: str
    status: str
    video_link: Optional[str] = None
    location: Optional[str] = None
    notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
