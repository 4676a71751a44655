"""Pydantic schemas for swipe events."""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field, validator

from hereoz_backend.models.swipe_event import SwipeAction
from .application import ApplicationResponse


class SwipeCreate(BaseModel):
    """Schema for recording a swipe."""

    offer_id: UUID = Field(..., description="Offer being swiped")
    action: SwipeAction = Field(..., description="right, left or favorite")
    rejection_reason: Optional[str] = Field(None, max_length=1000)
    matching_score: Optional[int] = Field(None, description="Score between 0 and 100")

    @validator('matching_score')
    def validate_matching_score(cls, v):
        """Out-of-range scores are rejected, never clamped."""
        if v is not None and not 0 <= v <= 100:
            raise ValueError('matching_score must be between 0 and 100')
        return v

    @validator('rejection_reason')
    def strip_rejection_reason(cls, v):
        if v is not None:
            v = v.strip() or None
        return v


class SwipeResponse(BaseModel):
    id: UUID
    user_id: UUID
    offer_id: UUID
    action: str
    rejection_reason: Optional[str] = None
    matching_score: Optional[int] = None
    created_at: datetime

    class Config:
        from_attributes = True


class SwipeResult(BaseModel):
    """Swipe outcome; `application` is set only for a right swipe."""

    swipe: SwipeResponse
    application: Optional[ApplicationResponse] = None
