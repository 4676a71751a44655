"""Pydantic schemas for Application model."""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field, validator

from hereoz_backend.models.application import ApplicationStatus
from hereoz_backend.services.fsm_service import ApplicationFSM


class ApplicationCreate(BaseModel):
    """Schema for a direct apply."""

    offer_id: UUID = Field(..., description="Offer UUID")
    cover_message: Optional[str] = Field(None, max_length=5000, description="Message to the recruiter")


class ApplicationStatusUpdate(BaseModel):
    """Schema for a recruiter moving an application along the pipeline."""

    status: ApplicationStatus = Field(..., description="Target status")
    rejection_reason: Optional[str] = Field(None, max_length=1000, description="Reason shown to the candidate")
    recruiter_notes: Optional[str] = Field(None, max_length=5000)

    @validator('rejection_reason')
    def validate_rejection_reason(cls, v, values):
        """A rejection reason only makes sense on a rejection."""
        if v is not None and values.get('status') not in (None, ApplicationStatus.REJECTED):
            raise ValueError('rejection_reason is only allowed when status is rejected')
        return v


class ApplicationWithdraw(BaseModel):
    reason: Optional[str] = Field(None, max_length=1000)


class ApplicationResponse(BaseModel):
    """Schema for application response."""

    id: UUID
    candidate_id: UUID
    offer_id: UUID
    status: str
    progress_step: Optional[int] = Field(None, description="Candidate-facing step, -1 when rejected")
    applied_at: datetime
    status_updated_at: datetime
    cover_message: Optional[str] = None
    recruiter_notes: Optional[str] = None
    rejection_reason: Optional[str] = None
    matching_score: Optional[int] = None
    conversation_id: Optional[UUID] = None
    withdrawn_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime

    @validator('progress_step', always=True)
    def derive_progress_step(cls, v, values):
        status = values.get('status')
        return ApplicationFSM.progress_step(status) if status else v

    class Config:
        from_attributes = True


class TransitionLogResponse(BaseModel):
    id: UUID
    application_id: UUID
    old_status: str
    new_status: str
    actor_id: Optional[UUID] = None
    actor_type: str
    reason: str
    is_terminal: bool
    created_at: datetime

    class Config:
        from_attributes = True
