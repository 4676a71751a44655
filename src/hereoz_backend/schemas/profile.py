"""Pydantic schemas for candidate profile sections and the public profile."""

from datetime import date, datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field, validator

from hereoz_backend.models.profile import EducationLevel


def _check_date_order(end_date, values):
    start_date = values.get('start_date')
    if end_date is not None and start_date is not None and end_date < start_date:
        raise ValueError('end_date must be on or after start_date')
    return end_date


class ExperienceCreate(BaseModel):
    """A position to add to the caller's profile; no end_date means current."""

    title: str = Field(..., min_length=1, max_length=255)
    company_name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = Field(None, max_length=5000)
    start_date: date
    end_date: Optional[date] = None

    @validator('end_date')
    def validate_end_date(cls, v, values):
        return _check_date_order(v, values)


class ExperienceUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    company_name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = Field(None, max_length=5000)
    start_date: Optional[date] = None
    end_date: Optional[date] = None

    @validator('title', 'company_name', 'start_date', pre=True)
    def reject_null(cls, v):
        if v is None:
            raise ValueError('may be omitted but not set to null')
        return v

    @validator('end_date')
    def validate_end_date(cls, v, values):
        return _check_date_order(v, values)


class ExperienceResponse(BaseModel):
    id: UUID
    title: str
    company_name: str
    description: Optional[str] = None
    start_date: date
    end_date: Optional[date] = None
    created_at: datetime

    class Config:
        from_attributes = True


class EducationCreate(BaseModel):
    degree: str = Field(..., min_length=1, max_length=255)
    school: str = Field(..., min_length=1, max_length=255)
    level: Optional[EducationLevel] = None
    field_of_study: Optional[str] = Field(None, max_length=255)
    description: Optional[str] = Field(None, max_length=5000)
    start_date: date
    end_date: Optional[date] = None
    obtained: bool = False

    @validator('end_date')
    def validate_end_date(cls, v, values):
        return _check_date_order(v, values)


class EducationResponse(BaseModel):
    id: UUID
    degree: str
    school: str
    level: Optional[str] = None
    field_of_study: Optional[str] = None
    description: Optional[str] = None
    start_date: date
    end_date: Optional[date] = None
    obtained: bool
    created_at: datetime

    class Config:
        from_attributes = True


class PublicProfileResponse(BaseModel):
    """What another signed-in user can see of a profile; no contact details."""

    id: UUID
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    role: str
    company_id: Optional[UUID] = None
    headline: Optional[str] = None
    skills: List[str] = []
    languages: List[str] = []
    experience_years: Optional[int] = None
    bio: Optional[str] = None
    experiences: List[ExperienceResponse] = []
    educations: List[EducationResponse] = []

    class Config:
        from_attributes = True
