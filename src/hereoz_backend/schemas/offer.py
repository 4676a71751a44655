"""Pydantic schemas for Offer model."""

from datetime import datetime
from typing import Optional, List
from uuid import UUID

from pydantic import BaseModel, Field, validator

from hereoz_backend.models.offer import ContractType, RemoteMode
from hereoz_backend.core.custom_types import clean_string_list


class OfferBase(BaseModel):
    """Fields shared by offer creation and responses."""

    title: str = Field(..., min_length=1, max_length=255, description="Job title")
    description: str = Field(..., min_length=1, description="Job description")
    location: Optional[str] = Field(None, max_length=255)
    contract_type: ContractType = Field(default=ContractType.PERMANENT)
    remote_mode: RemoteMode = Field(default=RemoteMode.ONSITE)
    salary_min: Optional[int] = Field(None, ge=0)
    salary_max: Optional[int] = Field(None, ge=0)
    required_skills: Optional[List[str]] = None
    required_languages: Optional[List[str]] = None
    required_experience_years: Optional[int] = Field(None, ge=0, le=70)
    is_urgent: bool = False
    expires_at: Optional[datetime] = None

    @validator('salary_max')
    def validate_salary_range(cls, v, values):
        """Maximum salary may not be lower than the minimum."""
        salary_min = values.get('salary_min')
        if v is not None and salary_min is not None and v < salary_min:
            raise ValueError('salary_max must be greater than or equal to salary_min')
        return v

    @validator('required_skills', 'required_languages')
    def validate_lists(cls, v):
        return clean_string_list(v)


class OfferCreate(OfferBase):
    """Schema for posting a new offer."""
    pass


class OfferUpdate(BaseModel):
    """Schema for updating an offer; omitted fields stay unchanged."""

    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = Field(None, min_length=1)
    location: Optional[str] = Field(None, max_length=255)
    contract_type: Optional[ContractType] = None
    remote_mode: Optional[RemoteMode] = None
    salary_min: Optional[int] = Field(None, ge=0)
    salary_max: Optional[int] = Field(None, ge=0)
    required_skills: Optional[List[str]] = None
    required_languages: Optional[List[str]] = None
    required_experience_years: Optional[int] = Field(None, ge=0, le=70)
    is_urgent: Optional[bool] = None
    expires_at: Optional[datetime] = None

    @validator('title', 'description', 'contract_type', 'remote_mode', 'is_urgent', pre=True)
    def reject_null(cls, v):
        if v is None:
            raise ValueError('may be omitted but not set to null')
        return v

    @validator('salary_max')
    def validate_salary_range(cls, v, values):
        salary_min = values.get('salary_min')
        if v is not None and salary_min is not None and v < salary_min:
            raise ValueError('salary_max must be greater than or equal to salary_min')
        return v

    @validator('required_skills', 'required_languages')
    def validate_lists(cls, v):
        return clean_string_list(v)


class OfferResponse(BaseModel):
    """Schema for offer response."""

    id: UUID
    company_id: UUID
    recruiter_id: UUID
    title: str
    description: str
    location: Optional[str] = None
    contract_type: str
    remote_mode: str
    salary_min: Optional[int] = None
    salary_max: Optional[int] = None
    required_skills: Optional[List[str]] = None
    required_languages: Optional[List[str]] = None
    required_experience_years: Optional[int] = None
    is_urgent: bool
    status: str
    expires_at: Optional[datetime] = None
    view_count: int
    application_count: int
    favorite_count: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class ScoredOfferResponse(OfferResponse):
    """Offer as shown in the swipe feed, with the caller's matching score."""

    matching_score: int = Field(..., ge=0, le=100)
