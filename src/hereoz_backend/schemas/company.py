"""Pydantic schemas for Company model."""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field, validator


class CompanyCreate(BaseModel):
    """Schema for creating a new company."""

    name: str = Field(..., min_length=1, max_length=255, description="Company name")
    email_domain: Optional[str] = Field(None, max_length=255, description="Email domain used to attach recruiters")
    description: Optional[str] = None
    website: Optional[str] = Field(None, max_length=255)

    @validator('email_domain')
    def validate_email_domain(cls, v):
        """Validate email domain format."""
        if v is not None:
            v = v.strip().lower().lstrip('@')
            if '.' not in v or ' ' in v:
                raise ValueError('Invalid email domain format')
        return v


class CompanyResponse(BaseModel):
    id: UUID
    name: str
    email_domain: Optional[str] = None
    description: Optional[str] = None
    website: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True
