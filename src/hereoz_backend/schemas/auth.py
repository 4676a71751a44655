"""Pydantic schemas for authentication and user profiles."""

from datetime import datetime
from typing import Optional, List
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field, validator

from hereoz_backend.auth.models import UserRole
from hereoz_backend.core.custom_types import clean_string_list


class RegisterRequest(BaseModel):
    """Schema for account registration."""

    email: EmailStr
    password: str = Field(..., min_length=8, max_length=128)
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    phone: Optional[str] = Field(None, max_length=50)
    role: UserRole = Field(default=UserRole.CANDIDATE)

    @validator('email')
    def normalize_email(cls, v):
        return v.lower()

    @validator('role')
    def validate_role(cls, v):
        """Platform admins are never self-registered."""
        if v == UserRole.PLATFORM_ADMIN:
            raise ValueError('Role platform_admin cannot be self-registered')
        return v


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)

    @validator('email')
    def normalize_email(cls, v):
        return v.lower()


class RefreshRequest(BaseModel):
    refresh_token: str = Field(..., min_length=1)


class ForgotPasswordRequest(BaseModel):
    email: EmailStr


class ResetPasswordRequest(BaseModel):
    token: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=8, max_length=128)


class UserResponse(BaseModel):
    """Schema for user response."""

    id: UUID
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone: Optional[str] = None
    role: str
    company_id: Optional[UUID] = None
    headline: Optional[str] = None
    address: Optional[str] = None
    skills: Optional[List[str]] = None
    languages: Optional[List[str]] = None
    experience_years: Optional[int] = None
    bio: Optional[str] = None
    is_active: bool
    email_verified: bool
    last_login_at: Optional[datetime] = None
    created_at: datetime

    class Config:
        from_attributes = True


class ProfileUpdate(BaseModel):
    """Schema for updating the caller's own profile."""

    first_name: Optional[str] = Field(None, min_length=1, max_length=100)
    last_name: Optional[str] = Field(None, min_length=1, max_length=100)
    phone: Optional[str] = Field(None, max_length=50)
    headline: Optional[str] = Field(None, max_length=255)
    address: Optional[str] = Field(None, max_length=255)
    skills: Optional[List[str]] = None
    languages: Optional[List[str]] = None
    experience_years: Optional[int] = Field(None, ge=0, le=70)
    bio: Optional[str] = None

    @validator('skills', 'languages')
    def validate_lists(cls, v):
        """Strip blanks and drop case-insensitive duplicates."""
        return clean_string_list(v)


class LoginResponse(BaseModel):
    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    expires_in: int
    user: UserResponse
