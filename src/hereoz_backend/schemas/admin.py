"""Pydantic schemas for platform administration."""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, validator

from .auth import UserResponse


class ModerationAction(str, Enum):
    SUSPEND = "suspend"
    REACTIVATE = "reactivate"


class ModerationRequest(BaseModel):
    """Schema for suspending or reactivating an account."""

    action: ModerationAction
    reason: Optional[str] = Field(None, max_length=1000, description="Shown in the moderation record")

    @validator('reason', always=True)
    def validate_reason(cls, v, values):
        """Suspensions must say why."""
        if v is not None:
            v = v.strip() or None
        if values.get('action') == ModerationAction.SUSPEND and not v:
            raise ValueError('reason is required to suspend an account')
        return v


class AdminUserResponse(UserResponse):
    suspended_at: Optional[datetime] = None
    suspension_reason: Optional[str] = None


class UserActivity(BaseModel):
    applications: int
    offers: int
    messages: int
    swipes: int


class AdminUserDetails(BaseModel):
    user: AdminUserResponse
    activity: UserActivity


class UserCounts(BaseModel):
    total: int
    candidates: int
    recruiters: int
    suspended: int


class OfferCounts(BaseModel):
    total: int
    active: int
    applications: int
    conversion_rate: float = Field(..., description="Applications per hundred offers")


class PlatformStats(BaseModel):
    users: UserCounts
    companies: int
    offers: OfferCounts
