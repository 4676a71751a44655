"""User model and authentication schemas."""

from datetime import datetime
from enum import Enum
from typing import Optional
from uuid import UUID, uuid4

from pydantic import BaseModel
from sqlalchemy import Column, String, DateTime, Boolean, ForeignKey, Integer, Text, CheckConstraint
from sqlalchemy.orm import relationship

from hereoz_backend.core.base import Base
from hereoz_backend.core.custom_types import GUID, StringList


class UserRole(str, Enum):
    """Roles a Hereoz account can hold."""
    CANDIDATE = "candidate"
    RECRUITER = "recruiter"
    COMPANY_ADMIN = "company_admin"
    PLATFORM_ADMIN = "platform_admin"


class User(Base):
    """User account; candidates also carry their matching profile here."""

    __tablename__ = "users"
    __table_args__ = (
        CheckConstraint(
            "role IN ('candidate', 'recruiter', 'company_admin', 'platform_admin')",
            name="ck_users_role",
        ),
    )

    id = Column(GUID(), primary_key=True, default=uuid4)
    email = Column(String(255), unique=True, nullable=False, index=True)
    hashed_password = Column(String(255), nullable=False)
    first_name = Column(String(100), nullable=True)
    last_name = Column(String(100), nullable=True)
    phone = Column(String(50), nullable=True)
    role = Column(String(30), default=UserRole.CANDIDATE.value, nullable=False)
    company_id = Column(GUID(), ForeignKey("companies.id"), nullable=True)

    # Candidate profile
    headline = Column(String(255), nullable=True)
    address = Column(String(255), nullable=True)
    skills = Column(StringList, nullable=True)
    languages = Column(StringList, nullable=True)
    experience_years = Column(Integer, nullable=True)
    bio = Column(Text, nullable=True)

    # Account state
    is_active = Column(Boolean, default=True, nullable=False)
    suspended_at = Column(DateTime, nullable=True)
    suspension_reason = Column(String(1000), nullable=True)
    email_verified = Column(Boolean, default=False, nullable=False)
    verification_token = Column(String(128), nullable=True, index=True)
    verification_token_expires_at = Column(DateTime, nullable=True)
    reset_token = Column(String(128), nullable=True, index=True)
    reset_token_expires_at = Column(DateTime, nullable=True)
    last_login_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    # Relationships
    company = relationship("Company", back_populates="users")

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email='{self.email}', role='{self.role}')>"

    @property
    def full_name(self) -> str:
        return " ".join(part for part in (self.first_name, self.last_name) if part) or self.email

    @property
    def is_candidate(self) -> bool:
        return self.role == UserRole.CANDIDATE.value


class TokenData(BaseModel):
    """Decoded JWT payload."""
    user_id: Optional[UUID] = None
    role: Optional[str] = None
    token_type: Optional[str] = None
