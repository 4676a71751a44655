"""Job offer model."""

from datetime import datetime
from enum import Enum
from uuid import uuid4

from sqlalchemy import Column, String, DateTime, ForeignKey, Boolean, Text, Integer, CheckConstraint
from sqlalchemy.orm import relationship

from hereoz_backend.core.base import Base
from hereoz_backend.core.custom_types import GUID, StringList


class OfferStatus(str, Enum):
    ACTIVE = "active"
    CLOSED = "closed"
    FILLED = "filled"


class ContractType(str, Enum):
    PERMANENT = "permanent"
    FIXED_TERM = "fixed_term"
    INTERNSHIP = "internship"
    FREELANCE = "freelance"
    OTHER = "other"


class RemoteMode(str, Enum):
    ONSITE = "onsite"
    HYBRID = "hybrid"
    FULL_REMOTE = "full_remote"


class Offer(Base):
    """Job offer posted by a recruiter on behalf of a company."""

    __tablename__ = "offers"
    __table_args__ = (
        CheckConstraint("status IN ('active', 'closed', 'filled')", name="ck_offers_status"),
        CheckConstraint(
            "salary_min IS NULL OR salary_max IS NULL OR salary_max >= salary_min",
            name="ck_offers_salary_range",
        ),
    )

    id = Column(GUID(), primary_key=True, default=uuid4)
    company_id = Column(GUID(), ForeignKey("companies.id"), nullable=False, index=True)
    recruiter_id = Column(GUID(), ForeignKey("users.id"), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    location = Column(String(255), nullable=True)
    contract_type = Column(String(30), default=ContractType.PERMANENT.value, nullable=False)
    remote_mode = Column(String(30), default=RemoteMode.ONSITE.value, nullable=False)
    salary_min = Column(Integer, nullable=True)
    salary_max = Column(Integer, nullable=True)
    required_skills = Column(StringList, nullable=True)
    required_languages = Column(StringList, nullable=True)
    required_experience_years = Column(Integer, nullable=True)
    is_urgent = Column(Boolean, default=False, nullable=False)
    status = Column(String(20), default=OfferStatus.ACTIVE.value, nullable=False, index=True)
    expires_at = Column(DateTime, nullable=True)
    view_count = Column(Integer, default=0, nullable=False)
    application_count = Column(Integer, default=0, nullable=False)
    favorite_count = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    # Relationships
    company = relationship("Company", back_populates="offers")
    recruiter = relationship("User")
    applications = relationship("Application", back_populates="offer")

    def __repr__(self) -> str:
        return f"<Offer(id={self.id}, title='{self.title}', status='{self.status}')>"

    @property
    def is_open(self) -> bool:
        """Active and not past its expiry date."""
        if self.status != OfferStatus.ACTIVE.value:
            return False
        return self.expires_at is None or self.expires_at > datetime.utcnow()
