"""Application model linking candidates to offers."""

from datetime import datetime
from enum import Enum
from uuid import uuid4

from sqlalchemy import Column, String, DateTime, ForeignKey, Integer, Text, CheckConstraint, UniqueConstraint
from sqlalchemy.orm import relationship

from hereoz_backend.core.base import Base
from hereoz_backend.core.custom_types import GUID


class ApplicationStatus(str, Enum):
    """Closed set of application statuses."""
    NEW = "new"
    VIEWED = "viewed"
    CONTACTED = "contacted"
    INTERVIEW = "interview"
    OFFER = "offer"
    ACCEPTED = "accepted"
    HIRED = "hired"
    REJECTED = "rejected"


class Application(Base):
    """A candidate's application to an offer, tracked through the review pipeline."""

    __tablename__ = "applications"
    __table_args__ = (
        UniqueConstraint("candidate_id", "offer_id", name="uq_applications_candidate_offer"),
        CheckConstraint(
            "status IN ('new', 'viewed', 'contacted', 'interview', 'offer', 'accepted', 'hired', 'rejected')",
            name="ck_applications_status",
        ),
        CheckConstraint(
            "matching_score IS NULL OR (matching_score >= 0 AND matching_score <= 100)",
            name="ck_applications_matching_score",
        ),
    )

    id = Column(GUID(), primary_key=True, default=uuid4)
    candidate_id = Column(GUID(), ForeignKey("users.id"), nullable=False, index=True)
    offer_id = Column(GUID(), ForeignKey("offers.id"), nullable=False, index=True)
    status = Column(String(20), default=ApplicationStatus.NEW.value, nullable=False, index=True)
    applied_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    status_updated_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    cover_message = Column(Text, nullable=True)
    recruiter_notes = Column(Text, nullable=True)
    rejection_reason = Column(Text, nullable=True)
    matching_score = Column(Integer, nullable=True)
    conversation_id = Column(GUID(), ForeignKey("conversations.id"), nullable=True)
    withdrawn_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    # Relationships
    candidate = relationship("User")
    offer = relationship("Offer", back_populates="applications")
    interviews = relationship("Interview", back_populates="application", cascade="all, delete-orphan")

    def __repr__(self) -> str:
        return f"<Application(id={self.id}, candidate_id={self.candidate_id}, offer_id={self.offer_id}, status='{self.status}')>"
