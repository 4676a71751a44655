"""Interview model."""

from datetime import datetime
from enum import Enum
from uuid import uuid4

from sqlalchemy import Column, String, DateTime, ForeignKey, Integer, Text, CheckConstraint
from sqlalchemy.orm import relationship

from hereoz_backend.core.base import Base
from hereoz_backend.core.custom_types import GUID


class InterviewMode(str, Enum):
    VIDEO = "video"
    ONSITE = "onsite"


class InterviewStatus(str, Enum):
    PLANNED = "planned"
    CONFIRMED = "confirmed"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class Interview(Base):
    """Interview scheduled against an application."""

    __tablename__ = "interviews"
    __table_args__ = (
        CheckConstraint("mode IN ('video', 'onsite')", name="ck_interviews_mode"),
        CheckConstraint(
            "status IN ('planned', 'confirmed', 'completed', 'cancelled')",
            name="ck_interviews_status",
        ),
        CheckConstraint(
            "duration_minutes >= 5 AND duration_minutes <= 480",
            name="ck_interviews_duration",
        ),
    )

    id = Column(GUID(), primary_key=True, default=uuid4)
    application_id = Column(GUID(), ForeignKey("applications.id"), nullable=False, index=True)
    scheduled_at = Column(DateTime, nullable=False, index=True)
    duration_minutes = Column(Integer, default=30, nullable=False)
    mode = Column(String(20), default=InterviewMode.VIDEO.value, nullable=False)
    status = Column(String(20), default=InterviewStatus.PLANNED.value, nullable=False)
    video_link = Column(String(500), nullable=True)
    location = Column(String(255), nullable=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    # Relationships
    application = relationship("Application", back_populates="interviews")

    def __repr__(self) -> str:
        return f"<Interview(id={self.id}, application_id={self.application_id}, status='{self.status}')>"
