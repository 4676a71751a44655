"""Transition log model for tracking application status changes."""

from datetime import datetime
from enum import Enum
from uuid import uuid4

from sqlalchemy import Column, String, DateTime, ForeignKey, Boolean, Text
from sqlalchemy.orm import relationship

from hereoz_backend.core.base import Base
from hereoz_backend.core.custom_types import GUID


class ActorType(str, Enum):
    """Actor types for status transitions."""
    USER = "USER"
    SYSTEM = "SYSTEM"


class ApplicationTransitionLog(Base):
    """One row per application status change."""

    __tablename__ = "application_transition_logs"

    id = Column(GUID(), primary_key=True, default=uuid4)
    application_id = Column(GUID(), ForeignKey("applications.id"), nullable=False, index=True)
    old_status = Column(String(20), nullable=False)
    new_status = Column(String(20), nullable=False)
    actor_id = Column(GUID(), nullable=True)  # null for system actions
    actor_type = Column(String(20), default=ActorType.SYSTEM.value, nullable=False)
    reason = Column(Text, nullable=False)
    is_terminal = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    # Relationships
    application = relationship("Application", backref="transitions")

    def __repr__(self) -> str:
        return f"<ApplicationTransitionLog(id={self.id}, application_id={self.application_id}, {self.old_status}->{self.new_status})>"
