"""Availability slot model."""

from datetime import datetime
from enum import Enum
from uuid import uuid4

from sqlalchemy import Column, String, DateTime, Date, ForeignKey, Boolean, Integer, CheckConstraint

from hereoz_backend.core.base import Base
from hereoz_backend.core.custom_types import GUID


class Recurrence(str, Enum):
    ONCE = "once"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


class AvailabilitySlot(Base):
    """A time window in which a user can be interviewed."""

    __tablename__ = "availability_slots"
    __table_args__ = (
        CheckConstraint("weekday >= 0 AND weekday <= 6", name="ck_availability_weekday"),
        CheckConstraint("recurrence IN ('once', 'weekly', 'monthly')", name="ck_availability_recurrence"),
    )

    id = Column(GUID(), primary_key=True, default=uuid4)
    user_id = Column(GUID(), ForeignKey("users.id"), nullable=False, index=True)
    weekday = Column(Integer, nullable=False)  # 0 = Sunday
    start_time = Column(String(5), nullable=False)  # HH:MM
    end_time = Column(String(5), nullable=False)
    recurrence = Column(String(20), default=Recurrence.WEEKLY.value, nullable=False)
    specific_date = Column(Date, nullable=True)
    timezone = Column(String(64), default="Europe/Paris", nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    def __repr__(self) -> str:
        return f"<AvailabilitySlot(id={self.id}, user_id={self.user_id}, weekday={self.weekday})>"
