"""Swipe event model recording a candidate's decision on an offer."""

from datetime import datetime
from enum import Enum
from uuid import uuid4

from sqlalchemy import Column, String, DateTime, ForeignKey, Integer, Text, CheckConstraint, UniqueConstraint
from sqlalchemy.orm import relationship

from hereoz_backend.core.base import Base
from hereoz_backend.core.custom_types import GUID


class SwipeAction(str, Enum):
    """Swipe gestures: right applies, left passes, favorite bookmarks."""
    RIGHT = "right"
    LEFT = "left"
    FAVORITE = "favorite"


class SwipeEvent(Base):
    """Immutable record of one swipe; at most one per (user, offer)."""

    __tablename__ = "swipe_events"
    __table_args__ = (
        UniqueConstraint("user_id", "offer_id", name="uq_swipe_events_user_offer"),
        CheckConstraint("action IN ('right', 'left', 'favorite')", name="ck_swipe_events_action"),
        CheckConstraint(
            "matching_score IS NULL OR (matching_score >= 0 AND matching_score <= 100)",
            name="ck_swipe_events_matching_score",
        ),
    )

    id = Column(GUID(), primary_key=True, default=uuid4)
    user_id = Column(GUID(), ForeignKey("users.id"), nullable=False, index=True)
    offer_id = Column(GUID(), ForeignKey("offers.id"), nullable=False, index=True)
    action = Column(String(20), nullable=False)
    rejection_reason = Column(Text, nullable=True)
    matching_score = Column(Integer, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    # Relationships
    user = relationship("User")
    offer = relationship("Offer")

    def __repr__(self) -> str:
        return f"<SwipeEvent(id={self.id}, user_id={self.user_id}, offer_id={self.offer_id}, action='{self.action}')>"
