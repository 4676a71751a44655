"""Conversation and message models."""

from datetime import datetime
from enum import Enum
from uuid import uuid4

from sqlalchemy import Column, String, DateTime, ForeignKey, Boolean, Text, CheckConstraint, UniqueConstraint
from sqlalchemy.orm import relationship

from hereoz_backend.core.base import Base
from hereoz_backend.core.custom_types import GUID


class ConversationStatus(str, Enum):
    OPEN = "open"
    CLOSED = "closed"
    ARCHIVED = "archived"


class MessageKind(str, Enum):
    TEXT = "text"
    FILE = "file"
    VIDEO = "video"


class Conversation(Base):
    """Thread between a candidate and a recruiter, optionally about an offer."""

    __tablename__ = "conversations"
    __table_args__ = (
        UniqueConstraint("candidate_id", "recruiter_id", "offer_id", name="uq_conversations_participants_offer"),
        CheckConstraint("status IN ('open', 'closed', 'archived')", name="ck_conversations_status"),
    )

    id = Column(GUID(), primary_key=True, default=uuid4)
    candidate_id = Column(GUID(), ForeignKey("users.id"), nullable=False, index=True)
    recruiter_id = Column(GUID(), ForeignKey("users.id"), nullable=False, index=True)
    offer_id = Column(GUID(), ForeignKey("offers.id"), nullable=True)
    status = Column(String(20), default=ConversationStatus.OPEN.value, nullable=False)
    last_activity_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    # Relationships
    candidate = relationship("User", foreign_keys=[candidate_id])
    recruiter = relationship("User", foreign_keys=[recruiter_id])
    messages = relationship(
        "Message",
        back_populates="conversation",
        cascade="all, delete-orphan",
        order_by="Message.created_at",
    )

    def __repr__(self) -> str:
        return f"<Conversation(id={self.id}, candidate_id={self.candidate_id}, recruiter_id={self.recruiter_id})>"

    def has_participant(self, user_id) -> bool:
        return user_id in (self.candidate_id, self.recruiter_id)


class Message(Base):
    """Message posted in a conversation."""

    __tablename__ = "messages"
    __table_args__ = (
        CheckConstraint("kind IN ('text', 'file', 'video')", name="ck_messages_kind"),
    )

    id = Column(GUID(), primary_key=True, default=uuid4)
    conversation_id = Column(GUID(), ForeignKey("conversations.id"), nullable=False, index=True)
    sender_id = Column(GUID(), ForeignKey("users.id"), nullable=False)
    content = Column(Text, nullable=False)
    kind = Column(String(20), default=MessageKind.TEXT.value, nullable=False)
    attachment_url = Column(String(500), nullable=True)
    is_read = Column(Boolean, default=False, nullable=False)
    read_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    # Relationships
    conversation = relationship("Conversation", back_populates="messages")

    def __repr__(self) -> str:
        return f"<Message(id={self.id}, conversation_id={self.conversation_id}, sender_id={self.sender_id})>"
