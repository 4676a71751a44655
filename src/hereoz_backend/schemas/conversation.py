"""Pydantic schemas for conversations and messages."""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field, validator

from hereoz_backend.models.conversation import MessageKind


class ConversationCreate(BaseModel):
    """Open (or reuse) a conversation with another user."""

    participant_id: UUID = Field(..., description="The other participant")
    offer_id: Optional[UUID] = None


class MessageCreate(BaseModel):
    content: str = Field(..., max_length=10000)
    kind: MessageKind = Field(default=MessageKind.TEXT)
    attachment_url: Optional[str] = Field(None, max_length=500)

    @validator('content')
    def validate_content(cls, v):
        v = v.strip()
        if not v:
            raise ValueError('Message content cannot be empty')
        return v


class MessageResponse(BaseModel):
    id: UUID
    conversation_id: UUID
    sender_id: UUID
    content: str
    kind: str
    attachment_url: Optional[str] = None
    is_read: bool
    read_at: Optional[datetime] = None
    created_at: datetime

    class Config:
        from_attributes = True


class ConversationResponse(BaseModel):
    id: UUID
    candidate_id: UUID
    recruiter_id: UUID
    offer_id: Optional[UUID] = None
    status: str
    last_activity_at: datetime
    created_at: datetime

    class Config:
        from_attributes = True


class ConversationSummary(ConversationResponse):
    """Conversation list item with the caller's unread count."""

    last_message: Optional[MessageResponse] = None
    unread_count: int = 0
