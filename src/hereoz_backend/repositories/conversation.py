"""Conversation, message and availability repositories."""

from typing import Optional, List
from uuid import UUID

from sqlalchemy.orm import Session, Query
from sqlalchemy import or_

from hereoz_backend.models.availability import AvailabilitySlot
from hereoz_backend.models.conversation import Conversation, ConversationStatus, Message
from .base import BaseRepository


class ConversationRepository(BaseRepository[Conversation]):
    """Repository for Conversation model operations."""

    def __init__(self):
        super().__init__(Conversation)

    def get_by_participants(
        self,
        db: Session,
        candidate_id: UUID,
        recruiter_id: UUID,
        offer_id: Optional[UUID] = None
    ) -> Optional[Conversation]:
        query = db.query(Conversation).filter(
            Conversation.candidate_id == candidate_id,
            Conversation.recruiter_id == recruiter_id,
        )
        if offer_id is None:
            query = query.filter(Conversation.offer_id.is_(None))
        else:
            query = query.filter(Conversation.offer_id == offer_id)
        return query.first()

    def for_user_query(self, db: Session, user_id: UUID) -> Query:
        """Non-archived conversations of a user, most recently active first."""
        return (
            db.query(Conversation)
            .filter(
                or_(Conversation.candidate_id == user_id, Conversation.recruiter_id == user_id),
                Conversation.status != ConversationStatus.ARCHIVED.value,
            )
            .order_by(Conversation.last_activity_at.desc())
        )

    def last_message(self, db: Session, conversation_id: UUID) -> Optional[Message]:
        return (
            db.query(Message)
            .filter(Message.conversation_id == conversation_id)
            .order_by(Message.created_at.desc())
            .first()
        )

    def unread_count(self, db: Session, conversation_id: UUID, user_id: UUID) -> int:
        """Messages from the other party the user has not read yet."""
        return (
            db.query(Message)
            .filter(
                Message.conversation_id == conversation_id,
                Message.sender_id != user_id,
                Message.is_read.is_(False),
            )
            .count()
        )

    def messages_query(self, db: Session, conversation_id: UUID) -> Query:
        return (
            db.query(Message)
            .filter(Message.conversation_id == conversation_id)
            .order_by(Message.created_at.asc())
        )

    def unread_messages_for(self, db: Session, conversation_id: UUID, user_id: UUID) -> List[Message]:
        return (
            db.query(Message)
            .filter(
                Message.conversation_id == conversation_id,
                Message.sender_id != user_id,
                Message.is_read.is_(False),
            )
            .all()
        )


class MessageRepository(BaseRepository[Message]):
    def __init__(self):
        super().__init__(Message)


class AvailabilityRepository(BaseRepository[AvailabilitySlot]):
    """Repository for AvailabilitySlot model operations."""

    resource_name = "Availability slot"

    def __init__(self):
        super().__init__(AvailabilitySlot)

    def get_active_for_user(self, db: Session, user_id: UUID) -> List[AvailabilitySlot]:
        return (
            db.query(AvailabilitySlot)
            .filter(AvailabilitySlot.user_id == user_id, AvailabilitySlot.is_active.is_(True))
            .order_by(AvailabilitySlot.weekday.asc(), AvailabilitySlot.start_time.asc())
            .all()
        )
