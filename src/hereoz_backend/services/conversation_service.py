"""Conversation and messaging service."""

from datetime import datetime
from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy.orm import Session
import structlog

from hereoz_backend.auth.models import User, UserRole
from hereoz_backend.core.error_handling import AuthorizationError, ConflictError, NotFoundError, ValidationError
from hereoz_backend.models.conversation import Conversation, ConversationStatus, Message
from hereoz_backend.repositories.conversation import ConversationRepository, MessageRepository
from hereoz_backend.repositories.user import UserRepository
from hereoz_backend.schemas.conversation import MessageCreate

logger = structlog.get_logger(__name__)


class ConversationService:
    """Service for conversations between candidates and recruiters."""

    def __init__(self):
        self.repository = ConversationRepository()
        self.message_repository = MessageRepository()
        self.user_repository = UserRepository()

    def get_or_create(
        self,
        db: Session,
        user: User,
        participant_id: UUID,
        offer_id: Optional[UUID] = None
    ) -> Conversation:
        """Find the conversation between two users about an offer, creating it if needed.

        The candidate side is decided from the participants' roles.

        Raises:
            NotFoundError: If the other participant does not exist
            ValidationError: If the pair is not one candidate and one recruiter
        """
        other = self.user_repository.get_by_id(db, participant_id)
        if not other or not other.is_active:
            raise NotFoundError("User", participant_id)
        if other.id == user.id:
            raise ValidationError("Cannot start a conversation with yourself", field="participant_id")

        if user.is_candidate and not other.is_candidate:
            candidate, recruiter = user, other
        elif other.is_candidate and not user.is_candidate:
            candidate, recruiter = other, user
        else:
            raise ValidationError(
                "A conversation needs one candidate and one recruiter",
                field="participant_id"
            )

        conversation = self.repository.get_by_participants(db, candidate.id, recruiter.id, offer_id)
        if conversation:
            return conversation

        try:
            conversation = self.repository.create(
                db,
                candidate_id=candidate.id,
                recruiter_id=recruiter.id,
                offer_id=offer_id,
                status=ConversationStatus.OPEN.value,
                last_activity_at=datetime.utcnow(),
            )
        except ConflictError:
            # lost a race against the unique constraint
            existing = self.repository.get_by_participants(db, candidate.id, recruiter.id, offer_id)
            if existing is None:
                raise
            return existing

        logger.info(
            "Conversation created",
            conversation_id=str(conversation.id),
            candidate_id=str(candidate.id),
            recruiter_id=str(recruiter.id)
        )
        return conversation

    def get_for_participant(self, db: Session, conversation_id: UUID, user: User) -> Conversation:
        conversation = self.repository.get_or_raise(db, conversation_id)
        if not conversation.has_participant(user.id) and user.role != UserRole.PLATFORM_ADMIN.value:
            raise AuthorizationError("You are not a participant of this conversation")
        return conversation

    def list_conversations(
        self,
        db: Session,
        user: User,
        skip: int = 0,
        limit: int = 10
    ) -> Tuple[List[dict], int]:
        """Non-archived conversations of the user with last message and unread count."""
        conversations, total = self.repository.paginate(self.repository.for_user_query(db, user.id), skip, limit)
        items = []
        for conversation in conversations:
            items.append({
                "conversation": conversation,
                "last_message": self.repository.last_message(db, conversation.id),
                "unread_count": self.repository.unread_count(db, conversation.id, user.id),
            })
        return items, total

    def send_message(self, db: Session, conversation_id: UUID, sender: User, message_data: MessageCreate) -> Message:
        """Post a message; only participants may write into an open conversation."""
        conversation = self.get_for_participant(db, conversation_id, sender)
        if not conversation.has_participant(sender.id):
            raise AuthorizationError("You are not a participant of this conversation")
        if conversation.status != ConversationStatus.OPEN.value:
            raise ValidationError(f"Conversation is {conversation.status}", field="conversation_id")

        try:
            now = datetime.utcnow()
            message = self.message_repository.add(
                db,
                conversation_id=conversation.id,
                sender_id=sender.id,
                content=message_data.content,
                kind=message_data.kind.value,
                attachment_url=message_data.attachment_url,
                created_at=now,
            )
            conversation.last_activity_at = now
            db.commit()
            db.refresh(message)

            logger.info("Message sent", conversation_id=str(conversation.id), sender_id=str(sender.id))
            return message

        except Exception:
            db.rollback()
            raise

    def get_messages(
        self,
        db: Session,
        conversation_id: UUID,
        user: User,
        skip: int = 0,
        limit: int = 50
    ) -> Tuple[List[Message], int]:
        """Messages oldest first."""
        conversation = self.get_for_participant(db, conversation_id, user)
        return self.repository.paginate(self.repository.messages_query(db, conversation.id), skip, limit)

    def mark_as_read(self, db: Session, conversation_id: UUID, user: User) -> int:
        """Flag every message from the other party as read. Returns how many changed."""
        conversation = self.get_for_participant(db, conversation_id, user)
        unread = self.repository.unread_messages_for(db, conversation.id, user.id)

        now = datetime.utcnow()
        for message in unread:
            message.is_read = True
            message.read_at = now
        db.commit()

        logger.debug("Messages marked as read", conversation_id=str(conversation.id), count=len(unread))
        return len(unread)

    def archive(self, db: Session, conversation_id: UUID, user: User) -> Conversation:
        conversation = self.get_for_participant(db, conversation_id, user)
        if not conversation.has_participant(user.id):
            raise AuthorizationError("Only participants can archive a conversation")

        conversation.status = ConversationStatus.ARCHIVED.value
        db.commit()
        db.refresh(conversation)

        logger.info("Conversation archived", conversation_id=str(conversation.id), user_id=str(user.id))
        return conversation
