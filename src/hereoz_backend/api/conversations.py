"""Conversation and messaging API endpoints."""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
import structlog

from hereoz_backend.auth.dependencies import get_current_user
from hereoz_backend.auth.models import User
from hereoz_backend.core.database import get_db
from hereoz_backend.schemas.common import Envelope, PageParams
from hereoz_backend.schemas.conversation import (
    ConversationCreate,
    ConversationResponse,
    ConversationSummary,
    MessageCreate,
    MessageResponse,
)
from hereoz_backend.services.conversation_service import ConversationService
from .common import page_params, paginated

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/conversations", tags=["conversations"])


@router.get("", response_model=Envelope[List[ConversationSummary]])
def list_conversations(
    params: PageParams = Depends(page_params),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    items, total = ConversationService().list_conversations(db, current_user, params.skip, params.limit)
    summaries = [
        ConversationSummary(
            **ConversationResponse.model_validate(item["conversation"]).model_dump(),
            last_message=MessageResponse.model_validate(item["last_message"]) if item["last_message"] else None,
            unread_count=item["unread_count"],
        )
        for item in items
    ]
    return paginated(summaries, total, params)


@router.post("", response_model=Envelope[ConversationResponse], status_code=status.HTTP_201_CREATED)
def open_conversation(
    data: ConversationCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    conversation = ConversationService().get_or_create(db, current_user, data.participant_id, data.offer_id)
    return {"data": conversation}


@router.get("/{conversation_id}/messages", response_model=Envelope[List[MessageResponse]])
def get_messages(
    conversation_id: UUID,
    page: int = Query(1, ge=1),
    limit: int = Query(50, ge=1, le=100),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    params = PageParams(page=page, limit=limit)
    messages, total = ConversationService().get_messages(
        db, conversation_id, current_user, skip=params.skip, limit=params.limit
    )
    return paginated(messages, total, params)


@router.post(
    "/{conversation_id}/messages",
    response_model=Envelope[MessageResponse],
    status_code=status.HTTP_201_CREATED
)
def send_message(
    conversation_id: UUID,
    data: MessageCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    message = ConversationService().send_message(db, conversation_id, current_user, data)
    return {"data": message, "message": "Message sent"}


@router.put("/{conversation_id}/read", response_model=Envelope[dict])
def mark_read(
    conversation_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    count = ConversationService().mark_as_read(db, conversation_id, current_user)
    return {"data": {"marked_read": count}}


@router.put("/{conversation_id}/archive", response_model=Envelope[ConversationResponse])
def archive_conversation(
    conversation_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    conversation = ConversationService().archive(db, conversation_id, current_user)
    return {"data": conversation, "message": "Conversation archived"}
