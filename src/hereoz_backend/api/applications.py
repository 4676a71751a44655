"""Application management API endpoints."""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
import structlog

from hereoz_backend.auth.dependencies import get_current_user, require_candidate, require_staff
from hereoz_backend.auth.models import User
from hereoz_backend.core.database import get_db
from hereoz_backend.core.logging import performance_logger
from hereoz_backend.models.application import ApplicationStatus
from hereoz_backend.schemas.application import (
    ApplicationCreate,
    ApplicationResponse,
    ApplicationStatusUpdate,
    ApplicationWithdraw,
    TransitionLogResponse,
)
from hereoz_backend.schemas.common import Envelope, PageParams
from hereoz_backend.services.application_service import ApplicationService
from hereoz_backend.services.conversation_service import ConversationService
from hereoz_backend.services.notification_service import NotificationService, get_notification_service
from hereoz_backend.services.offer_service import OfferService
from .common import page_params, paginated

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/applications", tags=["applications"])


@router.post("", response_model=Envelope[ApplicationResponse], status_code=status.HTTP_201_CREATED)
def create_application(
    data: ApplicationCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_candidate),
    notifier: NotificationService = Depends(get_notification_service)
):
    """Apply directly to an offer, without going through the swipe feed."""
    with performance_logger.log_operation_time(
        "create_application",
        user_id=str(current_user.id),
        offer_id=str(data.offer_id)
    ):
        application = ApplicationService(notifier).create_application(db, current_user, data)
    return {"data": application, "message": "Application submitted"}


@router.get("/me", response_model=Envelope[List[ApplicationResponse]])
def my_applications(
    application_status: Optional[ApplicationStatus] = Query(None, alias="status"),
    params: PageParams = Depends(page_params),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_candidate)
):
    applications, total = ApplicationService().list_for_candidate(
        db,
        current_user.id,
        status=application_status.value if application_status else None,
        skip=params.skip,
        limit=params.limit
    )
    return paginated(applications, total, params)


@router.get("/offer/{offer_id}", response_model=Envelope[List[ApplicationResponse]])
def offer_applications(
    offer_id: UUID,
    application_status: Optional[ApplicationStatus] = Query(None, alias="status"),
    params: PageParams = Depends(page_params),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_staff)
):
    """Applications received by an offer the caller manages."""
    offer = OfferService().get_offer(db, offer_id)
    applications, total = ApplicationService().list_for_offer(
        db,
        offer,
        current_user,
        status=application_status.value if application_status else None,
        skip=params.skip,
        limit=params.limit
    )
    return paginated(applications, total, params)


@router.get("/{application_id}", response_model=Envelope[ApplicationResponse])
def get_application(
    application_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return {"data": ApplicationService().get_application_for_user(db, application_id, current_user)}


@router.put("/{application_id}/status", response_model=Envelope[ApplicationResponse])
def update_application_status(
    application_id: UUID,
    data: ApplicationStatusUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_staff),
    notifier: NotificationService = Depends(get_notification_service)
):
    """Move an application along the review pipeline."""
    with performance_logger.log_operation_time(
        "update_application_status",
        application_id=str(application_id),
        target_status=data.status.value
    ):
        application = ApplicationService(notifier).update_status(db, application_id, current_user, data)
    return {"data": application, "message": f"Application status is {application.status}"}


@router.post("/{application_id}/viewed", response_model=Envelope[ApplicationResponse])
def mark_application_viewed(
    application_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_staff)
):
    application = ApplicationService().mark_viewed(db, application_id, current_user)
    return {"data": application}


@router.post("/{application_id}/withdraw", response_model=Envelope[ApplicationResponse])
def withdraw_application(
    application_id: UUID,
    data: Optional[ApplicationWithdraw] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_candidate)
):
    application = ApplicationService().withdraw(
        db,
        application_id,
        current_user,
        reason=data.reason if data else None
    )
    return {"data": application, "message": "Application withdrawn"}


@router.get("/{application_id}/history", response_model=Envelope[List[TransitionLogResponse]])
def application_history(
    application_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return {"data": ApplicationService().get_history(db, application_id, current_user)}


@router.post("/{application_id}/conversation", response_model=Envelope[ApplicationResponse])
def open_application_conversation(
    application_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Get or create the conversation about this application and link it."""
    service = ApplicationService()
    application = service.get_application_for_user(db, application_id, current_user)

    other_id = application.offer.recruiter_id if current_user.id == application.candidate_id else application.candidate_id
    conversation = ConversationService().get_or_create(db, current_user, other_id, application.offer_id)

    application = service.link_conversation(db, application, conversation.id)
    return {"data": application, "message": "Conversation linked"}
