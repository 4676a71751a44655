"""Interview scheduling API endpoints."""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
import structlog

from hereoz_backend.auth.dependencies import get_current_user, require_candidate, require_staff
from hereoz_backend.auth.models import User
from hereoz_backend.core.database import get_db
from hereoz_backend.core.logging import performance_logger
from hereoz_backend.models.interview import InterviewStatus
from hereoz_backend.schemas.common import Envelope, PageParams
from hereoz_backend.schemas.interview import InterviewCancel, InterviewCreate, InterviewResponse, InterviewUpdate
from hereoz_backend.services.interview_service import InterviewService
from hereoz_backend.services.notification_service import NotificationService, get_notification_service
from .common import page_params, paginated

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/interviews", tags=["interviews"])


@router.post("", response_model=Envelope[InterviewResponse], status_code=status.HTTP_201_CREATED)
def schedule_interview(
    data: InterviewCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_staff),
    notifier: NotificationService = Depends(get_notification_service)
):
    """Schedule an interview; the application moves to `interview` when earlier."""
    with performance_logger.log_operation_time(
        "schedule_interview",
        application_id=str(data.application_id),
        user_id=str(current_user.id)
    ):
        interview = InterviewService(notifier=notifier).schedule(db, current_user, data)
    return {"data": interview, "message": "Interview scheduled"}


@router.get("", response_model=Envelope[List[InterviewResponse]])
def list_interviews(
    interview_status: Optional[InterviewStatus] = Query(None, alias="status"),
    date_from: Optional[datetime] = None,
    date_to: Optional[datetime] = None,
    params: PageParams = Depends(page_params),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    interviews, total = InterviewService().list_interviews(
        db,
        current_user,
        status=interview_status.value if interview_status else None,
        date_from=date_from,
        date_to=date_to,
        skip=params.skip,
        limit=params.limit
    )
    return paginated(interviews, total, params)


@router.get("/{interview_id}", response_model=Envelope[InterviewResponse])
def get_interview(
    interview_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return {"data": InterviewService().get_interview(db, interview_id, current_user)}


@router.put("/{interview_id}", response_model=Envelope[InterviewResponse])
def update_interview(
    interview_id: UUID,
    data: InterviewUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_staff)
):
    interview = InterviewService().update(db, interview_id, current_user, data)
    return {"data": interview, "message": "Interview updated"}


@router.post("/{interview_id}/confirm", response_model=Envelope[InterviewResponse])
def confirm_interview(
    interview_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_candidate),
    notifier: NotificationService = Depends(get_notification_service)
):
    interview = InterviewService(notifier=notifier).confirm(db, interview_id, current_user)
    return {"data": interview, "message": "Interview confirmed"}


@router.post("/{interview_id}/cancel", response_model=Envelope[InterviewResponse])
def cancel_interview(
    interview_id: UUID,
    data: InterviewCancel,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    notifier: NotificationService = Depends(get_notification_service)
):
    interview = InterviewService(notifier=notifier).cancel(db, interview_id, current_user, data.reason)
    return {"data": interview, "message": "Interview cancelled"}
