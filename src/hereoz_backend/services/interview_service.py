"""Interview scheduling service."""

import secrets
from datetime import datetime
from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy.orm import Session
import structlog

from hereoz_backend.auth.models import User, UserRole
from hereoz_backend.core.config import settings
from hereoz_backend.core.error_handling import AuthorizationError, ValidationError
from hereoz_backend.models.interview import Interview, InterviewMode, InterviewStatus
from hereoz_backend.repositories.interview import InterviewRepository
from hereoz_backend.schemas.interview import InterviewCreate, InterviewUpdate
from .application_service import ApplicationService
from .notification_service import NotificationService
from .offer_service import can_manage_offer

logger = structlog.get_logger(__name__)


def generate_video_link() -> str:
    return f"{settings.video_meeting_base_url.rstrip('/')}/{secrets.token_hex(8)}"


class InterviewService:
    """Service for scheduling and following up interviews."""

    def __init__(
        self,
        application_service: Optional[ApplicationService] = None,
        notifier: Optional[NotificationService] = None
    ):
        self.repository = InterviewRepository()
        self.notifier = notifier or NotificationService()
        self.application_service = application_service or ApplicationService(self.notifier)

    def schedule(self, db: Session, recruiter: User, interview_data: InterviewCreate) -> Interview:
        """Schedule an interview and move the application to `interview`.

        The interview row and the status change share one transaction.

        Raises:
            NotFoundError: If the application does not exist
            AuthorizationError: If the user does not own the offer
            InvalidTransitionError: If the application is in a terminal status
        """
        application = self.application_service.get_application(db, interview_data.application_id)
        offer = application.offer
        if offer.recruiter_id != recruiter.id and recruiter.role != UserRole.PLATFORM_ADMIN.value:
            raise AuthorizationError("Only the offer's recruiter can schedule interviews")

        mode = interview_data.mode
        try:
            self.application_service.advance_for_interview(db, application, recruiter.id)

            interview = self.repository.add(
                db,
                application_id=application.id,
                scheduled_at=interview_data.scheduled_at,
                duration_minutes=interview_data.duration_minutes,
                mode=mode.value,
                status=InterviewStatus.PLANNED.value,
                video_link=generate_video_link() if mode == InterviewMode.VIDEO else None,
                location=interview_data.location if mode == InterviewMode.ONSITE else None,
                notes=interview_data.notes,
            )
            db.commit()
            db.refresh(interview)

        except Exception:
            db.rollback()
            raise

        logger.info(
            "Interview scheduled",
            interview_id=str(interview.id),
            application_id=str(application.id),
            scheduled_at=interview.scheduled_at.isoformat(),
            mode=interview.mode
        )

        self.notifier.send_interview_invitation(
            application.candidate.email,
            offer.title,
            interview.scheduled_at.isoformat(),
            interview.mode,
            interview.video_link or interview.location
        )
        return interview

    def get_interview(self, db: Session, interview_id: UUID, user: User) -> Interview:
        """Get an interview visible to its candidate or the offer's managers."""
        interview = self.repository.get_or_raise(db, interview_id)

        application = interview.application
        if application.candidate_id != user.id and not can_manage_offer(user, application.offer):
            raise AuthorizationError("You are not allowed to access this interview")
        return interview

    def list_interviews(
        self,
        db: Session,
        user: User,
        status: Optional[str] = None,
        date_from: Optional[datetime] = None,
        date_to: Optional[datetime] = None,
        skip: int = 0,
        limit: int = 10
    ) -> Tuple[List[Interview], int]:
        query = self.repository.for_user_query(db, user.id, status, date_from, date_to)
        return self.repository.paginate(query, skip, limit)

    def update(self, db: Session, interview_id: UUID, user: User, interview_data: InterviewUpdate) -> Interview:
        """Reschedule or edit an interview.

        Switching to video creates a link when there is none; switching to
        onsite drops the link and requires a location.
        """
        interview = self.get_interview(db, interview_id, user)
        if interview.application.offer.recruiter_id != user.id and user.role != UserRole.PLATFORM_ADMIN.value:
            raise AuthorizationError("Only the offer's recruiter can update interviews")
        if interview.status in (InterviewStatus.CANCELLED.value, InterviewStatus.COMPLETED.value):
            raise ValidationError(f"Cannot update a {interview.status} interview", field="status")

        updates = interview_data.dict(exclude_unset=True)
        mode = updates.pop("mode", None)

        for field, value in updates.items():
            setattr(interview, field, value)

        if mode is not None:
            interview.mode = mode.value
            if mode == InterviewMode.VIDEO:
                interview.location = None
                if not interview.video_link:
                    interview.video_link = generate_video_link()
            else:
                interview.video_link = None

        if interview.mode == InterviewMode.ONSITE.value and not interview.location:
            db.rollback()
            raise ValidationError("location is required for onsite interviews", field="location")

        try:
            db.commit()
            db.refresh(interview)
        except Exception:
            db.rollback()
            raise

        logger.info("Interview updated", interview_id=str(interview.id), fields=list(interview_data.dict(exclude_unset=True)))
        return interview

    def confirm(self, db: Session, interview_id: UUID, candidate: User) -> Interview:
        """Candidate confirms a planned interview."""
        interview = self.get_interview(db, interview_id, candidate)
        application = interview.application
        if application.candidate_id != candidate.id:
            raise AuthorizationError("Only the candidate can confirm this interview")
        if interview.status != InterviewStatus.PLANNED.value:
            raise ValidationError(f"Cannot confirm a {interview.status} interview", field="status")

        interview.status = InterviewStatus.CONFIRMED.value
        db.commit()
        db.refresh(interview)

        logger.info("Interview confirmed", interview_id=str(interview.id), candidate_id=str(candidate.id))
        self.notifier.send_interview_confirmed(
            application.offer.recruiter.email,
            candidate.full_name,
            interview.scheduled_at.isoformat()
        )
        return interview

    def cancel(self, db: Session, interview_id: UUID, user: User, reason: str) -> Interview:
        """Either party cancels; the other one is told why."""
        interview = self.get_interview(db, interview_id, user)
        if interview.status in (InterviewStatus.CANCELLED.value, InterviewStatus.COMPLETED.value):
            raise ValidationError(f"Cannot cancel a {interview.status} interview", field="status")

        interview.status = InterviewStatus.CANCELLED.value
        interview.notes = f"Cancelled: {reason}"
        db.commit()
        db.refresh(interview)

        application = interview.application
        if user.id == application.candidate_id:
            other_email = application.offer.recruiter.email
        else:
            other_email = application.candidate.email

        logger.info("Interview cancelled", interview_id=str(interview.id), cancelled_by=str(user.id))
        self.notifier.send_interview_cancelled(other_email, interview.scheduled_at.isoformat(), reason)
        return interview
