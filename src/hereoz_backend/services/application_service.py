"""Application management service."""

from datetime import datetime
from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
import structlog

from hereoz_backend.auth.models import User
from hereoz_backend.core.error_handling import (
    AuthorizationError,
    ConflictError,
    InvalidTransitionError,
    ValidationError,
)
from hereoz_backend.models.application import Application, ApplicationStatus
from hereoz_backend.models.application_transition_log import ApplicationTransitionLog, ActorType
from hereoz_backend.models.offer import Offer
from hereoz_backend.repositories.application import ApplicationRepository
from hereoz_backend.repositories.offer import OfferRepository
from hereoz_backend.schemas.application import ApplicationCreate, ApplicationStatusUpdate
from .fsm_service import ApplicationFSM, FSMService
from .matching_service import calculate_matching_score
from .notification_service import NotificationService
from .offer_service import can_manage_offer

logger = structlog.get_logger(__name__)

WITHDRAWAL_REASON = "Withdrawn by candidate"


class ApplicationService:
    """Service for managing application operations."""

    def __init__(self, notifier: Optional[NotificationService] = None):
        self.repository = ApplicationRepository()
        self.offer_repository = OfferRepository()
        self.notifier = notifier or NotificationService()

    def stage_application(
        self,
        db: Session,
        candidate: User,
        offer: Offer,
        matching_score: Optional[int] = None,
        cover_message: Optional[str] = None
    ) -> Tuple[Application, bool]:
        """Create the application for (candidate, offer) in the caller's transaction.

        An existing application for the pair is returned as is.

        Returns:
            Tuple of (application, created)
        """
        existing = self.repository.get_by_candidate_and_offer(db, candidate.id, offer.id)
        if existing:
            return existing, False

        now = datetime.utcnow()
        application = self.repository.add(
            db,
            candidate_id=candidate.id,
            offer_id=offer.id,
            status=ApplicationStatus.NEW.value,
            applied_at=now,
            status_updated_at=now,
            matching_score=matching_score,
            cover_message=cover_message,
        )
        offer.application_count = Offer.application_count + 1
        return application, True

    def create_application(self, db: Session, candidate: User, application_data: ApplicationCreate) -> Application:
        """Apply directly to an offer.

        Raises:
            NotFoundError: If the offer does not exist
            ValidationError: If the offer is closed or expired
            ConflictError: If the candidate already applied
        """
        offer = self.offer_repository.get_or_raise(db, application_data.offer_id)
        if not offer.is_open:
            raise ValidationError("Offer is not accepting applications", field="offer_id")
        if self.repository.get_by_candidate_and_offer(db, candidate.id, offer.id):
            raise ConflictError("You have already applied to this offer")

        try:
            application, _ = self.stage_application(
                db,
                candidate,
                offer,
                matching_score=calculate_matching_score(candidate, offer),
                cover_message=application_data.cover_message,
            )
            db.commit()
            db.refresh(application)

        except IntegrityError as e:
            db.rollback()
            raise ConflictError("You have already applied to this offer", original_error=e)
        except Exception as e:
            db.rollback()
            logger.error("Application creation failed", offer_id=str(offer.id), error=str(e))
            raise

        logger.info(
            "Application created",
            application_id=str(application.id),
            candidate_id=str(candidate.id),
            offer_id=str(offer.id),
            status=application.status
        )
        self.notify_new_application(db, application, candidate)
        return application

    def notify_new_application(self, db: Session, application: Application, candidate: User) -> None:
        offer = application.offer
        if offer and offer.recruiter:
            self.notifier.send_new_application(offer.recruiter.email, candidate.full_name, offer.title)

    def get_application(self, db: Session, application_id: UUID) -> Application:
        application = self.repository.get_or_raise(db, application_id)
        return application

    def get_application_for_user(self, db: Session, application_id: UUID, user: User) -> Application:
        """Get an application visible to the user.

        The candidate who applied and whoever manages the offer may read it.
        Reading never changes the status.
        """
        application = self.get_application(db, application_id)
        if application.candidate_id != user.id and not can_manage_offer(user, application.offer):
            raise AuthorizationError("You are not allowed to access this application")
        return application

    def get_managed_application(self, db: Session, application_id: UUID, user: User) -> Application:
        application = self.get_application(db, application_id)
        if not can_manage_offer(user, application.offer):
            raise AuthorizationError("Only the offer's recruiter can manage this application")
        return application

    def list_for_candidate(
        self,
        db: Session,
        candidate_id: UUID,
        status: Optional[str] = None,
        skip: int = 0,
        limit: int = 10
    ) -> Tuple[List[Application], int]:
        return self.repository.paginate(self.repository.candidate_query(db, candidate_id, status), skip, limit)

    def list_for_offer(
        self,
        db: Session,
        offer: Offer,
        user: User,
        status: Optional[str] = None,
        skip: int = 0,
        limit: int = 10
    ) -> Tuple[List[Application], int]:
        if not can_manage_offer(user, offer):
            raise AuthorizationError("You are not allowed to manage this offer")
        return self.repository.paginate(self.repository.offer_query(db, offer.id, status), skip, limit)

    def update_status(
        self,
        db: Session,
        application_id: UUID,
        user: User,
        update: ApplicationStatusUpdate
    ) -> Application:
        """Move an application along the pipeline on behalf of a recruiter.

        A move to the current status leaves the application untouched.

        Raises:
            AuthorizationError: If the user does not manage the offer
            InvalidTransitionError: If the state machine forbids the move
        """
        application = self.get_managed_application(db, application_id, user)
        target = update.status.value
        reason = update.rejection_reason or f"Status changed to {target} by recruiter"

        try:
            changed = FSMService(db).apply_transition(
                application,
                target,
                actor_id=user.id,
                actor_type=ActorType.USER,
                reason=reason
            )
            if not changed:
                return application

            if target == ApplicationStatus.REJECTED.value:
                application.rejection_reason = update.rejection_reason
            if update.recruiter_notes is not None:
                application.recruiter_notes = update.recruiter_notes

            db.commit()
            db.refresh(application)

        except Exception:
            db.rollback()
            raise

        self.notifier.send_application_status(
            application.candidate.email,
            application.offer.title,
            application.status,
            application.rejection_reason
        )
        return application

    def mark_viewed(self, db: Session, application_id: UUID, user: User) -> Application:
        """Mark a new application as viewed; later statuses are left as they are."""
        application = self.get_managed_application(db, application_id, user)
        if application.status != ApplicationStatus.NEW.value:
            logger.info(
                "Application already past viewed",
                application_id=str(application_id),
                status=application.status
            )
            return application

        try:
            FSMService(db).apply_transition(
                application,
                ApplicationStatus.VIEWED.value,
                actor_id=user.id,
                actor_type=ActorType.USER,
                reason="Viewed by recruiter"
            )
            db.commit()
            db.refresh(application)
            return application

        except Exception:
            db.rollback()
            raise

    def advance_for_interview(self, db: Session, application: Application, actor_id: UUID) -> None:
        """Move an application to interview when it is still earlier in the pipeline.

        Runs in the caller's transaction.

        Raises:
            InvalidTransitionError: If the application is in a terminal status
        """
        if ApplicationFSM.is_terminal(application.status):
            raise InvalidTransitionError(
                application.status,
                ApplicationStatus.INTERVIEW.value,
                f"Cannot schedule an interview for a {application.status} application"
            )
        if ApplicationFSM.is_before(application.status, ApplicationStatus.INTERVIEW.value):
            FSMService(db).apply_transition(
                application,
                ApplicationStatus.INTERVIEW.value,
                actor_id=actor_id,
                actor_type=ActorType.SYSTEM,
                reason="Interview scheduled"
            )

    def withdraw(self, db: Session, application_id: UUID, candidate: User, reason: Optional[str] = None) -> Application:
        """Withdraw the candidate's own application.

        Withdrawal ends as `rejected` with `withdrawn_at` set.

        Raises:
            AuthorizationError: If the application belongs to someone else
            InvalidTransitionError: If the application is already terminal
        """
        application = self.get_application(db, application_id)
        if application.candidate_id != candidate.id:
            raise AuthorizationError("You can only withdraw your own applications")

        if not ApplicationFSM.can_withdraw(application.status):
            raise InvalidTransitionError(
                application.status,
                ApplicationStatus.REJECTED.value,
                f"Cannot withdraw an application that is already {application.status}"
            )

        reason = (reason or "").strip() or WITHDRAWAL_REASON

        try:
            FSMService(db).apply_transition(
                application,
                ApplicationStatus.REJECTED.value,
                actor_id=candidate.id,
                actor_type=ActorType.USER,
                reason=reason
            )
            application.rejection_reason = reason
            application.withdrawn_at = datetime.utcnow()

            db.commit()
            db.refresh(application)

            logger.info("Application withdrawn", application_id=str(application_id), candidate_id=str(candidate.id))
            return application

        except Exception:
            db.rollback()
            raise

    def get_history(self, db: Session, application_id: UUID, user: User) -> List[ApplicationTransitionLog]:
        self.get_application_for_user(db, application_id, user)
        return FSMService(db).get_transition_history(application_id)

    def link_conversation(self, db: Session, application: Application, conversation_id: UUID) -> Application:
        application.conversation_id = conversation_id
        db.commit()
        db.refresh(application)
        return application
