"""Application status state machine with transition logging."""

from datetime import datetime
from typing import Optional, List, Tuple
from uuid import UUID

from sqlalchemy.orm import Session
import structlog

from hereoz_backend.core.error_handling import InvalidTransitionError, NotFoundError
from hereoz_backend.models.application import Application, ApplicationStatus
from hereoz_backend.models.application_transition_log import ApplicationTransitionLog, ActorType

logger = structlog.get_logger(__name__)


class ApplicationFSM:
    """Pure transition rules for application statuses.

    Statuses are ordered along the review pipeline. Forward moves may skip
    steps, `rejected` is reachable from every non-terminal status, and
    terminal statuses accept nothing.
    """

    VALID_STATES = [status.value for status in ApplicationStatus]
    TERMINAL_STATES = ["accepted", "hired", "rejected"]

    STATE_ORDER = {
        "new": 0,
        "viewed": 1,
        "contacted": 2,
        "interview": 3,
        "offer": 4,
        "accepted": 5,
        "hired": 5,
    }

    PROGRESS_STEPS = {
        "new": 0,
        "viewed": 1,
        "contacted": 1,
        "interview": 2,
        "offer": 2,
        "accepted": 3,
        "hired": 3,
        "rejected": -1,
    }

    @classmethod
    def is_valid(cls, status: str) -> bool:
        return status in cls.VALID_STATES

    @classmethod
    def is_terminal(cls, status: str) -> bool:
        return status in cls.TERMINAL_STATES

    @classmethod
    def can_transition(cls, current_status: str, target_status: str) -> Tuple[bool, str]:
        """
        Check whether `current_status` may move to `target_status`.

        Args:
            current_status: Status the application is in
            target_status: Requested status

        Returns:
            Tuple of (can_transition, reason)
        """
        if not cls.is_valid(target_status):
            return False, f"Invalid status: {target_status}"

        if current_status == target_status:
            return False, f"Application is already in {target_status} status"

        if current_status in cls.TERMINAL_STATES:
            return False, f"Cannot transition from terminal state {current_status}"

        if target_status == ApplicationStatus.REJECTED.value:
            return True, "Transition is allowed"

        if cls.STATE_ORDER[target_status] <= cls.STATE_ORDER[current_status]:
            return False, f"Cannot move application backwards from {current_status} to {target_status}"

        return True, "Transition is allowed"

    @classmethod
    def is_before(cls, current_status: str, target_status: str) -> bool:
        """True when `current_status` sits strictly earlier in the pipeline."""
        if current_status not in cls.STATE_ORDER or target_status not in cls.STATE_ORDER:
            return False
        return cls.STATE_ORDER[current_status] < cls.STATE_ORDER[target_status]

    @classmethod
    def progress_step(cls, status: str) -> int:
        """Candidate-facing step; rejected maps to -1, unknown values to 0."""
        return cls.PROGRESS_STEPS.get(status, 0)

    @classmethod
    def can_withdraw(cls, status: str) -> bool:
        return status not in cls.TERMINAL_STATES


class FSMService:
    """Service applying application status transitions with invariant enforcement."""

    def __init__(self, db: Session):
        self.db = db

    def apply_transition(
        self,
        application: Application,
        new_status: str,
        actor_id: Optional[UUID] = None,
        actor_type: ActorType = ActorType.SYSTEM,
        reason: str = "Status transition"
    ) -> bool:
        """
        Move an application to `new_status` inside the caller's transaction.

        Writes the transition log row but does not commit.

        Returns:
            False when the application is already in `new_status`, True otherwise

        Raises:
            InvalidTransitionError: If the state machine forbids the move
        """
        old_status = application.status

        if old_status == new_status:
            logger.info(
                "Application already in target status",
                application_id=str(application.id),
                status=new_status
            )
            return False

        allowed, why = ApplicationFSM.can_transition(old_status, new_status)
        if not allowed:
            logger.warning(
                "Application status transition rejected",
                application_id=str(application.id),
                old_status=old_status,
                new_status=new_status,
                reason=why
            )
            raise InvalidTransitionError(old_status, new_status, why)

        now = datetime.utcnow()
        application.status = new_status
        application.status_updated_at = now

        self.db.add(ApplicationTransitionLog(
            application_id=application.id,
            old_status=old_status,
            new_status=new_status,
            actor_id=actor_id,
            actor_type=actor_type.value,
            reason=reason,
            is_terminal=ApplicationFSM.is_terminal(new_status),
            created_at=now,
        ))

        logger.info(
            "Application status transition applied",
            application_id=str(application.id),
            old_status=old_status,
            new_status=new_status,
            actor_id=str(actor_id) if actor_id else None,
            actor_type=actor_type.value,
            reason=reason
        )
        return True

    def transition_application_status(
        self,
        application_id: UUID,
        new_status: str,
        actor_id: Optional[UUID] = None,
        actor_type: ActorType = ActorType.SYSTEM,
        reason: str = "Status transition"
    ) -> Application:
        """
        Transition an application and commit.

        Args:
            application_id: UUID of the application
            new_status: New status to transition to
            actor_id: UUID of the actor performing the transition (optional)
            actor_type: Type of actor (USER or SYSTEM)
            reason: Reason for the transition

        Returns:
            Updated application

        Raises:
            NotFoundError: If the application does not exist
            InvalidTransitionError: If the transition is invalid
        """
        application = self.db.query(Application).filter(Application.id == application_id).first()
        if not application:
            raise NotFoundError("Application", application_id)

        try:
            if self.apply_transition(application, new_status, actor_id, actor_type, reason):
                self.db.commit()
                self.db.refresh(application)
            return application

        except Exception:
            self.db.rollback()
            raise

    def get_transition_history(self, application_id: UUID, limit: int = 100) -> List[ApplicationTransitionLog]:
        """Transition log of an application, oldest first."""
        return (
            self.db.query(ApplicationTransitionLog)
            .filter(ApplicationTransitionLog.application_id == application_id)
            .order_by(ApplicationTransitionLog.created_at.asc())
            .limit(limit)
            .all()
        )
