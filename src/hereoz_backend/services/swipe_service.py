"""Swipe recorder: turns a candidate's swipe into a SwipeEvent and, on right swipes, an Application."""

from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
import structlog

from hereoz_backend.auth.models import User
from hereoz_backend.core.error_handling import (
    AuthorizationError,
    ConflictError,
    DuplicateSwipeError,
    ValidationError,
)
from hereoz_backend.models.application import Application
from hereoz_backend.models.offer import Offer
from hereoz_backend.models.swipe_event import SwipeAction, SwipeEvent
from hereoz_backend.repositories.offer import OfferRepository
from hereoz_backend.repositories.swipe import SwipeRepository
from hereoz_backend.schemas.swipe import SwipeCreate
from .application_service import ApplicationService
from .matching_service import calculate_matching_score

logger = structlog.get_logger(__name__)


class SwipeService:
    """Records swipes.

    A pair (user, offer) is swiped at most once. A second swipe fails with
    DuplicateSwipeError and leaves the first SwipeEvent and any Application
    untouched. The unique constraint on the table covers concurrent requests
    that both pass the pre-check.
    """

    def __init__(self, application_service: Optional[ApplicationService] = None):
        self.repository = SwipeRepository()
        self.offer_repository = OfferRepository()
        self.application_service = application_service or ApplicationService()

    def record_swipe(
        self,
        db: Session,
        user: User,
        swipe_data: SwipeCreate
    ) -> Tuple[SwipeEvent, Optional[Application]]:
        """Record a swipe and, for a right swipe, the matching application.

        Both rows are written in one transaction.

        Args:
            db: Database session
            user: Swiping candidate
            swipe_data: Validated swipe payload

        Returns:
            Tuple of (swipe event, application or None)

        Raises:
            AuthorizationError: If the user is not a candidate
            NotFoundError: If the offer does not exist
            ValidationError: If the offer is not open
            DuplicateSwipeError: If the pair was already swiped
        """
        if not user.is_candidate:
            raise AuthorizationError("Only candidates can swipe on offers")

        offer = self.offer_repository.get_or_raise(db, swipe_data.offer_id)
        if not offer.is_open:
            raise ValidationError("Offer is not open for swiping", field="offer_id")

        if self.repository.get_by_user_and_offer(db, user.id, offer.id):
            logger.info("Duplicate swipe rejected", user_id=str(user.id), offer_id=str(offer.id))
            raise DuplicateSwipeError(user.id, offer.id)

        action = swipe_data.action
        score = swipe_data.matching_score
        if score is None:
            score = calculate_matching_score(user, offer)

        application = None
        created = False
        try:
            try:
                swipe = self.repository.add(
                    db,
                    user_id=user.id,
                    offer_id=offer.id,
                    action=action.value,
                    rejection_reason=swipe_data.rejection_reason,
                    matching_score=score,
                )
            except IntegrityError as e:
                db.rollback()
                logger.info("Concurrent duplicate swipe rejected", user_id=str(user.id), offer_id=str(offer.id))
                raise DuplicateSwipeError(user.id, offer.id, original_error=e)

            if action == SwipeAction.RIGHT:
                application, created = self.application_service.stage_application(
                    db, user, offer, matching_score=score
                )
            elif action == SwipeAction.FAVORITE:
                offer.favorite_count = Offer.favorite_count + 1

            db.commit()
            db.refresh(swipe)
            if application is not None:
                db.refresh(application)

        except IntegrityError as e:
            db.rollback()
            logger.warning("Swipe transaction conflicted", user_id=str(user.id), offer_id=str(offer.id))
            raise ConflictError("Application already exists for this offer", original_error=e)
        except Exception:
            db.rollback()
            raise

        logger.info(
            "Swipe recorded",
            swipe_id=str(swipe.id),
            user_id=str(user.id),
            offer_id=str(offer.id),
            action=action.value,
            matching_score=score,
            application_id=str(application.id) if application else None,
            application_created=created
        )

        if created:
            self.application_service.notify_new_application(db, application, user)

        return swipe, application

    def get_history(
        self,
        db: Session,
        user_id: UUID,
        action: Optional[str] = None,
        skip: int = 0,
        limit: int = 10
    ) -> Tuple[List[SwipeEvent], int]:
        return self.repository.paginate(self.repository.history_query(db, user_id, action), skip, limit)
