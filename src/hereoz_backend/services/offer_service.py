"""Job offer management service."""

from typing import List, Tuple
from uuid import UUID

from sqlalchemy.orm import Session
import structlog

from hereoz_backend.auth.models import User, UserRole
from hereoz_backend.core.error_handling import AuthorizationError, ValidationError
from hereoz_backend.models.offer import Offer, OfferStatus
from hereoz_backend.repositories.offer import OfferRepository
from hereoz_backend.schemas.offer import OfferCreate, OfferUpdate

logger = structlog.get_logger(__name__)


def can_manage_offer(user: User, offer: Offer) -> bool:
    """Owner recruiter, an admin of the owning company, or a platform admin."""
    if user.role == UserRole.PLATFORM_ADMIN.value:
        return True
    if offer.recruiter_id == user.id:
        return True
    return user.role == UserRole.COMPANY_ADMIN.value and user.company_id == offer.company_id


class OfferService:
    """Service for managing job offers."""

    def __init__(self):
        self.repository = OfferRepository()

    def create_offer(self, db: Session, recruiter: User, offer_data: OfferCreate) -> Offer:
        """Post a new offer on behalf of the recruiter's company.

        Raises:
            ValidationError: If the recruiter is not attached to a company
        """
        if recruiter.company_id is None:
            raise ValidationError("Recruiter must belong to a company to post offers", field="company_id")

        values = offer_data.dict()
        values["contract_type"] = offer_data.contract_type.value
        values["remote_mode"] = offer_data.remote_mode.value

        offer = self.repository.create(
            db,
            company_id=recruiter.company_id,
            recruiter_id=recruiter.id,
            status=OfferStatus.ACTIVE.value,
            **values
        )

        logger.info(
            "Offer created",
            offer_id=str(offer.id),
            recruiter_id=str(recruiter.id),
            company_id=str(recruiter.company_id)
        )
        return offer

    def get_offer(self, db: Session, offer_id: UUID, count_view: bool = False) -> Offer:
        """Get an offer, optionally counting the read as a view.

        Raises:
            NotFoundError: If the offer does not exist
        """
        offer = self.repository.get_or_raise(db, offer_id)

        if count_view:
            offer.view_count = Offer.view_count + 1
            db.commit()
            db.refresh(offer)

        return offer

    def get_managed_offer(self, db: Session, offer_id: UUID, user: User) -> Offer:
        """Get an offer the user is allowed to manage.

        Raises:
            NotFoundError: If the offer does not exist
            AuthorizationError: If the user cannot manage it
        """
        offer = self.get_offer(db, offer_id)
        if not can_manage_offer(user, offer):
            logger.warning("Offer access denied", offer_id=str(offer_id), user_id=str(user.id))
            raise AuthorizationError("You are not allowed to manage this offer")
        return offer

    def list_offers(
        self,
        db: Session,
        skip: int = 0,
        limit: int = 10,
        **filters
    ) -> Tuple[List[Offer], int]:
        query = self.repository.search(db, **filters)
        return self.repository.paginate(query, skip, limit)

    def update_offer(self, db: Session, offer_id: UUID, user: User, offer_data: OfferUpdate) -> Offer:
        """Apply a partial update to an offer the user manages."""
        offer = self.get_managed_offer(db, offer_id, user)
        updates = offer_data.dict(exclude_unset=True)

        salary_min = updates.get("salary_min", offer.salary_min)
        salary_max = updates.get("salary_max", offer.salary_max)
        if salary_min is not None and salary_max is not None and salary_max < salary_min:
            raise ValidationError("salary_max must be greater than or equal to salary_min", field="salary_max")

        try:
            for field, value in updates.items():
                if hasattr(value, "value"):
                    value = value.value
                setattr(offer, field, value)

            db.commit()
            db.refresh(offer)

            logger.info("Offer updated", offer_id=str(offer_id), fields=list(updates.keys()))
            return offer

        except Exception as e:
            db.rollback()
            logger.error("Offer update failed", offer_id=str(offer_id), error=str(e))
            raise

    def close_offer(self, db: Session, offer_id: UUID, user: User, status: OfferStatus = OfferStatus.CLOSED) -> Offer:
        """Stop an offer from receiving applications."""
        offer = self.get_managed_offer(db, offer_id, user)

        if status == OfferStatus.ACTIVE:
            raise ValidationError("An offer can only be closed or filled", field="status")

        if offer.status == status.value:
            return offer

        offer.status = status.value
        db.commit()
        db.refresh(offer)

        logger.info("Offer closed", offer_id=str(offer_id), status=status.value, user_id=str(user.id))
        return offer
