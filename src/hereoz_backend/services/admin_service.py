"""Platform administration: global statistics, account moderation and listings."""

from datetime import datetime
from typing import Optional, List, Tuple
from uuid import UUID

from sqlalchemy import func
from sqlalchemy.orm import Session
import structlog

from hereoz_backend.auth.models import User, UserRole
from hereoz_backend.core.error_handling import AuthorizationError, ValidationError
from hereoz_backend.models.application import Application
from hereoz_backend.models.company import Company
from hereoz_backend.models.conversation import Message
from hereoz_backend.models.offer import Offer, OfferStatus
from hereoz_backend.models.swipe_event import SwipeEvent
from hereoz_backend.repositories.user import CompanyRepository, UserRepository
from hereoz_backend.schemas.admin import ModerationAction, ModerationRequest

logger = structlog.get_logger(__name__)

STAFF_ROLES = (UserRole.RECRUITER.value, UserRole.COMPANY_ADMIN.value)


def _count(db: Session, column, *criteria) -> int:
    return db.query(func.count(column)).filter(*criteria).scalar() or 0


class AdminService:
    """Read-mostly views over the whole platform for platform admins."""

    def __init__(self):
        self.user_repository = UserRepository()
        self.company_repository = CompanyRepository()

    def global_stats(
        self,
        db: Session,
        date_from: Optional[datetime] = None,
        date_to: Optional[datetime] = None
    ) -> dict:
        """Counts of users, companies, offers and applications.

        When a window is given, only rows created inside it are counted.
        The active-offer count always reflects the current state.

        Raises:
            ValidationError: If date_from is after date_to
        """
        if date_from and date_to and date_from > date_to:
            raise ValidationError("date_from must be before date_to", field="date_from")

        def window(model) -> list:
            criteria = []
            if date_from:
                criteria.append(model.created_at >= date_from)
            if date_to:
                criteria.append(model.created_at <= date_to)
            return criteria

        users = window(User)
        offers_total = _count(db, Offer.id, *window(Offer))
        applications = _count(db, Application.id, *window(Application))

        return {
            "users": {
                "total": _count(db, User.id, *users),
                "candidates": _count(db, User.id, User.role == UserRole.CANDIDATE.value, *users),
                "recruiters": _count(db, User.id, User.role.in_(STAFF_ROLES), *users),
                "suspended": _count(db, User.id, User.is_active.is_(False), *users),
            },
            "companies": _count(db, Company.id, *window(Company)),
            "offers": {
                "total": offers_total,
                "active": _count(db, Offer.id, Offer.status == OfferStatus.ACTIVE.value),
                "applications": applications,
                "conversion_rate": round(applications / offers_total * 100, 2) if offers_total else 0.0,
            },
        }

    def list_users(
        self,
        db: Session,
        skip: int = 0,
        limit: int = 25,
        **filters
    ) -> Tuple[List[User], int]:
        query = self.user_repository.search(db, **filters)
        return self.user_repository.paginate(query, skip, limit)

    def user_details(self, db: Session, user_id: UUID) -> dict:
        """A user together with counts of what they did on the platform."""
        user = self.user_repository.get_or_raise(db, user_id)
        return {
            "user": user,
            "activity": {
                "applications": _count(db, Application.id, Application.candidate_id == user.id),
                "offers": _count(db, Offer.id, Offer.recruiter_id == user.id),
                "messages": _count(db, Message.id, Message.sender_id == user.id),
                "swipes": _count(db, SwipeEvent.id, SwipeEvent.user_id == user.id),
            },
        }

    def moderate_user(self, db: Session, admin: User, user_id: UUID, request: ModerationRequest) -> User:
        """Suspend or reactivate an account.

        A suspended account can neither log in nor use existing tokens.

        Raises:
            NotFoundError: If the user does not exist
            ValidationError: If admins target their own account
            AuthorizationError: If the target is another platform admin
        """
        user = self.user_repository.get_or_raise(db, user_id)

        if user.id == admin.id:
            raise ValidationError("You cannot moderate your own account", field="user_id")
        if user.role == UserRole.PLATFORM_ADMIN.value:
            raise AuthorizationError("Platform admins cannot be moderated")

        if request.action == ModerationAction.SUSPEND:
            user.is_active = False
            user.suspended_at = datetime.utcnow()
            user.suspension_reason = request.reason
        else:
            user.is_active = True
            user.suspended_at = None
            user.suspension_reason = None

        db.commit()
        db.refresh(user)

        logger.info(
            "User moderated",
            user_id=str(user.id),
            admin_id=str(admin.id),
            action=request.action.value,
            reason=request.reason
        )
        return user

    def list_companies(
        self,
        db: Session,
        skip: int = 0,
        limit: int = 25,
        keyword: Optional[str] = None
    ) -> Tuple[List[Company], int]:
        query = self.company_repository.search(db, keyword=keyword)
        return self.company_repository.paginate(query, skip, limit)
