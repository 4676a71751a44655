"""Dashboard statistics for candidates and recruiters."""

from collections import Counter
from typing import Dict

from sqlalchemy.orm import Session

from hereoz_backend.auth.models import User, UserRole
from hereoz_backend.models.application import ApplicationStatus
from hereoz_backend.models.offer import Offer, OfferStatus
from hereoz_backend.models.swipe_event import SwipeAction
from hereoz_backend.repositories.application import ApplicationRepository
from hereoz_backend.repositories.interview import InterviewRepository
from hereoz_backend.repositories.offer import OfferRepository
from hereoz_backend.repositories.swipe import SwipeRepository


def _with_all_keys(counts: Dict[str, int], keys) -> Dict[str, int]:
    """Every key present, zero when absent."""
    return {key: counts.get(key, 0) for key in keys}


APPLICATION_STATUSES = [status.value for status in ApplicationStatus]


class StatsService:
    def __init__(self):
        self.application_repo = ApplicationRepository()
        self.swipe_repo = SwipeRepository()
        self.interview_repo = InterviewRepository()
        self.offer_repo = OfferRepository()

    def candidate_stats(self, db: Session, candidate: User) -> dict:
        return {
            "applications_by_status": _with_all_keys(
                self.application_repo.count_by_status(db, candidate_id=candidate.id), APPLICATION_STATUSES
            ),
            "swipes_by_action": _with_all_keys(
                self.swipe_repo.count_by_action(db, candidate.id), [action.value for action in SwipeAction]
            ),
            "upcoming_interviews": self.interview_repo.count_upcoming_for_candidate(db, candidate.id),
        }

    def recruiter_stats(self, db: Session, recruiter: User) -> dict:
        """Company admins see their whole company, recruiters their own offers."""
        if recruiter.role == UserRole.COMPANY_ADMIN.value and recruiter.company_id:
            offers = db.query(Offer).filter(Offer.company_id == recruiter.company_id).all()
        else:
            offers = self.offer_repo.get_by_recruiter(db, recruiter.id)

        return {
            "offers_by_status": _with_all_keys(
                dict(Counter(offer.status for offer in offers)), [status.value for status in OfferStatus]
            ),
            "applications_by_status": _with_all_keys(
                self.application_repo.count_by_status(db, offer_ids=[offer.id for offer in offers]),
                APPLICATION_STATUSES
            ),
            "total_views": sum(offer.view_count for offer in offers),
        }

    def offer_stats(self, db: Session, offer: Offer) -> dict:
        return {
            "offer_id": offer.id,
            "views": offer.view_count,
            "favorites": offer.favorite_count,
            "applications_by_status": _with_all_keys(
                self.application_repo.count_by_status(db, offer_ids=[offer.id]), APPLICATION_STATUSES
            ),
        }
