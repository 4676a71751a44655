"""Candidate/offer matching score and ranked listings."""

import math
from typing import Iterable, List, Optional, Tuple

from sqlalchemy.orm import Session
import structlog

from hereoz_backend.auth.models import User
from hereoz_backend.models.offer import Offer, RemoteMode
from hereoz_backend.repositories.offer import OfferRepository
from hereoz_backend.repositories.swipe import SwipeRepository
from hereoz_backend.repositories.user import UserRepository

logger = structlog.get_logger(__name__)

SKILLS_WEIGHT = 40
EXPERIENCE_WEIGHT = 20
LANGUAGES_WEIGHT = 20
LOCATION_WEIGHT = 20
PARTIAL_LOCATION_SCORE = 10


def _overlap_ratio(required: Optional[Iterable[str]], owned: Optional[Iterable[str]]) -> float:
    required_set = {item.strip().lower() for item in (required or []) if item and item.strip()}
    if not required_set:
        return 1.0
    owned_set = {item.strip().lower() for item in (owned or []) if item and item.strip()}
    return len(required_set & owned_set) / len(required_set)


def calculate_matching_score(candidate: User, offer: Offer) -> int:
    """Score how well a candidate fits an offer, from 0 to 100.

    Skills weigh 40 points, experience 20, languages 20 and location 20.
    A criterion the offer does not specify earns its full weight. Location
    earns full points for full-remote offers or when the candidate address
    contains the offer location, and half points otherwise.
    """
    skills = SKILLS_WEIGHT * _overlap_ratio(offer.required_skills, candidate.skills)

    required_years = offer.required_experience_years or 0
    if required_years > 0:
        experience = EXPERIENCE_WEIGHT * min((candidate.experience_years or 0) / required_years, 1)
    else:
        experience = EXPERIENCE_WEIGHT

    languages = LANGUAGES_WEIGHT * _overlap_ratio(offer.required_languages, candidate.languages)

    location = PARTIAL_LOCATION_SCORE
    if offer.remote_mode == RemoteMode.FULL_REMOTE.value:
        location = LOCATION_WEIGHT
    elif offer.location and candidate.address and offer.location.lower() in candidate.address.lower():
        location = LOCATION_WEIGHT

    # round half up
    total = math.floor(skills + experience + languages + location + 0.5)
    return max(0, min(100, int(total)))


class MatchingService:
    """Ranks offers for candidates and candidates for offers."""

    def __init__(self, db: Session):
        self.db = db
        self.offer_repo = OfferRepository()
        self.swipe_repo = SwipeRepository()
        self.user_repo = UserRepository()

    def get_swipe_feed(
        self,
        candidate: User,
        location: Optional[str] = None,
        contract_type: Optional[str] = None,
        remote_mode: Optional[str] = None
    ) -> List[Tuple[Offer, int]]:
        """Open offers the candidate has not swiped yet, best score first.

        Args:
            candidate: Candidate user
            location: Location substring filter
            contract_type: Contract type filter
            remote_mode: Remote mode filter

        Returns:
            List of (offer, score) pairs
        """
        swiped = self.swipe_repo.get_swiped_offer_ids(self.db, candidate.id)
        offers = self.offer_repo.get_open_offers(
            self.db,
            exclude_ids=swiped,
            location=location,
            contract_type=contract_type,
            remote_mode=remote_mode
        )

        scored = [(offer, calculate_matching_score(candidate, offer)) for offer in offers]
        scored.sort(key=lambda pair: pair[1], reverse=True)

        logger.debug(
            "Swipe feed computed",
            user_id=str(candidate.id),
            offers=len(scored),
            excluded=len(swiped)
        )
        return scored

    def suggest_candidates(self, offer: Offer, min_score: int = 0) -> List[Tuple[User, int]]:
        """Active candidates ranked by their score for the offer."""
        scored = [
            (candidate, calculate_matching_score(candidate, offer))
            for candidate in self.user_repo.get_active_candidates(self.db)
        ]
        scored = [pair for pair in scored if pair[1] >= min_score]
        scored.sort(key=lambda pair: pair[1], reverse=True)
        return scored
