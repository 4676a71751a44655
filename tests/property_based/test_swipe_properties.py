"""
Property-based tests for swipe recording and matching scores.

Covers score bounds, swipe payload validation, and the one-swipe-per-offer
rule under arbitrary repeated swipes.
"""

import pytest
from hypothesis import given, note, settings, strategies as st
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.orm import sessionmaker

from hereoz_backend.auth.models import UserRole
from hereoz_backend.core.base import Base
from hereoz_backend.core.error_handling import DuplicateSwipeError
from hereoz_backend.models.application import Application
from hereoz_backend.models.company import Company
from hereoz_backend.models.offer import Offer
from hereoz_backend.models.swipe_event import SwipeAction, SwipeEvent
from hereoz_backend.schemas.swipe import SwipeCreate
from hereoz_backend.services.application_service import ApplicationService
from hereoz_backend.services.matching_service import calculate_matching_score
from hereoz_backend.services.notification_service import NotificationService
from hereoz_backend.services.swipe_service import SwipeService
from tests.conftest import create_offer, create_user, make_engine
from .config import PropertyTestConfig
from .generators import candidate_users, offers, swipe_sequences


class TestMatchingScoreProperties:

    @given(candidate=candidate_users(), offer=offers())
    def test_score_is_bounded_integer(self, candidate, offer):
        score = calculate_matching_score(candidate, offer)
        note(f"score: {score}")

        assert isinstance(score, int)
        assert 0 <= score <= 100

    @given(candidate=candidate_users(), offer=offers())
    def test_score_ignores_skill_case_and_padding(self, candidate, offer):
        baseline = calculate_matching_score(candidate, offer)

        candidate.skills = [s.strip().upper() for s in candidate.skills] if candidate.skills else candidate.skills
        assert calculate_matching_score(candidate, offer) == baseline

    @given(candidate=candidate_users())
    def test_offer_without_requirements_scores_at_least_ninety(self, candidate):
        offer = Offer(title="Anything", description="Open role", remote_mode="onsite")
        assert calculate_matching_score(candidate, offer) >= 90


class TestSwipePayloadProperties:

    @given(score=st.integers(min_value=0, max_value=100))
    def test_in_range_scores_are_kept(self, score):
        payload = SwipeCreate(offer_id="7b0c3c1e-7d4c-4a57-9c6e-4cb1b2d1e0aa", action="right", matching_score=score)
        assert payload.matching_score == score

    @given(score=st.one_of(st.integers(max_value=-1), st.integers(min_value=101)))
    def test_out_of_range_scores_are_rejected(self, score):
        with pytest.raises(PydanticValidationError):
            SwipeCreate(offer_id="7b0c3c1e-7d4c-4a57-9c6e-4cb1b2d1e0aa", action="left", matching_score=score)

    @given(action=st.text(min_size=1, max_size=10).filter(lambda a: a not in {"right", "left", "favorite"}))
    def test_unknown_actions_are_rejected(self, action):
        with pytest.raises(PydanticValidationError):
            SwipeCreate(offer_id="7b0c3c1e-7d4c-4a57-9c6e-4cb1b2d1e0aa", action=action)


class TestSwipeUniquenessProperties:
    """Only the first swipe on an offer counts, whatever follows."""

    @settings(max_examples=PropertyTestConfig.DATABASE_ITERATIONS)
    @given(actions=swipe_sequences())
    def test_one_swipe_event_per_user_and_offer(self, actions):
        engine = make_engine()
        session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
        try:
            company = Company(name="Acme", email_domain="acme.com")
            session.add(company)
            session.commit()
            recruiter = create_user(session, "r@acme.com", UserRole.RECRUITER, company)
            candidate = create_user(session, "c@example.com")
            offer = create_offer(session, recruiter)

            service = SwipeService(ApplicationService(NotificationService(enabled=False)))
            accepted = []
            for action in actions:
                try:
                    service.record_swipe(session, candidate, SwipeCreate(offer_id=offer.id, action=action))
                    accepted.append(action)
                except DuplicateSwipeError:
                    pass

            note(f"actions: {actions}, accepted: {accepted}")
            assert accepted == actions[:1]
            assert session.query(SwipeEvent).count() == 1

            stored = session.query(SwipeEvent).one()
            assert stored.action == actions[0]

            applications = session.query(Application).count()
            assert applications == (1 if actions[0] == SwipeAction.RIGHT.value else 0)

            session.refresh(offer)
            assert offer.application_count == applications
            assert offer.favorite_count == (1 if actions[0] == SwipeAction.FAVORITE.value else 0)
        finally:
            session.close()
            Base.metadata.drop_all(bind=engine)
            engine.dispose()
