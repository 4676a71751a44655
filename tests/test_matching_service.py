"""Tests for matching scores and the swipe feed."""

from datetime import datetime, timedelta

from hereoz_backend.auth.models import User
from hereoz_backend.models.offer import Offer
from hereoz_backend.models.swipe_event import SwipeEvent
from hereoz_backend.services.matching_service import MatchingService, calculate_matching_score
from tests.conftest import create_offer


def _candidate(**fields):
    return User(email="c@example.com", hashed_password="x", role="candidate", **fields)


def _offer(**fields):
    fields.setdefault("remote_mode", "onsite")
    return Offer(title="Dev", description="Role", **fields)


class TestCalculateMatchingScore:

    def test_full_profile_example(self, candidate, offer):
        # skills 2/3 of 40, experience 20, languages 20, location 20
        assert calculate_matching_score(candidate, offer) == 87

    def test_no_requirements_gives_partial_location_only(self):
        assert calculate_matching_score(_candidate(), _offer()) == 90

    def test_full_remote_earns_location_points(self):
        assert calculate_matching_score(_candidate(), _offer(remote_mode="full_remote")) == 100

    def test_location_match_is_case_insensitive(self):
        candidate = _candidate(address="5 avenue Foch, LYON")
        assert calculate_matching_score(candidate, _offer(location="lyon")) == 100

    def test_experience_is_proportional_and_capped(self):
        offer = _offer(required_experience_years=4, remote_mode="full_remote")
        assert calculate_matching_score(_candidate(experience_years=1), offer) == 85
        assert calculate_matching_score(_candidate(experience_years=10), offer) == 100
        assert calculate_matching_score(_candidate(), offer) == 80

    def test_missing_skills_and_languages(self):
        offer = _offer(required_skills=["go", "rust"], required_languages=["german"], remote_mode="full_remote")
        assert calculate_matching_score(_candidate(skills=["Python"], languages=["French"]), offer) == 40

    def test_half_points_round_up(self):
        # 40 * 1/8 = 5, 20 * 1/8 = 2.5, 20, 20 -> 47.5
        offer = _offer(
            required_skills=[f"s{i}" for i in range(8)],
            required_experience_years=8,
            remote_mode="full_remote",
        )
        candidate = _candidate(skills=["s0"], experience_years=1)
        assert calculate_matching_score(candidate, offer) == 48


class TestSwipeFeed:

    def test_feed_excludes_swiped_and_closed_offers(self, db_session, candidate, recruiter, offer):
        closed = create_offer(db_session, recruiter, title="Closed role", status="closed")
        expired = create_offer(db_session, recruiter, title="Old role", expires_at=datetime.utcnow() - timedelta(days=1))
        swiped = create_offer(db_session, recruiter, title="Seen role")
        db_session.add(SwipeEvent(user_id=candidate.id, offer_id=swiped.id, action="left"))
        db_session.commit()

        feed = MatchingService(db_session).get_swipe_feed(candidate)

        ids = [o.id for o, _ in feed]
        assert ids == [offer.id]
        assert closed.id not in ids and expired.id not in ids

    def test_feed_sorted_by_score(self, db_session, candidate, recruiter, offer):
        perfect = create_offer(
            db_session,
            recruiter,
            title="Python developer",
            required_skills=["python"],
            required_languages=[],
            required_experience_years=1,
            remote_mode="full_remote",
        )

        feed = MatchingService(db_session).get_swipe_feed(candidate)

        assert [o.id for o, _ in feed] == [perfect.id, offer.id]
        assert [score for _, score in feed] == [100, 87]

    def test_feed_filters(self, db_session, candidate, recruiter, offer):
        create_offer(db_session, recruiter, title="Lyon role", location="Lyon", contract_type="internship")

        service = MatchingService(db_session)
        assert [o.title for o, _ in service.get_swipe_feed(candidate, location="lyon")] == ["Lyon role"]
        assert [o.title for o, _ in service.get_swipe_feed(candidate, contract_type="permanent")] == [offer.title]

    def test_suggest_candidates_min_score(self, db_session, candidate, other_candidate, offer):
        ranked = MatchingService(db_session).suggest_candidates(offer, min_score=50)

        assert [(user.id, score) for user, score in ranked] == [(candidate.id, 87)]
