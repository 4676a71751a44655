"""Tests for application management."""

import pytest

from hereoz_backend.core.error_handling import (
    AuthorizationError,
    ConflictError,
    InvalidTransitionError,
    ValidationError,
)
from hereoz_backend.models.application import Application
from hereoz_backend.schemas.application import ApplicationCreate, ApplicationStatusUpdate
from hereoz_backend.services.application_service import WITHDRAWAL_REASON, ApplicationService
from tests.conftest import create_offer


@pytest.fixture
def service(notifier):
    return ApplicationService(notifier)


@pytest.fixture
def application(db_session, service, candidate, offer):
    return service.create_application(db_session, candidate, ApplicationCreate(offer_id=offer.id))


class TestCreateApplication:

    def test_direct_apply(self, db_session, service, notifier, candidate, offer):
        application = service.create_application(
            db_session, candidate, ApplicationCreate(offer_id=offer.id, cover_message="Hello")
        )

        assert application.status == "new"
        assert application.cover_message == "Hello"
        assert application.matching_score == 87
        db_session.refresh(offer)
        assert offer.application_count == 1
        notifier.send_new_application.assert_called_once()

    def test_second_apply_conflicts(self, db_session, service, candidate, offer, application):
        with pytest.raises(ConflictError):
            service.create_application(db_session, candidate, ApplicationCreate(offer_id=offer.id))
        assert db_session.query(Application).count() == 1

    def test_closed_offer(self, db_session, service, candidate, recruiter):
        closed = create_offer(db_session, recruiter, status="closed")
        with pytest.raises(ValidationError):
            service.create_application(db_session, candidate, ApplicationCreate(offer_id=closed.id))


class TestUpdateStatus:

    def test_reject_with_reason(self, db_session, service, notifier, recruiter, application):
        updated = service.update_status(
            db_session,
            application.id,
            recruiter,
            ApplicationStatusUpdate(status="rejected", rejection_reason="Salary mismatch")
        )

        assert updated.status == "rejected"
        assert updated.rejection_reason == "Salary mismatch"
        history = service.get_history(db_session, application.id, recruiter)
        assert history[-1].reason == "Salary mismatch"
        assert history[-1].actor_id == recruiter.id
        notifier.send_application_status.assert_called_once_with(
            "candidate@example.com", "Backend Developer", "rejected", "Salary mismatch"
        )

    def test_recruiter_notes_saved(self, db_session, service, recruiter, application):
        updated = service.update_status(
            db_session,
            application.id,
            recruiter,
            ApplicationStatusUpdate(status="contacted", recruiter_notes="Call on Monday")
        )

        assert updated.status == "contacted"
        assert updated.recruiter_notes == "Call on Monday"
        assert updated.rejection_reason is None

    def test_same_status_leaves_application_untouched(self, db_session, service, notifier, recruiter, application):
        before = application.status_updated_at

        updated = service.update_status(db_session, application.id, recruiter, ApplicationStatusUpdate(status="new"))

        assert updated.status_updated_at == before
        assert service.get_history(db_session, application.id, recruiter) == []
        notifier.send_application_status.assert_not_called()

    def test_backward_move_rejected(self, db_session, service, recruiter, application):
        service.update_status(db_session, application.id, recruiter, ApplicationStatusUpdate(status="interview"))

        with pytest.raises(InvalidTransitionError):
            service.update_status(db_session, application.id, recruiter, ApplicationStatusUpdate(status="viewed"))

        db_session.refresh(application)
        assert application.status == "interview"

    def test_other_company_recruiter_denied(self, db_session, service, other_recruiter, application):
        with pytest.raises(AuthorizationError):
            service.update_status(
                db_session, application.id, other_recruiter, ApplicationStatusUpdate(status="viewed")
            )

    def test_company_admin_may_manage(self, db_session, service, company_admin, application):
        updated = service.update_status(
            db_session, application.id, company_admin, ApplicationStatusUpdate(status="offer")
        )
        assert updated.status == "offer"


class TestMarkViewed:

    def test_new_becomes_viewed(self, db_session, service, recruiter, application):
        updated = service.mark_viewed(db_session, application.id, recruiter)
        assert updated.status == "viewed"

    def test_later_status_unchanged(self, db_session, service, recruiter, application):
        service.update_status(db_session, application.id, recruiter, ApplicationStatusUpdate(status="interview"))

        updated = service.mark_viewed(db_session, application.id, recruiter)

        assert updated.status == "interview"
        assert len(service.get_history(db_session, application.id, recruiter)) == 1


class TestWithdraw:

    def test_withdraw_ends_rejected(self, db_session, service, candidate, application):
        withdrawn = service.withdraw(db_session, application.id, candidate)

        assert withdrawn.status == "rejected"
        assert withdrawn.withdrawn_at is not None
        assert withdrawn.rejection_reason == WITHDRAWAL_REASON
        log = service.get_history(db_session, application.id, candidate)[-1]
        assert log.actor_id == candidate.id
        assert log.is_terminal is True

    def test_withdraw_with_reason(self, db_session, service, candidate, application):
        withdrawn = service.withdraw(db_session, application.id, candidate, reason="Took another job")
        assert withdrawn.rejection_reason == "Took another job"

    def test_cannot_withdraw_someone_elses(self, db_session, service, other_candidate, application):
        with pytest.raises(AuthorizationError):
            service.withdraw(db_session, application.id, other_candidate)

    def test_cannot_withdraw_terminal(self, db_session, service, candidate, recruiter, application):
        service.update_status(db_session, application.id, recruiter, ApplicationStatusUpdate(status="hired"))

        with pytest.raises(InvalidTransitionError):
            service.withdraw(db_session, application.id, candidate)


class TestAccess:

    def test_reader_scope(self, db_session, service, candidate, recruiter, other_candidate, application):
        assert service.get_application_for_user(db_session, application.id, candidate).id == application.id
        assert service.get_application_for_user(db_session, application.id, recruiter).id == application.id
        with pytest.raises(AuthorizationError):
            service.get_application_for_user(db_session, application.id, other_candidate)

    def test_reading_does_not_change_status(self, db_session, service, recruiter, application):
        service.get_application_for_user(db_session, application.id, recruiter)
        db_session.refresh(application)
        assert application.status == "new"

    def test_list_for_offer_filters_status(self, db_session, service, recruiter, other_candidate, offer, application):
        service.create_application(db_session, other_candidate, ApplicationCreate(offer_id=offer.id))
        service.mark_viewed(db_session, application.id, recruiter)

        viewed, total = service.list_for_offer(db_session, offer, recruiter, status="viewed")

        assert total == 1
        assert viewed[0].id == application.id
