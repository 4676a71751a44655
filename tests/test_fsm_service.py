"""Tests for the application state machine and FSM service."""

from unittest.mock import MagicMock
from uuid import uuid4

import pytest
from sqlalchemy.exc import IntegrityError

from hereoz_backend.core.error_handling import InvalidTransitionError, NotFoundError
from hereoz_backend.models.application import Application
from hereoz_backend.models.application_transition_log import ActorType, ApplicationTransitionLog
from hereoz_backend.services.fsm_service import ApplicationFSM, FSMService


@pytest.fixture
def application(db_session, candidate, offer):
    application = Application(candidate_id=candidate.id, offer_id=offer.id, status="new")
    db_session.add(application)
    db_session.commit()
    db_session.refresh(application)
    return application


class TestApplicationFSM:
    """Pure transition rules."""

    def test_valid_states_defined(self):
        assert ApplicationFSM.VALID_STATES == [
            "new", "viewed", "contacted", "interview", "offer", "accepted", "hired", "rejected"
        ]
        assert ApplicationFSM.TERMINAL_STATES == ["accepted", "hired", "rejected"]

    @pytest.mark.parametrize("current,target", [
        ("new", "viewed"),
        ("new", "interview"),
        ("viewed", "contacted"),
        ("contacted", "offer"),
        ("offer", "accepted"),
        ("offer", "hired"),
        ("new", "rejected"),
        ("offer", "rejected"),
    ])
    def test_forward_and_rejection_moves_allowed(self, current, target):
        allowed, reason = ApplicationFSM.can_transition(current, target)
        assert allowed, reason

    @pytest.mark.parametrize("current,target", [
        ("viewed", "new"),
        ("interview", "contacted"),
        ("accepted", "hired"),
        ("hired", "accepted"),
    ])
    def test_backward_moves_rejected(self, current, target):
        allowed, reason = ApplicationFSM.can_transition(current, target)
        assert not allowed
        assert current in reason

    @pytest.mark.parametrize("terminal", ["accepted", "hired", "rejected"])
    def test_terminal_states_accept_nothing(self, terminal):
        for target in ApplicationFSM.VALID_STATES:
            allowed, _ = ApplicationFSM.can_transition(terminal, target)
            assert not allowed

    def test_unknown_status_rejected(self):
        allowed, reason = ApplicationFSM.can_transition("new", "shortlisted")
        assert not allowed
        assert reason == "Invalid status: shortlisted"

    def test_progress_steps(self):
        assert ApplicationFSM.progress_step("new") == 0
        assert ApplicationFSM.progress_step("viewed") == 1
        assert ApplicationFSM.progress_step("contacted") == 1
        assert ApplicationFSM.progress_step("interview") == 2
        assert ApplicationFSM.progress_step("offer") == 2
        assert ApplicationFSM.progress_step("accepted") == 3
        assert ApplicationFSM.progress_step("hired") == 3
        assert ApplicationFSM.progress_step("rejected") == -1

    def test_is_before(self):
        assert ApplicationFSM.is_before("viewed", "interview")
        assert not ApplicationFSM.is_before("interview", "interview")
        assert not ApplicationFSM.is_before("rejected", "interview")


class TestFSMService:
    """Transitions against a real session."""

    def test_apply_transition_writes_log_without_commit(self, db_session, application, recruiter):
        service = FSMService(db_session)

        changed = service.apply_transition(
            application, "viewed", actor_id=recruiter.id, actor_type=ActorType.USER, reason="Opened"
        )

        assert changed is True
        assert application.status == "viewed"
        db_session.rollback()
        db_session.refresh(application)
        assert application.status == "new"
        assert db_session.query(ApplicationTransitionLog).count() == 0

    def test_transition_application_status_success(self, db_session, application, recruiter):
        service = FSMService(db_session)

        result = service.transition_application_status(
            application.id,
            "interview",
            actor_id=recruiter.id,
            actor_type=ActorType.USER,
            reason="Phone screen went well"
        )

        assert result.status == "interview"
        history = service.get_transition_history(application.id)
        assert len(history) == 1
        log = history[0]
        assert (log.old_status, log.new_status) == ("new", "interview")
        assert log.actor_id == recruiter.id
        assert log.actor_type == "USER"
        assert log.reason == "Phone screen went well"
        assert log.is_terminal is False

    def test_terminal_transition_flagged(self, db_session, application):
        service = FSMService(db_session)
        service.transition_application_status(application.id, "rejected", reason="Position filled")

        log = service.get_transition_history(application.id)[0]
        assert log.is_terminal is True
        assert log.actor_type == "SYSTEM"
        assert log.actor_id is None

    def test_same_status_is_noop(self, db_session, application):
        service = FSMService(db_session)

        result = service.transition_application_status(application.id, "new", reason="Again")

        assert result.status == "new"
        assert service.get_transition_history(application.id) == []

    def test_invalid_transition_raises_and_leaves_status(self, db_session, application):
        service = FSMService(db_session)
        service.transition_application_status(application.id, "rejected", reason="No fit")

        with pytest.raises(InvalidTransitionError) as exc_info:
            service.transition_application_status(application.id, "interview", reason="Changed mind")

        assert exc_info.value.current_status == "rejected"
        assert exc_info.value.target_status == "interview"
        db_session.refresh(application)
        assert application.status == "rejected"
        assert len(service.get_transition_history(application.id)) == 1

    def test_application_not_found(self, db_session):
        with pytest.raises(NotFoundError):
            FSMService(db_session).transition_application_status(uuid4(), "viewed")

    def test_rollback_on_commit_error(self):
        mock_db = MagicMock()
        mock_application = MagicMock(spec=Application)
        mock_application.id = uuid4()
        mock_application.status = "new"
        mock_db.query.return_value.filter.return_value.first.return_value = mock_application
        mock_db.commit.side_effect = IntegrityError("Constraint violation", None, None)

        with pytest.raises(IntegrityError):
            FSMService(mock_db).transition_application_status(mock_application.id, "viewed")

        mock_db.rollback.assert_called_once()
