"""
Property-based tests for the application state machine.

Any sequence of requested transitions, applied through the transition
rules, must keep the pipeline monotonic and leave terminal statuses alone.
"""

from hypothesis import given, note, strategies as st

from hereoz_backend.models.application import ApplicationStatus
from hereoz_backend.services.fsm_service import ApplicationFSM
from .generators import APPLICATION_STATUSES, status_paths


def _walk(path):
    """Apply every allowed transition in order; return the visited statuses."""
    current = ApplicationStatus.NEW.value
    visited = [current]
    for target in path:
        allowed, _ = ApplicationFSM.can_transition(current, target)
        if allowed:
            current = target
            visited.append(current)
    return visited


class TestApplicationFSMProperties:
    """State machine invariants over arbitrary request sequences."""

    @given(path=status_paths())
    def test_pipeline_never_moves_backwards(self, path):
        visited = _walk(path)
        note(f"visited: {visited}")

        ordered = [s for s in visited if s in ApplicationFSM.STATE_ORDER]
        ranks = [ApplicationFSM.STATE_ORDER[s] for s in ordered]
        assert ranks == sorted(ranks)
        assert len(set(ranks)) == len(ranks)

    @given(path=status_paths(max_size=15))
    def test_terminal_status_is_final(self, path):
        visited = _walk(path)

        for index, status in enumerate(visited):
            if ApplicationFSM.is_terminal(status):
                assert index == len(visited) - 1

    @given(
        current=st.sampled_from(APPLICATION_STATUSES),
        target=st.sampled_from(APPLICATION_STATUSES),
    )
    def test_rejected_reachable_from_every_open_status(self, current, target):
        allowed, reason = ApplicationFSM.can_transition(current, target)

        if current == target or ApplicationFSM.is_terminal(current):
            assert not allowed
        elif target == ApplicationStatus.REJECTED.value:
            assert allowed
        else:
            assert allowed == ApplicationFSM.is_before(current, target), reason

    @given(path=status_paths())
    def test_progress_step_is_monotonic_until_rejection(self, path):
        visited = _walk(path)
        steps = [ApplicationFSM.progress_step(s) for s in visited]

        if visited[-1] == ApplicationStatus.REJECTED.value:
            assert steps[-1] == -1
            steps = steps[:-1]
        assert steps == sorted(steps)
        assert all(0 <= step <= 3 for step in steps)

    @given(status=st.sampled_from(APPLICATION_STATUSES))
    def test_withdrawal_allowed_exactly_when_not_terminal(self, status):
        assert ApplicationFSM.can_withdraw(status) is not ApplicationFSM.is_terminal(status)
