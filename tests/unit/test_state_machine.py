# tests/unit/test_state_machine.py

import pytest

from src.domain.state_machine import BookingStateMachine, BookingStatus
from src.domain.exceptions import InvalidRequestError, InvalidStateTransitionError


# ---------------------
# VALID TRANSITIONS
# ---------------------

def test_pending_can_move_anywhere():
    for target in BookingStatus:
        assert BookingStateMachine.can_transition(BookingStatus.PENDING, target)


def test_confirmed_can_be_canceled_or_completed():
    assert BookingStateMachine.can_transition(
        BookingStatus.CONFIRMED,
        BookingStatus.CANCELED,
    )
    assert BookingStateMachine.can_transition(
        BookingStatus.CONFIRMED,
        BookingStatus.COMPLETED,
    )


def test_completed_can_only_be_canceled():
    assert BookingStateMachine.get_allowed_transitions(BookingStatus.COMPLETED) == {
        BookingStatus.CANCELED
    }
    BookingStateMachine.validate_transition(
        BookingStatus.COMPLETED,
        BookingStatus.CANCELED,
    )


def test_rejected_is_not_locked():
    assert not BookingStateMachine.is_terminal(BookingStatus.REJECTED)


# ---------------------
# INVALID TRANSITIONS
# ---------------------

@pytest.mark.parametrize("target", list(BookingStatus))
def test_canceled_is_terminal(target):
    assert BookingStateMachine.is_terminal(BookingStatus.CANCELED)

    with pytest.raises(InvalidStateTransitionError) as exc_info:
        BookingStateMachine.validate_transition(BookingStatus.CANCELED, target)

    assert exc_info.value.message == "Cannot update a canceled booking"


@pytest.mark.parametrize(
    "target",
    [s for s in BookingStatus if s != BookingStatus.CANCELED],
)
def test_completed_locks_everything_but_cancel(target):
    with pytest.raises(InvalidStateTransitionError) as exc_info:
        BookingStateMachine.validate_transition(BookingStatus.COMPLETED, target)

    assert exc_info.value.message == "Completed booking cannot be updated"
    assert exc_info.value.from_state == "completed"


def test_transition_error_is_an_invalid_request():
    with pytest.raises(InvalidRequestError) as exc_info:
        BookingStateMachine.validate_transition(
            BookingStatus.CANCELED,
            BookingStatus.PENDING,
        )
    assert exc_info.value.status_code == 400


def test_invalid_type_guard():
    with pytest.raises(TypeError):
        BookingStateMachine.validate_transition(
            "pending",  # invalid type
            BookingStatus.CONFIRMED,
        )
