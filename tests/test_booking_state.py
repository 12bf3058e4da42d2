from datetime import UTC, datetime

import pytest

from bookdesk.core.exceptions import InvalidBookingInput, InvalidBookingStatus
from bookdesk.domain.booking_state import (
    BookingStatus,
    assert_booking_transition,
    build_status_update,
    get_allowed_transitions,
    is_terminal,
)

ROLES = ["admin", "worker", "customer"]
NOW = datetime(2026, 10, 17, 9, 30, tzinfo=UTC)


@pytest.mark.parametrize("role", ROLES)
@pytest.mark.parametrize("status", ["completed", "cancelled"])
def test_terminal_statuses_have_no_transitions(status, role):
    assert is_terminal(status)
    assert get_allowed_transitions(status, role) == frozenset()


def test_transition_table():
    assert get_allowed_transitions("pending", "customer") == {BookingStatus.CANCELLED}
    assert get_allowed_transitions("pending", "worker") == {
        BookingStatus.CONFIRMED,
        BookingStatus.CANCELLED,
    }
    assert get_allowed_transitions("confirmed", "admin") == {
        BookingStatus.IN_PROGRESS,
        BookingStatus.CANCELLED,
    }
    assert get_allowed_transitions("confirmed", "customer") == frozenset()
    assert get_allowed_transitions("in_progress", "worker") == {BookingStatus.COMPLETED}
    assert get_allowed_transitions("in_progress", "admin") == {
        BookingStatus.COMPLETED,
        BookingStatus.CANCELLED,
    }


def test_unknown_status_or_role_has_no_transitions():
    assert get_allowed_transitions("archived", "admin") == frozenset()
    assert get_allowed_transitions(None, "admin") == frozenset()
    assert get_allowed_transitions("pending", "guest") == frozenset()


def test_non_string_role_is_rejected():
    with pytest.raises(InvalidBookingInput):
        get_allowed_transitions("pending", None)


def test_assert_booking_transition():
    assert_booking_transition("pending", "confirmed", "worker")
    with pytest.raises(InvalidBookingStatus):
        assert_booking_transition("pending", "confirmed", "customer")
    with pytest.raises(InvalidBookingStatus):
        assert_booking_transition("completed", "cancelled", "admin")
    with pytest.raises(InvalidBookingStatus):
        assert_booking_transition("pending", "teleported", "admin")


def test_status_update_for_start():
    update = build_status_update("in_progress", now=NOW)
    assert update == {
        "status": "in_progress",
        "updated_at": "2026-10-17T09:30:00+00:00",
        "started_at": "2026-10-17T09:30:00+00:00",
    }


def test_status_update_for_completion_enables_rating():
    update = build_status_update(BookingStatus.COMPLETED, now=NOW)
    assert update["completed_at"] == NOW.isoformat()
    assert update["can_rate"] is True


def test_status_update_for_cancellation():
    update = build_status_update(
        "cancelled", now=NOW, cancelled_by="customer-1", cancellation_reason="Car sold"
    )
    assert update["cancelled_at"] == NOW.isoformat()
    assert update["cancelled_by"] == "customer-1"
    assert update["cancellation_reason"] == "Car sold"


def test_status_update_for_unknown_status():
    with pytest.raises(InvalidBookingInput):
        build_status_update("archived")


def test_status_and_role_names_match_exactly():
    assert get_allowed_transitions("Pending", "admin") == frozenset()
    assert get_allowed_transitions("pending", "Admin") == frozenset()
    assert get_allowed_transitions(" pending", "admin") == frozenset()
