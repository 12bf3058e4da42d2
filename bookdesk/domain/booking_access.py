"""Edit and cancel authorization for bookings."""

from typing import Any, Mapping

from bookdesk.core.exceptions import InvalidBookingInput
from bookdesk.core.permissions import UserRole, coerce_role
from bookdesk.domain.booking_state import TERMINAL_STATUSES, BookingStatus, coerce_status

WORKER_EDITABLE_STATUSES = frozenset({
    BookingStatus.PENDING,
    BookingStatus.CONFIRMED,
    BookingStatus.IN_PROGRESS,
})


def require_booking(booking: Any) -> Mapping[str, Any]:
    """Raise ``InvalidBookingInput`` unless ``booking`` is a mapping."""
    if not isinstance(booking, Mapping):
        raise InvalidBookingInput(
            f"Booking must be a mapping of fields, got {type(booking).__name__}"
        )
    return booking


def same_actor(owner_id: Any, actor_id: Any) -> bool:
    """Compare identifiers as strings; a missing id never matches."""
    if owner_id is None or actor_id is None:
        return False
    owner, actor = str(owner_id).strip(), str(actor_id).strip()
    return bool(owner) and owner == actor


def can_edit_booking(booking: Mapping[str, Any], role: str | UserRole, actor_id: Any) -> bool:
    """Check if an actor may edit a booking.

    Admins may edit anything. Otherwise terminal bookings are locked, customers
    may edit their own pending bookings and workers may edit their assigned
    bookings until completion.
    """
    record = require_booking(booking)
    actor_role = coerce_role(role)
    if actor_role is None:
        return False

    if actor_role is UserRole.ADMIN:
        return True

    status = coerce_status(record.get("status"))
    if status in TERMINAL_STATUSES:
        return False

    if actor_role is UserRole.CUSTOMER:
        return same_actor(record.get("customer_id"), actor_id) and status is BookingStatus.PENDING
    if actor_role is UserRole.WORKER:
        return same_actor(record.get("worker_id"), actor_id) and status in WORKER_EDITABLE_STATUSES
    raise AssertionError(f"Unhandled role: {actor_role!r}")


def can_cancel_booking(booking: Mapping[str, Any], role: str | UserRole, actor_id: Any) -> bool:
    """Check if an actor may cancel a booking.

    An explicit ``can_cancel: False`` on the record forbids cancellation for
    every role, admins included.
    """
    record = require_booking(booking)
    actor_role = coerce_role(role)

    if coerce_status(record.get("status")) in TERMINAL_STATUSES:
        return False
    if record.get("can_cancel") is False:
        return False
    if actor_role is None:
        return False

    if actor_role is UserRole.ADMIN:
        return True
    if actor_role is UserRole.CUSTOMER:
        return same_actor(record.get("customer_id"), actor_id)
    if actor_role is UserRole.WORKER:
        return same_actor(record.get("worker_id"), actor_id)
    raise AssertionError(f"Unhandled role: {actor_role!r}")
