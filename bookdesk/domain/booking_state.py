"""Booking status rules.

The transition table is a pure lookup keyed by (current status, actor role).
Callers apply and persist a transition; this module only reports legality.
"""

from datetime import UTC, datetime
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping

from bookdesk.core.exceptions import InvalidBookingInput, InvalidBookingStatus
from bookdesk.core.permissions import UserRole, coerce_role


class BookingStatus(str, Enum):
    """Booking lifecycle statuses."""

    PENDING = "pending"
    CONFIRMED = "confirmed"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


TERMINAL_STATUSES = frozenset({BookingStatus.COMPLETED, BookingStatus.CANCELLED})

_NONE: frozenset[BookingStatus] = frozenset()

BOOKING_TRANSITIONS: Mapping[BookingStatus, Mapping[UserRole, frozenset[BookingStatus]]] = MappingProxyType({
    BookingStatus.PENDING: MappingProxyType({
        UserRole.ADMIN: frozenset({BookingStatus.CONFIRMED, BookingStatus.CANCELLED}),
        UserRole.WORKER: frozenset({BookingStatus.CONFIRMED, BookingStatus.CANCELLED}),
        UserRole.CUSTOMER: frozenset({BookingStatus.CANCELLED}),
    }),
    BookingStatus.CONFIRMED: MappingProxyType({
        UserRole.ADMIN: frozenset({BookingStatus.IN_PROGRESS, BookingStatus.CANCELLED}),
        UserRole.WORKER: frozenset({BookingStatus.IN_PROGRESS, BookingStatus.CANCELLED}),
        UserRole.CUSTOMER: _NONE,
    }),
    BookingStatus.IN_PROGRESS: MappingProxyType({
        UserRole.ADMIN: frozenset({BookingStatus.COMPLETED, BookingStatus.CANCELLED}),
        UserRole.WORKER: frozenset({BookingStatus.COMPLETED}),
        UserRole.CUSTOMER: _NONE,
    }),
    BookingStatus.COMPLETED: MappingProxyType({role: _NONE for role in UserRole}),
    BookingStatus.CANCELLED: MappingProxyType({role: _NONE for role in UserRole}),
})


def coerce_status(status: Any) -> BookingStatus | None:
    """Convert a status value to ``BookingStatus``; unknown or missing gives ``None``.

    Raises:
        InvalidBookingInput: If ``status`` is neither a string nor ``None``
    """
    if status is None or isinstance(status, BookingStatus):
        return status
    if not isinstance(status, str):
        raise InvalidBookingInput(f"Booking status must be a string, got {type(status).__name__}")
    try:
        return BookingStatus(status)
    except ValueError:
        return None


def is_terminal(status: Any) -> bool:
    return coerce_status(status) in TERMINAL_STATUSES


def get_allowed_transitions(current_status: Any, role: str | UserRole) -> frozenset[BookingStatus]:
    """Get the statuses an actor may move a booking to.

    Args:
        current_status: The booking's current status
        role: The actor's role

    Returns:
        frozenset: Legal next statuses, empty for unknown statuses or roles
    """
    status = coerce_status(current_status)
    actor_role = coerce_role(role)
    if status is None or actor_role is None:
        return _NONE
    return BOOKING_TRANSITIONS[status][actor_role]


def _label(value: Any) -> str:
    return value.value if isinstance(value, Enum) else str(value)


def assert_booking_transition(current: Any, target: Any, role: str | UserRole) -> None:
    """Raise ``InvalidBookingStatus`` unless the actor may move ``current`` to ``target``."""
    target_status = coerce_status(target)
    if target_status is None or target_status not in get_allowed_transitions(current, role):
        raise InvalidBookingStatus(
            f"Invalid booking transition for {_label(role)}: {_label(current)} → {_label(target)}"
        )


def build_status_update(
    target: Any,
    now: datetime | None = None,
    cancelled_by: str | None = None,
    cancellation_reason: str | None = None,
) -> dict[str, Any]:
    """Build the fields to persist alongside a status change.

    Args:
        target: New status
        now: Timestamp of the change (defaults to current UTC time)
        cancelled_by: Actor id recorded on cancellation
        cancellation_reason: Reason recorded on cancellation

    Returns:
        dict: ``status``, ``updated_at`` and any status-specific timestamps/flags
    """
    status = coerce_status(target)
    if status is None:
        raise InvalidBookingInput(f"Unknown booking status: {target!r}")

    timestamp = (now or datetime.now(UTC)).isoformat()
    update: dict[str, Any] = {"status": status.value, "updated_at": timestamp}

    if status is BookingStatus.IN_PROGRESS:
        update["started_at"] = timestamp
    elif status is BookingStatus.COMPLETED:
        update["completed_at"] = timestamp
        update["can_rate"] = True
    elif status is BookingStatus.CANCELLED:
        update["cancelled_at"] = timestamp
        update["cancelled_by"] = cancelled_by
        update["cancellation_reason"] = cancellation_reason

    return update
