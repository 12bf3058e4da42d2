"""Actor roles."""

from enum import Enum

from bookdesk.core.exceptions import InvalidBookingInput


class UserRole(str, Enum):
    """Roles an actor can hold on the platform."""

    ADMIN = "admin"
    WORKER = "worker"
    CUSTOMER = "customer"


def coerce_role(role: str | UserRole) -> UserRole | None:
    """Convert a role string to ``UserRole``.

    Role names must match exactly; anything else, including a differently
    cased name, yields ``None`` so callers can deny by default.

    Raises:
        InvalidBookingInput: If ``role`` is not a string at all
    """
    if isinstance(role, UserRole):
        return role
    if not isinstance(role, str):
        raise InvalidBookingInput(f"Actor role must be a string, got {type(role).__name__}")
    try:
        return UserRole(role)
    except ValueError:
        return None
