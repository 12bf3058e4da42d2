"""Booking form validation.

Each field rule is evaluated on its own and reports a human-readable message,
or an empty string when the value is acceptable. Fields without a rule always
pass.
"""

from datetime import date, datetime, time
from decimal import Decimal
from typing import Any, Mapping, NamedTuple

from bookdesk.core.permissions import UserRole, coerce_role
from bookdesk.domain.booking_access import require_booking
from bookdesk.domain.pricing import ZERO, is_oversized, parse_amount

MIN_ADDRESS_LENGTH = 10
MIN_DURATION_MINUTES = 15
MIN_VEHICLE_YEAR = 1990

BASE_REQUIRED_FIELDS = (
    "service_id",
    "scheduled_date",
    "scheduled_time",
    "service_address_text",
    "vehicle_type",
    "base_price",
)

OPTIONAL_NUMERIC_FIELDS = (
    "estimated_duration",
    "vehicle_year",
    "additional_charges",
    "discount_amount",
)

# Actors booking on behalf of someone else must name the customer
ROLES_REQUIRING_CUSTOMER = frozenset({UserRole.ADMIN, UserRole.WORKER})


class ValidationResult(NamedTuple):
    is_valid: bool
    errors: dict[str, str]


def is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def parse_date(value: Any) -> date | None:
    """Parse a calendar date from a ``date``/``datetime`` or ISO string.

    Returns ``None`` when the value cannot be read as a date.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None
    text = value.strip()
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        return None


def parse_time(value: Any) -> time | None:
    """Parse a time of day from a ``time`` or ``HH:MM[:SS]`` string."""
    if isinstance(value, time):
        return value
    if not isinstance(value, str):
        return None
    try:
        return time.fromisoformat(value.strip())
    except ValueError:
        return None


def get_required_fields(role: str | UserRole) -> tuple[str, ...]:
    """Get the fields a booking form must fill in for an actor's role.

    Customers book for themselves, so ``customer_id`` is only required from
    admins and workers.
    """
    if coerce_role(role) in ROLES_REQUIRING_CUSTOMER:
        return BASE_REQUIRED_FIELDS + ("customer_id",)
    return BASE_REQUIRED_FIELDS


def _number_error(value: Any, minimum: Decimal, message: str) -> str:
    if is_blank(value):
        return ""
    if is_oversized(value):
        return "Please enter a smaller number"
    amount = parse_amount(value)
    if amount is None or amount < minimum:
        return message
    return ""


def get_field_error(
    field_name: str,
    value: Any,
    role: str | UserRole | None = None,
    today: date | None = None,
) -> str:
    """Validate a single booking form field.

    Args:
        field_name: Name of the booking field
        value: Raw form value (may be an empty string)
        role: Actor role; the rules themselves do not vary by role
        today: Reference day for date checks (defaults to ``date.today()``)

    Returns:
        str: Error message, or ``""`` when the value passes
    """
    today = today or date.today()

    if field_name == "customer_id":
        return "Please select a customer" if is_blank(value) else ""

    if field_name == "service_id":
        return "Please select a service" if is_blank(value) else ""

    if field_name == "scheduled_date":
        if is_blank(value):
            return "Please select a date"
        scheduled = parse_date(value)
        if scheduled is None:
            return "Please select a valid date"
        if scheduled < today:
            return "Date cannot be in the past"
        return ""

    if field_name == "scheduled_time":
        return "Please select a time" if is_blank(value) else ""

    if field_name == "service_address_text":
        if is_blank(value):
            return "Service address is required"
        if len(str(value).strip()) < MIN_ADDRESS_LENGTH:
            return f"Please provide a complete address (minimum {MIN_ADDRESS_LENGTH} characters)"
        return ""

    if field_name == "vehicle_type":
        return "Please select a vehicle type" if is_blank(value) else ""

    if field_name == "base_price":
        if is_oversized(value):
            return "Base price is too large"
        amount = parse_amount(value)
        if amount is None or amount <= ZERO:
            return "Base price must be greater than 0"
        return ""

    if field_name == "estimated_duration":
        return _number_error(
            value,
            Decimal(MIN_DURATION_MINUTES),
            f"Duration must be at least {MIN_DURATION_MINUTES} minutes",
        )

    if field_name == "vehicle_year":
        if is_blank(value):
            return ""
        year = parse_amount(value)
        if (
            year is None
            or year != year.to_integral_value()
            or not MIN_VEHICLE_YEAR <= year <= today.year + 1
        ):
            return "Please enter a valid vehicle year"
        return ""

    if field_name == "additional_charges":
        return _number_error(value, ZERO, "Additional charges must be a positive number")

    if field_name == "discount_amount":
        return _number_error(value, ZERO, "Discount amount must be a positive number")

    return ""


def validate_booking_data(
    data: Mapping[str, Any],
    role: str | UserRole,
    today: date | None = None,
) -> ValidationResult:
    """Validate a whole booking form for an actor.

    Runs the required-field rules for the role, the optional numeric rules and
    a final check that the unscaled total is not negative.

    Returns:
        ValidationResult: ``is_valid`` flag and a field -> message mapping
    """
    record = require_booking(data)
    errors: dict[str, str] = {}

    for field_name in get_required_fields(role) + OPTIONAL_NUMERIC_FIELDS:
        message = get_field_error(field_name, record.get(field_name), role, today)
        if message:
            errors[field_name] = message

    base = parse_amount(record.get("base_price")) or ZERO
    additional = parse_amount(record.get("additional_charges")) or ZERO
    discount = parse_amount(record.get("discount_amount")) or ZERO
    if base + additional - discount < ZERO:
        errors["total_price"] = "Total price cannot be negative"

    return ValidationResult(is_valid=not errors, errors=errors)
