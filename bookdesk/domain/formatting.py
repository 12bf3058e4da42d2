"""Booking conversions between the data store, forms and display."""

from types import MappingProxyType
from typing import Any, Mapping, NamedTuple

from bookdesk.core.exceptions import InvalidBookingInput
from bookdesk.domain.booking_access import require_booking
from bookdesk.domain.booking_state import BookingStatus, coerce_status
from bookdesk.domain.pricing import (
    calculate_total_price,
    parse_adjustment,
    parse_amount,
    require_base_price,
)
from bookdesk.domain.validation import is_blank, parse_date, parse_time

VEHICLE_PLACEHOLDER = "Vehicle details not provided"
DEFAULT_ESTIMATED_DURATION = 60

INTEGER_FIELDS = frozenset({"estimated_duration", "vehicle_year"})
# Adjustments default to zero instead of null
ZERO_DEFAULT_FIELDS = ("additional_charges", "discount_amount")


class StatusInfo(NamedTuple):
    label: str
    color: str
    description: str


BOOKING_STATUSES: Mapping[BookingStatus, StatusInfo] = MappingProxyType({
    BookingStatus.PENDING: StatusInfo(
        "Pending",
        "bg-yellow-100 text-yellow-800 dark:bg-yellow-900 dark:text-yellow-300",
        "Booking submitted, awaiting confirmation",
    ),
    BookingStatus.CONFIRMED: StatusInfo(
        "Confirmed",
        "bg-blue-100 text-blue-800 dark:bg-blue-900 dark:text-blue-300",
        "Booking confirmed by worker",
    ),
    BookingStatus.IN_PROGRESS: StatusInfo(
        "In Progress",
        "bg-orange-100 text-orange-800 dark:bg-orange-900 dark:text-orange-300",
        "Service currently being performed",
    ),
    BookingStatus.COMPLETED: StatusInfo(
        "Completed",
        "bg-green-100 text-green-800 dark:bg-green-900 dark:text-green-300",
        "Service completed successfully",
    ),
    BookingStatus.CANCELLED: StatusInfo(
        "Cancelled",
        "bg-red-100 text-red-800 dark:bg-red-900 dark:text-red-300",
        "Booking cancelled",
    ),
})


def get_status_info(status: Any) -> StatusInfo:
    """Look up a status descriptor, falling back to the pending one."""
    return BOOKING_STATUSES[coerce_status(status) or BookingStatus.PENDING]


def format_date(value: Any) -> str:
    """Format a date like ``Saturday, October 17, 2026``."""
    if is_blank(value):
        return ""
    parsed = parse_date(value)
    if parsed is None:
        raise InvalidBookingInput(f"scheduled_date is not a valid date: {value!r}")
    return f"{parsed:%A}, {parsed:%B} {parsed.day}, {parsed.year}"


def format_time(value: Any) -> str:
    """Format a time of day on a 12-hour clock, e.g. ``02:30 PM``."""
    if is_blank(value):
        return ""
    parsed = parse_time(value)
    if parsed is None:
        raise InvalidBookingInput(f"scheduled_time is not a valid time: {value!r}")
    return f"{parsed:%I:%M %p}"


def describe_vehicle(booking: Mapping[str, Any]) -> str:
    parts = [
        str(booking.get(key)).strip()
        for key in ("vehicle_year", "vehicle_make", "vehicle_model")
        if not is_blank(booking.get(key))
    ]
    return " ".join(parts) or VEHICLE_PLACEHOLDER


def format_booking_for_display(booking: Mapping[str, Any]) -> dict[str, Any]:
    """Enrich a booking record for display.

    Adds ``formatted_date``, ``formatted_time``, ``status_info`` and
    ``vehicle_info``, and replaces ``total_price`` with the recomputed total.

    Raises:
        InvalidBookingInput: If the record is not a mapping or holds an
            unusable base price, date or time
    """
    record = require_booking(booking)
    return {
        **record,
        "formatted_date": format_date(record.get("scheduled_date")),
        "formatted_time": format_time(record.get("scheduled_time")),
        "total_price": calculate_total_price(
            record.get("base_price"),
            record.get("vehicle_type"),
            record.get("additional_charges"),
            record.get("discount_amount"),
        ),
        "status_info": get_status_info(record.get("status"))._asdict(),
        "vehicle_info": describe_vehicle(record),
    }


def get_default_booking_form(profile: Mapping[str, Any] | None = None) -> dict[str, Any]:
    """Build a blank booking form, prefilled from the actor's profile."""
    form: dict[str, Any] = {
        "booking_number": "",
        "customer_id": "",
        "worker_id": "",
        "service_id": "",
        "status": BookingStatus.PENDING.value,
        "scheduled_date": "",
        "scheduled_time": "",
        "estimated_duration": DEFAULT_ESTIMATED_DURATION,
        "service_address_id": "",
        "service_address_text": "",
        "vehicle_type": "",
        "vehicle_make": "",
        "vehicle_model": "",
        "vehicle_year": "",
        "vehicle_color": "",
        "license_plate": "",
        "base_price": 0,
        "additional_charges": 0,
        "discount_amount": 0,
        "special_instructions": "",
        "customer_notes": "",
        "worker_notes": "",
    }

    if profile:
        role = profile.get("role")
        if role == "customer":
            form["customer_id"] = profile.get("id") or ""
        elif role == "worker":
            form["worker_id"] = profile.get("id") or ""

    return form


def prepare_booking_for_api(form_data: Mapping[str, Any]) -> dict[str, Any]:
    """Convert a booking form into a typed payload for the data store.

    Blank values become ``None``, ``estimated_duration``/``vehicle_year``
    become ints, money fields become floats (adjustments default to 0) and
    ``total_price`` is recomputed.

    Raises:
        InvalidBookingInput: If the form has no usable ``base_price`` or an
            amount is too large to price
    """
    record = require_booking(form_data)
    payload: dict[str, Any] = {}

    for key, value in record.items():
        if key == "total_price":
            continue
        if key in ZERO_DEFAULT_FIELDS:
            payload[key] = float(parse_adjustment(value, key))
        elif is_blank(value):
            payload[key] = None
        elif key in INTEGER_FIELDS:
            number = parse_amount(value)
            payload[key] = int(number) if number is not None else None
        elif key == "base_price":
            payload[key] = float(require_base_price(value))
        else:
            payload[key] = value

    for key in ZERO_DEFAULT_FIELDS:
        payload.setdefault(key, 0.0)

    payload["total_price"] = float(
        calculate_total_price(
            payload.get("base_price"),
            payload.get("vehicle_type"),
            payload["additional_charges"],
            payload["discount_amount"],
        )
    )
    return payload


def prepare_booking_for_form(api_data: Mapping[str, Any] | None) -> dict[str, Any]:
    """Convert a stored booking into form values; nulls become empty strings."""
    if api_data is None:
        return get_default_booking_form()
    record = require_booking(api_data)
    return {key: "" if value is None else value for key, value in record.items()}
