"""Booking rules engine.

Pure functions only: nothing in this package performs I/O, logs, or reads
settings.
"""

from bookdesk.domain.booking_access import can_cancel_booking, can_edit_booking
from bookdesk.domain.booking_state import (
    BookingStatus,
    assert_booking_transition,
    build_status_update,
    get_allowed_transitions,
)
from bookdesk.domain.formatting import (
    BOOKING_STATUSES,
    format_booking_for_display,
    get_default_booking_form,
    prepare_booking_for_api,
    prepare_booking_for_form,
)
from bookdesk.domain.pricing import (
    VEHICLE_MULTIPLIERS,
    VehicleType,
    calculate_payment_split,
    calculate_total_price,
    get_vehicle_multiplier,
)
from bookdesk.domain.validation import (
    get_field_error,
    get_required_fields,
    validate_booking_data,
)

__all__ = [
    # Pricing
    "VEHICLE_MULTIPLIERS",
    "VehicleType",
    "calculate_payment_split",
    "calculate_total_price",
    "get_vehicle_multiplier",
    # Status
    "BookingStatus",
    "assert_booking_transition",
    "build_status_update",
    "get_allowed_transitions",
    # Access
    "can_cancel_booking",
    "can_edit_booking",
    # Validation
    "get_field_error",
    "get_required_fields",
    "validate_booking_data",
    # Formatting
    "BOOKING_STATUSES",
    "format_booking_for_display",
    "get_default_booking_form",
    "prepare_booking_for_api",
    "prepare_booking_for_form",
]
