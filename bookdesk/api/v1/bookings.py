"""Booking rule endpoints.

These endpoints never touch the data store. The dashboard calls them to price,
validate and authorize a booking, then persists the result itself.
"""

import logging
from typing import Any

from fastapi import APIRouter

from bookdesk.api.deps import CurrentActor
from bookdesk.config import settings
from bookdesk.core.exceptions import AuthorizationError, ValidationError
from bookdesk.core.permissions import UserRole
from bookdesk.domain.booking_access import can_cancel_booking, can_edit_booking
from bookdesk.domain.booking_state import (
    BookingStatus,
    assert_booking_transition,
    build_status_update,
    coerce_status,
    get_allowed_transitions,
)
from bookdesk.domain.formatting import (
    format_booking_for_display,
    get_default_booking_form,
    prepare_booking_for_api,
)
from bookdesk.domain.pricing import (
    calculate_payment_split,
    calculate_total_price,
    get_vehicle_multiplier,
)
from bookdesk.domain.validation import (
    get_required_fields,
    is_blank,
    validate_booking_data,
)
from bookdesk.schemas.booking import (
    BookingCalculateRequest,
    BookingCalculateResponse,
    BookingPermissionsResponse,
    BookingTransitionRequest,
    BookingValidationResponse,
)
from bookdesk.utils.booking_number import generate_booking_number

router = APIRouter()
logger = logging.getLogger(__name__)


def _ordered(statuses: frozenset[BookingStatus]) -> list[str]:
    return [status.value for status in BookingStatus if status in statuses]


@router.post("/calculate", response_model=BookingCalculateResponse)
async def calculate_booking_price(
    request: BookingCalculateRequest,
    actor: CurrentActor,
) -> BookingCalculateResponse:
    """Calculate booking price without creating a booking."""
    multiplier = get_vehicle_multiplier(request.vehicle_type)
    total = calculate_total_price(
        request.base_price,
        request.vehicle_type,
        request.additional_charges,
        request.discount_amount,
    )
    split = calculate_payment_split(total, settings.platform_fee_percent)

    return BookingCalculateResponse(
        base_price=float(request.base_price),
        vehicle_multiplier=float(multiplier),
        adjusted_base_price=float(request.base_price * multiplier),
        additional_charges=float(request.additional_charges),
        discount_amount=float(request.discount_amount),
        total_price=float(total),
        platform_fee=float(split["platform_fee"]),
        worker_earnings=float(split["worker_earnings"]),
        currency=settings.currency,
    )


@router.post("/validate", response_model=BookingValidationResponse)
async def validate_booking(
    booking: dict[str, Any],
    actor: CurrentActor,
) -> BookingValidationResponse:
    """Validate a booking form for the current actor."""
    result = validate_booking_data(booking, actor.role)
    if not result.is_valid:
        logger.info(f"Booking form rejected for {actor.role.value} {actor.id}: {sorted(result.errors)}")
    return BookingValidationResponse(is_valid=result.is_valid, errors=result.errors)


@router.get("/required-fields")
async def list_required_fields(actor: CurrentActor) -> dict:
    """List the fields the current actor must fill in."""
    return {"role": actor.role.value, "fields": list(get_required_fields(actor.role))}


@router.get("/form-defaults")
async def get_form_defaults(actor: CurrentActor) -> dict:
    """Get a blank booking form prefilled for the current actor."""
    return get_default_booking_form({"role": actor.role.value, "id": actor.id})


@router.post("/prepare")
async def prepare_booking(
    booking: dict[str, Any],
    actor: CurrentActor,
) -> dict:
    """Validate a booking form and convert it into a data-store payload."""
    result = validate_booking_data(booking, actor.role)
    if not result.is_valid:
        logger.info(f"Booking payload rejected for {actor.role.value} {actor.id}: {sorted(result.errors)}")
        raise ValidationError("Booking data is invalid", errors=result.errors)

    payload = prepare_booking_for_api(booking)

    # Customers always book for themselves
    if actor.role is UserRole.CUSTOMER:
        payload["customer_id"] = actor.id
    if is_blank(payload.get("status")):
        payload["status"] = BookingStatus.PENDING.value
    if is_blank(payload.get("booking_number")):
        payload["booking_number"] = generate_booking_number(settings.booking_number_prefix)

    return payload


@router.post("/permissions", response_model=BookingPermissionsResponse)
async def get_booking_permissions(
    booking: dict[str, Any],
    actor: CurrentActor,
) -> BookingPermissionsResponse:
    """Report what the current actor may do with a booking."""
    return BookingPermissionsResponse(
        can_edit=can_edit_booking(booking, actor.role, actor.id),
        can_cancel=can_cancel_booking(booking, actor.role, actor.id),
        allowed_transitions=_ordered(get_allowed_transitions(booking.get("status"), actor.role)),
    )


@router.post("/transition")
async def transition_booking(
    request: BookingTransitionRequest,
    actor: CurrentActor,
) -> dict:
    """Check a status change and return the fields to persist with it."""
    booking = request.booking
    current = booking.get("status")

    assert_booking_transition(current, request.target_status, actor.role)

    if coerce_status(request.target_status) is BookingStatus.CANCELLED:
        if not can_cancel_booking(booking, actor.role, actor.id):
            raise AuthorizationError("You cannot cancel this booking")
        update = build_status_update(
            BookingStatus.CANCELLED,
            cancelled_by=actor.id,
            cancellation_reason=request.cancellation_reason,
        )
    else:
        if not can_edit_booking(booking, actor.role, actor.id):
            raise AuthorizationError("You cannot update this booking")
        update = build_status_update(request.target_status)

    logger.info(
        f"Booking {booking.get('id') or booking.get('booking_number')} "
        f"{current} → {update['status']} by {actor.role.value} {actor.id}"
    )
    return update


@router.post("/display")
async def display_booking(
    booking: dict[str, Any],
    actor: CurrentActor,
) -> dict:
    """Enrich a booking record for display."""
    display = format_booking_for_display(booking)
    display["total_price"] = float(display["total_price"])
    return display
