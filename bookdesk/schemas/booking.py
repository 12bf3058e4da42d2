"""Booking-related Pydantic schemas."""

from decimal import Decimal
from typing import Any

from pydantic import BaseModel, Field


class BookingCalculateRequest(BaseModel):
    """Schema for pricing a booking without saving it."""

    base_price: Decimal = Field(..., ge=0, allow_inf_nan=False)
    vehicle_type: str | None = None
    additional_charges: Decimal = Field(default=Decimal("0"), ge=0, allow_inf_nan=False)
    discount_amount: Decimal = Field(default=Decimal("0"), ge=0, allow_inf_nan=False)


class BookingCalculateResponse(BaseModel):
    """Schema for booking price breakdown."""

    base_price: float
    vehicle_multiplier: float
    adjusted_base_price: float
    additional_charges: float
    discount_amount: float
    total_price: float
    platform_fee: float
    worker_earnings: float
    currency: str


class BookingValidationResponse(BaseModel):
    """Schema for form validation results."""

    is_valid: bool
    errors: dict[str, str]


class BookingPermissionsResponse(BaseModel):
    """What the current actor may do with a booking."""

    can_edit: bool
    can_cancel: bool
    allowed_transitions: list[str]


class BookingTransitionRequest(BaseModel):
    """Schema for moving a booking to a new status."""

    booking: dict[str, Any]
    target_status: str
    cancellation_reason: str | None = Field(None, max_length=1000)
