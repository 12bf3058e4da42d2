"""Pydantic schemas for API validation."""

from bookdesk.schemas.booking import (
    BookingCalculateRequest,
    BookingCalculateResponse,
    BookingPermissionsResponse,
    BookingTransitionRequest,
    BookingValidationResponse,
)

__all__ = [
    "BookingCalculateRequest",
    "BookingCalculateResponse",
    "BookingPermissionsResponse",
    "BookingTransitionRequest",
    "BookingValidationResponse",
]
