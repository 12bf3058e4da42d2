"""Booking price calculation.

PRICING RULES:
- Base price is scaled by a fixed per-vehicle multiplier
- Additional charges are added and the discount subtracted after scaling
- The total is clamped at zero and rounded to cents
- Unknown vehicle types price like a sedan (multiplier 1.0)
"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping

from bookdesk.core.exceptions import InvalidBookingInput

ZERO = Decimal("0")
CENT = Decimal("0.01")
DEFAULT_MULTIPLIER = Decimal("1.0")
# Largest magnitude accepted for any amount or count
MAX_AMOUNT = Decimal("1e15")
MAX_TOTAL = MAX_AMOUNT * 10


class VehicleType(str, Enum):
    """Vehicle types with a pricing multiplier."""

    SEDAN = "sedan"
    SUV = "suv"
    VAN = "van"
    TRUCK = "truck"


VEHICLE_MULTIPLIERS: Mapping[VehicleType, Decimal] = MappingProxyType({
    VehicleType.SEDAN: Decimal("1.0"),
    VehicleType.SUV: Decimal("1.2"),
    VehicleType.VAN: Decimal("1.4"),
    VehicleType.TRUCK: Decimal("1.6"),
})


def _to_decimal(value: Any) -> Decimal | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        amount = Decimal(str(value))
    except (InvalidOperation, ValueError):
        return None
    if not amount.is_finite():
        return None
    return amount


def is_oversized(value: Any) -> bool:
    """Check if a value is a number beyond ``MAX_AMOUNT`` in magnitude."""
    amount = _to_decimal(value)
    return amount is not None and abs(amount) > MAX_AMOUNT


def parse_amount(value: Any) -> Decimal | None:
    """Parse a monetary or numeric value.

    Returns ``None`` for missing, blank, non-numeric, non-finite or oversized
    input. Booleans are not numbers here.
    """
    amount = _to_decimal(value)
    if amount is None or abs(amount) > MAX_AMOUNT:
        return None
    return amount


def get_vehicle_multiplier(vehicle_type: Any) -> Decimal:
    """Get the price multiplier for a vehicle type (1.0 when unknown)."""
    if isinstance(vehicle_type, VehicleType):
        return VEHICLE_MULTIPLIERS[vehicle_type]
    if not isinstance(vehicle_type, str):
        return DEFAULT_MULTIPLIER
    try:
        return VEHICLE_MULTIPLIERS[VehicleType(vehicle_type)]
    except ValueError:
        return DEFAULT_MULTIPLIER


def require_base_price(base_price: Any) -> Decimal:
    """Parse a base price, refusing to default it.

    Raises:
        InvalidBookingInput: If the value is missing, non-numeric, non-finite or negative
    """
    if is_oversized(base_price):
        raise InvalidBookingInput(f"base_price cannot exceed {MAX_AMOUNT:,f}, got {base_price!r}")
    amount = parse_amount(base_price)
    if amount is None:
        raise InvalidBookingInput(f"base_price must be a finite number, got {base_price!r}")
    if amount < ZERO:
        raise InvalidBookingInput(f"base_price cannot be negative, got {base_price!r}")
    return amount


def parse_adjustment(value: Any, field_name: str) -> Decimal:
    """Parse an optional adjustment, 0 when absent or non-numeric.

    Raises:
        InvalidBookingInput: If the value exceeds ``MAX_AMOUNT``
    """
    if is_oversized(value):
        raise InvalidBookingInput(f"{field_name} cannot exceed {MAX_AMOUNT:,f}, got {value!r}")
    return parse_amount(value) or ZERO


def calculate_total_price(
    base_price: Any,
    vehicle_type: Any = None,
    additional_charges: Any = 0,
    discount_amount: Any = 0,
) -> Decimal:
    """Calculate the total price of a booking.

    Args:
        base_price: Service base price, required and non-negative
        vehicle_type: Vehicle type key into ``VEHICLE_MULTIPLIERS``
        additional_charges: Extra charges, 0 when absent or non-numeric
        discount_amount: Discount, 0 when absent or non-numeric

    Returns:
        Decimal: Total price rounded to cents, never negative

    Raises:
        InvalidBookingInput: If ``base_price`` is not a usable number, or any
            amount exceeds ``MAX_AMOUNT``
    """
    base = require_base_price(base_price)
    additional = parse_adjustment(additional_charges, "additional_charges")
    discount = parse_adjustment(discount_amount, "discount_amount")

    adjusted_base = base * get_vehicle_multiplier(vehicle_type)
    total = adjusted_base + additional - discount

    return max(ZERO, total).quantize(CENT, rounding=ROUND_HALF_UP)


def calculate_payment_split(total_price: Any, platform_fee_percent: Any = 15) -> dict[str, Decimal]:
    """Split a booking total into the platform fee and the worker's earnings.

    Args:
        total_price: Total amount the customer pays
        platform_fee_percent: Platform fee as a percentage (e.g. 15 for 15%)

    Returns:
        dict: ``platform_fee`` and ``worker_earnings``, both rounded to cents
    """
    total = _to_decimal(total_price)
    if total is None or total < ZERO:
        raise InvalidBookingInput(f"total_price must be a non-negative number, got {total_price!r}")
    if total > MAX_TOTAL:
        raise InvalidBookingInput(f"total_price cannot exceed {MAX_TOTAL:,f}, got {total_price!r}")
    percent = parse_amount(platform_fee_percent)
    if percent is None or not ZERO <= percent <= Decimal("100"):
        raise InvalidBookingInput(
            f"platform_fee_percent must be between 0 and 100, got {platform_fee_percent!r}"
        )

    platform_fee = (total * percent / Decimal("100")).quantize(CENT, rounding=ROUND_HALF_UP)
    return {
        "platform_fee": platform_fee,
        "worker_earnings": (total - platform_fee).quantize(CENT, rounding=ROUND_HALF_UP),
    }
