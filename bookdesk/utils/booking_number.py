"""Booking number generation."""

import random
import string
from datetime import UTC, datetime


def generate_booking_number(prefix: str = "BK", now: datetime | None = None) -> str:
    """Generate a booking number like ``BK12345678A3B``.

    Args:
        prefix: Leading letters of the booking number
        now: Creation time (defaults to current UTC time)

    Returns:
        str: Prefix, last 8 digits of the millisecond timestamp and 3 random
            uppercase alphanumerics
    """
    moment = now or datetime.now(UTC)
    timestamp = str(int(moment.timestamp() * 1000))[-8:]
    random_part = "".join(random.choices(string.ascii_uppercase + string.digits, k=3))
    return f"{prefix}{timestamp}{random_part}"
