import re
from datetime import UTC, datetime

from bookdesk.utils.booking_number import generate_booking_number


def test_booking_number_format():
    now = datetime(2026, 10, 17, 9, 30, tzinfo=UTC)
    number = generate_booking_number(now=now)
    timestamp = str(int(now.timestamp() * 1000))[-8:]
    assert re.fullmatch(rf"BK{timestamp}[A-Z0-9]{{3}}", number)


def test_booking_number_prefix():
    assert generate_booking_number("WX").startswith("WX")
