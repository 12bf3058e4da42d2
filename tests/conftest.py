from datetime import date

import pytest
from fastapi.testclient import TestClient

from bookdesk.main import app

TODAY = date(2026, 10, 17)


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def today():
    return TODAY


def actor_headers(role: str, actor_id: str) -> dict[str, str]:
    return {"X-Actor-Role": role, "X-Actor-Id": actor_id}


@pytest.fixture
def admin_headers():
    return actor_headers("admin", "admin-1")


@pytest.fixture
def worker_headers():
    return actor_headers("worker", "worker-1")


@pytest.fixture
def customer_headers():
    return actor_headers("customer", "customer-1")


@pytest.fixture
def booking():
    return {
        "id": "b-100",
        "booking_number": "BK12345678XYZ",
        "customer_id": "customer-1",
        "worker_id": "worker-1",
        "service_id": "svc-wash",
        "status": "pending",
        "scheduled_date": "2026-10-17",
        "scheduled_time": "14:30",
        "estimated_duration": 60,
        "service_address_text": "12 Rue des Fleurs, Casablanca",
        "vehicle_type": "suv",
        "vehicle_make": "Toyota",
        "vehicle_model": "RAV4",
        "vehicle_year": 2021,
        "base_price": 100.0,
        "additional_charges": 0.0,
        "discount_amount": 0.0,
        "total_price": 100.0,
        "special_instructions": None,
        "can_cancel": True,
    }
