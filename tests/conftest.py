import os

os.environ.setdefault("DATABASE_DSN", "sqlite://")
os.environ.setdefault("STORE_BACKEND", "memory")
os.environ.setdefault("GOOGLE_MAPS_API_KEY", "test-maps-key")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from amts_connect.main import app  # noqa: E402
from amts_connect.services.kv_store import InMemoryKVStore, get_store  # noqa: E402

from helpers import StepClock  # noqa: E402


@pytest.fixture
def store():
    return InMemoryKVStore()


@pytest.fixture
def clock():
    return StepClock()


@pytest.fixture
def client(store):
    app.dependency_overrides[get_store] = lambda: store
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def booking_payload():
    return {
        "route": "1",
        "routeName": "Lal Darwaja - Naroda",
        "from": "Lal Darwaja",
        "to": "Naroda",
        "date": "2024-05-02",
        "passengers": 2,
        "passengerType": "adult",
        "fare": 30,
        "name": "Asha Patel",
        "email": "asha@example.com",
        "phone": "9876543210",
    }


@pytest.fixture
def complaint_payload():
    return {
        "busId": "GJ01-1234",
        "routeNumber": "42",
        "category": "Overcrowding",
        "description": "Bus was packed beyond capacity at Kankaria.",
        "contactName": None,
        "contactPhone": "9876543210",
        "contactEmail": None,
        "notifySMS": True,
        "notifyEmail": False,
    }
