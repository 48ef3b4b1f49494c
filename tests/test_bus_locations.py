import pytest

from amts_connect.config import settings
from amts_connect.main import app
from amts_connect.schemas.bus import BusLocation
from amts_connect.services.bus_locations import BusLocationService
from amts_connect.services.errors import InvalidPayloadError
from amts_connect.services.kv_store import get_store

from helpers import API, FailingStore


def _bus(bus_id, route, **extra):
    return {"busId": bus_id, "routeNumber": route, "latitude": 23.02, "longitude": 72.57, **extra}


def test_upsert_replaces_previous_record(client, store):
    client.post(f"{API}/bus-location", json={"busId": "B1", "eta": 5, "currentStop": "Kalupur"})
    r = client.post(f"{API}/bus-location", json={"busId": "B1", "eta": 2})
    assert r.status_code == 200
    assert r.json()["bus"]["eta"] == 2

    records = store.get_by_prefix("bus:")
    assert len(records) == 1
    assert records[0]["eta"] == 2
    assert "currentStop" not in records[0]
    assert "currentStop" not in r.json()["bus"]
    assert records[0]["lastUpdated"]


def test_missing_bus_id_rejected_without_write(client, store):
    r = client.post(f"{API}/bus-location", json={"routeNumber": "1"})
    assert r.status_code == 400
    assert r.json()["success"] is False
    assert "busId" in r.json()["error"]
    assert store.count_by_prefix("bus:") == 0


def test_service_rejects_empty_batch(store):
    service = BusLocationService(store)
    with pytest.raises(InvalidPayloadError):
        service.batch_upsert_locations([])
    assert store.count_by_prefix("bus:") == 0


def test_batch_shares_one_timestamp(client):
    r = client.post(f"{API}/bus-locations-batch",
                    json={"buses": [_bus("B1", "1"), _bus("B2", "42", isDelayed=True)]})
    assert r.status_code == 200
    body = r.json()
    assert body["count"] == 2

    buses = client.get(f"{API}/bus-tracking").json()["buses"]
    assert {b["busId"] for b in buses} == {"B1", "B2"}
    assert {b["lastUpdated"] for b in buses} == {body["timestamp"]}


@pytest.mark.parametrize("payload", [{}, {"buses": []}, {"buses": "B1"}, {"buses": [{"eta": 3}]}])
def test_batch_rejects_bad_payload(client, store, payload):
    r = client.post(f"{API}/bus-locations-batch", json=payload)
    assert r.status_code == 400
    assert r.json()["success"] is False
    assert store.count_by_prefix("bus:") == 0


def test_route_filter(client):
    client.post(f"{API}/bus-locations-batch",
                json={"buses": [_bus("B1", "1"), _bus("B2", "1"), _bus("B3", "42")]})

    r = client.get(f"{API}/bus-tracking", params={"route": "1"})
    body = r.json()
    assert body["success"] is True
    assert body["count"] == 2
    assert sorted(b["busId"] for b in body["buses"]) == ["B1", "B2"]
    assert body["timestamp"]

    body = client.get(f"{API}/bus-tracking", params={"route": "99"}).json()
    assert body["buses"] == []
    assert body["count"] == 0


def test_route_filter_is_exact_match(store):
    service = BusLocationService(store)
    service.upsert_location(BusLocation(bus_id="B1", route_number="1A"))
    service.upsert_location(BusLocation(bus_id="B2", route_number="1"))
    assert [b["busId"] for b in service.list_locations("1")] == ["B2"]
    assert service.list_locations("1a") == []


def test_tracking_requires_maps_key(client, monkeypatch):
    monkeypatch.setattr(settings, "google_maps_api_key", "")
    r = client.get(f"{API}/bus-tracking")
    assert r.status_code == 500
    assert r.json() == {
        "success": False,
        "error": "Google Maps API key not configured. Please add your API key.",
    }
    # only the tracking endpoint is gated
    assert client.post(f"{API}/bus-location", json={"busId": "B1"}).status_code == 200


def test_route_view_without_details(client):
    client.post(f"{API}/bus-locations-batch", json={"buses": [_bus("B1", "42"), _bus("B2", "7")]})
    body = client.get(f"{API}/route/42").json()
    assert body["success"] is True
    assert body["routeNumber"] == "42"
    assert body["routeDetails"] is None
    assert body["activeBusCount"] == 1
    assert body["buses"][0]["busId"] == "B1"


def test_route_view_with_details(client, store):
    store.set("route:42", {"number": "42", "name": "Maninagar - Vastrapur", "fare": "₹15"})
    body = client.get(f"{API}/route/42").json()
    assert body["routeDetails"]["name"] == "Maninagar - Vastrapur"
    assert body["buses"] == []
    assert body["activeBusCount"] == 0


def test_store_failure_reported_as_500(client):
    app.dependency_overrides[get_store] = lambda: FailingStore()
    r = client.post(f"{API}/bus-locations-batch", json={"buses": [_bus("B1", "1")]})
    assert r.status_code == 500
    assert r.json()["error"] == "Failed to batch update bus locations: connection refused"
    assert client.get(f"{API}/route/1").status_code == 500
