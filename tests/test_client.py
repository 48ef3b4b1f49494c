import httpx
import pytest

from amts_connect.client import TransitAPIError, TransitClient

from helpers import API


@pytest.fixture
def api(client):
    return TransitClient(base_url=API, token="anon-key", client=client)


def test_booking_flow(api, booking_payload):
    created = api.create_booking(booking_payload)
    fetched = api.get_booking(created["bookingId"])
    assert fetched["booking"] == created["booking"]
    assert [b["bookingId"] for b in api.list_bookings()["bookings"]] == [created["bookingId"]]


def test_complaint_flow(api, complaint_payload):
    complaint_id = api.create_complaint(complaint_payload)["complaintId"]
    updated = api.update_complaint_status(complaint_id, "resolved", "Fixed")
    assert updated["complaint"]["status"] == "resolved"
    assert api.get_complaint(complaint_id)["complaint"]["status"] == "resolved"
    assert len(api.list_complaints()["complaints"]) == 1


def test_bus_flow(api):
    api.update_bus_location({"busId": "B1", "routeNumber": "1"})
    api.batch_update_bus_locations([{"busId": "B2", "routeNumber": "42"}])
    assert api.list_bus_locations("42")["count"] == 1
    assert api.list_bus_locations()["count"] == 2
    assert api.get_route("1")["activeBusCount"] == 1
    assert api.chat("thank you")["reply"].startswith("You're welcome")


def test_error_raised_with_server_message(api):
    with pytest.raises(TransitAPIError) as exc:
        api.get_booking("AMTS000000")
    assert exc.value.status_code == 404
    assert exc.value.error == "Booking not found"


def test_validation_error_raised(api):
    with pytest.raises(TransitAPIError) as exc:
        api.update_bus_location({"routeNumber": "1"})
    assert exc.value.status_code == 400


@pytest.mark.parametrize("body", [b"[1, 2]", b"null", b'"ok"'])
def test_non_object_body_raises_api_error(body):
    transport = httpx.MockTransport(
        lambda request: httpx.Response(200, content=body, headers={"content-type": "application/json"})
    )
    with TransitClient(base_url="http://transit.test/api", client=httpx.Client(transport=transport)) as api:
        with pytest.raises(TransitAPIError) as exc:
            api.list_bookings()
    assert exc.value.status_code == 200
