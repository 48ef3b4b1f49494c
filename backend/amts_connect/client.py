"""
Thin HTTP client for the AMTS Connect API.

Every call returns the decoded JSON body. A non-2xx status or a body with
success=false raises TransitAPIError carrying the server's error message.
"""
from typing import Any

import httpx


class TransitAPIError(Exception):
    def __init__(self, status_code: int, error: str):
        super().__init__(f"{status_code}: {error}")
        self.status_code = status_code
        self.error = error


class TransitClient:
    def __init__(self, base_url: str = "", token: str | None = None,
                 client: httpx.Client | None = None, timeout: float = 15.0):
        headers = {"Content-Type": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        self._client = client or httpx.Client(timeout=timeout)
        self._headers = headers
        self.base_url = base_url.rstrip("/")

    def close(self):
        self._client.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

    def _call(self, method: str, endpoint: str, **kwargs) -> dict[str, Any]:
        r = self._client.request(method, f"{self.base_url}{endpoint}",
                                 headers=self._headers, **kwargs)
        try:
            data = r.json()
        except ValueError:
            raise TransitAPIError(r.status_code, r.text or "API request failed")
        if not isinstance(data, dict):
            raise TransitAPIError(r.status_code, "API request failed")
        if r.is_error or not data.get("success"):
            raise TransitAPIError(r.status_code, data.get("error") or "API request failed")
        return data

    # --- Ticket booking ---

    def create_booking(self, booking: dict) -> dict:
        return self._call("POST", "/ticket-booking", json=booking)

    def list_bookings(self) -> dict:
        return self._call("GET", "/ticket-bookings")

    def get_booking(self, booking_id: str) -> dict:
        return self._call("GET", f"/ticket-booking/{booking_id}")

    # --- Complaints ---

    def create_complaint(self, complaint: dict) -> dict:
        return self._call("POST", "/complaint", json=complaint)

    def list_complaints(self) -> dict:
        return self._call("GET", "/complaints")

    def get_complaint(self, complaint_id: str) -> dict:
        return self._call("GET", f"/complaint/{complaint_id}")

    def update_complaint_status(self, complaint_id: str, status: str, message: str = "") -> dict:
        return self._call("PUT", f"/complaint/{complaint_id}/status",
                          json={"status": status, "message": message})

    # --- Bus tracking ---

    def list_bus_locations(self, route_number: str | None = None) -> dict:
        params = {"route": route_number} if route_number else None
        return self._call("GET", "/bus-tracking", params=params)

    def update_bus_location(self, bus: dict) -> dict:
        return self._call("POST", "/bus-location", json=bus)

    def batch_update_bus_locations(self, buses: list[dict]) -> dict:
        return self._call("POST", "/bus-locations-batch", json={"buses": buses})

    def get_route(self, route_number: str) -> dict:
        return self._call("GET", f"/route/{route_number}")

    def chat(self, message: str) -> dict:
        return self._call("POST", "/chat", json={"message": message})
