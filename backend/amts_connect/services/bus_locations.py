"""
Live bus positions. Keys: bus:<busId>.

Each write fully replaces the previous record for that bus; there is no merge
and no position history.
"""
import logging

from ..schemas.bus import BusLocation
from .common import Clock, to_iso, utcnow
from .errors import InvalidPayloadError
from .kv_store import KVStore

logger = logging.getLogger(__name__)

NAMESPACE = "bus"


class BusLocationService:
    def __init__(self, store: KVStore, clock: Clock = utcnow):
        self.store = store
        self.clock = clock

    def now_iso(self) -> str:
        return to_iso(self.clock())

    def upsert_location(self, bus: BusLocation) -> dict:
        if not bus.bus_id:
            raise InvalidPayloadError("Bus ID is required")
        record = {**bus.to_record(), "lastUpdated": self.now_iso()}
        self.store.set(f"{NAMESPACE}:{bus.bus_id}", record)
        logger.info(f"Bus location updated: {bus.bus_id} - Route {bus.route_number}")
        return record

    def batch_upsert_locations(self, buses: list[BusLocation]) -> tuple[int, str]:
        if not buses:
            raise InvalidPayloadError("Buses array is required")
        if any(not b.bus_id for b in buses):
            raise InvalidPayloadError("Bus ID is required for every bus")
        timestamp = self.now_iso()
        self.store.mset(
            (f"{NAMESPACE}:{b.bus_id}", {**b.to_record(), "lastUpdated": timestamp})
            for b in buses
        )
        logger.info(f"Batch updated {len(buses)} bus locations")
        return len(buses), timestamp

    def list_locations(self, route_number: str | None = None) -> list[dict]:
        buses = self.store.get_by_prefix(f"{NAMESPACE}:")
        if route_number:
            buses = [b for b in buses if b.get("routeNumber") == route_number]
        logger.info(
            f"Retrieved {len(buses)} bus locations"
            + (f" for route {route_number}" if route_number else "")
        )
        return buses

    def get_route(self, route_number: str) -> tuple[dict | None, list[dict]]:
        buses = self.list_locations(route_number)
        details = self.store.get(f"route:{route_number}")
        logger.info(f"Retrieved route {route_number} with {len(buses)} active buses")
        return details, buses
