import logging

from ..config import settings
from ..schemas.booking import BookingCreate
from .common import Clock, insert_with_unique_id, sort_newest_first, to_iso, utcnow
from .errors import NotFoundError
from .fares import calculate_fare, parse_base_fare
from .kv_store import KVStore

logger = logging.getLogger(__name__)

NAMESPACE = "ticket"
ID_PREFIX = "AMTS"


class BookingService:
    def __init__(self, store: KVStore, clock: Clock = utcnow,
                 id_max_attempts: int | None = None):
        self.store = store
        self.clock = clock
        self.id_max_attempts = id_max_attempts or settings.id_max_attempts

    def create_booking(self, payload: BookingCreate) -> dict:
        now = self.clock()
        timestamp = to_iso(now)
        data = payload.to_record()
        if payload.fare is None:
            fare = self._route_fare(payload)
            if fare is not None:
                data["fare"] = fare

        booking = insert_with_unique_id(
            self.store, NAMESPACE, ID_PREFIX, now,
            lambda booking_id: {
                **data,
                "bookingId": booking_id,
                "timestamp": timestamp,
                "status": "confirmed",
            },
            self.id_max_attempts,
        )
        logger.info(f"Ticket booking saved: {booking['bookingId']}")
        return booking

    def list_bookings(self) -> list[dict]:
        bookings = self.store.get_by_prefix(f"{NAMESPACE}:")
        logger.info(f"Retrieved {len(bookings)} ticket bookings")
        return sort_newest_first(bookings)

    def get_booking(self, booking_id: str) -> dict:
        booking = self.store.get(f"{NAMESPACE}:{booking_id}")
        if booking is None:
            raise NotFoundError("Booking not found")
        return booking

    def _route_fare(self, payload: BookingCreate) -> float | None:
        details = self.store.get(f"route:{payload.route}")
        if not isinstance(details, dict):
            return None
        base = parse_base_fare(details.get("fare"))
        if base is None:
            return None
        return calculate_fare(base, payload.passengers, payload.passenger_type)
