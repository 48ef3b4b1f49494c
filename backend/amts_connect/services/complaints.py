"""
Complaint intake and status tracking.

Status transitions are unrestricted: any status may follow any other, including
reopening a resolved complaint. Every update appends to statusHistory through an
optimistic compare-and-set loop so concurrent updates never drop an entry.
"""
import logging

from ..config import settings
from ..schemas.complaint import ComplaintCreate
from .common import Clock, insert_with_unique_id, sort_newest_first, to_iso, utcnow
from .errors import ConcurrentUpdateError, NotFoundError
from .kv_store import KVStore

logger = logging.getLogger(__name__)

NAMESPACE = "complaint"
ID_PREFIX = "AMTS-"
INITIAL_MESSAGE = "Complaint received and is being reviewed"


class ComplaintService:
    def __init__(self, store: KVStore, clock: Clock = utcnow,
                 max_update_attempts: int | None = None,
                 id_max_attempts: int | None = None):
        self.store = store
        self.clock = clock
        self.max_update_attempts = max_update_attempts or settings.status_update_max_attempts
        self.id_max_attempts = id_max_attempts or settings.id_max_attempts

    def create_complaint(self, payload: ComplaintCreate) -> dict:
        now = self.clock()
        timestamp = to_iso(now)
        data = payload.to_record()

        complaint = insert_with_unique_id(
            self.store, NAMESPACE, ID_PREFIX, now,
            lambda complaint_id: {
                **data,
                "complaintId": complaint_id,
                "timestamp": timestamp,
                "status": "submitted",
                "statusHistory": [
                    {"status": "submitted", "timestamp": timestamp, "message": INITIAL_MESSAGE},
                ],
            },
            self.id_max_attempts,
        )
        logger.info(f"Complaint saved: {complaint['complaintId']} - Category: {payload.category}")
        return complaint

    def list_complaints(self) -> list[dict]:
        complaints = self.store.get_by_prefix(f"{NAMESPACE}:")
        logger.info(f"Retrieved {len(complaints)} complaints")
        return sort_newest_first(complaints)

    def get_complaint(self, complaint_id: str) -> dict:
        complaint = self.store.get(f"{NAMESPACE}:{complaint_id}")
        if complaint is None:
            raise NotFoundError("Complaint not found")
        return complaint

    def update_status(self, complaint_id: str, status: str, message: str = "") -> dict:
        key = f"{NAMESPACE}:{complaint_id}"
        for attempt in range(1, self.max_update_attempts + 1):
            current = self.store.get_versioned(key)
            if current is None:
                raise NotFoundError("Complaint not found")
            complaint, version = current

            complaint["status"] = status
            complaint["statusHistory"] = list(complaint.get("statusHistory") or [])
            complaint["statusHistory"].append(
                {"status": status, "timestamp": to_iso(self.clock()), "message": message}
            )
            if self.store.compare_and_set(key, complaint, version):
                logger.info(f"Complaint {complaint_id} status updated to: {status}")
                return complaint
            logger.warning(
                f"Complaint {complaint_id}: concurrent update, retrying "
                f"({attempt}/{self.max_update_attempts})"
            )
        raise ConcurrentUpdateError(
            f"Complaint {complaint_id} is being updated concurrently, please retry"
        )
