from datetime import datetime, timedelta, timezone

from amts_connect.config import settings
from amts_connect.services.errors import StoreError
from amts_connect.services.kv_store import InMemoryKVStore

API = settings.api_prefix


class StepClock:
    """Deterministic clock that advances one second per call."""

    def __init__(self, start=datetime(2024, 5, 1, 8, 0, tzinfo=timezone.utc)):
        self.now = start

    def __call__(self):
        current = self.now
        self.now += timedelta(seconds=1)
        return current


class FailingStore(InMemoryKVStore):
    """Every operation fails as if the database were unreachable."""

    def _fail(self, *args, **kwargs):
        raise StoreError("connection refused")

    get = set = add = get_by_prefix = mset = _fail
    get_versioned = compare_and_set = count_by_prefix = _fail
