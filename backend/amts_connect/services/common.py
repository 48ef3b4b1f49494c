import secrets
from datetime import datetime, timezone
from typing import Any, Callable

from .errors import StoreError
from .kv_store import KVStore

Clock = Callable[[], datetime]


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def to_iso(dt: datetime) -> str:
    """ISO-8601 in UTC with millisecond precision and a trailing Z."""
    return dt.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _parse_ts(value: Any) -> datetime | None:
    if not isinstance(value, str) or not value:
        return None
    try:
        dt = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def sort_newest_first(records: list[dict], field: str = "timestamp") -> list[dict]:
    """Sort by an ISO timestamp field, most recent first. Undated records go last."""
    dated = [(r, _parse_ts(r.get(field))) for r in records]
    with_ts = sorted((p for p in dated if p[1] is not None), key=lambda p: p[1], reverse=True)
    return [r for r, _ in with_ts] + [r for r, ts in dated if ts is None]


def generate_id(prefix: str, now: datetime) -> str:
    # Last 6 digits of the ms clock keep the familiar format; the random tail prevents collisions.
    millis = str(int(now.timestamp() * 1000))[-6:]
    return f"{prefix}{millis}{secrets.token_hex(2).upper()}"


def insert_with_unique_id(
    store: KVStore,
    namespace: str,
    prefix: str,
    now: datetime,
    build: Callable[[str], dict],
    max_attempts: int,
) -> dict:
    """Allocate an id, build the record for it and insert it without overwriting."""
    for _ in range(max_attempts):
        record_id = generate_id(prefix, now)
        record = build(record_id)
        if store.add(f"{namespace}:{record_id}", record):
            return record
    raise StoreError(f"could not allocate a unique {namespace} id after {max_attempts} attempts")
