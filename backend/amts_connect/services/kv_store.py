"""
Namespaced key-value store used by every handler.

Records live under flat string keys grouped by prefix ("ticket:", "complaint:",
"bus:", "route:"). Values are arbitrary JSON. Each key carries a version that is
bumped on every write so callers can do optimistic read-modify-write through
get_versioned() / compare_and_set().
"""
import copy
import json
import logging
import threading
from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Any, Iterable

from fastapi import Depends
from sqlalchemy import func, update
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from ..config import settings
from ..database import get_db
from ..models.kv import KVEntry
from .errors import StoreError

logger = logging.getLogger(__name__)

_UPSERT_INSERTS = {"postgresql": postgresql.insert, "sqlite": sqlite.insert}


class KVStore(ABC):
    @abstractmethod
    def get(self, key: str) -> Any | None: ...

    @abstractmethod
    def set(self, key: str, value: Any) -> None: ...

    @abstractmethod
    def add(self, key: str, value: Any) -> bool:
        """Insert only if the key is absent. Returns False if it already exists."""

    @abstractmethod
    def get_by_prefix(self, prefix: str) -> list[Any]: ...

    @abstractmethod
    def mset(self, items: Iterable[tuple[str, Any]]) -> None:
        """Write all items or none of them."""

    @abstractmethod
    def get_versioned(self, key: str) -> tuple[Any, int] | None: ...

    @abstractmethod
    def compare_and_set(self, key: str, value: Any, expected_version: int) -> bool:
        """Write only if the stored version still equals expected_version."""

    @abstractmethod
    def count_by_prefix(self, prefix: str) -> int: ...


def _encode(value: Any) -> Any:
    """Copy a value through JSON, rejecting anything the SQL JSON column would reject."""
    try:
        return json.loads(json.dumps(value))
    except (TypeError, ValueError) as e:
        raise StoreError(str(e)) from e


class InMemoryKVStore(KVStore):
    def __init__(self):
        self._data: dict[str, tuple[Any, int]] = {}
        self._lock = threading.Lock()

    def get(self, key):
        with self._lock:
            entry = self._data.get(key)
            return copy.deepcopy(entry[0]) if entry else None

    def set(self, key, value):
        value = _encode(value)
        with self._lock:
            self._put(key, value)

    def add(self, key, value):
        with self._lock:
            if key in self._data:
                return False
            self._data[key] = (_encode(value), 1)
            return True

    def get_by_prefix(self, prefix):
        with self._lock:
            return [
                copy.deepcopy(value)
                for key, (value, _) in sorted(self._data.items())
                if key.startswith(prefix)
            ]

    def mset(self, items):
        encoded = [(key, _encode(value)) for key, value in items]
        with self._lock:
            for key, value in encoded:
                self._put(key, value)

    def get_versioned(self, key):
        with self._lock:
            entry = self._data.get(key)
            if entry is None:
                return None
            return copy.deepcopy(entry[0]), entry[1]

    def compare_and_set(self, key, value, expected_version):
        with self._lock:
            entry = self._data.get(key)
            if entry is None or entry[1] != expected_version:
                return False
            self._data[key] = (_encode(value), expected_version + 1)
            return True

    def count_by_prefix(self, prefix):
        with self._lock:
            return sum(1 for key in self._data if key.startswith(prefix))

    def _put(self, key, value):
        version = self._data[key][1] + 1 if key in self._data else 1
        self._data[key] = (value, version)


class SQLKVStore(KVStore):
    """KVStore backed by the kv_store table through a SQLAlchemy session."""

    def __init__(self, db: Session):
        self.db = db

    @contextmanager
    def _guard(self, action: str):
        try:
            yield
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"kv_store {action} failed: {e}", exc_info=True)
            raise StoreError(str(e)) from e

    def get(self, key):
        with self._guard(f"get {key}"):
            entry = self.db.get(KVEntry, key)
            return copy.deepcopy(entry.value) if entry else None

    def set(self, key, value):
        with self._guard(f"set {key}"):
            self._upsert(key, value)
            self.db.commit()

    def add(self, key, value):
        with self._guard(f"add {key}"):
            if self.db.get(KVEntry, key) is not None:
                return False
            self.db.add(KVEntry(key=key, value=value, version=1))
            try:
                self.db.commit()
            except IntegrityError:
                self.db.rollback()
                return False
            return True

    def get_by_prefix(self, prefix):
        with self._guard(f"scan {prefix}"):
            rows = (
                self.db.query(KVEntry)
                .filter(KVEntry.key.startswith(prefix, autoescape=True))
                .order_by(KVEntry.key)
                .all()
            )
            return [copy.deepcopy(r.value) for r in rows]

    def mset(self, items):
        with self._guard("mset"):
            for key, value in items:
                self._upsert(key, value)
            self.db.commit()

    def get_versioned(self, key):
        with self._guard(f"get {key}"):
            entry = self.db.get(KVEntry, key)
            if entry is None:
                return None
            return copy.deepcopy(entry.value), entry.version

    def compare_and_set(self, key, value, expected_version):
        with self._guard(f"compare_and_set {key}"):
            result = self.db.execute(
                update(KVEntry)
                .where(KVEntry.key == key, KVEntry.version == expected_version)
                .values(value=value, version=expected_version + 1)
                .execution_options(synchronize_session=False)
            )
            self.db.commit()
            return result.rowcount == 1

    def count_by_prefix(self, prefix):
        with self._guard(f"count {prefix}"):
            return (
                self.db.query(func.count(KVEntry.key))
                .filter(KVEntry.key.startswith(prefix, autoescape=True))
                .scalar()
            )

    def _upsert(self, key: str, value: Any):
        # INSERT .. ON CONFLICT keeps a first write atomic per key under concurrent writers.
        dialect = self.db.get_bind().dialect.name
        insert = _UPSERT_INSERTS.get(dialect)
        if insert is None:
            raise StoreError(f"unsupported database dialect for upsert: {dialect}")
        stmt = insert(KVEntry).values(key=key, value=value, version=1)
        self.db.execute(stmt.on_conflict_do_update(
            index_elements=[KVEntry.key],
            set_={
                "value": stmt.excluded["value"],
                "version": KVEntry.version + 1,
                "updated_at": func.now(),
            },
        ))


_memory_store = InMemoryKVStore()


def get_store(db: Session = Depends(get_db)) -> KVStore:
    if settings.store_backend == "memory":
        return _memory_store
    return SQLKVStore(db)
