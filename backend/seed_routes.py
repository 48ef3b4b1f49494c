"""
Load route metadata into the key-value store as route:<number> records.
No API endpoint writes these; GET /route/<n> and the chat assistant read them.

Run from backend/ directory: python seed_routes.py routes.json
"""
import json
import sys
from pathlib import Path

from amts_connect.database import Base, SessionLocal, engine
from amts_connect.services.errors import StoreError
from amts_connect.services.kv_store import KVStore, SQLKVStore


def load_routes(path: Path) -> list[dict]:
    routes = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(routes, list):
        raise ValueError("routes file must contain a JSON list")
    for i, route in enumerate(routes):
        if not isinstance(route, dict) or not route.get("number"):
            raise ValueError(f"route #{i} has no 'number'")
    return routes


def seed(store: KVStore, routes: list[dict]) -> int:
    store.mset((f"route:{r['number']}", r) for r in routes)
    return len(routes)


def main():
    if len(sys.argv) < 2:
        print("Usage: python seed_routes.py <routes.json>")
        sys.exit(1)

    path = Path(sys.argv[1])
    try:
        routes = load_routes(path)
    except (OSError, ValueError) as e:
        print(f"  ✗ Cannot read {path}: {e}")
        sys.exit(1)

    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        count = seed(SQLKVStore(db), routes)
    except StoreError as e:
        print(f"  ✗ Failed: {e}")
        sys.exit(1)
    finally:
        db.close()
    print(f"  ✓ Seeded {count} route(s): {', '.join(str(r['number']) for r in routes)}")


if __name__ == "__main__":
    main()
