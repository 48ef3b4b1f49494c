import json

import pytest

from seed_routes import load_routes, seed


def test_seed_writes_route_records(tmp_path, store):
    path = tmp_path / "routes.json"
    path.write_text(json.dumps([
        {"number": "1", "name": "Lal Darwaja - Naroda", "fare": "₹10"},
        {"number": "42", "name": "Maninagar - Vastrapur", "fare": 15},
    ]), encoding="utf-8")

    assert seed(store, load_routes(path)) == 2
    assert store.get("route:42")["name"] == "Maninagar - Vastrapur"
    assert store.count_by_prefix("route:") == 2


def test_route_without_number_rejected(tmp_path):
    path = tmp_path / "routes.json"
    path.write_text(json.dumps([{"name": "No number"}]), encoding="utf-8")
    with pytest.raises(ValueError):
        load_routes(path)
