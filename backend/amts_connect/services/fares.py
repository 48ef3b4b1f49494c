import re
from typing import Any

PASSENGER_MULTIPLIERS = {"adult": 1.0, "student": 0.5, "senior": 1.0}

_AMOUNT_RE = re.compile(r"\d+(?:\.\d+)?")


def parse_base_fare(value: Any) -> float | None:
    """Route records may carry the fare as a number or as display text like "₹15"."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        m = _AMOUNT_RE.search(value)
        if m:
            return float(m.group())
    return None


def calculate_fare(base_fare: float, passengers: int, passenger_type: str) -> float:
    return base_fare * passengers * PASSENGER_MULTIPLIERS.get(passenger_type, 1.0)
