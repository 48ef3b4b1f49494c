from typing import Any, Literal

from pydantic import Field

from .common import CamelModel, PayloadModel

Occupancy = Literal["low", "medium", "high"]


class BusLocation(PayloadModel):
    bus_id: str = Field(min_length=1)
    route_number: str | None = None
    latitude: float | None = None
    longitude: float | None = None
    current_stop: str | None = None
    next_stop: str | None = None
    eta: int | float | None = None  # minutes to next stop
    occupancy: Occupancy | None = None
    is_delayed: bool | None = None


class BusLocationRecord(BusLocation):
    last_updated: str


class BusLocationBatch(CamelModel):
    buses: list[BusLocation] = Field(min_length=1)


class BusOut(CamelModel):
    success: bool = True
    bus: BusLocationRecord


class BusTracking(CamelModel):
    success: bool = True
    buses: list[BusLocationRecord]
    count: int
    timestamp: str


class BatchResult(CamelModel):
    success: bool = True
    count: int
    timestamp: str


class RouteView(CamelModel):
    success: bool = True
    route_number: str
    route_details: Any | None = None  # opaque route:<n> record, written out of band
    buses: list[BusLocationRecord]
    active_bus_count: int
