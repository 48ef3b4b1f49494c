import logging

from fastapi import APIRouter, Depends, HTTPException, Query

from ..config import settings
from ..schemas.bus import BatchResult, BusLocation, BusLocationBatch, BusOut, BusTracking, RouteView
from ..services.bus_locations import BusLocationService
from ..services.errors import InvalidPayloadError, StoreError
from ..services.kv_store import KVStore, get_store

logger = logging.getLogger(__name__)

router = APIRouter(tags=["bus"])

MAPS_KEY_MISSING = "Google Maps API key not configured. Please add your API key."


def get_bus_service(store: KVStore = Depends(get_store)) -> BusLocationService:
    return BusLocationService(store)


@router.get("/bus-tracking", response_model=BusTracking)
def bus_tracking(route: str | None = Query(None),
                 service: BusLocationService = Depends(get_bus_service)):
    if not settings.google_maps_api_key:
        logger.error("Google Maps API key not configured")
        raise HTTPException(status_code=500, detail=MAPS_KEY_MISSING)
    try:
        buses = service.list_locations(route)
    except StoreError as e:
        logger.error(f"Error fetching bus tracking data: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to fetch bus tracking data: {e}")
    return BusTracking(buses=buses, count=len(buses), timestamp=service.now_iso())


@router.post("/bus-location", response_model=BusOut)
def update_bus_location(payload: BusLocation,
                        service: BusLocationService = Depends(get_bus_service)):
    try:
        bus = service.upsert_location(payload)
    except InvalidPayloadError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except StoreError as e:
        logger.error(f"Error updating bus location: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to update bus location: {e}")
    return BusOut(bus=bus)


@router.post("/bus-locations-batch", response_model=BatchResult)
def batch_update_bus_locations(payload: BusLocationBatch,
                               service: BusLocationService = Depends(get_bus_service)):
    try:
        count, timestamp = service.batch_upsert_locations(payload.buses)
    except InvalidPayloadError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except StoreError as e:
        logger.error(f"Error batch updating bus locations: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to batch update bus locations: {e}")
    return BatchResult(count=count, timestamp=timestamp)


@router.get("/route/{route_number}", response_model=RouteView)
def get_route(route_number: str, service: BusLocationService = Depends(get_bus_service)):
    try:
        details, buses = service.get_route(route_number)
    except StoreError as e:
        logger.error(f"Error fetching route information: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to fetch route information: {e}")
    return RouteView(
        route_number=route_number,
        route_details=details,
        buses=buses,
        active_bus_count=len(buses),
    )
