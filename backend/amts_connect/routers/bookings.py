import logging

from fastapi import APIRouter, Depends, HTTPException

from ..schemas.booking import BookingCreate, BookingCreated, BookingList, BookingOut
from ..services.bookings import BookingService
from ..services.errors import NotFoundError, StoreError
from ..services.kv_store import KVStore, get_store

logger = logging.getLogger(__name__)

router = APIRouter(tags=["bookings"])


def get_booking_service(store: KVStore = Depends(get_store)) -> BookingService:
    return BookingService(store)


@router.post("/ticket-booking", response_model=BookingCreated)
def create_booking(payload: BookingCreate, service: BookingService = Depends(get_booking_service)):
    try:
        booking = service.create_booking(payload)
    except StoreError as e:
        logger.error(f"Error saving ticket booking: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to save ticket booking: {e}")
    return BookingCreated(booking_id=booking["bookingId"], booking=booking)


@router.get("/ticket-bookings", response_model=BookingList)
def list_bookings(service: BookingService = Depends(get_booking_service)):
    try:
        bookings = service.list_bookings()
    except StoreError as e:
        logger.error(f"Error retrieving ticket bookings: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to retrieve ticket bookings: {e}")
    return BookingList(bookings=bookings)


@router.get("/ticket-booking/{booking_id}", response_model=BookingOut)
def get_booking(booking_id: str, service: BookingService = Depends(get_booking_service)):
    try:
        booking = service.get_booking(booking_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except StoreError as e:
        logger.error(f"Error retrieving ticket booking {booking_id}: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to retrieve ticket booking: {e}")
    return BookingOut(booking=booking)
