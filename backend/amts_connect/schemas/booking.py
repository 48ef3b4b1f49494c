from typing import Literal

from pydantic import Field, PositiveInt

from .common import CamelModel, PayloadModel

PassengerType = Literal["adult", "student", "senior"]


class BookingCreate(PayloadModel):
    always_stored = ("passengers", "passenger_type")

    route: str
    route_name: str | None = None
    from_: str = Field(alias="from")
    to: str
    date: str
    passengers: PositiveInt = 1
    passenger_type: PassengerType = "adult"
    fare: int | float | None = None
    name: str
    email: str | None = None
    phone: str | None = None


class BookingRecord(BookingCreate):
    always_stored = ("passengers", "passenger_type", "status")

    booking_id: str
    timestamp: str
    status: str = "confirmed"


class BookingCreated(CamelModel):
    success: bool = True
    booking_id: str
    booking: BookingRecord


class BookingOut(CamelModel):
    success: bool = True
    booking: BookingRecord


class BookingList(CamelModel):
    success: bool = True
    bookings: list[BookingRecord]
