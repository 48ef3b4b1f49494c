from typing import Literal

from pydantic import Field, model_validator

from .common import CamelModel, PayloadModel

ComplaintCategory = Literal[
    "Bus Not Running on Time",
    "Poor Vehicle Condition",
    "Rude Conductor/Driver",
    "Overcrowding",
    "AC Not Working",
    "Cleanliness Issue",
    "Safety Concern",
    "Other",
]

ComplaintStatus = Literal["submitted", "under review", "resolved", "rejected"]


class ComplaintCreate(PayloadModel):
    always_stored = ("notify_sms", "notify_email", "has_image")

    bus_id: str = Field(min_length=1)
    route_number: str = Field(min_length=1)
    category: ComplaintCategory
    description: str = Field(min_length=1)
    contact_name: str | None = None
    contact_phone: str | None = None
    contact_email: str | None = None
    notify_sms: bool = Field(False, alias="notifySMS")
    notify_email: bool = False
    has_image: bool = False
    image: str | None = None  # base64 data URL

    @model_validator(mode="after")
    def derive_has_image(self):
        self.has_image = bool(self.image)
        return self


class StatusHistoryEntry(CamelModel):
    status: str
    timestamp: str
    message: str = ""


class ComplaintRecord(ComplaintCreate):
    always_stored = ("notify_sms", "notify_email", "has_image", "status", "status_history")

    complaint_id: str
    timestamp: str
    status: str = "submitted"
    status_history: list[StatusHistoryEntry] = []


class ComplaintStatusUpdate(CamelModel):
    status: ComplaintStatus
    message: str = ""


class ComplaintCreated(CamelModel):
    success: bool = True
    complaint_id: str
    complaint: ComplaintRecord


class ComplaintOut(CamelModel):
    success: bool = True
    complaint: ComplaintRecord


class ComplaintList(CamelModel):
    success: bool = True
    complaints: list[ComplaintRecord]
