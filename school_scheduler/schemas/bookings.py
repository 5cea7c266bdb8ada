# school_scheduler/schemas/bookings.py

from datetime import date, datetime
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


class BookingStatus(str, Enum):
    pending = "pending"
    confirmed = "confirmed"
    cancelled = "cancelled"


class BookingDraft(BaseModel):
    """
    Parent-submitted interview request before it is stored.

    parent_name and consultation_topic may arrive empty: required-field
    checks belong to the form that builds the draft, the ledger stores
    whatever it is given.
    """
    parent_name: str = ""
    child_growth: Optional[str] = None
    consultation_topic: str = ""
    message: Optional[str] = None

    preferred_date: date
    preferred_time: str

    idempotency_key: Optional[str] = Field(
        None, description="Client-generated key; resubmitting with the same key returns the first booking"
    )


class Booking(BaseModel):
    id: str

    parent_name: str
    child_growth: Optional[str] = None
    consultation_topic: str
    message: Optional[str] = None

    preferred_date: date
    preferred_time: str

    status: BookingStatus = BookingStatus.pending
    idempotency_key: Optional[str] = None

    created_at: datetime

    model_config = {"from_attributes": True}

    @property
    def is_active(self) -> bool:
        return self.status != BookingStatus.cancelled


class BookingStatusUpdate(BaseModel):
    status: BookingStatus
