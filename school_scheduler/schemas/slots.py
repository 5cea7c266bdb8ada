# school_scheduler/schemas/slots.py
"""
Pydantic schemas for interview slots.
"""

from datetime import date
from pydantic import BaseModel, Field


class Slot(BaseModel):
    """One staff-designated interview opportunity."""
    id: str
    date: date
    time: str = Field(description='Half-hour grid label, "HH:MM"')
    is_booked: bool = False
    booking_id: str | None = None

    model_config = {"from_attributes": True}


class SlotToggleRequest(BaseModel):
    date: date
    time: str


class SlotDatesResponse(BaseModel):
    dates: list[date]


class SlotTimesResponse(BaseModel):
    date: date
    times: list[str]
