# school_scheduler/schemas/events.py

from datetime import datetime
from enum import Enum
from typing import Optional
from pydantic import BaseModel


class EventType(str, Enum):
    class_ = "class"
    event = "event"
    exam = "exam"
    interview = "interview"


class CalendarEvent(BaseModel):
    id: str
    title: str

    start_at: datetime
    end_at: datetime

    event_type: EventType = EventType.class_
    is_cancelled: bool = False
    cancel_reason: Optional[str] = None

    location: Optional[str] = None
    description: Optional[str] = None

    model_config = {"from_attributes": True}


class CalendarEventCreate(BaseModel):
    """Staff-added event; id is assigned by the catalog when omitted."""
    id: Optional[str] = None
    title: str

    start_at: datetime
    end_at: datetime

    event_type: EventType = EventType.event
    location: Optional[str] = None
    description: Optional[str] = None


class EventCancelRequest(BaseModel):
    reason: Optional[str] = None
