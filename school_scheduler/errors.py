# school_scheduler/errors.py
"""
Domain exceptions.

Routers translate these into HTTP errors; services never catch them.
"""


class SchedulerError(Exception):
    """Base class for all service errors."""


class StoreUnavailableError(SchedulerError):
    """Backing key-value store could not be read or written."""


class InvalidSlotError(SchedulerError, ValueError):
    """Date is not ISO formatted or time is not on the slot grid."""


class SlotAlreadyBookedError(SchedulerError):
    """Slot at (date, time) is held by another active booking."""

    def __init__(self, slot_date, slot_time: str, booking_id: str | None):
        super().__init__(f"Slot {slot_date} {slot_time} already booked by {booking_id}")
        self.slot_date = slot_date
        self.slot_time = slot_time
        self.booking_id = booking_id


class EventNotFoundError(SchedulerError, LookupError):
    """No calendar event with the given id."""
