# tests/helpers.py

import asyncio
from datetime import date, datetime

from school_scheduler.clock import FixedClock
from school_scheduler.schemas.bookings import BookingDraft
from school_scheduler.services.bookings import BookingLedger
from school_scheduler.services.kv_store import MemoryStore
from school_scheduler.services.scheduler import SchedulerCore
from school_scheduler.services.slots import SlotRegistry

START = datetime(2026, 3, 1, 9, 0)


def make_scheduler(store=None, clock=None):
    store = store or MemoryStore()
    clock = clock or FixedClock(START)
    return SchedulerCore(SlotRegistry(store), BookingLedger(store, clock)), store, clock


class YieldingStore(MemoryStore):
    """Memory store that gives the event loop a turn on every call, like a network store."""

    async def get(self, key):
        await asyncio.sleep(0)
        return await super().get(key)

    async def set(self, key, value):
        await asyncio.sleep(0)
        await super().set(key, value)


def draft(slot_date="2026-03-10", slot_time="15:00", **overrides):
    fields = {
        "parent_name": "Yamada",
        "consultation_topic": "学習相談",
        "preferred_date": date.fromisoformat(slot_date),
        "preferred_time": slot_time,
    }
    fields.update(overrides)
    return BookingDraft(**fields)
