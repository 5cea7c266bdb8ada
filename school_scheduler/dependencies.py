# school_scheduler/dependencies.py
"""
FastAPI dependencies.

One SchedulerCore per store; writers of a store share one lock.
Tests override get_store / get_clock / get_drafter.
"""

import weakref
from functools import lru_cache
from typing import Optional

from fastapi import Depends, Header

from .clock import Clock, SystemClock
from .config import settings
from .services.attendance import AttendanceLedger
from .services.bookings import BookingLedger
from .services.catalog import EventCatalog
from .services.drafting import MessageDrafter
from .services.identity import Identity, Profile, resolve_identity
from .services.kv_store import KeyValueStore, RedisJSONStore
from .services.scheduler import SchedulerCore
from .services.slots import SlotRegistry


@lru_cache
def get_store() -> KeyValueStore:
    from .redis_client import redis_client
    return RedisJSONStore(redis_client, settings.store_key_prefix)


@lru_cache
def get_clock() -> Clock:
    return SystemClock(settings.timezone)


@lru_cache
def get_drafter() -> MessageDrafter:
    return MessageDrafter(
        api_key=settings.gemini_api_key,
        model=settings.gemini_model,
        timeout=settings.drafting_timeout_seconds,
    )


_schedulers: weakref.WeakKeyDictionary = weakref.WeakKeyDictionary()


def get_scheduler(
    store: KeyValueStore = Depends(get_store),
    clock: Clock = Depends(get_clock),
) -> SchedulerCore:
    # One scheduler per backing store.
    scheduler = _schedulers.get(store)
    if scheduler is None:
        scheduler = SchedulerCore(SlotRegistry(store), BookingLedger(store, clock))
        _schedulers[store] = scheduler
    return scheduler


def get_catalog(
    store: KeyValueStore = Depends(get_store),
    clock: Clock = Depends(get_clock),
) -> EventCatalog:
    return EventCatalog(store, clock, weeks=settings.catalog_weeks)


def get_attendance(
    store: KeyValueStore = Depends(get_store),
    clock: Clock = Depends(get_clock),
) -> AttendanceLedger:
    return AttendanceLedger(store, clock)


def get_identity(
    x_user_id: Optional[str] = Header(None),
    x_display_name: Optional[str] = Header(None),
) -> Identity:
    if x_user_id is None and x_display_name is None:
        return resolve_identity(None)
    return resolve_identity(Profile(user_id=x_user_id, display_name=x_display_name))
