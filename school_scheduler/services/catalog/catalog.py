# school_scheduler/services/catalog/catalog.py
"""
Stored class calendar.

The first read on an empty store seeds it from the generator. After that
the stored collection is the source of truth: staff add, remove and
cancel events directly, no recurrence logic is re-run.
"""

import logging
from datetime import date
from uuid import uuid4

from ...clock import Clock
from ...errors import EventNotFoundError
from ...schemas.events import CalendarEvent, CalendarEventCreate
from ..kv_store import EVENTS_KEY, KeyValueStore, writer_lock
from .generator import DEFAULT_WEEKS, generate_class_events
from .holidays import HOLIDAYS_2026

logger = logging.getLogger(__name__)


class EventCatalog:

    def __init__(
        self,
        store: KeyValueStore,
        clock: Clock,
        holidays: frozenset[date] = HOLIDAYS_2026,
        weeks: int = DEFAULT_WEEKS,
    ):
        self.store = store
        self.clock = clock
        self.holidays = holidays
        self.weeks = weeks
        self._lock = writer_lock(store)

    async def _save(self, events: list[CalendarEvent]) -> None:
        await self.store.set(EVENTS_KEY, [e.model_dump(mode="json") for e in events])

    async def list_events(self) -> list[CalendarEvent]:
        """
        All stored events. Seeds the store on first access.

        Seeding happens only when the key has never been written; a
        catalog emptied by staff stays empty.
        """
        async with self._lock:
            return await self._load_or_seed()

    async def _load_or_seed(self) -> list[CalendarEvent]:
        raw = await self.store.get(EVENTS_KEY)
        if raw is not None:
            return [CalendarEvent.model_validate(item) for item in raw]

        events = generate_class_events(self.clock.today(), self.holidays, self.weeks)
        await self._save(events)
        logger.info("Event catalog seeded with %d class events", len(events))
        return events

    async def events_on(self, dt: date) -> list[CalendarEvent]:
        """Events starting on `dt`, in start order."""
        events = [e for e in await self.list_events() if e.start_at.date() == dt]
        return sorted(events, key=lambda e: e.start_at)

    async def find_event(self, event_id: str) -> CalendarEvent | None:
        for event in await self.list_events():
            if event.id == event_id:
                return event
        return None

    async def add_event(self, data: CalendarEventCreate) -> list[CalendarEvent]:
        event = CalendarEvent(
            id=data.id or f"custom-{uuid4().hex[:12]}",
            **data.model_dump(exclude={"id"}),
        )
        async with self._lock:
            events = await self._load_or_seed()
            events.append(event)
            await self._save(events)
        logger.info("Event added: %s %s", event.id, event.title)
        return events

    async def remove_event(self, event_id: str) -> list[CalendarEvent]:
        """Remove by id. Unknown id leaves the collection unchanged."""
        async with self._lock:
            events = await self._load_or_seed()
            remaining = [e for e in events if e.id != event_id]
            if len(remaining) == len(events):
                logger.warning("remove_event: %s not found", event_id)
                return events

            await self._save(remaining)
        logger.info("Event removed: %s", event_id)
        return remaining

    async def cancel_event(self, event_id: str, reason: str | None = None) -> CalendarEvent:
        """
        Mark a class as cancelled (休講). The event stays on the calendar.

        Raises:
            EventNotFoundError: no event with this id.
        """
        async with self._lock:
            events = await self._load_or_seed()
            for event in events:
                if event.id == event_id:
                    event.is_cancelled = True
                    event.cancel_reason = reason
                    await self._save(events)
                    break
            else:
                raise EventNotFoundError(event_id)
        logger.info("Event cancelled: %s (%s)", event_id, reason or "no reason")
        return event
