# school_scheduler/services/slots/registry.py
"""
Slot Registry: store of record for which (date, time) pairs are open.

State per slot:
  absent → open (toggle) → booked (bind) → open (release) → absent (toggle)

booked → absent is refused: toggling a booked slot is a no-op so a
booking is never left pointing at nothing.

bind/release are single-collection primitives. Only the scheduler calls
them, paired with the matching booking write.
"""

import logging
from datetime import date
from uuid import uuid4

from ...errors import InvalidSlotError
from ...schemas.slots import Slot
from ..kv_store import SLOTS_KEY, KeyValueStore
from .config import SlotGridConfig, get_slot_grid_config

logger = logging.getLogger(__name__)


def _parse_date(value: date | str) -> date:
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(value)
    except (TypeError, ValueError) as e:
        raise InvalidSlotError(f"Invalid date: {value!r}") from e


class SlotRegistry:

    def __init__(self, store: KeyValueStore, config: SlotGridConfig | None = None):
        self.store = store
        self.config = config or get_slot_grid_config()

    async def _load(self) -> list[Slot]:
        raw = await self.store.get(SLOTS_KEY)
        return [Slot.model_validate(item) for item in (raw or [])]

    async def _save(self, slots: list[Slot]) -> None:
        await self.store.set(SLOTS_KEY, [s.model_dump(mode="json") for s in slots])

    # ── Read ─────────────────────────────────────────────────────────────

    async def list_slots(self) -> list[Slot]:
        """All slots in storage order. Callers filter and sort."""
        return await self._load()

    async def find_slot(self, slot_date: date | str, slot_time: str) -> Slot | None:
        slot_date = _parse_date(slot_date)
        for slot in await self._load():
            if slot.date == slot_date and slot.time == slot_time:
                return slot
        return None

    # ── Staff toggle ─────────────────────────────────────────────────────

    async def toggle_slot(self, slot_date: date | str, slot_time: str) -> list[Slot]:
        """
        Open or close the slot at (date, time).

        - absent → created with is_booked=False
        - open → removed
        - booked → unchanged

        Returns:
            Full slot collection after the toggle.
        """
        slot_date = _parse_date(slot_date)
        if not self.config.is_valid_time(slot_time):
            raise InvalidSlotError(f"Time {slot_time!r} is not on the slot grid")

        slots = await self._load()
        existing = next(
            (s for s in slots if s.date == slot_date and s.time == slot_time),
            None,
        )

        if existing is None:
            slots.append(Slot(id=uuid4().hex, date=slot_date, time=slot_time))
            logger.info("Slot opened: %s %s", slot_date, slot_time)
        elif existing.is_booked:
            logger.info(
                "Slot %s %s is booked by %s, toggle ignored",
                slot_date, slot_time, existing.booking_id,
            )
            return slots
        else:
            slots = [s for s in slots if s.id != existing.id]
            logger.info("Slot closed: %s %s", slot_date, slot_time)

        await self._save(slots)
        return slots

    # ── Scheduler primitives ─────────────────────────────────────────────

    async def bind(self, slot_date: date, slot_time: str, booking_id: str) -> Slot | None:
        """
        Mark the slot at (date, time) booked by booking_id.

        Returns:
            Updated slot, or None if no slot exists there (nothing written).
        """
        slots = await self._load()
        for slot in slots:
            if slot.date == slot_date and slot.time == slot_time:
                slot.is_booked = True
                slot.booking_id = booking_id
                await self._save(slots)
                return slot
        return None

    async def release(self, booking_id: str) -> list[Slot]:
        """
        Free every slot held by booking_id.

        Returns:
            Slots that were released (empty if none referenced the booking).
        """
        slots = await self._load()
        released = []
        for slot in slots:
            if slot.booking_id == booking_id:
                slot.is_booked = False
                slot.booking_id = None
                released.append(slot)

        if released:
            await self._save(slots)
        return released
