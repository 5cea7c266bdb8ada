# school_scheduler/services/scheduler.py
"""
Scheduler Core: the only place that writes slots and bookings together.

submit:  ledger.append → registry.bind      (slot becomes booked)
cancel:  ledger.set_status(cancelled) → registry.release   (slot reopens)

The two writes are separate store calls. If the second one fails the
first stays written; store errors propagate and are not retried.

Referential misses are not errors:
✓ booking for (date, time) with no slot → booking kept, slot step skipped
✓ cancel for a booking no slot points at → status changes only
"""

import logging
from datetime import date

from ..errors import SlotAlreadyBookedError
from ..schemas.bookings import Booking, BookingDraft, BookingStatus
from ..schemas.slots import Slot
from .bookings import BookingLedger
from .kv_store import writer_lock
from .slots import SlotRegistry

logger = logging.getLogger(__name__)


class SchedulerCore:

    def __init__(self, registry: SlotRegistry, ledger: BookingLedger):
        self.registry = registry
        self.ledger = ledger
        # Shared with every other writer to the same store.
        self._lock = writer_lock(registry.store)

    # ── Mutations ────────────────────────────────────────────────────────

    async def toggle_slot(self, slot_date: date | str, slot_time: str) -> list[Slot]:
        async with self._lock:
            return await self.registry.toggle_slot(slot_date, slot_time)

    async def submit_booking(self, draft: BookingDraft) -> Booking:
        """
        Create a booking and bind it to the slot at its preferred date/time.

        Raises:
            SlotAlreadyBookedError: slot is held by another active booking.
                Nothing is written in that case.
        """
        async with self._lock:
            replay = await self.ledger.find_by_idempotency_key(draft.idempotency_key)
            if replay is not None:
                logger.info("submit_booking replayed key %s", draft.idempotency_key)
                return replay

            slot = await self.registry.find_slot(draft.preferred_date, draft.preferred_time)
            if slot is not None and slot.is_booked:
                holder = await self.ledger.get_booking(slot.booking_id) if slot.booking_id else None
                if holder is None or holder.is_active:
                    raise SlotAlreadyBookedError(slot.date, slot.time, slot.booking_id)
                # Slot still points at a cancelled booking; treat it as open.
                logger.warning(
                    "Slot %s %s held by cancelled booking %s, rebinding",
                    slot.date, slot.time, slot.booking_id,
                )

            booking = await self.ledger.append_booking(draft)

            bound = await self.registry.bind(
                booking.preferred_date, booking.preferred_time, booking.id
            )
            if bound is None:
                logger.warning(
                    "No slot at %s %s for booking %s, slot update skipped",
                    booking.preferred_date, booking.preferred_time, booking.id,
                )
            return booking

    async def cancel_booking(self, booking_id: str) -> None:
        """
        Mark the booking cancelled and reopen its slot.

        Current status is not checked: confirmed bookings are cancelled too.
        """
        async with self._lock:
            await self._cancel(booking_id)

    async def _cancel(self, booking_id: str) -> None:
        await self.ledger.set_status(booking_id, BookingStatus.cancelled)
        released = await self.registry.release(booking_id)
        if released:
            for slot in released:
                logger.info("Slot reopened: %s %s", slot.date, slot.time)
        else:
            logger.warning("Cancel %s: no slot referenced this booking", booking_id)

    async def set_booking_status(self, booking_id: str, status: BookingStatus) -> list[Booking]:
        """
        Staff status change. Cancelling goes through the slot-freeing path.

        Cancelled is final: moving a cancelled booking to any other status
        is a no-op, its slot may already belong to someone else.

        Returns:
            All bookings, newest first.
        """
        async with self._lock:
            if status == BookingStatus.cancelled:
                await self._cancel(booking_id)
                return await self.ledger.list_bookings()

            current = await self.ledger.get_booking(booking_id)
            if current is not None and not current.is_active:
                logger.warning(
                    "Booking %s is cancelled, status %s ignored", booking_id, status.value
                )
                return await self.ledger.list_bookings()
            return await self.ledger.set_status(booking_id, status)

    # ── Read views ───────────────────────────────────────────────────────

    async def list_slots(self) -> list[Slot]:
        return await self.registry.list_slots()

    async def list_bookings(self) -> list[Booking]:
        return await self.ledger.list_bookings()

    async def open_slots(self) -> list[Slot]:
        """
        Slots a parent can book: unbooked, or still pointing at a
        cancelled booking (submit_booking rebinds those).
        """
        slots = await self.registry.list_slots()
        if not any(s.is_booked for s in slots):
            return slots
        cancelled = {
            b.id for b in await self.ledger.list_bookings() if not b.is_active
        }
        return [s for s in slots if not s.is_booked or s.booking_id in cancelled]

    async def open_dates(self, not_before: date | None = None) -> set[date]:
        """Dates with at least one open slot (parent calendar)."""
        return {
            s.date for s in await self.open_slots()
            if not_before is None or s.date >= not_before
        }

    async def any_slot_dates(self) -> set[date]:
        """Dates with any slot, booked or not (staff calendar)."""
        return {s.date for s in await self.registry.list_slots()}

    async def times_for_date(self, slot_date: date) -> list[str]:
        """Sorted open times on one date."""
        return sorted(s.time for s in await self.open_slots() if s.date == slot_date)
