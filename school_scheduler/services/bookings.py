# school_scheduler/services/bookings.py
"""
Booking Ledger: append-only store of interview requests.

Records only ever change status. The ledger knows nothing about slots;
keeping a slot in step with a booking is the scheduler's job.
"""

import itertools
import logging
from uuid import uuid4

from ..clock import Clock
from ..schemas.bookings import Booking, BookingDraft, BookingStatus
from .kv_store import BOOKINGS_KEY, KeyValueStore

logger = logging.getLogger(__name__)

_sequence = itertools.count()


def _new_booking_id(clock: Clock) -> str:
    """
    Creation-ordered id: "{epoch_ms}-{seq}-{rand}".

    Lexical order of ids follows creation order within one process.
    """
    epoch_ms = int(clock.now().timestamp() * 1000)
    return f"{epoch_ms:013d}-{next(_sequence):010d}-{uuid4().hex[:6]}"


def _newest_first(bookings: list[Booking]) -> list[Booking]:
    return sorted(bookings, key=lambda b: (b.created_at, b.id), reverse=True)


class BookingLedger:

    def __init__(self, store: KeyValueStore, clock: Clock):
        self.store = store
        self.clock = clock

    async def _load(self) -> list[Booking]:
        raw = await self.store.get(BOOKINGS_KEY)
        return [Booking.model_validate(item) for item in (raw or [])]

    async def _save(self, bookings: list[Booking]) -> None:
        await self.store.set(BOOKINGS_KEY, [b.model_dump(mode="json") for b in bookings])

    # ── Read ─────────────────────────────────────────────────────────────

    async def list_bookings(self) -> list[Booking]:
        """All bookings, newest first by created_at."""
        return _newest_first(await self._load())

    async def get_booking(self, booking_id: str) -> Booking | None:
        for booking in await self._load():
            if booking.id == booking_id:
                return booking
        return None

    async def find_by_idempotency_key(self, key: str | None) -> Booking | None:
        if not key:
            return None
        for booking in await self._load():
            if booking.idempotency_key == key:
                return booking
        return None

    # ── Write ────────────────────────────────────────────────────────────

    async def append_booking(self, draft: BookingDraft) -> Booking:
        """
        Store a new booking with status=pending.

        A draft whose idempotency_key is already on file returns the
        stored booking unchanged.
        """
        bookings = await self._load()

        if draft.idempotency_key:
            for booking in bookings:
                if booking.idempotency_key == draft.idempotency_key:
                    logger.info(
                        "Booking replay for key %s → %s", draft.idempotency_key, booking.id
                    )
                    return booking

        booking = Booking(
            id=_new_booking_id(self.clock),
            status=BookingStatus.pending,
            created_at=self.clock.now(),
            **draft.model_dump(),
        )
        bookings.append(booking)
        await self._save(bookings)

        logger.info(
            "Booking created: %s for %s %s",
            booking.id, booking.preferred_date, booking.preferred_time,
        )
        return booking

    async def set_status(self, booking_id: str, status: BookingStatus) -> list[Booking]:
        """
        Set status by id. Unknown id is a no-op.

        Returns:
            All bookings, newest first.
        """
        bookings = await self._load()
        target = next((b for b in bookings if b.id == booking_id), None)

        if target is None:
            logger.warning("set_status: booking %s not found", booking_id)
            return _newest_first(bookings)

        target.status = status
        await self._save(bookings)
        logger.info("Booking %s → %s", booking_id, status.value)
        return _newest_first(bookings)
