# school_scheduler/services/kv_store.py
"""
Key-value storage for JSON collections.

One key per logical collection, value = whole collection as JSON.
Readers get the collection or None when the key was never written;
writers replace the collection in a single SET.

Contains:
✓ RedisJSONStore: production backend (redis.asyncio)
✓ MemoryStore: in-process backend for tests and local runs

Does NOT contain:
✗ Any knowledge of slots, bookings or events
✗ Retries (a failed write surfaces as StoreUnavailableError)
"""

import asyncio
import json
import logging
import weakref
from typing import Any, Protocol

from redis.asyncio import Redis
from redis.exceptions import RedisError

from ..errors import StoreUnavailableError

logger = logging.getLogger(__name__)


SLOTS_KEY = "interview_slots"
BOOKINGS_KEY = "interview_bookings"
EVENTS_KEY = "calendar_events"
REPORTS_KEY = "attendance_reports"


class KeyValueStore(Protocol):
    async def get(self, key: str) -> Any | None: ...

    async def set(self, key: str, value: Any) -> None: ...


_writer_locks: weakref.WeakKeyDictionary = weakref.WeakKeyDictionary()


def writer_lock(store: KeyValueStore) -> asyncio.Lock:
    """
    The lock every read-modify-write on `store` runs under.

    Shared by all services of one process; writers in other processes
    are not covered.
    """
    lock = _writer_locks.get(store)
    if lock is None:
        lock = asyncio.Lock()
        _writer_locks[store] = lock
    return lock


class RedisJSONStore:
    """Redis wrapper storing each collection as one JSON string."""

    def __init__(self, redis: Redis, prefix: str = ""):
        self.redis = redis
        self.prefix = prefix

    def _key(self, key: str) -> str:
        return f"{self.prefix}{key}"

    # ── Read ─────────────────────────────────────────────────────────────

    async def get(self, key: str) -> Any | None:
        """
        Load a collection.

        Returns:
            Decoded JSON, or None if the key does not exist.
        """
        full_key = self._key(key)
        try:
            raw = await self.redis.get(full_key)
        except RedisError as e:
            logger.error(f"Store read failed for {full_key}: {e}")
            raise StoreUnavailableError(f"read {full_key}") from e

        if raw is None:
            return None
        if isinstance(raw, bytes):
            raw = raw.decode()

        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            logger.error(f"Corrupt JSON under {full_key}: {e}")
            raise StoreUnavailableError(f"decode {full_key}") from e

    # ── Write ────────────────────────────────────────────────────────────

    async def set(self, key: str, value: Any) -> None:
        full_key = self._key(key)
        payload = json.dumps(value, ensure_ascii=False)
        try:
            await self.redis.set(full_key, payload)
        except RedisError as e:
            logger.error(f"Store write failed for {full_key}: {e}")
            raise StoreUnavailableError(f"write {full_key}") from e


class MemoryStore:
    """Dict-backed store. Values round-trip through JSON like Redis would."""

    def __init__(self, initial: dict[str, Any] | None = None):
        self._data: dict[str, str] = {}
        for key, value in (initial or {}).items():
            self._data[key] = json.dumps(value, ensure_ascii=False)

    async def get(self, key: str) -> Any | None:
        raw = self._data.get(key)
        return json.loads(raw) if raw is not None else None

    async def set(self, key: str, value: Any) -> None:
        self._data[key] = json.dumps(value, ensure_ascii=False)

    def keys(self) -> list[str]:
        return sorted(self._data)
