# school_scheduler/clock.py
"""
Time source for createdAt stamps and the catalog's rolling window.

All timestamps are naive wall-clock values in the school's timezone,
matching how calendar events are stored.
"""

from datetime import date, datetime
from typing import Protocol
from zoneinfo import ZoneInfo


class Clock(Protocol):
    def now(self) -> datetime: ...

    def today(self) -> date: ...


class SystemClock:
    def __init__(self, timezone: str = "Asia/Tokyo"):
        self.tz = ZoneInfo(timezone)

    def now(self) -> datetime:
        return datetime.now(self.tz).replace(tzinfo=None)

    def today(self) -> date:
        return datetime.now(self.tz).date()


class FixedClock:
    """Clock pinned to a given instant; `advance` moves it forward."""

    def __init__(self, at: datetime):
        self.at = at

    def now(self) -> datetime:
        return self.at

    def today(self) -> date:
        return self.at.date()

    def advance(self, delta) -> None:
        self.at = self.at + delta
