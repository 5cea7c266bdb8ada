# school_scheduler/services/slots/config.py
"""
Interview slot grid configuration.
"""

from dataclasses import dataclass
from functools import lru_cache


def time_str_to_minutes(time_str: str) -> int:
    """Time label ("HH:MM") to minutes since midnight."""
    hour, minute = time_str.split(":")
    return int(hour) * 60 + int(minute)


def minutes_to_time_str(minutes: int) -> str:
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


@dataclass(frozen=True)
class SlotGridConfig:
    """
    Time-of-day grid that interview slots are placed on.

    Attributes:
        first_slot: Earliest slot label (inclusive)
        last_slot: Latest slot label (inclusive)
        slot_step_minutes: Grid step in minutes (15/30/60)
    """
    first_slot: str = "11:00"
    last_slot: str = "20:30"
    slot_step_minutes: int = 30

    def __post_init__(self):
        """Validate configuration."""
        if self.slot_step_minutes not in (15, 30, 60):
            raise ValueError(f"slot_step_minutes must be 15, 30, or 60, got {self.slot_step_minutes}")
        start = time_str_to_minutes(self.first_slot)
        end = time_str_to_minutes(self.last_slot)
        if end < start:
            raise ValueError(f"last_slot {self.last_slot} is before first_slot {self.first_slot}")
        if start % self.slot_step_minutes or end % self.slot_step_minutes:
            raise ValueError("first_slot and last_slot must lie on the step grid")

    @property
    def times(self) -> tuple[str, ...]:
        """
        All slot labels in order.

        Default grid → 20 labels, "11:00" … "20:30".
        """
        start = time_str_to_minutes(self.first_slot)
        end = time_str_to_minutes(self.last_slot)
        return tuple(
            minutes_to_time_str(m)
            for m in range(start, end + 1, self.slot_step_minutes)
        )

    def is_valid_time(self, time_str: str) -> bool:
        return time_str in self.times


@lru_cache
def get_slot_grid_config() -> SlotGridConfig:
    """Get slot grid configuration (singleton)."""
    return SlotGridConfig()
