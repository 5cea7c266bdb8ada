# school_scheduler/services/slots/__init__.py
"""
Interview slots.

Grid config (which times exist) and the registry (which are open/booked).
"""

from .config import SlotGridConfig, get_slot_grid_config
from .registry import SlotRegistry

__all__ = [
    "SlotGridConfig",
    "get_slot_grid_config",
    "SlotRegistry",
]
