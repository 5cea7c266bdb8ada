# school_scheduler/services/catalog/__init__.py
"""
Class calendar: generator (weekly templates × rolling window) and the
stored catalog seeded from it.
"""

from .catalog import EventCatalog
from .generator import ClassTemplate, DEFAULT_TEMPLATES, generate_class_events
from .holidays import HOLIDAYS_2026, is_holiday

__all__ = [
    "EventCatalog",
    "ClassTemplate",
    "DEFAULT_TEMPLATES",
    "generate_class_events",
    "HOLIDAYS_2026",
    "is_holiday",
]
