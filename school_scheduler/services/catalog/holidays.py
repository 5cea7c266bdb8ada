# school_scheduler/services/catalog/holidays.py
"""
School closure days (no regular classes) for the 2026 academic year.
"""

from datetime import date, timedelta


def _date_range(start: date, end: date) -> list[date]:
    """Dates in [start, end], inclusive."""
    days = (end - start).days
    return [start + timedelta(days=i) for i in range(days + 1)]


HOLIDAYS_2026: frozenset[date] = frozenset(
    # February break
    _date_range(date(2026, 2, 22), date(2026, 2, 28))
    # End of year
    + _date_range(date(2026, 3, 29), date(2026, 3, 31))
    + [date(2026, 4, 29), date(2026, 4, 30)]
    # Golden Week
    + _date_range(date(2026, 5, 3), date(2026, 5, 6))
    # August closed
    + _date_range(date(2026, 8, 1), date(2026, 8, 31))
    + _date_range(date(2026, 11, 1), date(2026, 11, 4))
    + _date_range(date(2026, 11, 22), date(2026, 11, 24))
    # Winter break
    + _date_range(date(2026, 12, 20), date(2027, 1, 4))
)


def is_holiday(dt: date, holidays: frozenset[date] = HOLIDAYS_2026) -> bool:
    return dt in holidays
