# school_scheduler/services/catalog/generator.py
"""
Recurring class calendar generation.

Pure function of (today, holidays, weeks, templates): the same inputs
always give the same events, ids included.

Window per weekday:
  first occurrence of the weekday on/after the 1st of last month,
  then every 7 days for `weeks` weeks.
"""

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta

from ...schemas.events import CalendarEvent, EventType
from .holidays import HOLIDAYS_2026, is_holiday

DEFAULT_WEEKS = 52

_DAY_CODES = ("mon", "tue", "wed", "thu", "fri", "sat", "sun")


@dataclass(frozen=True)
class ClassTemplate:
    """
    One weekly class.

    Attributes:
        weekday: 0 = Monday … 6 = Sunday (date.weekday())
        title: Class name shown on the calendar
        start: Start time of day
        end: End time of day
    """
    weekday: int
    title: str
    start: time
    end: time


DEFAULT_TEMPLATES: tuple[ClassTemplate, ...] = (
    ClassTemplate(0, "探究スターター", time(16, 0), time(17, 0)),
    ClassTemplate(0, "探究ベーシック", time(18, 0), time(19, 40)),
    ClassTemplate(1, "探究アドバンス", time(17, 0), time(18, 40)),
    ClassTemplate(1, "探究リミットレス", time(19, 0), time(20, 40)),
    ClassTemplate(2, "個別", time(16, 0), time(17, 40)),
    ClassTemplate(2, "個別", time(19, 0), time(20, 40)),
    ClassTemplate(3, "個別", time(16, 0), time(17, 40)),
    ClassTemplate(3, "個別", time(18, 0), time(18, 50)),
    ClassTemplate(5, "探究ベーシック", time(10, 0), time(12, 10)),
)


def window_start(today: date) -> date:
    """First day of the month before `today`."""
    first_of_month = today.replace(day=1)
    return (first_of_month - timedelta(days=1)).replace(day=1)


def dates_for_weekday(weekday: int, today: date, weeks: int = DEFAULT_WEEKS) -> list[date]:
    """`weeks` consecutive dates falling on `weekday`, starting from the window start."""
    current = window_start(today)
    current += timedelta(days=(weekday - current.weekday()) % 7)
    return [current + timedelta(weeks=i) for i in range(weeks)]


def generate_class_events(
    today: date,
    holidays: frozenset[date] = HOLIDAYS_2026,
    weeks: int = DEFAULT_WEEKS,
    templates: tuple[ClassTemplate, ...] = DEFAULT_TEMPLATES,
) -> list[CalendarEvent]:
    """
    Expand weekly templates into dated class events, skipping holidays.

    Event ids are "{day}-{n}-{week_index}" where n numbers the templates
    of that weekday from 1, so a skipped holiday leaves a gap in indexes.
    """
    events: list[CalendarEvent] = []
    per_day_counter: dict[int, int] = {}

    for template in templates:
        per_day_counter[template.weekday] = per_day_counter.get(template.weekday, 0) + 1
        n = per_day_counter[template.weekday]
        day_code = _DAY_CODES[template.weekday]

        for idx, dt in enumerate(dates_for_weekday(template.weekday, today, weeks)):
            if is_holiday(dt, holidays):
                continue
            events.append(CalendarEvent(
                id=f"{day_code}-{n}-{idx}",
                title=template.title,
                start_at=datetime.combine(dt, template.start),
                end_at=datetime.combine(dt, template.end),
                event_type=EventType.class_,
                is_cancelled=False,
            ))

    return events
