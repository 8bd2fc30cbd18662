"""Business logic for deciding which dates a doctor can be booked on."""

from __future__ import annotations

import logging
from datetime import date, datetime, timedelta
from zoneinfo import ZoneInfo

from src.core.config import settings
from src.modules.schedule.schemas import CalendarDay
from src.shared.enums import AvailabilityCategory, Weekday

logger = logging.getLogger(__name__)

MAX_CALENDAR_DAYS = 92


def today() -> date:
    """Current calendar date in the configured timezone."""
    return datetime.now(tz=ZoneInfo(settings.default_timezone)).date()


def coerce_category(value: AvailabilityCategory | str | None) -> AvailabilityCategory:
    """Map a stored or caller-supplied category onto the closed enumeration.

    Unknown values fall back to ``ALL`` so a doctor with a bad record stays
    bookable instead of disappearing from the calendar.
    """
    if isinstance(value, AvailabilityCategory):
        return value
    if value is None:
        return AvailabilityCategory.ALL
    try:
        return AvailabilityCategory(value)
    except ValueError:
        logger.warning("Unknown availability category %r, treating as %s", value, AvailabilityCategory.ALL)
        return AvailabilityCategory.ALL


def is_available(value: date, category: AvailabilityCategory | str | None) -> bool:
    resolved = coerce_category(category)
    if resolved is AvailabilityCategory.WEEKDAYS:
        return not Weekday.from_date(value).is_weekend
    if resolved is AvailabilityCategory.WEEKENDS:
        return Weekday.from_date(value).is_weekend
    return True


def is_selectable(
    value: date,
    current_date: date,
    category: AvailabilityCategory | str | None = None,
    *,
    doctor_selected: bool = True,
) -> bool:
    """Whether a calendar cell may be picked for a new appointment.

    Past dates are never selectable. With no doctor chosen yet only the past
    check applies.
    """
    if value < current_date:
        return False
    if not doctor_selected:
        return True
    return is_available(value, category)


def build_calendar(
    start: date,
    days: int,
    category: AvailabilityCategory | str | None,
    current_date: date,
) -> list[CalendarDay]:
    if not 1 <= days <= MAX_CALENDAR_DAYS:
        raise ValueError(f"days must be between 1 and {MAX_CALENDAR_DAYS}")
    calendar: list[CalendarDay] = []
    for offset in range(days):
        value = start + timedelta(days=offset)
        calendar.append(
            CalendarDay(
                day=value,
                weekday=Weekday.from_date(value),
                selectable=is_selectable(value, current_date, category),
            )
        )
    return calendar
