from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Optional, Union

from ..core.constants import DAYS_PER_WEEK, WEEKDAYS
from ..core.enums import Weekday

DateLike = Union[date, datetime]


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def as_date(value: DateLike) -> date:
    """Drop the time-of-day component (datetime is a subclass of date)."""
    if isinstance(value, datetime):
        return value.date()
    return value


def weekday_of(value: DateLike) -> Weekday:
    # date.weekday() is Monday=0; shift data is Sunday-first.
    return WEEKDAYS[(as_date(value).weekday() + 1) % DAYS_PER_WEEK]


def is_within(value: DateLike, start: date, end: Optional[date]) -> bool:
    """Inclusive day interval check; a missing end means the single day `start`."""
    day = as_date(value)
    if end is None:
        return day == start
    return start <= day <= end


def start_of_week(value: DateLike) -> date:
    day = as_date(value)
    return day - timedelta(days=(day.weekday() + 1) % DAYS_PER_WEEK)


def week_days(value: DateLike) -> list[date]:
    """Sunday..Saturday of the week containing `value`."""
    first = start_of_week(value)
    return [first + timedelta(days=i) for i in range(DAYS_PER_WEEK)]


def days_between(start: date, end: date) -> list[date]:
    if end < start:
        return []
    return [start + timedelta(days=i) for i in range((end - start).days + 1)]


def minutes_between(later: datetime, earlier: datetime) -> int:
    """Whole minutes from `earlier` to `later`, truncated toward zero."""
    return int((later - earlier).total_seconds() / 60)
