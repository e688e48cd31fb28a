"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from .enums import Weekday

# Index 0 = Sunday, matching date -> weekday lookups in common.datetime_utils.
WEEKDAYS: tuple[Weekday, ...] = (
    Weekday.SUNDAY,
    Weekday.MONDAY,
    Weekday.TUESDAY,
    Weekday.WEDNESDAY,
    Weekday.THURSDAY,
    Weekday.FRIDAY,
    Weekday.SATURDAY,
)

DEFAULT_OFF_DAYS = frozenset({Weekday.SUNDAY})
DEFAULT_EARLY_THRESHOLD_MINUTES = 10
DAYS_PER_WEEK = 7
