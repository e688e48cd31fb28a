from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Optional

from ..core.exceptions import ParseError

_CLOCK_RE = re.compile(r"^(\d{1,2}):(\d{2})\s*(AM|PM)$", re.IGNORECASE)
_ON_THE_HOUR_RE = re.compile(r"^0?(\d+):00\s*(AM|PM)$", re.IGNORECASE)


@dataclass(frozen=True)
class ClockTime:
    """Wall-clock time of day in 12-hour form, e.g. 09:00 AM."""

    hour: int
    minute: int
    meridiem: str

    def to_time(self) -> time:
        hour = self.hour % 12
        if self.meridiem == "PM":
            hour += 12
        return time(hour=hour, minute=self.minute)

    def on(self, day: date) -> datetime:
        return datetime.combine(day, self.to_time())

    def __str__(self) -> str:
        return f"{self.hour:02d}:{self.minute:02d} {self.meridiem}"


@dataclass(frozen=True)
class ClockTimeResult:
    """Outcome of a non-raising parse: either `value` or `error` is set."""

    value: Optional[ClockTime] = None
    error: Optional[ParseError] = None

    @property
    def ok(self) -> bool:
        return self.value is not None


def try_parse_clock_time(value: Optional[str]) -> ClockTimeResult:
    text = (value or "").strip()
    m = _CLOCK_RE.match(text)
    if not m:
        return ClockTimeResult(error=ParseError(ParseError.INVALID_TIME_FORMAT, value))

    hour = int(m.group(1))
    minute = int(m.group(2))
    if not 1 <= hour <= 12 or not 0 <= minute <= 59:
        return ClockTimeResult(error=ParseError(ParseError.INVALID_TIME_FORMAT, value))

    return ClockTimeResult(value=ClockTime(hour=hour, minute=minute, meridiem=m.group(3).upper()))


def parse_clock_time(value: Optional[str]) -> ClockTime:
    result = try_parse_clock_time(value)
    if result.error is not None:
        raise result.error
    return result.value


def format_time(text: str) -> str:
    """Shorten on-the-hour times for display: "09:00 AM" -> "9 AM"."""
    return _ON_THE_HOUR_RE.sub(r"\1 \2", text)
