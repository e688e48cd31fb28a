from __future__ import annotations

from enum import Enum


class ShiftType(str, Enum):
    """Loại ca: lặp lại theo tuần hoặc chạy một lần trong một khoảng ngày."""

    RECURRING = "recurring"
    ONE_TIME = "one_time"


class Weekday(str, Enum):
    """Weekday tokens as stored in shift data, Sunday first.

    Note: "firday" is the stored token for Friday and is kept verbatim so
    existing rows keep matching.
    """

    SUNDAY = "sunday"
    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "firday"
    SATURDAY = "saturday"

    @classmethod
    def from_token(cls, token: str) -> "Weekday":
        value = (token or "").strip().lower()
        if value == "friday":
            return cls.FRIDAY
        return cls(value)


class OccurrenceReason(str, Enum):
    """Why a shift is (or is not) in effect on a given day."""

    IN_EFFECT = "IN_EFFECT"
    NOT_STARTED = "NOT_STARTED"
    EXCLUDED = "EXCLUDED"
    OFF_DAY = "OFF_DAY"
    ENDED = "ENDED"


class AttendanceStatus(str, Enum):
    """Trạng thái chấm công suy ra từ ca dự kiến và giờ vào thực tế."""

    ABSENT = "absent"
    EARLY = "early"
    LATE = "late"
    ON_TIME = "on-time"
    UPCOMING = "upcoming"
