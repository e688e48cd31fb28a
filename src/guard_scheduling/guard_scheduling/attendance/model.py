from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class TimeEntry:
    """Thực thể miền (domain): Một lần chấm công vào/ra của nhân viên."""

    employee_id: int
    start_time: datetime
    shift_id: Optional[int] = None
    end_time: Optional[datetime] = None
    break_start: Optional[datetime] = None
    break_end: Optional[datetime] = None
    entry_id: Optional[int] = None
    site_id: Optional[int] = None


@dataclass(frozen=True)
class WorkedDuration:
    hours: int
    minutes: int

    @classmethod
    def between(cls, start: datetime, end: datetime) -> "WorkedDuration":
        total_minutes = max(int((end - start).total_seconds() // 60), 0)
        return cls(hours=total_minutes // 60, minutes=total_minutes % 60)

    def __str__(self) -> str:
        return f"{self.hours:02d}:{self.minutes:02d}"


@dataclass(frozen=True)
class AttendanceResult:
    """Read-model: attendance of one employee on one day (nothing is persisted)."""

    status: AttendanceStatus
    shift_id: Optional[int] = None
    early_minutes: Optional[int] = None
    late_minutes: Optional[int] = None
    has_clocked_out: bool = False
    hours_worked: Optional[WorkedDuration] = None

    def to_dict(self) -> dict:
        return {
            "status": self.status.value,
            "shift_id": self.shift_id,
            "early_minutes": self.early_minutes,
            "late_minutes": self.late_minutes,
            "has_clocked_out": self.has_clocked_out,
            "hours_worked": (
                {"hours": self.hours_worked.hours, "minutes": self.hours_worked.minutes}
                if self.hours_worked
                else None
            ),
        }
