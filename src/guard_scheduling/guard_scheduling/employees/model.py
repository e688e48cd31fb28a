from __future__ import annotations

from dataclasses import dataclass, field

from ..attendance.model import TimeEntry
from ..shifts.model import Shift


@dataclass(frozen=True)
class Employee:
    """Employee aggregate as the attendance grid needs it.

    `shifts` keeps assignment order: shift selection depends on it.
    """

    employee_id: int
    employee_code: str
    first_name: str
    last_name: str
    shifts: tuple[Shift, ...] = field(default=())
    time_entries: tuple[TimeEntry, ...] = field(default=())

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def initials(self) -> str:
        return f"{self.first_name[:1]}{self.last_name[:1]}".upper()
