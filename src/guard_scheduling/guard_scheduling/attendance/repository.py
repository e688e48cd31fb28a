from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import TimeEntry


class TimeEntryRepository(Protocol):
    """Read-only: time entries are written by the clock-in devices, not by this package."""

    def list_for_employees(
        self,
        employee_ids: Sequence[int],
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> Sequence[TimeEntry]:
        raise NotImplementedError
