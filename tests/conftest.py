from __future__ import annotations

from datetime import date, datetime

import pytest

from src.guard_scheduling.guard_scheduling.core.enums import ShiftType, Weekday
from src.guard_scheduling.guard_scheduling.shifts.model import Shift


@pytest.fixture
def fixed_now() -> datetime:
    # Wednesday
    return datetime(2024, 1, 10, 12, 0, 0)


@pytest.fixture
def make_shift():
    def _make(**overrides) -> Shift:
        fields = dict(
            shift_id=1,
            start_date=date(2024, 1, 1),
            start_time="09:00 AM",
            end_time="05:00 PM",
            type=ShiftType.RECURRING,
            off_days=frozenset({Weekday.SUNDAY}),
            every_day=False,
        )
        fields.update(overrides)
        return Shift(**fields)

    return _make
