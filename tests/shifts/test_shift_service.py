from __future__ import annotations

from dataclasses import replace
from datetime import date
from typing import Optional

import pytest

from src.guard_scheduling.guard_scheduling.core.enums import OccurrenceReason, ShiftType
from src.guard_scheduling.guard_scheduling.core.exceptions import NotFoundError, ValidationError
from src.guard_scheduling.guard_scheduling.shifts.model import ExcludeDay, IncludeDay, Shift
from src.guard_scheduling.guard_scheduling.shifts.service import (
    ScheduleCalendarService,
    ShiftService,
    validate_shift,
)


class InMemoryShifts:
    def __init__(self, shifts=()):
        self._shifts: dict[int, Shift] = {s.shift_id: s for s in shifts}
        self.excludes: list[tuple[int, ExcludeDay]] = []
        self.includes: list[tuple[int, IncludeDay]] = []

    def list_all(self, *, site_id=None, include_terminated=False):
        return [
            s
            for s in self._shifts.values()
            if (site_id is None or s.site_id == site_id) and (include_terminated or not s.terminated)
        ]

    def get_by_id(self, shift_id: int) -> Optional[Shift]:
        return self._shifts.get(shift_id)

    def get_many(self, shift_ids):
        return [self._shifts[i] for i in shift_ids if i in self._shifts]

    def create(self, shift: Shift) -> int:
        new_id = max(self._shifts, default=0) + 1
        self._shifts[new_id] = replace(shift, shift_id=new_id)
        return new_id

    def add_exclude_day(self, *, shift_id: int, exclude: ExcludeDay) -> int:
        self.excludes.append((shift_id, exclude))
        return len(self.excludes)

    def add_include_day(self, *, shift_id: int, include: IncludeDay) -> int:
        self.includes.append((shift_id, include))
        return len(self.includes)

    def set_terminated(self, shift_id: int, *, terminated: bool) -> bool:
        if shift_id not in self._shifts:
            return False
        self._shifts[shift_id] = replace(self._shifts[shift_id], terminated=terminated)
        return True


def test_validate_rejects_inverted_one_time_window(make_shift):
    shift = make_shift(type=ShiftType.ONE_TIME, start_date=date(2024, 1, 10), end_date=date(2024, 1, 5))

    with pytest.raises(ValidationError):
        validate_shift(shift)


def test_validate_rejects_malformed_times(make_shift):
    with pytest.raises(ValidationError):
        validate_shift(make_shift(start_time="9am"))


def test_validate_rejects_inverted_exclude_range(make_shift):
    shift = make_shift(exclude_days=(ExcludeDay(from_date=date(2024, 1, 10), to_date=date(2024, 1, 9)),))

    with pytest.raises(ValidationError):
        validate_shift(shift)


def test_validate_normalizes_times_and_drops_recurring_end_date(make_shift):
    shift = validate_shift(make_shift(start_time="9:00 am", end_time="5:30 pm", end_date=date(2024, 2, 1)))

    assert shift.start_time == "09:00 AM"
    assert shift.end_time == "05:30 PM"
    assert shift.end_date is None


def test_create_persists_validated_shift(make_shift):
    repo = InMemoryShifts()
    svc = ShiftService(repo)

    shift_id = svc.create(make_shift(start_time="7:00 pm"))

    assert repo.get_by_id(shift_id).start_time == "07:00 PM"


def test_custom_include_day_needs_a_time(make_shift):
    svc = ShiftService(InMemoryShifts([make_shift()]))

    with pytest.raises(ValidationError):
        svc.add_include_day(shift_id=1, include=IncludeDay(start_date=date(2024, 1, 9), custom_time=True))


def test_add_exclude_day_unknown_shift():
    with pytest.raises(NotFoundError):
        ShiftService(InMemoryShifts()).add_exclude_day(shift_id=5, exclude=ExcludeDay(from_date=date(2024, 1, 9)))


def test_occurrences_for_range(make_shift):
    svc = ShiftService(InMemoryShifts([make_shift(exclude_days=(ExcludeDay(from_date=date(2024, 1, 9)),))]))

    days = [o.day for o in svc.occurrences(1, start=date(2024, 1, 7), end=date(2024, 1, 10))]

    assert days == [date(2024, 1, 8), date(2024, 1, 10)]


def test_occurrences_rejects_inverted_range(make_shift):
    with pytest.raises(ValidationError):
        ShiftService(InMemoryShifts([make_shift()])).occurrences(1, start=date(2024, 1, 10), end=date(2024, 1, 1))


def test_terminated_shift_hidden_from_calendar(make_shift):
    repo = InMemoryShifts([make_shift(shift_id=1), make_shift(shift_id=2)])
    ShiftService(repo).terminate(2)

    pairs = ScheduleCalendarService(repo).shifts_for_day(date(2024, 1, 8))

    assert [s.shift_id for s, _ in pairs] == [1]


def test_week_rows_labels(make_shift):
    shift = make_shift(
        start_date=date(2024, 1, 9),
        end_time="05:30 PM",
        exclude_days=(ExcludeDay(from_date=date(2024, 1, 11)),),
    )

    rows = ScheduleCalendarService(InMemoryShifts([shift])).week_rows(date(2024, 1, 10))
    cells = rows[0].cells

    assert [c.day.day for c in cells] == [7, 8, 9, 10, 11, 12, 13]
    assert [c.reason for c in cells[:2]] == [OccurrenceReason.NOT_STARTED, OccurrenceReason.NOT_STARTED]
    assert cells[2].label == "9 AM - 05:30 PM"
    assert cells[4].label == "Excluded"
    assert cells[4].reason == OccurrenceReason.EXCLUDED
    assert rows[0].to_dict()["cells"][2]["start_time"] == "09:00 AM"


def test_week_rows_off_day_label(make_shift):
    rows = ScheduleCalendarService(InMemoryShifts([make_shift()])).week_rows(date(2024, 1, 10))

    assert rows[0].cells[0].label == "Off Day"


def test_week_rows_flag_malformed_time(make_shift):
    rows = ScheduleCalendarService(InMemoryShifts([make_shift(start_time="nine")])).week_rows(date(2024, 1, 10))
    monday = rows[0].cells[1]

    assert monday.reason == OccurrenceReason.IN_EFFECT
    assert monday.error == "invalid_time_format"
    assert "nine" not in monday.label
    assert monday.to_dict()["error"] == "invalid_time_format"
    # Off days never look at the times.
    assert rows[0].cells[0].error is None
    assert "error" not in rows[0].cells[0].to_dict()
