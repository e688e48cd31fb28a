from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

import pytest

from src.guard_scheduling.guard_scheduling.attendance.model import TimeEntry, WorkedDuration
from src.guard_scheduling.guard_scheduling.attendance.selection import RejectAmbiguousPolicy
from src.guard_scheduling.guard_scheduling.attendance.service import AttendanceService
from src.guard_scheduling.guard_scheduling.core.enums import AttendanceStatus
from src.guard_scheduling.guard_scheduling.core.exceptions import NotFoundError, ParseError
from src.guard_scheduling.guard_scheduling.employees.model import Employee
from src.guard_scheduling.guard_scheduling.shifts.model import ExcludeDay, IncludeDay

MONDAY = date(2024, 1, 8)


def _employee(shifts, entries=()) -> Employee:
    return Employee(
        employee_id=1,
        employee_code="ABC12345",
        first_name="Jordan",
        last_name="Reyes",
        shifts=tuple(shifts),
        time_entries=tuple(entries),
    )


def _clock_in(hour: int, minute: int, *, day: date = MONDAY, out: Optional[datetime] = None) -> TimeEntry:
    start = datetime(day.year, day.month, day.day, hour, minute)
    return TimeEntry(employee_id=1, shift_id=1, start_time=start, end_time=out)


@dataclass
class InMemoryEmployees:
    employees: dict[int, Employee]
    calls: list = field(default_factory=list)

    def get_with_attendance(self, employee_id: int, *, start=None, end=None) -> Optional[Employee]:
        self.calls.append(("get", employee_id, start, end))
        return self.employees.get(employee_id)

    def list_with_attendance(self, *, start=None, end=None):
        self.calls.append(("list", start, end))
        return list(self.employees.values())


@pytest.mark.parametrize(
    "hour, minute, status, early, late",
    [
        (8, 45, AttendanceStatus.EARLY, 15, None),
        (8, 50, AttendanceStatus.EARLY, 10, None),
        (8, 55, AttendanceStatus.ON_TIME, None, None),
        (9, 0, AttendanceStatus.ON_TIME, None, None),
        (9, 10, AttendanceStatus.LATE, None, 10),
        (9, 12, AttendanceStatus.LATE, None, 12),
    ],
)
def test_punctuality_against_nine_am_start(make_shift, fixed_now, hour, minute, status, early, late):
    svc = AttendanceService()
    result = svc.classify(_employee([make_shift()], [_clock_in(hour, minute)]), MONDAY, now=fixed_now)

    assert result.status == status
    assert result.early_minutes == early
    assert result.late_minutes == late
    assert result.shift_id == 1


def test_not_scheduled_is_none_not_absent(make_shift, fixed_now):
    svc = AttendanceService()

    # Sunday is an off day.
    assert svc.classify(_employee([make_shift()]), date(2024, 1, 7), now=fixed_now) is None
    assert svc.classify(_employee([]), MONDAY, now=fixed_now) is None


def test_no_entry_is_absent(make_shift, fixed_now):
    svc = AttendanceService()
    other_day = _clock_in(9, 0, day=date(2024, 1, 9))

    result = svc.classify(_employee([make_shift()], [other_day]), MONDAY, now=fixed_now)

    assert result.status == AttendanceStatus.ABSENT
    assert result.has_clocked_out is False
    assert result.hours_worked is None


def test_future_day_is_upcoming_even_with_entry(make_shift, fixed_now):
    svc = AttendanceService()
    tomorrow = date(2024, 1, 11)

    result = svc.classify(_employee([make_shift()], [_clock_in(9, 30, day=tomorrow)]), tomorrow, now=fixed_now)

    assert result.status == AttendanceStatus.UPCOMING
    assert result.late_minutes is None


def test_today_is_not_upcoming(make_shift, fixed_now):
    result = AttendanceService().classify(_employee([make_shift()]), fixed_now.date(), now=fixed_now)

    assert result.status == AttendanceStatus.ABSENT


def test_clock_out_sets_worked_duration(make_shift, fixed_now):
    entry = _clock_in(8, 55, out=datetime(2024, 1, 8, 17, 20))

    result = AttendanceService().classify(_employee([make_shift()], [entry]), MONDAY, now=fixed_now)

    assert result.status == AttendanceStatus.ON_TIME
    assert result.has_clocked_out is True
    assert result.hours_worked == WorkedDuration(hours=8, minutes=25)
    assert result.to_dict()["hours_worked"] == {"hours": 8, "minutes": 25}


def test_overnight_worked_duration_counts_total_hours():
    duration = WorkedDuration.between(datetime(2024, 1, 8, 21, 0), datetime(2024, 1, 9, 23, 30))

    assert (duration.hours, duration.minutes) == (26, 30)
    assert str(duration) == "26:30"


def test_custom_include_time_drives_punctuality(make_shift, fixed_now):
    shift = make_shift(include_days=(IncludeDay(start_date=MONDAY, custom_time=True, start_time="07:00 AM"),))

    result = AttendanceService().classify(_employee([shift], [_clock_in(7, 5)]), MONDAY, now=fixed_now)

    assert result.status == AttendanceStatus.LATE
    assert result.late_minutes == 5


def test_malformed_start_time_raises_parse_error(make_shift, fixed_now):
    shift = make_shift(start_time="9am")

    with pytest.raises(ParseError) as exc:
        AttendanceService().classify(_employee([shift], [_clock_in(9, 0)]), MONDAY, now=fixed_now)

    assert exc.value.kind == ParseError.INVALID_TIME_FORMAT


def test_malformed_time_only_fails_its_own_cells(make_shift, fixed_now):
    good = _employee([make_shift()], [_clock_in(9, 0)])
    bad = Employee(
        employee_id=2,
        employee_code="BAD00001",
        first_name="Sam",
        last_name="Okafor",
        shifts=(make_shift(shift_id=2, start_time="25:00"),),
    )

    rows = AttendanceService().week_grid([good, bad], MONDAY, now=fixed_now)

    good_monday = rows[0].cells[1]
    assert good_monday.result.status == AttendanceStatus.ON_TIME

    bad_monday = rows[1].cells[1]
    assert bad_monday.result is None
    assert bad_monday.error == "invalid_time_format"
    # Sunday is an off day for both: no occurrence, so no parse is attempted.
    assert rows[1].cells[0].error is None


def test_week_grid_cells(make_shift, fixed_now):
    shift = make_shift(exclude_days=(ExcludeDay(from_date=date(2024, 1, 9)),))
    employee = _employee([shift], [_clock_in(8, 57)])

    row = AttendanceService().week_grid([employee], date(2024, 1, 10), now=fixed_now)[0]
    statuses = [c.result.status.value if c.result else None for c in row.cells]

    # Sun off, Mon on-time, Tue excluded, Wed today absent, Thu-Sat upcoming
    assert statuses == [None, "on-time", None, "absent", "upcoming", "upcoming", "upcoming"]
    assert row.to_dict()["initials"] == "JR"
    assert row.to_dict()["cells"][0] == {"date": "2024-01-07", "scheduled": False}


def test_attendance_week_loads_only_that_week(make_shift, fixed_now):
    repo = InMemoryEmployees({1: _employee([make_shift()])})

    rows = AttendanceService(repo).attendance_week(date(2024, 1, 10), now=fixed_now)

    assert len(rows) == 1
    assert repo.calls == [("list", date(2024, 1, 7), date(2024, 1, 13))]


def test_employee_day_unknown_employee(fixed_now):
    with pytest.raises(NotFoundError):
        AttendanceService(InMemoryEmployees({})).employee_day(99, MONDAY, now=fixed_now)


def test_ambiguous_policy_blanks_cell(make_shift, fixed_now):
    svc = AttendanceService(selection_policy=RejectAmbiguousPolicy())
    employee = _employee([make_shift(shift_id=1), make_shift(shift_id=2)])

    cell = svc.week_grid([employee], MONDAY, now=fixed_now)[0].cells[1]

    assert cell.result is None
    assert cell.error == "AmbiguousShiftError"
