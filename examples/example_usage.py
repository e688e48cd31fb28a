"""Ví dụ: dùng resolver và service layer trực tiếp (không qua Flask, không cần DB).

Builds one recurring shift and one employee in memory, prints the schedule
week and the attendance week.
"""

from datetime import date, datetime
from decimal import Decimal

from src.guard_scheduling.guard_scheduling.attendance.model import TimeEntry
from src.guard_scheduling.guard_scheduling.attendance.service import AttendanceService
from src.guard_scheduling.guard_scheduling.core.enums import Weekday
from src.guard_scheduling.guard_scheduling.employees.model import Employee
from src.guard_scheduling.guard_scheduling.shifts.model import ExcludeDay, Shift
from src.guard_scheduling.guard_scheduling.shifts.resolver import resolve_with_reason


def main():
    shift = Shift(
        shift_id=1,
        name="Day gate",
        start_date=date(2024, 1, 1),
        start_time="09:00 AM",
        end_time="05:00 PM",
        off_days=frozenset({Weekday.SUNDAY}),
        pay_rate=Decimal("18.50"),
        exclude_days=(ExcludeDay(from_date=date(2024, 1, 10), reason="Site closed"),),
    )

    for d in range(7, 14):
        res = resolve_with_reason(shift, date(2024, 1, d))
        print(date(2024, 1, d), res.reason.value, res.occurrence.start_time if res.occurrence else "")

    employee = Employee(
        employee_id=1,
        employee_code="ABC12345",
        first_name="Jordan",
        last_name="Reyes",
        shifts=(shift,),
        time_entries=(
            TimeEntry(employee_id=1, start_time=datetime(2024, 1, 8, 8, 45), end_time=datetime(2024, 1, 8, 17, 5)),
            TimeEntry(employee_id=1, start_time=datetime(2024, 1, 9, 9, 12)),
        ),
    )

    svc = AttendanceService()
    for row in svc.week_grid([employee], date(2024, 1, 8), now=datetime(2024, 1, 11, 12, 0)):
        print(row.to_dict())


if __name__ == "__main__":
    main()
