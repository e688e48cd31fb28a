from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Iterable, Optional, Sequence

from ..common.clock_time import parse_clock_time
from ..common.datetime_utils import DateLike, as_date, now_local, week_days
from ..core.enums import AttendanceStatus
from ..core.exceptions import DomainError, NotFoundError
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from .factory import AttendanceStrategyFactory
from .model import AttendanceResult, TimeEntry, WorkedDuration
from .selection import FirstMatchPolicy, ShiftSelectionPolicy

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AttendanceCell:
    day: date
    result: Optional[AttendanceResult] = None
    error: Optional[str] = None

    def to_dict(self) -> dict:
        data = {"date": self.day.strftime("%Y-%m-%d"), "scheduled": self.result is not None}
        if self.result is not None:
            data.update(self.result.to_dict())
        if self.error:
            data["error"] = self.error
        return data


@dataclass(frozen=True)
class AttendanceRow:
    employee: Employee
    cells: list[AttendanceCell] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "employee_id": self.employee.employee_id,
            "employee_code": self.employee.employee_code,
            "full_name": self.employee.full_name,
            "initials": self.employee.initials,
            "cells": [c.to_dict() for c in self.cells],
        }


def find_entry_for_day(entries: Iterable[TimeEntry], day: date) -> Optional[TimeEntry]:
    for entry in entries:
        if as_date(entry.start_time) == day:
            return entry
    return None


class AttendanceService:
    def __init__(
        self,
        employees: EmployeeRepository | None = None,
        *,
        strategy_factory: AttendanceStrategyFactory | None = None,
        selection_policy: ShiftSelectionPolicy | None = None,
    ):
        self._employees = employees
        self._factory = strategy_factory or AttendanceStrategyFactory()
        self._policy = selection_policy or FirstMatchPolicy()

    def classify(self, employee: Employee, day: DateLike, *, now: datetime | None = None) -> Optional[AttendanceResult]:
        """Attendance of `employee` on `day`; None when no assigned shift is in effect.

        Raises ParseError when the shift start time is malformed.
        """

        now = now or now_local()
        day = as_date(day)

        occurrence = self._policy.select(employee.shifts, day)
        if occurrence is None:
            return None

        if day > now.date():
            return AttendanceResult(status=AttendanceStatus.UPCOMING, shift_id=occurrence.shift_id)

        expected_start = parse_clock_time(occurrence.start_time).on(day)
        entry = find_entry_for_day(employee.time_entries, day)

        strategy = self._factory.for_clock_in(expected_start=expected_start, entry=entry)
        decision = strategy.decide(
            expected_start=expected_start,
            entry=entry,
            difference=self._factory.difference(expected_start=expected_start, entry=entry),
        )

        has_clocked_out = entry is not None and entry.end_time is not None
        return AttendanceResult(
            status=decision.status,
            shift_id=occurrence.shift_id,
            early_minutes=decision.early_minutes,
            late_minutes=decision.late_minutes,
            has_clocked_out=has_clocked_out,
            hours_worked=WorkedDuration.between(entry.start_time, entry.end_time) if has_clocked_out else None,
        )

    def week_grid(self, employees: Sequence[Employee], day: DateLike, *, now: datetime | None = None) -> list[AttendanceRow]:
        now = now or now_local()
        days = week_days(as_date(day))
        return [AttendanceRow(employee=e, cells=[self._cell(e, d, now) for d in days]) for e in employees]

    def attendance_week(self, day: DateLike, *, now: datetime | None = None) -> list[AttendanceRow]:
        days = week_days(as_date(day))
        employees = self._repo().list_with_attendance(start=days[0], end=days[-1])
        return self.week_grid(employees, day, now=now)

    def employee_week(self, employee_id: int, day: DateLike, *, now: datetime | None = None) -> AttendanceRow:
        days = week_days(as_date(day))
        employee = self._repo().get_with_attendance(int(employee_id), start=days[0], end=days[-1])
        if not employee:
            raise NotFoundError(f"Không tìm thấy nhân viên {employee_id}")
        return self.week_grid([employee], day, now=now)[0]

    def employee_day(self, employee_id: int, day: DateLike, *, now: datetime | None = None) -> Optional[AttendanceResult]:
        day = as_date(day)
        employee = self._repo().get_with_attendance(int(employee_id), start=day, end=day)
        if not employee:
            raise NotFoundError(f"Không tìm thấy nhân viên {employee_id}")
        return self.classify(employee, day, now=now)

    def _cell(self, employee: Employee, day: date, now: datetime) -> AttendanceCell:
        # A bad shift record only blanks its own cell.
        try:
            return AttendanceCell(day=day, result=self.classify(employee, day, now=now))
        except DomainError as e:
            logger.warning("Attendance for employee %s on %s failed: %s", employee.employee_id, day, e)
            return AttendanceCell(day=day, error=getattr(e, "kind", type(e).__name__))

    def _repo(self) -> EmployeeRepository:
        if self._employees is None:
            raise RuntimeError("AttendanceService was built without an employee repository")
        return self._employees
