from __future__ import annotations

import logging
from datetime import date
from typing import Optional, Sequence

from ..attendance.model import TimeEntry
from ..attendance.repository import TimeEntryRepository
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, in_placeholders
from ..shifts.repository import ShiftRepository
from .model import Employee
from .repository import EmployeeRepository

logger = logging.getLogger(__name__)


class MySQLEmployeeRepository(EmployeeRepository):
    """Builds Employee aggregates from employees + shift_assignments + time_entries."""

    def __init__(self, conn_factory: DatabaseConnection, shifts: ShiftRepository, time_entries: TimeEntryRepository):
        self._conn_factory = conn_factory
        self._shifts = shifts
        self._time_entries = time_entries

    def get_with_attendance(
        self, employee_id: int, *, start: Optional[date] = None, end: Optional[date] = None
    ) -> Optional[Employee]:
        employees = self._load(employee_id=int(employee_id), start=start, end=end)
        return employees[0] if employees else None

    def list_with_attendance(self, *, start: Optional[date] = None, end: Optional[date] = None) -> Sequence[Employee]:
        return self._load(employee_id=None, start=start, end=end)

    def _load(self, *, employee_id: Optional[int], start: Optional[date], end: Optional[date]) -> list[Employee]:
        where = "WHERE employee_id=%s" if employee_id is not None else "WHERE status <> 'terminated'"
        params = (employee_id,) if employee_id is not None else ()

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT employee_id, employee_code, first_name, last_name
                FROM employees
                {where}
                ORDER BY first_name, last_name
                """,
                params,
            )
            rows = fetchall(cur)
            if not rows:
                return []

            ids = [int(r["employee_id"]) for r in rows]
            cur.execute(
                f"""
                SELECT employee_id, shift_id
                FROM shift_assignments
                WHERE employee_id IN ({in_placeholders(ids)})
                ORDER BY assignment_id
                """,
                tuple(ids),
            )
            assignments = fetchall(cur)

        shift_ids_by_employee: dict[int, list[int]] = {i: [] for i in ids}
        for a in assignments:
            shift_ids_by_employee[int(a["employee_id"])].append(int(a["shift_id"]))

        # Terminated shifts stay in: attendance history still refers to them.
        all_shift_ids = sorted({sid for sids in shift_ids_by_employee.values() for sid in sids})
        shifts_by_id = {s.shift_id: s for s in self._shifts.get_many(all_shift_ids)}

        entries_by_employee: dict[int, list[TimeEntry]] = {i: [] for i in ids}
        for entry in self._time_entries.list_for_employees(ids, start=start, end=end):
            entries_by_employee[entry.employee_id].append(entry)

        logger.debug("Loaded %d employee aggregate(s), %d shift(s)", len(rows), len(shifts_by_id))
        return [
            Employee(
                employee_id=int(r["employee_id"]),
                employee_code=r["employee_code"],
                first_name=r["first_name"],
                last_name=r["last_name"],
                shifts=tuple(
                    shifts_by_id[sid] for sid in shift_ids_by_employee[int(r["employee_id"])] if sid in shifts_by_id
                ),
                time_entries=tuple(entries_by_employee[int(r["employee_id"])]),
            )
            for r in rows
        ]
