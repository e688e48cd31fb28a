from __future__ import annotations

from datetime import date, datetime, time, timedelta
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, in_placeholders
from .model import TimeEntry
from .repository import TimeEntryRepository


class MySQLTimeEntryRepository(TimeEntryRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_employees(
        self,
        employee_ids: Sequence[int],
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> Sequence[TimeEntry]:
        ids = [int(i) for i in employee_ids]
        if not ids:
            return []

        clauses = [f"employee_id IN ({in_placeholders(ids)})"]
        params: list[object] = list(ids)
        if start is not None:
            clauses.append("start_time >= %s")
            params.append(datetime.combine(start, time.min))
        if end is not None:
            clauses.append("start_time < %s")
            params.append(datetime.combine(end + timedelta(days=1), time.min))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT entry_id, employee_id, shift_id, site_id, start_time, break_start, break_end, end_time
                FROM time_entries
                WHERE {" AND ".join(clauses)}
                ORDER BY start_time, entry_id
                """,
                tuple(params),
            )
            rows = fetchall(cur)
            return [
                TimeEntry(
                    entry_id=int(r["entry_id"]),
                    employee_id=int(r["employee_id"]),
                    shift_id=int(r["shift_id"]) if r.get("shift_id") is not None else None,
                    site_id=int(r["site_id"]) if r.get("site_id") is not None else None,
                    start_time=r["start_time"],
                    break_start=r.get("break_start"),
                    break_end=r.get("break_end"),
                    end_time=r.get("end_time"),
                )
                for r in rows
            ]
