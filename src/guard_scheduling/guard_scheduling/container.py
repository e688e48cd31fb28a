from __future__ import annotations

from dataclasses import dataclass

from .attendance.factory import AttendanceStrategyFactory
from .attendance.mysql_time_entry_repository import MySQLTimeEntryRepository
from .attendance.selection import FirstMatchPolicy, ShiftSelectionPolicy
from .attendance.service import AttendanceService
from .core.constants import DEFAULT_EARLY_THRESHOLD_MINUTES
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .shifts.mysql_shift_repository import MySQLShiftRepository
from .shifts.service import ScheduleCalendarService, ShiftService


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    shifts_repo: MySQLShiftRepository
    time_entries_repo: MySQLTimeEntryRepository
    employees_repo: MySQLEmployeeRepository

    shift_service: ShiftService
    schedule_calendar_service: ScheduleCalendarService
    attendance_service: AttendanceService


def build_container(
    *,
    db_config: dict,
    early_threshold_minutes: int = DEFAULT_EARLY_THRESHOLD_MINUTES,
    selection_policy: ShiftSelectionPolicy | None = None,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_settings(db_config))

    shifts_repo = MySQLShiftRepository(conn)
    time_entries_repo = MySQLTimeEntryRepository(conn)
    employees_repo = MySQLEmployeeRepository(conn, shifts_repo, time_entries_repo)

    attendance_service = AttendanceService(
        employees_repo,
        strategy_factory=AttendanceStrategyFactory(early_threshold_minutes=int(early_threshold_minutes)),
        selection_policy=selection_policy or FirstMatchPolicy(),
    )

    return Container(
        conn=conn,
        shifts_repo=shifts_repo,
        time_entries_repo=time_entries_repo,
        employees_repo=employees_repo,
        shift_service=ShiftService(shifts_repo),
        schedule_calendar_service=ScheduleCalendarService(shifts_repo),
        attendance_service=attendance_service,
    )
