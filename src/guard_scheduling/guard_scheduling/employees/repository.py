from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import Employee


class EmployeeRepository(Protocol):
    """Giao diện repository cho Employee aggregate.

    Lưu ý (DIP): tầng service phụ thuộc vào interface này, không phụ thuộc trực tiếp DB cụ thể.
    """

    def get_with_attendance(
        self, employee_id: int, *, start: Optional[date] = None, end: Optional[date] = None
    ) -> Optional[Employee]:
        raise NotImplementedError

    def list_with_attendance(self, *, start: Optional[date] = None, end: Optional[date] = None) -> Sequence[Employee]:
        """Employees with assigned shifts (assignment order) and time entries in [start, end]."""

        raise NotImplementedError
