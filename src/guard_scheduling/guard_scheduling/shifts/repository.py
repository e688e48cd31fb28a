from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import ExcludeDay, IncludeDay, Shift


class ShiftRepository(Protocol):
    """Loads fully materialized Shift aggregates (exclude/include days attached)."""

    def list_all(self, *, site_id: Optional[int] = None, include_terminated: bool = False) -> Sequence[Shift]:
        raise NotImplementedError

    def get_by_id(self, shift_id: int) -> Optional[Shift]:
        raise NotImplementedError

    def get_many(self, shift_ids: Sequence[int]) -> Sequence[Shift]:
        """Shifts for the given ids, in the order of `shift_ids`."""

        raise NotImplementedError

    def create(self, shift: Shift) -> int:
        """Persist a new shift row; returns shift_id."""

        raise NotImplementedError

    def add_exclude_day(self, *, shift_id: int, exclude: ExcludeDay) -> int:
        raise NotImplementedError

    def add_include_day(self, *, shift_id: int, include: IncludeDay) -> int:
        raise NotImplementedError

    def set_terminated(self, shift_id: int, *, terminated: bool) -> bool:
        raise NotImplementedError
