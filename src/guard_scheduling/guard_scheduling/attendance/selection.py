"""Which of an employee's assigned shifts applies on a given day.

Assignments can overlap; there is no conflict detection. The policy object
makes the tie-break explicit and swappable.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional, Sequence

from ..common.datetime_utils import DateLike
from ..core.exceptions import AmbiguousShiftError
from ..shifts.model import Shift
from ..shifts.resolver import Occurrence, resolve, resolve_many


class ShiftSelectionPolicy(ABC):
    @abstractmethod
    def select(self, shifts: Sequence[Shift], day: DateLike) -> Optional[Occurrence]:
        raise NotImplementedError


class FirstMatchPolicy(ShiftSelectionPolicy):
    """First shift in assignment order that is in effect wins; later ones are not resolved."""

    def select(self, shifts: Sequence[Shift], day: DateLike) -> Optional[Occurrence]:
        for shift in shifts:
            occ = resolve(shift, day)
            if occ is not None:
                return occ
        return None


class RejectAmbiguousPolicy(ShiftSelectionPolicy):
    """Refuse to pick when two or more assigned shifts are in effect on the day."""

    def select(self, shifts: Sequence[Shift], day: DateLike) -> Optional[Occurrence]:
        matches = resolve_many(shifts, day)
        if len(matches) > 1:
            raise AmbiguousShiftError([m.shift_id for m in matches])
        return matches[0] if matches else None
