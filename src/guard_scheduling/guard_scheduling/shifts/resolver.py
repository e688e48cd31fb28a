"""Shift occurrence resolution.

A shift definition (start date, off days, exclusions, one-time window) is
turned into a yes/no answer for one calendar day. Both the schedule calendar
and the attendance grid go through this module, one call per cell.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Iterable, Optional, Sequence

from ..common.datetime_utils import DateLike, as_date, days_between, weekday_of
from ..core.enums import OccurrenceReason
from .model import IncludeDay, Shift


@dataclass(frozen=True)
class Occurrence:
    """A shift being active on one specific day, with its effective hours."""

    shift_id: int
    day: date
    start_time: str
    end_time: str
    custom_time: bool = False


@dataclass(frozen=True)
class Resolution:
    shift_id: int
    day: date
    reason: OccurrenceReason
    occurrence: Optional[Occurrence] = None

    @property
    def in_effect(self) -> bool:
        return self.occurrence is not None


def _custom_hours(include_days: Iterable[IncludeDay], day: date) -> Optional[IncludeDay]:
    for inc in include_days:
        if inc.custom_time and inc.covers(day):
            return inc
    return None


def resolve_with_reason(shift: Shift, value: DateLike) -> Resolution:
    """Run the ordered checks; the first one that matches decides."""
    day = as_date(value)

    def _none(reason: OccurrenceReason) -> Resolution:
        return Resolution(shift_id=shift.shift_id, day=day, reason=reason)

    if day < shift.start_date:
        return _none(OccurrenceReason.NOT_STARTED)

    if any(ex.covers(day) for ex in (shift.exclude_days or ())):
        return _none(OccurrenceReason.EXCLUDED)

    if not shift.every_day and weekday_of(day) in shift.off_days:
        return _none(OccurrenceReason.OFF_DAY)

    if shift.is_one_time and shift.end_date is not None:
        # Inverted windows (end before start) match nothing.
        if not shift.start_date <= day <= shift.end_date:
            return _none(OccurrenceReason.ENDED)

    start_time, end_time, custom = shift.start_time, shift.end_time, False
    override = _custom_hours(shift.include_days or (), day)
    if override is not None:
        start_time = override.start_time or start_time
        end_time = override.end_time or end_time
        custom = True

    return Resolution(
        shift_id=shift.shift_id,
        day=day,
        reason=OccurrenceReason.IN_EFFECT,
        occurrence=Occurrence(
            shift_id=shift.shift_id,
            day=day,
            start_time=start_time,
            end_time=end_time,
            custom_time=custom,
        ),
    )


def resolve(shift: Shift, value: DateLike) -> Optional[Occurrence]:
    return resolve_with_reason(shift, value).occurrence


def resolve_many(shifts: Sequence[Shift], value: DateLike) -> list[Occurrence]:
    """Every shift in effect on the day, in input order."""
    out = []
    for shift in shifts:
        occ = resolve(shift, value)
        if occ is not None:
            out.append(occ)
    return out


def occurrences_between(shift: Shift, start: date, end: date) -> list[Occurrence]:
    out = []
    for day in days_between(start, end):
        occ = resolve(shift, day)
        if occ is not None:
            out.append(occ)
    return out
