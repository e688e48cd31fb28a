from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import date
from typing import Optional, Sequence

from ..common.clock_time import format_time, try_parse_clock_time
from ..common.datetime_utils import DateLike, as_date, week_days
from ..common.validators import require_clock_time, require_date_order, require_non_negative
from ..core.enums import OccurrenceReason, ShiftType
from ..core.exceptions import NotFoundError, ParseError, ValidationError
from .model import ExcludeDay, IncludeDay, Shift
from .repository import ShiftRepository
from .resolver import Occurrence, occurrences_between, resolve, resolve_with_reason

logger = logging.getLogger(__name__)

_REASON_LABELS = {
    OccurrenceReason.EXCLUDED: "Excluded",
    OccurrenceReason.OFF_DAY: "Off Day",
    OccurrenceReason.NOT_STARTED: "-",
    OccurrenceReason.ENDED: "-",
}


def validate_exclude_day(exclude: ExcludeDay) -> ExcludeDay:
    require_date_order(exclude.from_date, exclude.to_date, "Ngày loại trừ")
    return exclude


def validate_include_day(include: IncludeDay) -> IncludeDay:
    require_date_order(include.start_date, include.end_date, "Ngày bổ sung")
    if not include.custom_time:
        return include
    if not include.start_time and not include.end_time:
        raise ValidationError("Ngày bổ sung có giờ riêng phải có giờ bắt đầu hoặc kết thúc")
    return replace(
        include,
        start_time=require_clock_time(include.start_time, "Giờ bắt đầu") if include.start_time else None,
        end_time=require_clock_time(include.end_time, "Giờ kết thúc") if include.end_time else None,
    )


def validate_shift(shift: Shift) -> Shift:
    """Construction-time checks; returns the shift with normalized time strings."""

    if shift.type == ShiftType.ONE_TIME:
        require_date_order(shift.start_date, shift.end_date, "Khoảng ngày của ca")
    require_non_negative(shift.pay_rate, "Mức lương")
    require_non_negative(shift.overtime_multiplier, "Hệ số tăng ca")
    return replace(
        shift,
        # end_date only bounds one-time shifts.
        end_date=shift.end_date if shift.type == ShiftType.ONE_TIME else None,
        start_time=require_clock_time(shift.start_time, "Giờ bắt đầu"),
        end_time=require_clock_time(shift.end_time, "Giờ kết thúc"),
        exclude_days=tuple(validate_exclude_day(ex) for ex in (shift.exclude_days or ())),
        include_days=tuple(validate_include_day(inc) for inc in (shift.include_days or ())),
    )


class ShiftService:
    def __init__(self, shifts: ShiftRepository):
        self._shifts = shifts

    def create(self, shift: Shift) -> int:
        return self._shifts.create(validate_shift(shift))

    def add_exclude_day(self, *, shift_id: int, exclude: ExcludeDay) -> int:
        self.get(shift_id)
        return self._shifts.add_exclude_day(shift_id=int(shift_id), exclude=validate_exclude_day(exclude))

    def add_include_day(self, *, shift_id: int, include: IncludeDay) -> int:
        self.get(shift_id)
        return self._shifts.add_include_day(shift_id=int(shift_id), include=validate_include_day(include))

    def terminate(self, shift_id: int) -> None:
        if not self._shifts.set_terminated(int(shift_id), terminated=True):
            raise NotFoundError(f"Không tìm thấy ca {shift_id}")

    def get(self, shift_id: int) -> Shift:
        shift = self._shifts.get_by_id(int(shift_id))
        if not shift:
            raise NotFoundError(f"Không tìm thấy ca {shift_id}")
        return shift

    def occurrences(self, shift_id: int, *, start: date, end: date) -> list[Occurrence]:
        require_date_order(start, end, "Khoảng ngày")
        return occurrences_between(self.get(shift_id), start, end)


@dataclass(frozen=True)
class ScheduleCell:
    day: date
    reason: OccurrenceReason
    label: str
    occurrence: Optional[Occurrence] = None
    error: Optional[str] = None

    def to_dict(self) -> dict:
        occ = self.occurrence
        data = {
            "date": self.day.strftime("%Y-%m-%d"),
            "reason": self.reason.value,
            "label": self.label,
            "start_time": occ.start_time if occ else None,
            "end_time": occ.end_time if occ else None,
            "custom_time": occ.custom_time if occ else False,
        }
        if self.error:
            data["error"] = self.error
        return data


@dataclass(frozen=True)
class ScheduleRow:
    shift: Shift
    cells: list[ScheduleCell]

    def to_dict(self) -> dict:
        return {
            "shift_id": self.shift.shift_id,
            "name": self.shift.name,
            "site_id": self.shift.site_id,
            "type": self.shift.type.value,
            "cells": [c.to_dict() for c in self.cells],
        }


class ScheduleCalendarService:
    """Read side of the scheduling calendar: active shifts only."""

    def __init__(self, shifts: ShiftRepository):
        self._shifts = shifts

    def _active(self, site_id: Optional[int]) -> Sequence[Shift]:
        return self._shifts.list_all(site_id=site_id, include_terminated=False)

    def shifts_for_day(self, day: DateLike, *, site_id: Optional[int] = None) -> list[tuple[Shift, Occurrence]]:
        out = []
        for shift in self._active(site_id):
            occ = resolve(shift, day)
            if occ is not None:
                out.append((shift, occ))
        return out

    def week_rows(self, day: DateLike, *, site_id: Optional[int] = None) -> list[ScheduleRow]:
        days = week_days(as_date(day))
        rows = [ScheduleRow(shift=s, cells=[self._cell(s, d) for d in days]) for s in self._active(site_id)]
        logger.debug("Built schedule week of %s: %d row(s)", days[0], len(rows))
        return rows

    @staticmethod
    def _cell(shift: Shift, day: date) -> ScheduleCell:
        res = resolve_with_reason(shift, day)
        if res.occurrence is None:
            return ScheduleCell(day=day, reason=res.reason, label=_REASON_LABELS[res.reason])

        occ = res.occurrence
        if not all(try_parse_clock_time(t).ok for t in (occ.start_time, occ.end_time)):
            logger.warning(
                "Shift %s on %s has a malformed time: %r - %r", shift.shift_id, day, occ.start_time, occ.end_time
            )
            return ScheduleCell(
                day=day,
                reason=res.reason,
                label="Invalid time",
                occurrence=occ,
                error=ParseError.INVALID_TIME_FORMAT,
            )

        label = f"{format_time(occ.start_time)} - {format_time(occ.end_time)}"
        return ScheduleCell(day=day, reason=res.reason, label=label, occurrence=occ)
