from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Optional

from ..common.datetime_utils import DateLike, is_within
from ..core.constants import DEFAULT_OFF_DAYS
from ..core.enums import ShiftType, Weekday


@dataclass(frozen=True)
class ExcludeDay:
    """Ngày (hoặc khoảng ngày) ca bị tạm ngưng: ngày lễ, nghỉ có kế hoạch..."""

    from_date: date
    to_date: Optional[date] = None
    reason: Optional[str] = None
    notes: Optional[str] = None
    exclude_id: Optional[int] = None

    def covers(self, day: DateLike) -> bool:
        return is_within(day, self.from_date, self.to_date)


@dataclass(frozen=True)
class IncludeDay:
    """Ad-hoc day (or range) attached to a shift, optionally with custom hours."""

    start_date: date
    end_date: Optional[date] = None
    custom_time: bool = False
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    include_id: Optional[int] = None

    def covers(self, day: DateLike) -> bool:
        return is_within(day, self.start_date, self.end_date)


@dataclass(frozen=True)
class Shift:
    """Thực thể miền (domain): Ca trực tại một địa điểm (site).

    Lưu ý: đối tượng dữ liệu thuần, đã nạp sẵn exclude/include days.
    """

    shift_id: int
    start_date: date
    start_time: str
    end_time: str
    type: ShiftType = ShiftType.RECURRING
    end_date: Optional[date] = None
    off_days: frozenset[Weekday] = DEFAULT_OFF_DAYS
    every_day: bool = False
    site_id: Optional[int] = None
    name: Optional[str] = None
    notes: Optional[str] = None
    pay_rate: Decimal = Decimal("0")
    overtime_multiplier: Optional[Decimal] = None
    terminated: bool = False
    exclude_days: Optional[tuple[ExcludeDay, ...]] = field(default=())
    include_days: Optional[tuple[IncludeDay, ...]] = field(default=())

    @property
    def is_one_time(self) -> bool:
        return self.type == ShiftType.ONE_TIME

    @property
    def is_open_ended(self) -> bool:
        """One-time shift stored without an end date: no upper bound applies."""
        return self.is_one_time and self.end_date is None
