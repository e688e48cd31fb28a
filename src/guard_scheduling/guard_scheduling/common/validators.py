from __future__ import annotations

from datetime import date
from typing import Optional

from ..core.exceptions import ValidationError
from .clock_time import try_parse_clock_time


def require_clock_time(value: Optional[str], field_name: str) -> str:
    result = try_parse_clock_time(value)
    if not result.ok:
        raise ValidationError(f"{field_name} không hợp lệ (định dạng h:mm AM/PM)")
    return str(result.value)


def require_date_order(start: date, end: Optional[date], field_name: str) -> None:
    if end is not None and end < start:
        raise ValidationError(f"{field_name}: ngày kết thúc phải sau hoặc bằng ngày bắt đầu")


def require_non_negative(value, field_name: str) -> None:
    if value is not None and value < 0:
        raise ValidationError(f"{field_name} không được âm")
