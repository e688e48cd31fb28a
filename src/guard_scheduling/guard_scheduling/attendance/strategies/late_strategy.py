from __future__ import annotations

from datetime import datetime
from typing import Optional

from ...core.enums import AttendanceStatus
from ..model import TimeEntry
from .base import AttendanceStrategy, StatusDecision


class LateStrategy(AttendanceStrategy):
    """Late clock-in."""

    def decide(self, *, expected_start: datetime, entry: Optional[TimeEntry], difference: Optional[int]) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.LATE, late_minutes=abs(difference or 0))
