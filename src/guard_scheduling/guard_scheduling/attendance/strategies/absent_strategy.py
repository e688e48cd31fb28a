from __future__ import annotations

from datetime import datetime
from typing import Optional

from ...core.enums import AttendanceStatus
from ..model import TimeEntry
from .base import AttendanceStrategy, StatusDecision


class AbsentStrategy(AttendanceStrategy):
    """Scheduled, but no clock-in that day."""

    def decide(self, *, expected_start: datetime, entry: Optional[TimeEntry], difference: Optional[int]) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.ABSENT)
