from __future__ import annotations

from datetime import datetime
from typing import Optional

from ...core.enums import AttendanceStatus
from ..model import TimeEntry
from .base import AttendanceStrategy, StatusDecision


class OnTimeStrategy(AttendanceStrategy):
    """Clock-in between the expected start and the early threshold."""

    def decide(self, *, expected_start: datetime, entry: Optional[TimeEntry], difference: Optional[int]) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.ON_TIME)
