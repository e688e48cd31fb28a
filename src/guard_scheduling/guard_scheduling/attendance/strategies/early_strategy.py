from __future__ import annotations

from datetime import datetime
from typing import Optional

from ...core.enums import AttendanceStatus
from ..model import TimeEntry
from .base import AttendanceStrategy, StatusDecision


class EarlyStrategy(AttendanceStrategy):
    """Clock-in at least the early threshold before the expected start."""

    def decide(self, *, expected_start: datetime, entry: Optional[TimeEntry], difference: Optional[int]) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.EARLY, early_minutes=difference)
