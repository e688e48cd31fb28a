from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import minutes_between
from ..core.constants import DEFAULT_EARLY_THRESHOLD_MINUTES
from .model import TimeEntry
from .strategies.absent_strategy import AbsentStrategy
from .strategies.base import AttendanceStrategy
from .strategies.early_strategy import EarlyStrategy
from .strategies.late_strategy import LateStrategy
from .strategies.on_time_strategy import OnTimeStrategy


@dataclass
class AttendanceStrategyFactory:
    """Factory Pattern: choose appropriate strategy based on rules."""

    early_threshold_minutes: int = DEFAULT_EARLY_THRESHOLD_MINUTES

    @staticmethod
    def difference(*, expected_start: datetime, entry: Optional[TimeEntry]) -> Optional[int]:
        if entry is None:
            return None
        return minutes_between(expected_start, entry.start_time)

    def for_clock_in(self, *, expected_start: datetime, entry: Optional[TimeEntry]) -> AttendanceStrategy:
        diff = self.difference(expected_start=expected_start, entry=entry)
        if diff is None:
            return AbsentStrategy()
        if diff >= self.early_threshold_minutes:
            return EarlyStrategy()
        if diff < 0:
            return LateStrategy()
        return OnTimeStrategy()
