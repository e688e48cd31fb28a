from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ...core.enums import AttendanceStatus
from ..model import TimeEntry


@dataclass(frozen=True)
class StatusDecision:
    status: AttendanceStatus
    early_minutes: Optional[int] = None
    late_minutes: Optional[int] = None


class AttendanceStrategy(ABC):
    """Strategy Pattern: encapsulate how we decide an attendance status."""

    @abstractmethod
    def decide(self, *, expected_start: datetime, entry: Optional[TimeEntry], difference: Optional[int]) -> StatusDecision:
        """`difference` is expected start minus actual clock-in, in whole minutes."""

        raise NotImplementedError
