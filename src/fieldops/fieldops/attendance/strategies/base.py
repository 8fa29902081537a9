from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ...schedules.model import ScheduleEntry
from ..model import AttendancePolicy


@dataclass(frozen=True)
class PunctualityDecision:
    is_late: bool = False
    late_minutes: Optional[int] = None
    note: Optional[str] = None


class ClockInStrategy(ABC):
    """Strategy Pattern: encapsulate how a clock-in is judged against its schedule."""

    @abstractmethod
    def decide(self, *, now: datetime, schedule: Optional[ScheduleEntry], policy: AttendancePolicy) -> PunctualityDecision:
        raise NotImplementedError
