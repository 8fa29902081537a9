from __future__ import annotations

from datetime import datetime
from typing import Optional

from ...schedules.model import ScheduleEntry
from ..model import AttendancePolicy
from .base import ClockInStrategy, PunctualityDecision


class OnTimeStrategy(ClockInStrategy):
    """Within [start - early window, start + grace]."""

    def decide(self, *, now: datetime, schedule: Optional[ScheduleEntry], policy: AttendancePolicy) -> PunctualityDecision:
        return PunctualityDecision(is_late=False)
