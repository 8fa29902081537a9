from __future__ import annotations

from datetime import datetime, timedelta
from typing import Optional

from ...schedules.model import ScheduleEntry
from ..model import AttendancePolicy
from .base import ClockInStrategy, PunctualityDecision


class LateStrategy(ClockInStrategy):
    """Past start + grace. Late minutes count from the scheduled start, rounded down."""

    def decide(self, *, now: datetime, schedule: Optional[ScheduleEntry], policy: AttendancePolicy) -> PunctualityDecision:
        late_minutes = (now - schedule.scheduled_start) // timedelta(minutes=1)
        return PunctualityDecision(is_late=True, late_minutes=int(late_minutes))
