from __future__ import annotations

from datetime import datetime, timedelta
from typing import Optional

from ...schedules.model import ScheduleEntry
from ..model import AttendancePolicy
from .base import ClockInStrategy, PunctualityDecision


class EarlyStrategy(ClockInStrategy):
    """Clock-in before the early window opens. Never late; the gap is noted for supervisors."""

    def decide(self, *, now: datetime, schedule: Optional[ScheduleEntry], policy: AttendancePolicy) -> PunctualityDecision:
        minutes_early = (schedule.scheduled_start - now) // timedelta(minutes=1)
        return PunctualityDecision(
            is_late=False,
            note=f"Clocked in {minutes_early} min before scheduled start",
        )
