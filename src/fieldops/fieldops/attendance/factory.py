from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from ..schedules.model import ScheduleEntry
from .model import AttendancePolicy
from .strategies.base import ClockInStrategy
from .strategies.early_strategy import EarlyStrategy
from .strategies.late_strategy import LateStrategy
from .strategies.on_time_strategy import OnTimeStrategy
from .strategies.unscheduled_strategy import UnscheduledStrategy


@dataclass
class ClockInStrategyFactory:
    """Factory Pattern: choose the punctuality strategy for a clock-in."""

    def for_clock_in(self, *, now: datetime, schedule: Optional[ScheduleEntry], policy: AttendancePolicy) -> ClockInStrategy:
        if not schedule:
            return UnscheduledStrategy()

        start = schedule.scheduled_start
        if now > start + timedelta(minutes=policy.grace_period_minutes):
            return LateStrategy()
        if now < start - timedelta(minutes=policy.early_clock_in_minutes):
            return EarlyStrategy()
        return OnTimeStrategy()
