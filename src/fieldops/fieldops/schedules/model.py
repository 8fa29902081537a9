from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Optional


@dataclass(frozen=True)
class ScheduleEntry:
    schedule_id: int
    user_id: int
    location_id: int
    work_date: date
    start_time: time
    end_time: time
    note: Optional[str] = None

    @property
    def scheduled_start(self) -> datetime:
        return datetime.combine(self.work_date, self.start_time)

    @property
    def scheduled_end(self) -> datetime:
        return datetime.combine(self.work_date, self.end_time)
