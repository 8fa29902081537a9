from __future__ import annotations

from datetime import date, time
from typing import Optional, Sequence

from ..common.validators import optional_text, require_positive_id
from ..core.exceptions import NotFoundError, ValidationError
from .model import ScheduleEntry
from .repository import ScheduleRepository


class ScheduleService:
    """Planned work per (employee, location, UTC day); read by the attendance engine."""

    def __init__(self, schedules: ScheduleRepository):
        self._schedules = schedules

    def assign(
        self,
        *,
        user_id: int,
        location_id: int,
        work_date: date,
        start_time: time,
        end_time: time,
        note: Optional[str] = None,
    ) -> int:
        user_id = require_positive_id(user_id, "userId")
        location_id = require_positive_id(location_id, "locationId")
        if end_time <= start_time:
            raise ValidationError("End time must be after start time")

        return self._schedules.upsert(
            user_id=user_id,
            location_id=location_id,
            work_date=work_date,
            start_time=start_time,
            end_time=end_time,
            note=optional_text(note),
        )

    def delete(self, *, schedule_id: int) -> None:
        if not self._schedules.delete(schedule_id=int(schedule_id)):
            raise NotFoundError("Schedule not found")

    def list_range(self, *, start: date, end: date, user_id: Optional[int] = None) -> Sequence[ScheduleEntry]:
        if end < start:
            raise ValidationError("End date must not be before start date")
        return self._schedules.list_range(start=start, end=end, user_id=user_id)

    def find_for_clock_in(self, *, user_id: int, location_id: int, work_date: date) -> Optional[ScheduleEntry]:
        return self._schedules.get_for_clock_in(user_id=int(user_id), location_id=int(location_id), work_date=work_date)
