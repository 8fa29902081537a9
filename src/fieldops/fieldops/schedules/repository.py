from __future__ import annotations

from datetime import date, time
from typing import Optional, Protocol, Sequence

from .model import ScheduleEntry


class ScheduleRepository(Protocol):
    def get_for_clock_in(self, *, user_id: int, location_id: int, work_date: date) -> Optional[ScheduleEntry]:
        raise NotImplementedError

    def upsert(
        self,
        *,
        user_id: int,
        location_id: int,
        work_date: date,
        start_time: time,
        end_time: time,
        note: Optional[str] = None,
    ) -> int:
        """Create or update the assignment for (user, location, date).

        Returns schedule_id.
        """

        raise NotImplementedError

    def delete(self, *, schedule_id: int) -> bool:
        raise NotImplementedError

    def list_range(self, *, start: date, end: date, user_id: Optional[int] = None) -> Sequence[ScheduleEntry]:
        raise NotImplementedError
