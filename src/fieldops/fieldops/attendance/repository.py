from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional, Protocol, Sequence

from .model import ClockRecord, NewClockIn


class AttendanceRepository(Protocol):
    def get_by_id(self, record_id: int) -> Optional[ClockRecord]:
        raise NotImplementedError

    def get_open_for_user(self, user_id: int) -> Optional[ClockRecord]:
        raise NotImplementedError

    def create_clock_in(self, record: NewClockIn, *, created_at: datetime) -> int:
        """Insert an open record.

        Raises AlreadyClockedInError when the user already has an open record.
        """

        raise NotImplementedError

    def close(
        self,
        *,
        record_id: int,
        clock_out_time: datetime,
        total_hours: Decimal,
        latitude: Optional[Decimal] = None,
        longitude: Optional[Decimal] = None,
    ) -> bool:
        """Close an open record; False when it was already closed."""

        raise NotImplementedError

    def update_times(
        self,
        *,
        record_id: int,
        clock_in_time: datetime,
        clock_out_time: Optional[datetime],
        location_id: int,
        total_hours: Optional[Decimal],
    ) -> bool:
        """Supervisor correction; lateness columns are left alone.

        Raises AlreadyClockedInError when reopening while the user has another open record.
        """

        raise NotImplementedError

    def list_open(self) -> Sequence[ClockRecord]:
        """Open records, oldest clock-in first."""

        raise NotImplementedError

    def list_between(
        self,
        *,
        start: datetime,
        end: datetime,
        user_id: Optional[int] = None,
    ) -> Sequence[ClockRecord]:
        """Records with start <= clock_in_time < end, newest first."""

        raise NotImplementedError
