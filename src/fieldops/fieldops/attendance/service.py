from __future__ import annotations

import logging
from datetime import date, datetime
from decimal import Decimal
from typing import Optional, Sequence

from ..common.datetime_utils import day_bounds, hours_between, now_utc, today_utc
from ..core.exceptions import (
    AlreadyClockedInError,
    AlreadyClockedOutError,
    InvalidTimeRangeError,
    RecordNotFoundError,
    ValidationError,
)
from ..locations.geofence import Coordinate, distance_from, inside_geofence
from ..locations.repository import LocationRepository
from ..schedules.service import ScheduleService
from ..users.repository import UserRepository
from .factory import ClockInStrategyFactory
from .model import AttendancePolicy, ClockRecord, DaySummary, NewClockIn, WorkHistory
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


def _as_decimal(value: Optional[float]) -> Optional[Decimal]:
    return Decimal(str(value)) if value is not None else None


def _sum_closed_hours(records: Sequence[ClockRecord]) -> Decimal:
    return sum((r.total_hours for r in records if r.total_hours is not None), Decimal(0))


class AttendanceService:
    """Clock in/out engine: punctuality against schedules and worked-hours aggregation."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        users: UserRepository,
        locations: LocationRepository,
        schedules: ScheduleService,
        *,
        policy: AttendancePolicy | None = None,
        strategy_factory: ClockInStrategyFactory | None = None,
    ):
        self._attendance = attendance
        self._users = users
        self._locations = locations
        self._schedules = schedules
        self._policy = policy or AttendancePolicy()
        self._factory = strategy_factory or ClockInStrategyFactory()

    @property
    def policy(self) -> AttendancePolicy:
        return self._policy

    def clock_in(
        self,
        user_id: int,
        location_id: int,
        *,
        now: datetime | None = None,
        coordinate: Coordinate | None = None,
    ) -> ClockRecord:
        now = now or now_utc()

        user = self._users.get_by_id(int(user_id))
        if not user:
            raise ValidationError("Employee does not exist")
        if not user.is_active:
            raise ValidationError("Employee is not active")

        location = self._locations.get_by_id(int(location_id))
        if not location:
            raise ValidationError("Location does not exist")

        if self._attendance.get_open_for_user(user.user_id):
            raise AlreadyClockedInError("Employee is already clocked in")

        if coordinate is not None and not inside_geofence(location, coordinate):
            logger.warning(
                "Clock-in for user %s is %.0f m from %s (radius %d m)",
                user.user_id,
                distance_from(location, coordinate),
                location.name,
                location.radius,
            )

        schedule = self._schedules.find_for_clock_in(
            user_id=user.user_id, location_id=location.location_id, work_date=now.date()
        )
        strategy = self._factory.for_clock_in(now=now, schedule=schedule, policy=self._policy)
        decision = strategy.decide(now=now, schedule=schedule, policy=self._policy)

        record_id = self._attendance.create_clock_in(
            NewClockIn(
                user_id=user.user_id,
                location_id=location.location_id,
                clock_in_time=now,
                schedule_id=schedule.schedule_id if schedule else None,
                latitude=_as_decimal(coordinate.latitude) if coordinate else None,
                longitude=_as_decimal(coordinate.longitude) if coordinate else None,
                is_late=decision.is_late,
                late_minutes=decision.late_minutes,
                notes=decision.note,
            ),
            created_at=now,
        )
        if decision.is_late:
            logger.info("User %s clocked in late (%s min) at %s", user.user_id, decision.late_minutes, location.name)
        return self._require(record_id)

    def clock_out(
        self,
        record_id: int,
        *,
        now: datetime | None = None,
        coordinate: Coordinate | None = None,
    ) -> ClockRecord:
        now = now or now_utc()

        record = self._require(record_id)
        if not record.is_open:
            raise AlreadyClockedOutError("Record is already clocked out")
        if now <= record.clock_in_time:
            raise InvalidTimeRangeError("Clock-out must be after clock-in")

        closed = self._attendance.close(
            record_id=record.record_id,
            clock_out_time=now,
            total_hours=hours_between(record.clock_in_time, now),
            latitude=_as_decimal(coordinate.latitude) if coordinate else None,
            longitude=_as_decimal(coordinate.longitude) if coordinate else None,
        )
        if not closed:
            # closed by a concurrent request in between
            raise AlreadyClockedOutError("Record is already clocked out")
        return self._require(record.record_id)

    def edit_record(
        self,
        record_id: int,
        *,
        clock_in_time: datetime,
        clock_out_time: datetime | None = None,
        location_id: int,
    ) -> ClockRecord:
        """Supervisor correction. Total hours follow the new times; lateness is kept as punched."""

        record = self._require(record_id)
        if clock_out_time is not None and clock_out_time <= clock_in_time:
            raise InvalidTimeRangeError("Clock-out must be after clock-in")
        if not self._locations.get_by_id(int(location_id)):
            raise ValidationError("Location does not exist")
        if clock_out_time is None:
            other = self._attendance.get_open_for_user(record.user_id)
            if other and other.record_id != record.record_id:
                raise AlreadyClockedInError("Employee already has another open shift")

        total_hours = hours_between(clock_in_time, clock_out_time) if clock_out_time is not None else None
        self._attendance.update_times(
            record_id=record.record_id,
            clock_in_time=clock_in_time,
            clock_out_time=clock_out_time,
            location_id=int(location_id),
            total_hours=total_hours,
        )
        logger.info("Clock record %s edited", record.record_id)
        return self._require(record.record_id)

    def get_record(self, record_id: int) -> ClockRecord:
        return self._require(record_id)

    def get_active_shifts(self) -> Sequence[ClockRecord]:
        return self._attendance.list_open()

    def get_records_for_day(self, day: date) -> Sequence[ClockRecord]:
        start, end = day_bounds(day)
        return self._attendance.list_between(start=start, end=end)

    def get_todays_records(self, *, today: date | None = None) -> Sequence[ClockRecord]:
        return self.get_records_for_day(today or today_utc())

    def get_records_by_employee(self, user_id: int, start: date, end: date) -> Sequence[ClockRecord]:
        """Records whose clock-in date falls in [start, end], both inclusive."""

        if end < start:
            raise ValidationError("End date must not be before start date")
        range_start, _ = day_bounds(start)
        _, range_end = day_bounds(end)
        return self._attendance.list_between(start=range_start, end=range_end, user_id=int(user_id))

    def total_hours_worked(self, user_id: int, start: date, end: date) -> Decimal:
        return _sum_closed_hours(self.get_records_by_employee(user_id, start, end))

    def work_history(self, user_id: int, start: date, end: date) -> WorkHistory:
        records = tuple(self.get_records_by_employee(user_id, start, end))
        total = _sum_closed_hours(records)
        total_days = len({r.clock_in_time.date() for r in records})
        avg = total / total_days if total_days else Decimal(0)
        return WorkHistory(
            user_id=int(user_id),
            start=start,
            end=end,
            records=records,
            total_hours=total,
            total_days=total_days,
            avg_hours_per_day=avg,
        )

    def day_summary(self, day: date) -> DaySummary:
        records = tuple(self.get_records_for_day(day))
        return DaySummary(
            day=day,
            records=records,
            total_hours=_sum_closed_hours(records),
            total_workers=len({r.user_id for r in records}),
        )

    def _require(self, record_id: int) -> ClockRecord:
        record = self._attendance.get_by_id(int(record_id))
        if not record:
            raise RecordNotFoundError("Clock record not found")
        return record
