from __future__ import annotations

import dataclasses
from datetime import date, datetime, time
from typing import Optional, Sequence

from src.fieldops.fieldops.attendance.model import AttendancePolicy, ClockRecord, NewClockIn
from src.fieldops.fieldops.container import Container, assemble
from src.fieldops.fieldops.core.enums import EmployeeStatus
from src.fieldops.fieldops.core.exceptions import AlreadyClockedInError
from src.fieldops.fieldops.evaluations.model import SiteEvaluation
from src.fieldops.fieldops.locations.model import JobLocation, LocationContact
from src.fieldops.fieldops.reports.model import ChemicalReading, ReportPhoto, ServiceTechReport
from src.fieldops.fieldops.schedules.model import ScheduleEntry
from src.fieldops.fieldops.users.model import Employee, EmployeeProfile


def employee(user_id: int = 7, *, status: EmployeeStatus = EmployeeStatus.APPROVED, **kw) -> Employee:
    values = dict(first_name="Ana", last_name="Lopez", email=f"user{user_id}@example.com", position="Lifeguard")
    values.update(kw)
    return Employee(user_id=user_id, status=status, **values)


def location(location_id: int = 3, **kw) -> JobLocation:
    values = dict(name="Oak Park Pool", address="12 Oak St", city="Austin", state="TX", zip_code="73301")
    values.update(kw)
    return JobLocation(location_id=location_id, **values)


def schedule(
    schedule_id: int = 1,
    *,
    user_id: int = 7,
    location_id: int = 3,
    work_date: date = date(2026, 2, 2),
    start: time = time(8, 0),
    end: time = time(16, 0),
) -> ScheduleEntry:
    return ScheduleEntry(
        schedule_id=schedule_id,
        user_id=user_id,
        location_id=location_id,
        work_date=work_date,
        start_time=start,
        end_time=end,
    )


class InMemoryUsers:
    def __init__(self, *users: Employee):
        self.by_id: dict[int, Employee] = {u.user_id: u for u in users}
        self._id = max(self.by_id, default=0)

    def get_by_id(self, user_id: int) -> Optional[Employee]:
        return self.by_id.get(user_id)

    def get_by_email(self, email: str) -> Optional[Employee]:
        return next((u for u in self.by_id.values() if u.email.lower() == email.lower()), None)

    def list_all(self) -> Sequence[Employee]:
        return sorted(self.by_id.values(), key=lambda u: u.user_id, reverse=True)

    def list_by_status(self, status: EmployeeStatus) -> Sequence[Employee]:
        return [u for u in self.list_all() if u.status is status]

    def create(self, *, email: str, password_hash: str, profile: EmployeeProfile, created_at: datetime) -> int:
        self._id += 1
        self.by_id[self._id] = Employee(
            user_id=self._id,
            email=email,
            password_hash=password_hash,
            created_at=created_at,
            **dataclasses.asdict(profile),
        )
        return self._id

    def update_profile(self, user_id: int, profile: EmployeeProfile) -> bool:
        if user_id not in self.by_id:
            return False
        self.by_id[user_id] = dataclasses.replace(self.by_id[user_id], **dataclasses.asdict(profile))
        return True

    def set_status(self, user_id: int, status: EmployeeStatus) -> bool:
        return self._replace(user_id, status=status)

    def set_position(self, user_id: int, position: str) -> bool:
        return self._replace(user_id, position=position)

    def delete_by_id(self, user_id: int) -> bool:
        return self.by_id.pop(user_id, None) is not None

    def _replace(self, user_id: int, **changes) -> bool:
        if user_id not in self.by_id:
            return False
        self.by_id[user_id] = dataclasses.replace(self.by_id[user_id], **changes)
        return True


class InMemoryInvites:
    def __init__(self):
        self.created: list[dict] = []

    def create(self, *, email: str, position: str, invite_code: str, created_at: datetime, expires_at: datetime) -> int:
        self.created.append(
            dict(email=email, position=position, invite_code=invite_code, created_at=created_at, expires_at=expires_at)
        )
        return len(self.created)


class InMemoryLocations:
    def __init__(self, *locations: JobLocation):
        self.by_id: dict[int, JobLocation] = {loc.location_id: loc for loc in locations}
        self._id = max(self.by_id, default=0)

    def get_by_id(self, location_id: int) -> Optional[JobLocation]:
        return self.by_id.get(location_id)

    def list_all(self, *, active_only: bool = False) -> Sequence[JobLocation]:
        items = sorted(self.by_id.values(), key=lambda loc: loc.name)
        return [loc for loc in items if loc.is_active or not active_only]

    def create(self, location: JobLocation, contacts: Sequence[LocationContact]) -> int:
        self._id += 1
        self.by_id[self._id] = self._with_contacts(dataclasses.replace(location, location_id=self._id), contacts)
        return self._id

    def update(self, location: JobLocation, contacts: Sequence[LocationContact]) -> bool:
        if location.location_id not in self.by_id:
            return False
        self.by_id[location.location_id] = self._with_contacts(location, contacts)
        return True

    def delete(self, location_id: int) -> bool:
        return self.by_id.pop(location_id, None) is not None

    @staticmethod
    def _with_contacts(location: JobLocation, contacts: Sequence[LocationContact]) -> JobLocation:
        bound = tuple(dataclasses.replace(c, location_id=location.location_id) for c in contacts)
        return dataclasses.replace(location, contacts=bound)


class InMemorySchedules:
    def __init__(self, *entries: ScheduleEntry):
        self.by_id: dict[int, ScheduleEntry] = {e.schedule_id: e for e in entries}
        self._id = max(self.by_id, default=0)

    def get_for_clock_in(self, *, user_id: int, location_id: int, work_date: date) -> Optional[ScheduleEntry]:
        return next(
            (
                e
                for e in self.by_id.values()
                if (e.user_id, e.location_id, e.work_date) == (user_id, location_id, work_date)
            ),
            None,
        )

    def upsert(self, *, user_id, location_id, work_date, start_time, end_time, note=None) -> int:
        existing = self.get_for_clock_in(user_id=user_id, location_id=location_id, work_date=work_date)
        if existing:
            schedule_id = existing.schedule_id
        else:
            self._id += 1
            schedule_id = self._id
        self.by_id[schedule_id] = ScheduleEntry(
            schedule_id=schedule_id,
            user_id=user_id,
            location_id=location_id,
            work_date=work_date,
            start_time=start_time,
            end_time=end_time,
            note=note,
        )
        return schedule_id

    def delete(self, *, schedule_id: int) -> bool:
        return self.by_id.pop(schedule_id, None) is not None

    def list_range(self, *, start: date, end: date, user_id: Optional[int] = None) -> Sequence[ScheduleEntry]:
        items = [
            e for e in self.by_id.values() if start <= e.work_date <= end and (user_id is None or e.user_id == user_id)
        ]
        return sorted(items, key=lambda e: (e.work_date, e.start_time))


class InMemoryAttendance:
    """Keeps the one-open-record-per-user rule the way the database unique key does."""

    def __init__(self):
        self.by_id: dict[int, ClockRecord] = {}
        self._id = 0

    def get_by_id(self, record_id: int) -> Optional[ClockRecord]:
        return self.by_id.get(record_id)

    def get_open_for_user(self, user_id: int) -> Optional[ClockRecord]:
        return next((r for r in self.by_id.values() if r.user_id == user_id and r.is_open), None)

    def create_clock_in(self, record: NewClockIn, *, created_at: datetime) -> int:
        if self.get_open_for_user(record.user_id):
            raise AlreadyClockedInError("Employee is already clocked in")
        self._id += 1
        self.by_id[self._id] = ClockRecord(
            record_id=self._id,
            user_id=record.user_id,
            location_id=record.location_id,
            clock_in_time=record.clock_in_time,
            schedule_id=record.schedule_id,
            clock_in_latitude=record.latitude,
            clock_in_longitude=record.longitude,
            is_late=record.is_late,
            late_minutes=record.late_minutes,
            notes=record.notes,
            created_at=created_at,
        )
        return self._id

    def close(self, *, record_id, clock_out_time, total_hours, latitude=None, longitude=None) -> bool:
        record = self.by_id.get(record_id)
        if record is None or not record.is_open:
            return False
        self.by_id[record_id] = dataclasses.replace(
            record,
            clock_out_time=clock_out_time,
            total_hours=total_hours,
            clock_out_latitude=latitude,
            clock_out_longitude=longitude,
        )
        return True

    def update_times(self, *, record_id, clock_in_time, clock_out_time, location_id, total_hours) -> bool:
        record = self.by_id.get(record_id)
        if record is None:
            return False
        if clock_out_time is None:
            other = self.get_open_for_user(record.user_id)
            if other and other.record_id != record_id:
                raise AlreadyClockedInError("Employee is already clocked in")
        self.by_id[record_id] = dataclasses.replace(
            record,
            clock_in_time=clock_in_time,
            clock_out_time=clock_out_time,
            location_id=location_id,
            total_hours=total_hours,
        )
        return True

    def list_open(self) -> Sequence[ClockRecord]:
        return sorted((r for r in self.by_id.values() if r.is_open), key=lambda r: r.clock_in_time)

    def list_between(self, *, start: datetime, end: datetime, user_id: Optional[int] = None) -> Sequence[ClockRecord]:
        items = [
            r
            for r in self.by_id.values()
            if start <= r.clock_in_time < end and (user_id is None or r.user_id == user_id)
        ]
        return sorted(items, key=lambda r: r.clock_in_time, reverse=True)

    def seed(self, **kw) -> ClockRecord:
        """Insert a record directly, bypassing the open-record rule."""
        self._id += 1
        record = ClockRecord(record_id=self._id, **kw)
        self.by_id[self._id] = record
        return record


class InMemoryReports:
    def __init__(self):
        self.reports: dict[int, ServiceTechReport] = {}
        self.readings: list[ChemicalReading] = []
        self.photos: list[ReportPhoto] = []
        self.fail_reading_at: set[int] = set()
        self._calls = 0

    def create_report(self, report: ServiceTechReport) -> int:
        report_id = len(self.reports) + 1
        self.reports[report_id] = dataclasses.replace(report, report_id=report_id)
        return report_id

    def add_reading(self, reading: ChemicalReading) -> int:
        index = self._calls
        self._calls += 1
        if index in self.fail_reading_at:
            raise RuntimeError("Data too long for column 'body_of_water'")
        self.readings.append(dataclasses.replace(reading, reading_id=len(self.readings) + 1))
        return len(self.readings)

    def add_photo(self, photo: ReportPhoto) -> int:
        self.photos.append(dataclasses.replace(photo, photo_id=len(self.photos) + 1))
        return len(self.photos)

    def exists(self, report_id: int) -> bool:
        return report_id in self.reports

    def get_report(self, report_id: int) -> Optional[ServiceTechReport]:
        report = self.reports.get(report_id)
        if report is None:
            return None
        return dataclasses.replace(
            report,
            chemical_readings=tuple(r for r in self.readings if r.report_id == report_id),
            photos=tuple(p for p in self.photos if p.report_id == report_id),
        )

    def list_for_user(self, *, user_id: int, start: datetime, end: datetime) -> Sequence[ServiceTechReport]:
        items = [r for r in self.reports.values() if r.user_id == user_id and start <= r.service_date < end]
        return sorted(items, key=lambda r: r.service_date, reverse=True)


class InMemoryEvaluations:
    def __init__(self):
        self.by_id: dict[int, SiteEvaluation] = {}

    def create(self, evaluation: SiteEvaluation) -> int:
        evaluation_id = len(self.by_id) + 1
        self.by_id[evaluation_id] = dataclasses.replace(evaluation, evaluation_id=evaluation_id)
        return evaluation_id

    def get_by_id(self, evaluation_id: int) -> Optional[SiteEvaluation]:
        return self.by_id.get(evaluation_id)

    def list_for_user(self, *, user_id: int, start: datetime, end: datetime) -> Sequence[SiteEvaluation]:
        items = [e for e in self.by_id.values() if e.user_id == user_id and start <= e.evaluation_date < end]
        return sorted(items, key=lambda e: e.evaluation_date, reverse=True)


def in_memory_container(
    *,
    users: Sequence[Employee] = (),
    locations: Sequence[JobLocation] = (),
    schedules: Sequence[ScheduleEntry] = (),
    policy: AttendancePolicy | None = None,
) -> Container:
    return assemble(
        users_repo=InMemoryUsers(*users),
        invites_repo=InMemoryInvites(),
        locations_repo=InMemoryLocations(*locations),
        schedules_repo=InMemorySchedules(*schedules),
        attendance_repo=InMemoryAttendance(),
        reports_repo=InMemoryReports(),
        evaluations_repo=InMemoryEvaluations(),
        policy=policy,
    )

