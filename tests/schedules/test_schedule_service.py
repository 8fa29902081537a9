from __future__ import annotations

from datetime import date, time

import pytest

from src.fieldops.fieldops.core.exceptions import NotFoundError, ValidationError
from src.fieldops.fieldops.schedules.service import ScheduleService
from tests.fakes import InMemorySchedules


@pytest.fixture
def svc():
    return ScheduleService(InMemorySchedules())


def test_assign_is_upsert_per_user_location_day(svc):
    first = svc.assign(user_id=7, location_id=3, work_date=date(2026, 2, 2), start_time=time(8), end_time=time(16))
    second = svc.assign(
        user_id=7, location_id=3, work_date=date(2026, 2, 2), start_time=time(9), end_time=time(17), note=" swap "
    )

    assert first == second
    entry = svc.find_for_clock_in(user_id=7, location_id=3, work_date=date(2026, 2, 2))
    assert entry.start_time == time(9)
    assert entry.note == "swap"


def test_end_must_follow_start(svc):
    with pytest.raises(ValidationError):
        svc.assign(user_id=7, location_id=3, work_date=date(2026, 2, 2), start_time=time(16), end_time=time(8))


def test_list_range_inclusive_and_filtered(svc):
    svc.assign(user_id=7, location_id=3, work_date=date(2026, 2, 2), start_time=time(8), end_time=time(16))
    svc.assign(user_id=8, location_id=3, work_date=date(2026, 2, 3), start_time=time(8), end_time=time(16))
    svc.assign(user_id=7, location_id=3, work_date=date(2026, 2, 9), start_time=time(8), end_time=time(16))

    assert len(svc.list_range(start=date(2026, 2, 2), end=date(2026, 2, 3))) == 2
    assert [e.work_date for e in svc.list_range(start=date(2026, 2, 1), end=date(2026, 2, 28), user_id=7)] == [
        date(2026, 2, 2),
        date(2026, 2, 9),
    ]
    with pytest.raises(ValidationError):
        svc.list_range(start=date(2026, 2, 3), end=date(2026, 2, 2))


def test_delete(svc):
    schedule_id = svc.assign(user_id=7, location_id=3, work_date=date(2026, 2, 2), start_time=time(8), end_time=time(16))

    svc.delete(schedule_id=schedule_id)

    assert svc.find_for_clock_in(user_id=7, location_id=3, work_date=date(2026, 2, 2)) is None
    with pytest.raises(NotFoundError):
        svc.delete(schedule_id=schedule_id)
