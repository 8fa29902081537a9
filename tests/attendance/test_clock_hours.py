from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

import pytest

from src.fieldops.fieldops.core.exceptions import ValidationError
from tests.fakes import employee, in_memory_container, location


@pytest.fixture
def container():
    c = in_memory_container(users=[employee(7), employee(8)], locations=[location(3)])
    repo = c.attendance_repo
    # Feb 2: two closed shifts for user 7, one for user 8
    repo.seed(
        user_id=7,
        location_id=3,
        clock_in_time=datetime(2026, 2, 2, 8, 0),
        clock_out_time=datetime(2026, 2, 2, 12, 0),
        total_hours=Decimal(4),
    )
    repo.seed(
        user_id=7,
        location_id=3,
        clock_in_time=datetime(2026, 2, 2, 13, 0),
        clock_out_time=datetime(2026, 2, 2, 15, 0),
        total_hours=Decimal(2),
    )
    repo.seed(
        user_id=8,
        location_id=3,
        clock_in_time=datetime(2026, 2, 2, 9, 0),
        clock_out_time=datetime(2026, 2, 2, 10, 30),
        total_hours=Decimal("1.5"),
    )
    # Feb 3: user 7 is still on the clock
    repo.seed(user_id=7, location_id=3, clock_in_time=datetime(2026, 2, 3, 7, 0))
    return c


def test_open_record_counts_as_zero_hours(container):
    total = container.attendance_service.total_hours_worked(7, date(2026, 2, 2), date(2026, 2, 3))

    assert total == Decimal(6)


def test_range_is_inclusive_of_both_days(container):
    records = container.attendance_service.get_records_by_employee(7, date(2026, 2, 3), date(2026, 2, 3))

    assert len(records) == 1
    assert records[0].is_open


def test_records_by_employee_newest_first(container):
    records = container.attendance_service.get_records_by_employee(7, date(2026, 2, 1), date(2026, 2, 28))

    assert [r.clock_in_time.day for r in records] == [3, 2, 2]
    assert records[1].clock_in_time.hour == 13


def test_inverted_range_is_rejected(container):
    with pytest.raises(ValidationError):
        container.attendance_service.get_records_by_employee(7, date(2026, 2, 3), date(2026, 2, 2))


def test_work_history_averages_over_distinct_days(container):
    history = container.attendance_service.work_history(7, date(2026, 2, 1), date(2026, 2, 28))

    assert history.total_hours == Decimal(6)
    assert history.total_days == 2
    assert history.avg_hours_per_day == Decimal(3)


def test_work_history_without_records(container):
    history = container.attendance_service.work_history(8, date(2026, 3, 1), date(2026, 3, 31))

    assert history.records == ()
    assert history.total_days == 0
    assert history.avg_hours_per_day == Decimal(0)


def test_day_summary_counts_distinct_workers(container):
    summary = container.attendance_service.day_summary(date(2026, 2, 2))

    assert len(summary.records) == 3
    assert summary.total_hours == Decimal("7.5")
    assert summary.total_workers == 2


def test_todays_records_use_given_day(container):
    records = container.attendance_service.get_todays_records(today=date(2026, 2, 3))

    assert [r.user_id for r in records] == [7]


def test_active_shifts_lists_only_open_records(container):
    active = container.attendance_service.get_active_shifts()

    assert [(r.user_id, r.status_text) for r in active] == [(7, "Active")]
