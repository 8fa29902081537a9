from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone
from decimal import Decimal
from typing import Optional

from ..core.constants import DEFAULT_REPORT_DAYS

_MICROSECONDS_PER_HOUR = Decimal(3_600_000_000)


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_iso_datetime(value: str) -> datetime:
    """Parse an ISO-8601 timestamp; aware values are converted to naive UTC."""
    dt = datetime.fromisoformat(value.strip())
    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc).replace(tzinfo=None)
    return dt


def parse_hhmm(value: str) -> time:
    return datetime.strptime(value.strip(), "%H:%M").time()


def now_utc() -> datetime:
    """Current time as naive UTC.

    Note: Every stored timestamp uses this convention. Wrapped so tests can patch it.
    """
    return datetime.now(timezone.utc).replace(tzinfo=None)


def today_utc() -> date:
    return now_utc().date()


def day_bounds(day: date) -> tuple[datetime, datetime]:
    """[midnight, next midnight) for a calendar day."""
    start = datetime.combine(day, time.min)
    return start, start + timedelta(days=1)


def default_range(
    start: Optional[date] = None,
    end: Optional[date] = None,
    *,
    today: Optional[date] = None,
) -> tuple[date, date]:
    """Fill in a missing range as DEFAULT_REPORT_DAYS trailing through today."""
    today = today or today_utc()
    end = end or today
    start = start or (today - timedelta(days=DEFAULT_REPORT_DAYS))
    return start, end


def hours_between(start: datetime, end: datetime) -> Decimal:
    """Exact elapsed hours; no rounding beyond Decimal context precision."""
    micros = (end - start) // timedelta(microseconds=1)
    return Decimal(micros) / _MICROSECONDS_PER_HOUR
