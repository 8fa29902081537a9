from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Optional, Tuple

from ..core.constants import DEFAULT_EARLY_CLOCK_IN_MINUTES, DEFAULT_GRACE_PERIOD_MINUTES


@dataclass(frozen=True)
class AttendancePolicy:
    """Punctuality rules handed to the attendance engine at construction."""

    grace_period_minutes: int = DEFAULT_GRACE_PERIOD_MINUTES
    early_clock_in_minutes: int = DEFAULT_EARLY_CLOCK_IN_MINUTES

    def __post_init__(self) -> None:
        if self.grace_period_minutes < 0 or self.early_clock_in_minutes < 0:
            raise ValueError("Attendance policy windows must not be negative")


@dataclass(frozen=True)
class ClockRecord:
    """Domain entity: one attendance punch, open until clocked out.

    `user_name` and `location_name` are only filled on joined reads.
    """

    record_id: int
    user_id: int
    location_id: int
    clock_in_time: datetime
    schedule_id: Optional[int] = None
    clock_in_latitude: Optional[Decimal] = None
    clock_in_longitude: Optional[Decimal] = None
    clock_out_time: Optional[datetime] = None
    clock_out_latitude: Optional[Decimal] = None
    clock_out_longitude: Optional[Decimal] = None
    total_hours: Optional[Decimal] = None
    notes: Optional[str] = None
    is_late: bool = False
    late_minutes: Optional[int] = None
    created_at: Optional[datetime] = None
    user_name: Optional[str] = None
    location_name: Optional[str] = None

    json_properties = ("is_open", "status_text", "late_status", "clock_in_location")

    @property
    def is_open(self) -> bool:
        return self.clock_out_time is None

    @property
    def status_text(self) -> str:
        return "Active" if self.is_open else "Completed"

    @property
    def late_status(self) -> str:
        return f"Late ({self.late_minutes} min)" if self.is_late else "On Time"

    @property
    def clock_in_location(self) -> str:
        if self.clock_in_latitude is None or self.clock_in_longitude is None:
            return "N/A"
        return f"{self.clock_in_latitude:.6f}, {self.clock_in_longitude:.6f}"


@dataclass(frozen=True)
class NewClockIn:
    """Values written when a shift is opened."""

    user_id: int
    location_id: int
    clock_in_time: datetime
    schedule_id: Optional[int] = None
    latitude: Optional[Decimal] = None
    longitude: Optional[Decimal] = None
    is_late: bool = False
    late_minutes: Optional[int] = None
    notes: Optional[str] = None


@dataclass(frozen=True)
class WorkHistory:
    user_id: int
    start: date
    end: date
    records: Tuple[ClockRecord, ...] = field(default_factory=tuple)
    total_hours: Decimal = Decimal(0)
    total_days: int = 0
    avg_hours_per_day: Decimal = Decimal(0)


@dataclass(frozen=True)
class DaySummary:
    day: date
    records: Tuple[ClockRecord, ...] = field(default_factory=tuple)
    total_hours: Decimal = Decimal(0)
    total_workers: int = 0
