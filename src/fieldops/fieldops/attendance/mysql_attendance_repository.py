from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, Optional, Sequence

import mysql.connector

from ..core.exceptions import AlreadyClockedInError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_bool, as_optional_decimal, db_cursor, fetchall, fetchone, is_duplicate_key
from .model import ClockRecord, NewClockIn
from .repository import AttendanceRepository

_SELECT = """
    SELECT
        cr.record_id, cr.user_id, cr.location_id, cr.schedule_id,
        cr.clock_in_time, cr.clock_in_latitude, cr.clock_in_longitude,
        cr.clock_out_time, cr.clock_out_latitude, cr.clock_out_longitude,
        cr.total_hours, cr.notes, cr.is_late, cr.late_minutes, cr.created_at,
        CONCAT(u.first_name, ' ', u.last_name) AS user_name,
        jl.name AS location_name
    FROM clock_records cr
    JOIN users u ON u.user_id = cr.user_id
    JOIN job_locations jl ON jl.location_id = cr.location_id
"""


def _row_to_record(r: Dict[str, Any]) -> ClockRecord:
    return ClockRecord(
        record_id=int(r["record_id"]),
        user_id=int(r["user_id"]),
        location_id=int(r["location_id"]),
        schedule_id=r.get("schedule_id"),
        clock_in_time=r["clock_in_time"],
        clock_in_latitude=as_optional_decimal(r.get("clock_in_latitude")),
        clock_in_longitude=as_optional_decimal(r.get("clock_in_longitude")),
        clock_out_time=r.get("clock_out_time"),
        clock_out_latitude=as_optional_decimal(r.get("clock_out_latitude")),
        clock_out_longitude=as_optional_decimal(r.get("clock_out_longitude")),
        total_hours=as_optional_decimal(r.get("total_hours")),
        notes=r.get("notes"),
        is_late=as_bool(r.get("is_late")),
        late_minutes=r.get("late_minutes"),
        created_at=r.get("created_at"),
        user_name=r.get("user_name"),
        location_name=r.get("location_name"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, record_id: int) -> Optional[ClockRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE cr.record_id=%s", (int(record_id),))
            r = fetchone(cur)
            return _row_to_record(r) if r else None

    def get_open_for_user(self, user_id: int) -> Optional[ClockRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE cr.user_id=%s AND cr.clock_out_time IS NULL", (int(user_id),))
            r = fetchone(cur)
            return _row_to_record(r) if r else None

    def create_clock_in(self, record: NewClockIn, *, created_at: datetime) -> int:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO clock_records(
                        user_id, location_id, schedule_id, clock_in_time,
                        clock_in_latitude, clock_in_longitude, notes, is_late, late_minutes, created_at
                    )
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        record.user_id,
                        record.location_id,
                        record.schedule_id,
                        record.clock_in_time,
                        record.latitude,
                        record.longitude,
                        record.notes,
                        1 if record.is_late else 0,
                        record.late_minutes,
                        created_at,
                    ),
                )
                return int(cur.lastrowid)
        except mysql.connector.IntegrityError as e:
            # uq_clock_one_open_per_user
            if is_duplicate_key(e):
                raise AlreadyClockedInError("Employee is already clocked in") from e
            raise

    def close(
        self,
        *,
        record_id: int,
        clock_out_time: datetime,
        total_hours: Decimal,
        latitude: Optional[Decimal] = None,
        longitude: Optional[Decimal] = None,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE clock_records
                SET clock_out_time=%s, clock_out_latitude=%s, clock_out_longitude=%s, total_hours=%s
                WHERE record_id=%s AND clock_out_time IS NULL
                """,
                (clock_out_time, latitude, longitude, total_hours, int(record_id)),
            )
            return cur.rowcount > 0

    def update_times(
        self,
        *,
        record_id: int,
        clock_in_time: datetime,
        clock_out_time: Optional[datetime],
        location_id: int,
        total_hours: Optional[Decimal],
    ) -> bool:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    UPDATE clock_records
                    SET clock_in_time=%s, clock_out_time=%s, location_id=%s, total_hours=%s
                    WHERE record_id=%s
                    """,
                    (clock_in_time, clock_out_time, int(location_id), total_hours, int(record_id)),
                )
                return cur.rowcount > 0
        except mysql.connector.IntegrityError as e:
            # reopening while another record is open
            if is_duplicate_key(e):
                raise AlreadyClockedInError("Employee already has another open shift") from e
            raise

    def list_open(self) -> Sequence[ClockRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE cr.clock_out_time IS NULL ORDER BY cr.clock_in_time ASC")
            return [_row_to_record(r) for r in fetchall(cur)]

    def list_between(
        self,
        *,
        start: datetime,
        end: datetime,
        user_id: Optional[int] = None,
    ) -> Sequence[ClockRecord]:
        clauses = ["cr.clock_in_time >= %s", "cr.clock_in_time < %s"]
        params: list[object] = [start, end]
        if user_id is not None:
            clauses.append("cr.user_id=%s")
            params.append(int(user_id))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT + " WHERE " + " AND ".join(clauses) + " ORDER BY cr.clock_in_time DESC",
                tuple(params),
            )
            return [_row_to_record(r) for r in fetchall(cur)]
