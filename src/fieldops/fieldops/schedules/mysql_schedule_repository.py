from __future__ import annotations

from datetime import date, time
from typing import Any, Dict, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_time
from .model import ScheduleEntry
from .repository import ScheduleRepository

_COLUMNS = "schedule_id, user_id, location_id, work_date, start_time, end_time, note"


def _row_to_entry(r: Dict[str, Any]) -> ScheduleEntry:
    return ScheduleEntry(
        schedule_id=int(r["schedule_id"]),
        user_id=int(r["user_id"]),
        location_id=int(r["location_id"]),
        work_date=r["work_date"],
        start_time=normalize_mysql_time(r["start_time"]),
        end_time=normalize_mysql_time(r["end_time"]),
        note=r.get("note"),
    )


class MySQLScheduleRepository(ScheduleRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_clock_in(self, *, user_id: int, location_id: int, work_date: date) -> Optional[ScheduleEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM schedules
                WHERE user_id=%s AND location_id=%s AND work_date=%s
                """,
                (int(user_id), int(location_id), work_date),
            )
            r = fetchone(cur)
            return _row_to_entry(r) if r else None

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO schedules(user_id, location_id, work_date, start_time, end_time, note)
                VALUES(%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE start_time=VALUES(start_time), end_time=VALUES(end_time), note=VALUES(note)
                """,
                (int(user_id), int(location_id), work_date, start_time, end_time, note),
            )

            # If it was an update, lastrowid can be 0; fetch schedule_id.
            if cur.lastrowid:
                return int(cur.lastrowid)

            cur.execute(
                "SELECT schedule_id FROM schedules WHERE user_id=%s AND location_id=%s AND work_date=%s",
                (int(user_id), int(location_id), work_date),
            )
            r = fetchone(cur)
            return int(r["schedule_id"]) if r else 0

    def delete(self, *, schedule_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM schedules WHERE schedule_id=%s", (int(schedule_id),))
            return cur.rowcount > 0

    def list_range(self, *, start: date, end: date, user_id: Optional[int] = None) -> Sequence[ScheduleEntry]:
        clauses = ["work_date BETWEEN %s AND %s"]
        params: list[object] = [start, end]
        if user_id is not None:
            clauses.append("user_id=%s")
            params.append(int(user_id))

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM schedules
                WHERE {where}
                ORDER BY work_date ASC, start_time ASC, user_id ASC
                """,
                tuple(params),
            )
            return [_row_to_entry(r) for r in fetchall(cur)]
