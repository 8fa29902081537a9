from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional, Sequence

from ..core.enums import EvaluationType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_optional_bool, db_cursor, fetchall, fetchone
from .model import ALL_ITEMS, SiteEvaluation
from .repository import EvaluationRepository

_COLUMNS = (
    ("user_id", "location_id", "clock_record_id", "evaluation_type")
    + ALL_ITEMS
    + ("safety_concerns_notes", "notes", "evaluation_date", "created_at")
)

_SELECT = f"""
    SELECT
        e.evaluation_id, e.updated_at, {", ".join("e." + c for c in _COLUMNS)},
        CONCAT(u.first_name, ' ', u.last_name) AS user_name,
        jl.name AS location_name,
        CONCAT_WS(', ', jl.address, jl.city, jl.state) AS location_address
    FROM site_evaluations e
    JOIN users u ON u.user_id = e.user_id
    JOIN job_locations jl ON jl.location_id = e.location_id
"""


def _db_value(evaluation: SiteEvaluation, column: str):
    value = getattr(evaluation, column)
    if isinstance(value, EvaluationType):
        return value.value
    if isinstance(value, bool):
        return 1 if value else 0
    return value


def _row_to_evaluation(r: Dict[str, Any]) -> SiteEvaluation:
    return SiteEvaluation(
        evaluation_id=int(r["evaluation_id"]),
        user_id=int(r["user_id"]),
        location_id=int(r["location_id"]),
        clock_record_id=r.get("clock_record_id"),
        evaluation_type=EvaluationType(r["evaluation_type"]),
        evaluation_date=r["evaluation_date"],
        safety_concerns_notes=r.get("safety_concerns_notes"),
        notes=r.get("notes"),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
        user_name=r.get("user_name"),
        location_name=r.get("location_name"),
        location_address=r.get("location_address") or None,
        **{item: as_optional_bool(r.get(item)) for item in ALL_ITEMS},
    )


class MySQLEvaluationRepository(EvaluationRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(self, evaluation: SiteEvaluation) -> int:
        placeholders = ",".join(["%s"] * len(_COLUMNS))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"INSERT INTO site_evaluations({', '.join(_COLUMNS)}) VALUES({placeholders})",
                tuple(_db_value(evaluation, c) for c in _COLUMNS),
            )
            return int(cur.lastrowid)

    def get_by_id(self, evaluation_id: int) -> Optional[SiteEvaluation]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE e.evaluation_id=%s", (int(evaluation_id),))
            r = fetchone(cur)
            return _row_to_evaluation(r) if r else None

    def list_for_user(self, *, user_id: int, start: datetime, end: datetime) -> Sequence[SiteEvaluation]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT
                + " WHERE e.user_id=%s AND e.evaluation_date >= %s AND e.evaluation_date < %s"
                + " ORDER BY e.evaluation_date DESC",
                (int(user_id), start, end),
            )
            return [_row_to_evaluation(r) for r in fetchall(cur)]
