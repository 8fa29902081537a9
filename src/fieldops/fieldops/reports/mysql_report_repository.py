from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, Optional, Sequence

from ..core.enums import PhotoType, TriState
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_bool, as_optional_decimal, db_cursor, fetchall, fetchone
from .model import (
    EQUIPMENT_READINGS,
    SUPPLY_ORDERS,
    TRACKED_TASKS,
    UNTRACKED_TASKS,
    ChemicalReading,
    ReportPhoto,
    ServiceTechReport,
)
from .repository import ReportRepository

_BOOL_COLUMNS = tuple(n for n in TRACKED_TASKS + UNTRACKED_TASKS + SUPPLY_ORDERS if n != "cleaned_cartridges")

_REPORT_COLUMNS = (
    ("user_id", "location_id", "clock_record_id", "service_date", "service_type", "work_performed",
     "chemicals_added_notes", "issues_found", "recommendations", "cleaned_cartridges")
    + _BOOL_COLUMNS
    + EQUIPMENT_READINGS
    + ("supplies_needed", "report_sent_to", "customer_rating", "customer_feedback", "notes", "created_at")
)

_READING_COLUMNS = (
    "report_id", "body_of_water", "chlorine_bromine", "ph", "calcium_hardness", "total_alkalinity",
    "cyanuric_acid", "salt", "phosphates", "temperature", "reading_time", "created_at",
)

_SELECT_REPORT = f"""
    SELECT
        r.report_id, r.updated_at, {", ".join("r." + c for c in _REPORT_COLUMNS)},
        CONCAT(u.first_name, ' ', u.last_name) AS user_name,
        jl.name AS location_name,
        CONCAT_WS(', ', jl.address, jl.city, jl.state) AS location_address
    FROM service_tech_reports r
    JOIN users u ON u.user_id = r.user_id
    JOIN job_locations jl ON jl.location_id = r.location_id
"""


def _db_value(report: ServiceTechReport, column: str):
    value = getattr(report, column)
    if isinstance(value, TriState):
        return value.value
    if isinstance(value, bool):
        return 1 if value else 0
    return value


def _row_to_report(r: Dict[str, Any], readings=(), photos=()) -> ServiceTechReport:
    values: Dict[str, Any] = {c: as_bool(r.get(c)) for c in _BOOL_COLUMNS}
    values.update({c: as_optional_decimal(r.get(c)) or Decimal(0) for c in EQUIPMENT_READINGS})
    return ServiceTechReport(
        report_id=int(r["report_id"]),
        user_id=int(r["user_id"]),
        location_id=int(r["location_id"]),
        clock_record_id=r.get("clock_record_id"),
        service_date=r["service_date"],
        service_type=r.get("service_type"),
        work_performed=r.get("work_performed"),
        chemicals_added_notes=r.get("chemicals_added_notes"),
        issues_found=r.get("issues_found"),
        recommendations=r.get("recommendations"),
        cleaned_cartridges=TriState(r.get("cleaned_cartridges") or TriState.FALSE.value),
        supplies_needed=r.get("supplies_needed"),
        report_sent_to=r.get("report_sent_to"),
        customer_rating=r.get("customer_rating"),
        customer_feedback=r.get("customer_feedback"),
        notes=r.get("notes"),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
        user_name=r.get("user_name"),
        location_name=r.get("location_name"),
        location_address=r.get("location_address") or None,
        chemical_readings=tuple(readings),
        photos=tuple(photos),
        **values,
    )


def _row_to_reading(r: Dict[str, Any]) -> ChemicalReading:
    return ChemicalReading(
        reading_id=int(r["reading_id"]),
        report_id=int(r["report_id"]),
        body_of_water=r["body_of_water"],
        chlorine_bromine=as_optional_decimal(r.get("chlorine_bromine")),
        ph=as_optional_decimal(r.get("ph")),
        calcium_hardness=as_optional_decimal(r.get("calcium_hardness")),
        total_alkalinity=as_optional_decimal(r.get("total_alkalinity")),
        cyanuric_acid=as_optional_decimal(r.get("cyanuric_acid")),
        salt=as_optional_decimal(r.get("salt")),
        phosphates=as_optional_decimal(r.get("phosphates")),
        temperature=as_optional_decimal(r.get("temperature")),
        reading_time=r.get("reading_time"),
        created_at=r.get("created_at"),
    )


def _row_to_photo(r: Dict[str, Any]) -> ReportPhoto:
    return ReportPhoto(
        photo_id=int(r["photo_id"]),
        report_id=int(r["report_id"]),
        photo_url=r["photo_url"],
        photo_type=PhotoType(r["photo_type"]),
        description=r.get("description"),
        gps_location=r.get("gps_location"),
        photo_timestamp=r["photo_timestamp"],
        created_at=r.get("created_at"),
    )


class MySQLReportRepository(ReportRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create_report(self, report: ServiceTechReport) -> int:
        placeholders = ",".join(["%s"] * len(_REPORT_COLUMNS))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"INSERT INTO service_tech_reports({', '.join(_REPORT_COLUMNS)}) VALUES({placeholders})",
                tuple(_db_value(report, c) for c in _REPORT_COLUMNS),
            )
            return int(cur.lastrowid)

    def add_reading(self, reading: ChemicalReading) -> int:
        placeholders = ",".join(["%s"] * len(_READING_COLUMNS))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"INSERT INTO chemical_readings({', '.join(_READING_COLUMNS)}) VALUES({placeholders})",
                tuple(getattr(reading, c) for c in _READING_COLUMNS),
            )
            return int(cur.lastrowid)

    def add_photo(self, photo: ReportPhoto) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO report_photos(
                    report_id, photo_url, photo_type, description, gps_location, photo_timestamp, created_at
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    photo.report_id,
                    photo.photo_url,
                    photo.photo_type.value,
                    photo.description,
                    photo.gps_location,
                    photo.photo_timestamp,
                    photo.created_at,
                ),
            )
            return int(cur.lastrowid)

    def exists(self, report_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT 1 AS found FROM service_tech_reports WHERE report_id=%s", (int(report_id),))
            return fetchone(cur) is not None

    def get_report(self, report_id: int) -> Optional[ServiceTechReport]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT_REPORT + " WHERE r.report_id=%s", (int(report_id),))
            row = fetchone(cur)
            if not row:
                return None

            cur.execute(
                f"SELECT reading_id, {', '.join(_READING_COLUMNS)} FROM chemical_readings "
                "WHERE report_id=%s ORDER BY reading_id ASC",
                (int(report_id),),
            )
            readings = [_row_to_reading(r) for r in fetchall(cur)]

            cur.execute(
                """
                SELECT photo_id, report_id, photo_url, photo_type, description, gps_location,
                       photo_timestamp, created_at
                FROM report_photos
                WHERE report_id=%s
                ORDER BY photo_id ASC
                """,
                (int(report_id),),
            )
            photos = [_row_to_photo(r) for r in fetchall(cur)]
            return _row_to_report(row, readings, photos)

    def list_for_user(self, *, user_id: int, start: datetime, end: datetime) -> Sequence[ServiceTechReport]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT_REPORT
                + " WHERE r.user_id=%s AND r.service_date >= %s AND r.service_date < %s"
                + " ORDER BY r.service_date DESC",
                (int(user_id), start, end),
            )
            return [_row_to_report(r) for r in fetchall(cur)]
