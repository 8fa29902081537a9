from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

from ..common.datetime_utils import now_utc
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_bool, db_cursor, fetchall, fetchone
from .model import JobLocation, LocationContact
from .repository import LocationRepository

_SELECT = """
    SELECT
        l.location_id, l.name, l.address, l.city, l.state, l.zip_code, l.country,
        l.latitude, l.longitude, l.radius, l.pool_type, l.pool_size, l.lockbox_code,
        l.supervisor_id, l.pool_depth_feet, l.pool_depth_inches, l.has_wading_pool,
        l.wading_pool_size_gallons, l.has_spa, l.spa_size_gallons, l.notes, l.is_active,
        l.created_at,
        CONCAT(u.first_name, ' ', u.last_name) AS supervisor_name
    FROM job_locations l
    LEFT JOIN users u ON u.user_id = l.supervisor_id
"""

# Column order shared by INSERT and UPDATE.
_WRITE_COLUMNS = (
    "name", "address", "city", "state", "zip_code", "country", "latitude", "longitude", "radius",
    "pool_type", "pool_size", "lockbox_code", "supervisor_id", "pool_depth_feet", "pool_depth_inches",
    "has_wading_pool", "wading_pool_size_gallons", "has_spa", "spa_size_gallons", "notes", "is_active",
)


def _write_values(location: JobLocation) -> list:
    return [getattr(location, col) for col in _WRITE_COLUMNS]


def _row_to_contact(r: Dict[str, Any]) -> LocationContact:
    return LocationContact(
        contact_id=int(r["contact_id"]),
        location_id=int(r["location_id"]),
        contact_name=r.get("contact_name"),
        contact_phone=r.get("contact_phone"),
        contact_email=r.get("contact_email"),
        contact_role=r.get("contact_role"),
        is_primary=as_bool(r.get("is_primary")),
        created_at=r.get("created_at"),
    )


def _row_to_location(r: Dict[str, Any], contacts: Sequence[LocationContact] = ()) -> JobLocation:
    return JobLocation(
        location_id=int(r["location_id"]),
        name=r["name"],
        address=r.get("address"),
        city=r.get("city"),
        state=r.get("state"),
        zip_code=r.get("zip_code"),
        country=r.get("country"),
        latitude=float(r["latitude"]) if r.get("latitude") is not None else None,
        longitude=float(r["longitude"]) if r.get("longitude") is not None else None,
        radius=int(r["radius"]),
        pool_type=r.get("pool_type"),
        pool_size=r.get("pool_size"),
        lockbox_code=r.get("lockbox_code"),
        supervisor_id=r.get("supervisor_id"),
        pool_depth_feet=r.get("pool_depth_feet"),
        pool_depth_inches=r.get("pool_depth_inches"),
        has_wading_pool=as_bool(r.get("has_wading_pool")),
        wading_pool_size_gallons=r.get("wading_pool_size_gallons"),
        has_spa=as_bool(r.get("has_spa")),
        spa_size_gallons=r.get("spa_size_gallons"),
        notes=r.get("notes"),
        is_active=as_bool(r.get("is_active")),
        created_at=r.get("created_at"),
        supervisor_name=r.get("supervisor_name"),
        contacts=tuple(contacts),
    )


class MySQLLocationRepository(LocationRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, location_id: int) -> Optional[JobLocation]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE l.location_id=%s", (int(location_id),))
            row = fetchone(cur)
            if not row:
                return None

            cur.execute(
                """
                SELECT contact_id, location_id, contact_name, contact_phone, contact_email,
                       contact_role, is_primary, created_at
                FROM location_contacts
                WHERE location_id=%s
                ORDER BY is_primary DESC, contact_id ASC
                """,
                (int(location_id),),
            )
            contacts = [_row_to_contact(r) for r in fetchall(cur)]
            return _row_to_location(row, contacts)

    def list_all(self, *, active_only: bool = False) -> Sequence[JobLocation]:
        where = " WHERE l.is_active=1" if active_only else ""
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + where + " ORDER BY l.name ASC")
            return [_row_to_location(r) for r in fetchall(cur)]

    def create(self, location: JobLocation, contacts: Sequence[LocationContact]) -> int:
        placeholders = ",".join(["%s"] * (len(_WRITE_COLUMNS) + 1))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"INSERT INTO job_locations({', '.join(_WRITE_COLUMNS)}, created_at) VALUES({placeholders})",
                tuple(_write_values(location) + [location.created_at or now_utc()]),
            )
            location_id = int(cur.lastrowid)
            self._insert_contacts(cur, location_id, contacts)
            return location_id

    def update(self, location: JobLocation, contacts: Sequence[LocationContact]) -> bool:
        assignments = ", ".join(f"{col}=%s" for col in _WRITE_COLUMNS)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"UPDATE job_locations SET {assignments} WHERE location_id=%s",
                tuple(_write_values(location) + [int(location.location_id)]),
            )
            cur.execute("SELECT 1 AS found FROM job_locations WHERE location_id=%s", (int(location.location_id),))
            if not fetchone(cur):
                return False

            cur.execute("DELETE FROM location_contacts WHERE location_id=%s", (int(location.location_id),))
            self._insert_contacts(cur, int(location.location_id), contacts)
            return True

    def delete(self, location_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM job_locations WHERE location_id=%s", (int(location_id),))
            return cur.rowcount > 0

    @staticmethod
    def _insert_contacts(cur, location_id: int, contacts: Sequence[LocationContact]) -> None:
        now = now_utc()
        rows: List[tuple] = [
            (
                location_id,
                c.contact_name,
                c.contact_phone,
                c.contact_email,
                c.contact_role,
                1 if c.is_primary else 0,
                now,
            )
            for c in contacts
        ]
        if not rows:
            return
        cur.executemany(
            """
            INSERT INTO location_contacts(
                location_id, contact_name, contact_phone, contact_email, contact_role, is_primary, created_at
            )
            VALUES(%s,%s,%s,%s,%s,%s,%s)
            """,
            rows,
        )
