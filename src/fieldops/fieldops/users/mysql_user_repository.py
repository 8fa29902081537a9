from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional, Sequence

from ..core.enums import EmployeeStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_bool, db_cursor, fetchall, fetchone
from .model import Employee, EmployeeProfile
from .repository import InviteRepository, UserRepository

_COLUMNS = """
    user_id, first_name, last_name, email, password_hash, position, phone_number, address,
    emergency_contact, emergency_phone, hire_date, notes, status, email_verified, created_at, last_login_at
"""


def _row_to_employee(row: Dict[str, Any]) -> Employee:
    return Employee(
        user_id=int(row["user_id"]),
        first_name=row["first_name"],
        last_name=row["last_name"],
        email=row["email"],
        password_hash=row["password_hash"],
        position=row.get("position"),
        phone_number=row.get("phone_number"),
        address=row.get("address"),
        emergency_contact=row.get("emergency_contact"),
        emergency_phone=row.get("emergency_phone"),
        hire_date=row.get("hire_date"),
        notes=row.get("notes"),
        status=EmployeeStatus(row["status"]),
        email_verified=as_bool(row.get("email_verified")),
        created_at=row.get("created_at"),
        last_login_at=row.get("last_login_at"),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: int) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE user_id=%s", (int(user_id),))
            row = fetchone(cur)
            return _row_to_employee(row) if row else None

    def get_by_email(self, email: str) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE email=%s", (email,))
            row = fetchone(cur)
            return _row_to_employee(row) if row else None

    def list_all(self) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users ORDER BY created_at DESC, user_id DESC")
            return [_row_to_employee(r) for r in fetchall(cur)]

    def list_by_status(self, status: EmployeeStatus) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM users WHERE status=%s ORDER BY created_at DESC, user_id DESC",
                (status.value,),
            )
            return [_row_to_employee(r) for r in fetchall(cur)]

    def create(self, *, email: str, password_hash: str, profile: EmployeeProfile, created_at: datetime) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO users(
                    first_name, last_name, email, password_hash, position, phone_number, address,
                    emergency_contact, emergency_phone, hire_date, notes, status, email_verified, created_at
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,0,%s)
                """,
                (
                    profile.first_name,
                    profile.last_name,
                    email,
                    password_hash,
                    profile.position,
                    profile.phone_number,
                    profile.address,
                    profile.emergency_contact,
                    profile.emergency_phone,
                    profile.hire_date,
                    profile.notes,
                    EmployeeStatus.PENDING.value,
                    created_at,
                ),
            )
            return int(cur.lastrowid)

    def update_profile(self, user_id: int, profile: EmployeeProfile) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE users
                SET first_name=%s, last_name=%s, position=%s, phone_number=%s, address=%s,
                    emergency_contact=%s, emergency_phone=%s, hire_date=%s, notes=%s
                WHERE user_id=%s
                """,
                (
                    profile.first_name,
                    profile.last_name,
                    profile.position,
                    profile.phone_number,
                    profile.address,
                    profile.emergency_contact,
                    profile.emergency_phone,
                    profile.hire_date,
                    profile.notes,
                    int(user_id),
                ),
            )
            return cur.rowcount > 0

    def set_status(self, user_id: int, status: EmployeeStatus) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE users SET status=%s WHERE user_id=%s", (status.value, int(user_id)))
            return cur.rowcount > 0

    def set_position(self, user_id: int, position: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE users SET position=%s WHERE user_id=%s", (position, int(user_id)))
            return cur.rowcount > 0

    def delete_by_id(self, user_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM users WHERE user_id=%s", (int(user_id),))
            return cur.rowcount > 0


class MySQLInviteRepository(InviteRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(self, *, email: str, position: str, invite_code: str, created_at: datetime, expires_at: datetime) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO invite_links(email, position, invite_code, created_at, expires_at, is_used)
                VALUES(%s,%s,%s,%s,%s,0)
                """,
                (email, position, invite_code, created_at, expires_at),
            )
            return int(cur.lastrowid)
