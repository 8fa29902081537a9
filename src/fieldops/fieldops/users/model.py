from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import EmployeeStatus


@dataclass(frozen=True)
class Employee:
    """Domain entity: a field employee.

    `status` is the only stored lifecycle state; activity and approval are read from it.
    """

    user_id: int
    first_name: str
    last_name: str
    email: str
    password_hash: str = ""
    position: Optional[str] = None
    phone_number: Optional[str] = None
    address: Optional[str] = None
    emergency_contact: Optional[str] = None
    emergency_phone: Optional[str] = None
    hire_date: Optional[date] = None
    notes: Optional[str] = None
    status: EmployeeStatus = EmployeeStatus.PENDING
    email_verified: bool = False
    created_at: Optional[datetime] = None
    last_login_at: Optional[datetime] = None

    json_properties = ("full_name", "display_position", "is_active", "is_approved")
    json_exclude = ("password_hash",)

    @property
    def is_active(self) -> bool:
        return self.status.is_active

    @property
    def is_approved(self) -> bool:
        return self.status.is_approved

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def display_position(self) -> str:
        return self.position or "Not Assigned"


@dataclass(frozen=True)
class EmployeeProfile:
    """Editable part of an employee record (everything except identity and credentials)."""

    first_name: str
    last_name: str
    position: Optional[str] = None
    phone_number: Optional[str] = None
    address: Optional[str] = None
    emergency_contact: Optional[str] = None
    emergency_phone: Optional[str] = None
    hire_date: Optional[date] = None
    notes: Optional[str] = None


@dataclass(frozen=True)
class InviteLink:
    invite_id: int
    email: str
    position: str
    invite_code: str
    created_at: datetime
    expires_at: datetime
    is_used: bool = False

    def is_valid_at(self, now: datetime) -> bool:
        return not self.is_used and now < self.expires_at
