from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import EmployeeStatus
from .model import Employee, EmployeeProfile


class UserRepository(Protocol):
    """Repository interface for employees.

    Services depend on this protocol, never on a concrete database.
    """

    def get_by_id(self, user_id: int) -> Optional[Employee]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[Employee]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Employee]:
        """All employees, newest first."""

        raise NotImplementedError

    def list_by_status(self, status: EmployeeStatus) -> Sequence[Employee]:
        raise NotImplementedError

    def create(self, *, email: str, password_hash: str, profile: EmployeeProfile, created_at: datetime) -> int:
        """Insert a Pending employee; returns user_id."""

        raise NotImplementedError

    def update_profile(self, user_id: int, profile: EmployeeProfile) -> bool:
        raise NotImplementedError

    def set_status(self, user_id: int, status: EmployeeStatus) -> bool:
        raise NotImplementedError

    def set_position(self, user_id: int, position: str) -> bool:
        raise NotImplementedError

    def delete_by_id(self, user_id: int) -> bool:
        raise NotImplementedError


class InviteRepository(Protocol):
    def create(self, *, email: str, position: str, invite_code: str, created_at: datetime, expires_at: datetime) -> int:
        raise NotImplementedError
