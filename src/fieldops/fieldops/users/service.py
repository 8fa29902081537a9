from __future__ import annotations

import logging
import re
import uuid
from datetime import datetime, timedelta
from typing import Optional, Sequence

from werkzeug.security import generate_password_hash

from ..common.datetime_utils import now_utc
from ..common.validators import optional_text, require_non_empty
from ..core.constants import DEFAULT_POSITION, INVITE_CODE_LENGTH, INVITE_EXPIRY_DAYS, TEMP_PASSWORD
from ..core.enums import EmployeeStatus
from ..core.exceptions import NotFoundError, ValidationError
from .model import Employee, EmployeeProfile
from .repository import InviteRepository, UserRepository

logger = logging.getLogger(__name__)

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def _clean_profile(profile: EmployeeProfile) -> EmployeeProfile:
    return EmployeeProfile(
        first_name=require_non_empty(profile.first_name, "First name"),
        last_name=require_non_empty(profile.last_name, "Last name"),
        position=optional_text(profile.position),
        phone_number=optional_text(profile.phone_number),
        address=optional_text(profile.address),
        emergency_contact=optional_text(profile.emergency_contact),
        emergency_phone=optional_text(profile.emergency_phone),
        hire_date=profile.hire_date,
        notes=optional_text(profile.notes),
    )


def _require_email(email: Optional[str]) -> str:
    email = require_non_empty(email, "Email").lower()
    if not _EMAIL_RE.match(email):
        raise ValidationError("Email is invalid")
    return email


class UserService:
    """Use case: administer employees and their lifecycle status."""

    def __init__(self, users: UserRepository, invites: InviteRepository):
        self._users = users
        self._invites = invites

    def list_users(
        self,
        *,
        search: Optional[str] = None,
        position: Optional[str] = None,
        active: Optional[bool] = None,
    ) -> Sequence[Employee]:
        users = list(self._users.list_all())

        needle = (search or "").strip().lower()
        if needle:
            users = [
                u
                for u in users
                if needle in u.first_name.lower() or needle in u.last_name.lower() or needle in u.email.lower()
            ]
        if position and position.strip():
            users = [u for u in users if u.position == position.strip()]
        if active is not None:
            users = [u for u in users if u.is_active == active]
        return users

    def get(self, user_id: int) -> Employee:
        user = self._users.get_by_id(int(user_id))
        if not user:
            raise NotFoundError("Employee not found")
        return user

    def create(self, *, email: str, profile: EmployeeProfile, now: Optional[datetime] = None) -> int:
        """Create a Pending employee with a hashed temporary password."""

        email = _require_email(email)
        profile = _clean_profile(profile)
        if self._users.get_by_email(email):
            raise ValidationError("Email already exists")

        user_id = self._users.create(
            email=email,
            password_hash=generate_password_hash(TEMP_PASSWORD),
            profile=profile,
            created_at=now or now_utc(),
        )
        logger.info("Created employee %s (%s)", user_id, email)
        return user_id

    def update(self, user_id: int, profile: EmployeeProfile) -> None:
        self.get(user_id)
        self._users.update_profile(int(user_id), _clean_profile(profile))

    def approve(self, user_id: int) -> None:
        self._set_status(user_id, EmployeeStatus.APPROVED)

    def deactivate(self, user_id: int) -> None:
        self._set_status(user_id, EmployeeStatus.TERMINATED)

    def activate(self, user_id: int) -> None:
        """Re-activate a terminated employee; a pending one stays pending."""

        user = self.get(user_id)
        if user.status is EmployeeStatus.TERMINATED:
            self._set_status(user_id, EmployeeStatus.APPROVED)

    def _set_status(self, user_id: int, status: EmployeeStatus) -> None:
        user = self.get(user_id)
        if user.status is status:
            return
        self._users.set_status(int(user_id), status)
        logger.info("Employee %s status %s -> %s", user_id, user.status.value, status.value)

    def assign_position(self, user_id: int, position: str) -> None:
        position = require_non_empty(position, "Position")
        self.get(user_id)
        self._users.set_position(int(user_id), position)

    def delete(self, user_id: int) -> None:
        if not self._users.delete_by_id(int(user_id)):
            raise NotFoundError("Employee not found")
        logger.info("Deleted employee %s", user_id)

    def pending_approvals(self) -> Sequence[Employee]:
        return self._users.list_by_status(EmployeeStatus.PENDING)

    def list_by_position(self, position: str) -> Sequence[Employee]:
        return self.list_users(position=position, active=True)

    def generate_invite(self, email: str, position: Optional[str] = None, *, now: Optional[datetime] = None) -> str:
        email = _require_email(email)
        position = optional_text(position) or DEFAULT_POSITION
        now = now or now_utc()

        code = uuid.uuid4().hex[:INVITE_CODE_LENGTH]
        self._invites.create(
            email=email,
            position=position,
            invite_code=code,
            created_at=now,
            expires_at=now + timedelta(days=INVITE_EXPIRY_DAYS),
        )
        logger.info("Generated invite for %s as %s", email, position)
        return code
