from __future__ import annotations

from enum import Enum
from typing import Optional


class EmployeeStatus(str, Enum):
    """Single source of truth for an employee's lifecycle."""

    PENDING = "Pending"
    APPROVED = "Approved"
    TERMINATED = "Terminated"

    @property
    def is_active(self) -> bool:
        return self is not EmployeeStatus.TERMINATED

    @property
    def is_approved(self) -> bool:
        return self is EmployeeStatus.APPROVED


class EvaluationType(str, Enum):
    MANAGER = "Manager"
    SUPERVISOR = "Supervisor"
    SAFETY_AUDIT = "Safety Audit"

    @classmethod
    def parse(cls, value: Optional[str]) -> "EvaluationType":
        """Accept 'Safety Audit', 'SafetyAudit', 'safety audit', ...; None means Safety Audit."""

        if value is None or not str(value).strip():
            return cls.SAFETY_AUDIT
        key = str(value).replace(" ", "").replace("_", "").lower()
        for member in cls:
            if member.value.replace(" ", "").lower() == key:
                return member
        raise ValueError(f"Unknown evaluation type: {value!r}")


class TriState(str, Enum):
    """Checklist answer that may also be 'not applicable'."""

    TRUE = "true"
    FALSE = "false"
    NOT_APPLICABLE = "na"

    @classmethod
    def from_bool(cls, value: bool) -> "TriState":
        return cls.TRUE if value else cls.FALSE

    def as_bool(self) -> Optional[bool]:
        if self is TriState.NOT_APPLICABLE:
            return None
        return self is TriState.TRUE


class PhotoType(str, Enum):
    MAIN_POOL_FULL_VIEW = "Main Pool Full View"
    MAIN_POOL_MAIN_DRAIN = "Main Pool Main Drain"
    WADING_POOL = "Wading Pool"
    SPA = "Spa"
    OTHER_WATER_FEATURE = "Other Water Feature"
    POOL_GATE_LOCKED = "Pool Gate Locked"
