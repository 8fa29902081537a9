from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Optional, Tuple

from ..core.enums import EvaluationType

# Counted by the safety compliance percentage, for every evaluation type.
SAFETY_EQUIPMENT_ITEMS: Tuple[str, ...] = (
    "pool_open",
    "main_drain_visible",
    "aed_present",
    "rescue_tube_present",
    "backboard_present",
    "first_aid_kit",
    "bloodborne_pathogen_kit",
    "haz_mat_kit",
    "gate_fence_secured",
    "emergency_phone_working",
)

# Recorded with the safety equipment for every type but not counted.
GENERAL_ITEMS: Tuple[str, ...] = ("msds_safety_supplies_needed",)

SUPERVISOR_ITEMS: Tuple[str, ...] = (
    "staff_on_duty",
    "scanning_rotation_discussed",
    "zones_established",
    "break_time_discussed",
    "gate_control_discussed",
    "cellphone_policy_discussed",
    "pumproom_cleaned",
    "balancing_chemicals_tested_logged",
    "closing_procedures_discussed",
)

MANAGER_ITEMS: Tuple[str, ...] = ("staff_wearing_uniform",)

SAFETY_AUDIT_ITEMS: Tuple[str, ...] = ("facility_entry_procedures", "msds", "safety_supplies_needed")

TYPE_ITEMS: Dict[EvaluationType, Tuple[str, ...]] = {
    EvaluationType.SUPERVISOR: SUPERVISOR_ITEMS,
    EvaluationType.MANAGER: MANAGER_ITEMS,
    EvaluationType.SAFETY_AUDIT: SAFETY_AUDIT_ITEMS,
}

ALL_ITEMS: Tuple[str, ...] = (
    SAFETY_EQUIPMENT_ITEMS + GENERAL_ITEMS + SUPERVISOR_ITEMS + MANAGER_ITEMS + SAFETY_AUDIT_ITEMS
)


def _percentage(values, total: int) -> int:
    return (100 * sum(1 for v in values if v is True)) // total


@dataclass(frozen=True)
class SiteEvaluation:
    """Safety audit or site evaluation. Items are None when not asked."""

    user_id: int
    location_id: int
    evaluation_type: EvaluationType
    evaluation_date: datetime
    evaluation_id: Optional[int] = None
    clock_record_id: Optional[int] = None

    pool_open: Optional[bool] = None
    main_drain_visible: Optional[bool] = None
    aed_present: Optional[bool] = None
    rescue_tube_present: Optional[bool] = None
    backboard_present: Optional[bool] = None
    first_aid_kit: Optional[bool] = None
    bloodborne_pathogen_kit: Optional[bool] = None
    haz_mat_kit: Optional[bool] = None
    gate_fence_secured: Optional[bool] = None
    emergency_phone_working: Optional[bool] = None
    msds_safety_supplies_needed: Optional[bool] = None

    staff_on_duty: Optional[bool] = None
    scanning_rotation_discussed: Optional[bool] = None
    zones_established: Optional[bool] = None
    break_time_discussed: Optional[bool] = None
    gate_control_discussed: Optional[bool] = None
    cellphone_policy_discussed: Optional[bool] = None
    pumproom_cleaned: Optional[bool] = None
    balancing_chemicals_tested_logged: Optional[bool] = None
    closing_procedures_discussed: Optional[bool] = None

    staff_wearing_uniform: Optional[bool] = None

    facility_entry_procedures: Optional[bool] = None
    msds: Optional[bool] = None
    safety_supplies_needed: Optional[bool] = None

    safety_concerns_notes: Optional[str] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    user_name: Optional[str] = None
    location_name: Optional[str] = None
    location_address: Optional[str] = None

    json_properties = ("safety_compliance_percentage", "supervisor_checklist_percentage")

    @property
    def safety_compliance_percentage(self) -> int:
        return _percentage((getattr(self, n) for n in SAFETY_EQUIPMENT_ITEMS), len(SAFETY_EQUIPMENT_ITEMS))

    @property
    def supervisor_checklist_percentage(self) -> int:
        # Computed for every type: an evaluation that never asked these items reads as 0.
        return _percentage((getattr(self, n) for n in SUPERVISOR_ITEMS), len(SUPERVISOR_ITEMS))
