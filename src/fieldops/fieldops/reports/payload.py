"""Mapping between the mobile checklist payload and report entities."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Mapping, Optional

from ..common.payload import get_bool, get_decimal, get_int, get_optional_decimal, get_str, get_text, parse_bool
from ..common.serialization import camel_case
from ..core.constants import DEFAULT_BODY_OF_WATER
from ..core.enums import TriState
from ..core.exceptions import ValidationError
from .model import (
    EQUIPMENT_READINGS,
    SUPPLY_ORDERS,
    TRACKED_TASKS,
    UNTRACKED_TASKS,
    ChemicalReading,
    ServiceTechReport,
)

_BOOL_FIELDS = tuple(n for n in TRACKED_TASKS + UNTRACKED_TASKS + SUPPLY_ORDERS if n != "cleaned_cartridges")

# Mobile keys that do not follow plain camelCase.
_KEY_OVERRIDES = {"controller_orp": "controllerORP", "controller_ph": "controllerPH"}

_TEXT_FIELDS = (
    "service_type",
    "work_performed",
    "chemicals_added_notes",
    "issues_found",
    "recommendations",
    "supplies_needed",
    "report_sent_to",
    "customer_feedback",
)

_NOT_APPLICABLE = {"na", "n/a"}

# reading field -> mobile key
_READING_KEYS = {
    "ph": "phLevel",
    "calcium_hardness": "calciumHardness",
    "total_alkalinity": "alkalinity",
    "cyanuric_acid": "cyanuricAcid",
    "salt": "saltLevel",
    "phosphates": "phosphates",
    "temperature": "temperature",
}


def payload_key(field_name: str) -> str:
    return _KEY_OVERRIDES.get(field_name, camel_case(field_name))


def parse_tristate(value: Any) -> TriState:
    if isinstance(value, str) and value.strip().lower() in _NOT_APPLICABLE:
        return TriState.NOT_APPLICABLE
    return TriState.from_bool(parse_bool(value, False))


def report_from_payload(
    *,
    user_id: int,
    location_id: int,
    data: Optional[Mapping[str, Any]],
    notes: Optional[str],
    now: datetime,
) -> ServiceTechReport:
    data = data or {}
    values: Dict[str, Any] = {name: get_bool(data, payload_key(name), False) for name in _BOOL_FIELDS}
    values.update({name: get_decimal(data, payload_key(name)) for name in EQUIPMENT_READINGS})
    values.update({name: get_str(data, payload_key(name)) for name in _TEXT_FIELDS})

    rating = get_int(data, "customerRating")
    if rating is not None and not 1 <= rating <= 5:
        raise ValidationError("customerRating must be between 1 and 5")

    return ServiceTechReport(
        user_id=user_id,
        location_id=location_id,
        service_date=now,
        clock_record_id=get_int(data, "clockRecordId"),
        cleaned_cartridges=parse_tristate(data.get("cleanedCartridges")),
        customer_rating=rating,
        notes=(notes or "").strip() or None,
        created_at=now,
        **values,
    )


def reading_from_payload(report_id: int, data: Mapping[str, Any], *, now: datetime) -> ChemicalReading:
    chlorine = get_optional_decimal(data, "chlorine")
    if chlorine is None:
        chlorine = get_optional_decimal(data, "bromine")

    return ChemicalReading(
        report_id=report_id,
        body_of_water=get_text(data, "bodyOfWater", DEFAULT_BODY_OF_WATER),
        chlorine_bromine=chlorine,
        reading_time=now,
        created_at=now,
        **{name: get_optional_decimal(data, key) for name, key in _READING_KEYS.items()},
    )


def checklist_data(report: ServiceTechReport) -> Dict[str, Any]:
    """The checklist as the mobile app submitted it."""

    out: Dict[str, Any] = {payload_key(name): getattr(report, name) for name in _BOOL_FIELDS}
    cartridges = report.cleaned_cartridges
    out["cleanedCartridges"] = cartridges.value if cartridges is TriState.NOT_APPLICABLE else cartridges.as_bool()
    out.update({payload_key(name): getattr(report, name) for name in EQUIPMENT_READINGS})
    out.update({payload_key(name): getattr(report, name) for name in _TEXT_FIELDS})
    out["customerRating"] = report.customer_rating
    return out


def reading_data(reading: ChemicalReading) -> Dict[str, Any]:
    out: Dict[str, Any] = {
        "readingId": reading.reading_id,
        "bodyOfWater": reading.body_of_water,
        "chlorine": reading.chlorine_bromine,
        "readingTime": reading.reading_time,
    }
    out.update({key: getattr(reading, name) for name, key in _READING_KEYS.items()})
    return out
