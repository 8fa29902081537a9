from __future__ import annotations

from datetime import datetime

import pytest

from src.fieldops.fieldops.common.serialization import camel_case
from src.fieldops.fieldops.core.enums import EvaluationType
from src.fieldops.fieldops.core.exceptions import NotFoundError, ValidationError
from src.fieldops.fieldops.evaluations.model import SAFETY_EQUIPMENT_ITEMS, SUPERVISOR_ITEMS
from src.fieldops.fieldops.evaluations.service import EvaluationService
from tests.fakes import InMemoryEvaluations

NOW = datetime(2026, 2, 2, 10, 0)

HALF_SAFE = {
    "poolOpen": True,
    "mainDrainVisible": "true",
    "aedPresent": True,
    "rescueTubePresent": True,
    "backboardPresent": True,
    "firstAidKit": False,
    "bloodbornePathogenKit": False,
}


@pytest.fixture
def svc():
    return EvaluationService(InMemoryEvaluations())


@pytest.mark.parametrize("audit_type", ["Supervisor", "Manager", "Safety Audit", None])
def test_safety_compliance_is_same_for_every_type(svc, audit_type):
    evaluation = svc.get(svc.submit(7, 3, audit_type, HALF_SAFE, now=NOW))

    assert evaluation.safety_compliance_percentage == 50


def test_missing_type_means_safety_audit(svc):
    evaluation = svc.get(svc.submit(7, 3, None, {}, now=NOW))

    assert evaluation.evaluation_type is EvaluationType.SAFETY_AUDIT


def test_type_spelling_is_flexible(svc):
    evaluation = svc.get(svc.submit(7, 3, "safetyaudit", {}, now=NOW))

    assert evaluation.evaluation_type is EvaluationType.SAFETY_AUDIT


def test_only_items_of_the_submitted_type_are_kept(svc):
    data = {"staffOnDuty": True, "staffWearingUniform": True, "msds": True, "msdsSafetySuppliesNeeded": False}

    evaluation = svc.get(svc.submit(7, 3, "Manager", data, now=NOW))

    assert evaluation.staff_wearing_uniform is True
    assert evaluation.msds_safety_supplies_needed is False
    assert evaluation.staff_on_duty is None
    assert evaluation.msds is None


def test_unasked_items_stay_none_not_false(svc):
    evaluation = svc.get(svc.submit(7, 3, "Supervisor", {"poolOpen": True}, now=NOW))

    assert evaluation.pool_open is True
    assert evaluation.aed_present is None
    assert all(getattr(evaluation, item) is None for item in SUPERVISOR_ITEMS)


def test_supervisor_percentage_counts_supervisor_items(svc):
    data = {"staffOnDuty": True, "zonesEstablished": True, "pumproomCleaned": True, "breakTimeDiscussed": False}

    evaluation = svc.get(svc.submit(7, 3, "Supervisor", data, now=NOW))

    assert evaluation.supervisor_checklist_percentage == 33


def test_supervisor_percentage_is_zero_for_other_types(svc):
    data = {camel_case(name): True for name in SAFETY_EQUIPMENT_ITEMS}
    data.update({"staffOnDuty": True, "zonesEstablished": True})

    evaluation = svc.get(svc.submit(7, 3, "Manager", data, now=NOW))

    assert evaluation.safety_compliance_percentage == 100
    assert evaluation.supervisor_checklist_percentage == 0


def test_unknown_type_is_rejected(svc):
    with pytest.raises(ValidationError) as e:
        svc.submit(7, 3, "Inspector", {}, now=NOW)

    assert "Supervisor, Manager, Safety Audit" in str(e.value)


def test_types_list():
    assert EvaluationService.evaluation_types() == ["Supervisor", "Manager", "Safety Audit"]


def test_get_unknown_audit(svc):
    with pytest.raises(NotFoundError):
        svc.get(404)
