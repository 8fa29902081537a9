from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Any, Dict, List, Mapping, Optional, Sequence

from ..common.datetime_utils import day_bounds, default_range, now_utc
from ..common.payload import get_bool, get_int
from ..common.serialization import camel_case
from ..common.validators import optional_text, require_positive_id
from ..core.enums import EvaluationType
from ..core.exceptions import NotFoundError, ValidationError
from .model import GENERAL_ITEMS, SAFETY_EQUIPMENT_ITEMS, TYPE_ITEMS, SiteEvaluation
from .repository import EvaluationRepository

logger = logging.getLogger(__name__)


class EvaluationService:
    """Intake for safety audits and supervisor/manager site evaluations."""

    def __init__(self, evaluations: EvaluationRepository):
        self._evaluations = evaluations

    def submit(
        self,
        user_id: int,
        location_id: int,
        audit_type: Optional[str],
        audit_data: Optional[Mapping[str, Any]],
        *,
        safety_concerns: Optional[str] = None,
        notes: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> int:
        user_id = require_positive_id(user_id, "userId")
        location_id = require_positive_id(location_id, "locationId")
        try:
            evaluation_type = EvaluationType.parse(audit_type)
        except ValueError:
            allowed = ", ".join(self.evaluation_types())
            raise ValidationError(f"auditType must be one of: {allowed}")

        data = audit_data or {}
        now = now or now_utc()
        items = SAFETY_EQUIPMENT_ITEMS + GENERAL_ITEMS + TYPE_ITEMS[evaluation_type]
        values: Dict[str, Optional[bool]] = {item: get_bool(data, camel_case(item), None) for item in items}

        evaluation = SiteEvaluation(
            user_id=user_id,
            location_id=location_id,
            evaluation_type=evaluation_type,
            evaluation_date=now,
            clock_record_id=get_int(data, "clockRecordId"),
            safety_concerns_notes=optional_text(safety_concerns),
            notes=optional_text(notes),
            created_at=now,
            **values,
        )
        evaluation_id = self._evaluations.create(evaluation)
        logger.info(
            "%s %s submitted by user %s at location %s (%d%% safety compliance)",
            evaluation_type.value,
            evaluation_id,
            user_id,
            location_id,
            evaluation.safety_compliance_percentage,
        )
        return evaluation_id

    def get(self, evaluation_id: int) -> SiteEvaluation:
        evaluation = self._evaluations.get_by_id(int(evaluation_id))
        if not evaluation:
            raise NotFoundError("Audit not found")
        return evaluation

    def list_for_user(
        self,
        user_id: int,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> Sequence[SiteEvaluation]:
        start, end = default_range(start, end)
        range_start, _ = day_bounds(start)
        _, range_end = day_bounds(end)
        return self._evaluations.list_for_user(user_id=int(user_id), start=range_start, end=range_end)

    @staticmethod
    def evaluation_types() -> List[str]:
        return [EvaluationType.SUPERVISOR.value, EvaluationType.MANAGER.value, EvaluationType.SAFETY_AUDIT.value]
