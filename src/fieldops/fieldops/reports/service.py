from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Any, Mapping, Optional, Sequence

from ..common.datetime_utils import day_bounds, default_range, now_utc
from ..common.validators import optional_text, require_non_empty, require_positive_id
from ..core.constants import MAX_CHEMICAL_READINGS
from ..core.enums import PhotoType
from ..core.exceptions import NotFoundError, ValidationError
from .model import ChecklistSubmission, FailedReading, ReportPhoto, ServiceTechReport
from .payload import reading_from_payload, report_from_payload
from .repository import ReportRepository

logger = logging.getLogger(__name__)

READING_NOT_SAVED = "Chemical reading could not be saved"


def _photo_type(value: Any) -> PhotoType:
    try:
        return PhotoType(str(value or "").strip())
    except ValueError:
        allowed = ", ".join(t.value for t in PhotoType)
        raise ValidationError(f"photoType must be one of: {allowed}")


class ChecklistService:
    """Intake for service-tech checklists, their chemical readings and photos."""

    def __init__(self, reports: ReportRepository):
        self._reports = reports

    def submit(
        self,
        user_id: int,
        location_id: int,
        checklist_data: Optional[Mapping[str, Any]],
        chemical_readings: Optional[Sequence[Mapping[str, Any]]] = None,
        notes: Optional[str] = None,
        *,
        now: Optional[datetime] = None,
    ) -> ChecklistSubmission:
        """Store the report, then each reading in its own statement.

        Readings are best-effort: a failing reading is recorded in the result and
        does not undo the report or the readings stored before it.
        """

        user_id = require_positive_id(user_id, "userId")
        location_id = require_positive_id(location_id, "locationId")
        now = now or now_utc()

        readings = list(chemical_readings or [])
        if len(readings) > MAX_CHEMICAL_READINGS:
            raise ValidationError(f"At most {MAX_CHEMICAL_READINGS} chemical readings per checklist")
        if any(not isinstance(r, Mapping) for r in readings):
            raise ValidationError("chemicalReadings must be a list of objects")

        report = report_from_payload(user_id=user_id, location_id=location_id, data=checklist_data, notes=notes, now=now)
        report_id = self._reports.create_report(report)
        logger.info(
            "Checklist %s submitted by user %s at location %s (%d%% complete)",
            report_id,
            user_id,
            location_id,
            report.completion_percentage,
        )

        saved = 0
        failed: list[FailedReading] = []
        for index, payload in enumerate(readings):
            try:
                self._reports.add_reading(reading_from_payload(report_id, payload, now=now))
                saved += 1
            except Exception as e:
                logger.warning("Reading %d of checklist %s was not stored: %s", index, report_id, e)
                failed.append(FailedReading(index=index, error=READING_NOT_SAVED))

        return ChecklistSubmission(report_id=report_id, readings_saved=saved, failed_readings=tuple(failed))

    def add_chemical_reading(
        self,
        report_id: int,
        payload: Mapping[str, Any],
        *,
        now: Optional[datetime] = None,
    ) -> int:
        report_id = require_positive_id(report_id, "serviceChecklistId")
        if not self._reports.exists(report_id):
            raise NotFoundError("Checklist not found")
        return self._reports.add_reading(reading_from_payload(report_id, payload, now=now or now_utc()))

    def add_photo(
        self,
        report_id: int,
        photo_url: Optional[str],
        photo_type: Any,
        description: Optional[str] = None,
        gps_location: Optional[str] = None,
        *,
        now: Optional[datetime] = None,
    ) -> int:
        url = require_non_empty(photo_url, "photoUrl")
        kind = _photo_type(photo_type)
        if not self._reports.exists(int(report_id)):
            raise NotFoundError("Checklist not found")

        now = now or now_utc()
        return self._reports.add_photo(
            ReportPhoto(
                report_id=int(report_id),
                photo_url=url,
                photo_type=kind,
                photo_timestamp=now,
                description=optional_text(description),
                gps_location=optional_text(gps_location),
                created_at=now,
            )
        )

    def get(self, report_id: int) -> ServiceTechReport:
        report = self._reports.get_report(int(report_id))
        if not report:
            raise NotFoundError("Checklist not found")
        return report

    def list_for_user(
        self,
        user_id: int,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> Sequence[ServiceTechReport]:
        """Defaults to the trailing 30 days through the end of today."""

        start, end = default_range(start, end)
        range_start, _ = day_bounds(start)
        _, range_end = day_bounds(end)
        return self._reports.list_for_user(user_id=int(user_id), start=range_start, end=range_end)
