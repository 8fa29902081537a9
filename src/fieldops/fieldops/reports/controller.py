from __future__ import annotations

from typing import Any, Dict

from flask import Flask

from ..common.http import api_errors, json_body, ok, query_date, query_int
from ..common.payload import get_int, get_text
from ..core.exceptions import ValidationError
from ..container import Container
from .model import ServiceTechReport
from .payload import checklist_data, reading_data


def _checklist_view(report: ServiceTechReport) -> Dict[str, Any]:
    return {
        "checklistId": report.report_id,
        "userId": report.user_id,
        "userName": report.user_name,
        "locationId": report.location_id,
        "locationName": report.location_name,
        "locationAddress": report.location_address,
        "serviceDate": report.service_date,
        "checklistData": checklist_data(report),
        "chemicalReadings": [reading_data(r) for r in report.chemical_readings],
        "photos": list(report.photos),
        "completionPercentage": report.completion_percentage,
        "notes": report.notes,
        "createdAt": report.created_at,
    }


def _summary_view(report: ServiceTechReport) -> Dict[str, Any]:
    return {
        "checklistId": report.report_id,
        "locationId": report.location_id,
        "locationName": report.location_name,
        "serviceDate": report.service_date,
        "completionPercentage": report.completion_percentage,
        "notes": report.notes,
        "createdAt": report.created_at,
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/checklist/submit", methods=["POST"], endpoint="api_checklist_submit")
    @api_errors
    def api_checklist_submit():
        data = json_body()
        checklist = data.get("checklistData")
        readings = data.get("chemicalReadings")
        if checklist is not None and not isinstance(checklist, dict):
            raise ValidationError("checklistData must be an object")
        if readings is not None and not isinstance(readings, list):
            raise ValidationError("chemicalReadings must be a list")

        result = container.checklist_service.submit(
            get_int(data, "userId", 0),
            get_int(data, "locationId", 0),
            checklist,
            readings,
            get_text(data, "notes"),
        )

        message = "Checklist submitted successfully"
        if not result.complete:
            message = f"Checklist submitted; {len(result.failed_readings)} chemical reading(s) were not saved"
        return ok(
            {
                "checklistId": result.report_id,
                "readingsSaved": result.readings_saved,
                "failedReadings": list(result.failed_readings),
            },
            message=message,
        )

    @app.route("/api/checklist/chemical-reading", methods=["POST"], endpoint="api_checklist_chemical_reading")
    @api_errors
    def api_checklist_chemical_reading():
        data = json_body()
        reading_id = container.checklist_service.add_chemical_reading(get_int(data, "serviceChecklistId", 0), data)
        return ok({"readingId": reading_id}, message="Chemical reading added successfully")

    @app.route("/api/checklist/<int:checklist_id>/photos", methods=["POST"], endpoint="api_checklist_photo")
    @api_errors
    def api_checklist_photo(checklist_id: int):
        data = json_body()
        photo_id = container.checklist_service.add_photo(
            checklist_id,
            get_text(data, "photoUrl"),
            get_text(data, "photoType"),
            description=get_text(data, "description"),
            gps_location=get_text(data, "gpsLocation"),
        )
        return ok({"photoId": photo_id}, message="Photo attached", status=201)

    @app.route("/api/checklist/<int:checklist_id>", methods=["GET"], endpoint="api_checklist_get")
    @api_errors
    def api_checklist_get(checklist_id: int):
        return ok(_checklist_view(container.checklist_service.get(checklist_id)))

    @app.route("/api/checklist/my-checklists", methods=["GET"], endpoint="api_checklist_mine")
    @api_errors
    def api_checklist_mine():
        user_id = query_int("userId")
        if not user_id:
            raise ValidationError("userId is required")
        reports = container.checklist_service.list_for_user(user_id, query_date("startDate"), query_date("endDate"))
        return ok([_summary_view(r) for r in reports])
