from __future__ import annotations

from typing import Any, Dict

from flask import Flask

from ..common.http import api_errors, json_body, ok, query_date, query_int
from ..common.payload import get_int, get_text
from ..common.serialization import camel_case
from ..core.enums import EvaluationType
from ..core.exceptions import ValidationError
from ..container import Container
from .model import ALL_ITEMS, SiteEvaluation


def _audit_view(evaluation: SiteEvaluation) -> Dict[str, Any]:
    return {
        "auditId": evaluation.evaluation_id,
        "userId": evaluation.user_id,
        "userName": evaluation.user_name,
        "locationId": evaluation.location_id,
        "locationName": evaluation.location_name,
        "locationAddress": evaluation.location_address,
        "auditType": evaluation.evaluation_type,
        "auditData": {camel_case(item): getattr(evaluation, item) for item in ALL_ITEMS},
        "safetyConcerns": evaluation.safety_concerns_notes,
        "notes": evaluation.notes,
        "safetyCompliancePercentage": evaluation.safety_compliance_percentage,
        "supervisorChecklistPercentage": evaluation.supervisor_checklist_percentage,
        "evaluationDate": evaluation.evaluation_date,
        "createdAt": evaluation.created_at,
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/safety-audit/submit", methods=["POST"], endpoint="api_audit_submit")
    @api_errors
    def api_audit_submit():
        data = json_body()
        audit_data = data.get("auditData")
        if audit_data is not None and not isinstance(audit_data, dict):
            raise ValidationError("auditData must be an object")

        audit_type = get_text(data, "auditType")
        evaluation_id = container.evaluation_service.submit(
            get_int(data, "userId", 0),
            get_int(data, "locationId", 0),
            audit_type,
            audit_data,
            safety_concerns=get_text(data, "safetyConcerns"),
            notes=get_text(data, "notes"),
        )
        return ok(
            {"auditId": evaluation_id},
            message=f"{EvaluationType.parse(audit_type).value} submitted successfully",
        )

    @app.route("/api/safety-audit/types", methods=["GET"], endpoint="api_audit_types")
    @api_errors
    def api_audit_types():
        return ok(container.evaluation_service.evaluation_types())

    @app.route("/api/safety-audit/my-audits", methods=["GET"], endpoint="api_audit_mine")
    @api_errors
    def api_audit_mine():
        user_id = query_int("userId")
        if not user_id:
            raise ValidationError("userId is required")
        evaluations = container.evaluation_service.list_for_user(user_id, query_date("startDate"), query_date("endDate"))
        return ok(
            [
                {
                    "auditId": e.evaluation_id,
                    "locationId": e.location_id,
                    "locationName": e.location_name,
                    "auditType": e.evaluation_type,
                    "safetyCompliancePercentage": e.safety_compliance_percentage,
                    "createdAt": e.created_at,
                }
                for e in evaluations
            ]
        )

    @app.route("/api/safety-audit/<int:audit_id>", methods=["GET"], endpoint="api_audit_get")
    @api_errors
    def api_audit_get(audit_id: int):
        return ok(_audit_view(container.evaluation_service.get(audit_id)))
