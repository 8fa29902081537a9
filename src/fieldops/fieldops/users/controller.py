from __future__ import annotations

from typing import Any, Dict

from flask import Flask, request

from ..common.datetime_utils import parse_iso_date
from ..common.http import api_errors, json_body, ok
from ..common.payload import get_text, parse_bool
from ..core.exceptions import ValidationError
from ..container import Container
from .model import EmployeeProfile


def _profile_from(data: Dict[str, Any]) -> EmployeeProfile:
    hire_date = get_text(data, "hireDate")
    try:
        parsed_hire_date = parse_iso_date(hire_date[:10]) if hire_date else None
    except ValueError:
        raise ValidationError("hireDate is not a valid date")

    return EmployeeProfile(
        first_name=get_text(data, "firstName", ""),
        last_name=get_text(data, "lastName", ""),
        position=get_text(data, "position"),
        phone_number=get_text(data, "phoneNumber"),
        address=get_text(data, "address"),
        emergency_contact=get_text(data, "emergencyContact"),
        emergency_phone=get_text(data, "emergencyPhone"),
        hire_date=parsed_hire_date,
        notes=get_text(data, "notes"),
    )


def register(app: Flask, container: Container) -> None:
    @app.route("/api/users", methods=["GET"], endpoint="api_users_list")
    @api_errors
    def api_users_list():
        users = container.user_service.list_users(
            search=request.args.get("search"),
            position=request.args.get("position"),
            active=parse_bool(request.args.get("active"), None),
        )
        return ok(list(users))

    @app.route("/api/users/pending", methods=["GET"], endpoint="api_users_pending")
    @api_errors
    def api_users_pending():
        return ok(list(container.user_service.pending_approvals()))

    @app.route("/api/users", methods=["POST"], endpoint="api_users_create")
    @api_errors
    def api_users_create():
        data = json_body()
        user_id = container.user_service.create(email=get_text(data, "email", ""), profile=_profile_from(data))
        return ok({"userId": user_id}, message="Employee created", status=201)

    @app.route("/api/users/<int:user_id>", methods=["GET"], endpoint="api_users_get")
    @api_errors
    def api_users_get(user_id: int):
        return ok(container.user_service.get(user_id))

    @app.route("/api/users/<int:user_id>", methods=["PUT"], endpoint="api_users_update")
    @api_errors
    def api_users_update(user_id: int):
        container.user_service.update(user_id, _profile_from(json_body()))
        return ok(message="Employee updated")

    @app.route("/api/users/<int:user_id>", methods=["DELETE"], endpoint="api_users_delete")
    @api_errors
    def api_users_delete(user_id: int):
        container.user_service.delete(user_id)
        return ok(message="Employee deleted")

    @app.route("/api/users/<int:user_id>/approve", methods=["POST"], endpoint="api_users_approve")
    @api_errors
    def api_users_approve(user_id: int):
        container.user_service.approve(user_id)
        return ok(message="Employee approved")

    @app.route("/api/users/<int:user_id>/deactivate", methods=["POST"], endpoint="api_users_deactivate")
    @api_errors
    def api_users_deactivate(user_id: int):
        container.user_service.deactivate(user_id)
        return ok(message="Employee deactivated")

    @app.route("/api/users/<int:user_id>/activate", methods=["POST"], endpoint="api_users_activate")
    @api_errors
    def api_users_activate(user_id: int):
        container.user_service.activate(user_id)
        return ok(message="Employee activated")

    @app.route("/api/users/<int:user_id>/position", methods=["POST"], endpoint="api_users_position")
    @api_errors
    def api_users_position(user_id: int):
        container.user_service.assign_position(user_id, get_text(json_body(), "position", ""))
        return ok(message="Position assigned")

    @app.route("/api/users/invite", methods=["POST"], endpoint="api_users_invite")
    @api_errors
    def api_users_invite():
        data = json_body()
        code = container.user_service.generate_invite(get_text(data, "email", ""), get_text(data, "position"))
        return ok({"inviteCode": code}, message="Invite generated", status=201)
