from __future__ import annotations

from typing import Any, Dict, List

from flask import Flask, request

from ..common.http import api_errors, json_body, ok
from ..common.payload import get_bool, get_decimal, get_int, get_text, parse_bool
from ..core.constants import DEFAULT_COUNTRY, DEFAULT_GEOFENCE_RADIUS_M
from ..core.exceptions import ValidationError
from ..container import Container
from .model import JobLocation, LocationContact


def _optional_float(data: Dict[str, Any], key: str):
    value = get_decimal(data, key, None)
    return float(value) if value is not None else None


def _location_from(data: Dict[str, Any]) -> JobLocation:
    return JobLocation(
        name=get_text(data, "name", ""),
        address=get_text(data, "address"),
        city=get_text(data, "city"),
        state=get_text(data, "state"),
        zip_code=get_text(data, "zipCode"),
        country=get_text(data, "country", DEFAULT_COUNTRY),
        latitude=_optional_float(data, "latitude"),
        longitude=_optional_float(data, "longitude"),
        radius=get_int(data, "radius", DEFAULT_GEOFENCE_RADIUS_M),
        pool_type=get_text(data, "poolType"),
        pool_size=get_text(data, "poolSize"),
        lockbox_code=get_text(data, "lockboxCode"),
        supervisor_id=get_int(data, "supervisorId"),
        pool_depth_feet=get_int(data, "poolDepthFeet"),
        pool_depth_inches=get_int(data, "poolDepthInches"),
        has_wading_pool=get_bool(data, "hasWadingPool"),
        wading_pool_size_gallons=get_int(data, "wadingPoolSizeGallons"),
        has_spa=get_bool(data, "hasSpa"),
        spa_size_gallons=get_int(data, "spaSizeGallons"),
        notes=get_text(data, "notes"),
        is_active=get_bool(data, "isActive", True),
    )


def _contacts_from(data: Dict[str, Any]) -> List[LocationContact]:
    raw = data.get("contacts") or []
    if not isinstance(raw, list):
        raise ValidationError("contacts must be a list")

    contacts: List[LocationContact] = []
    for item in raw:
        if not isinstance(item, dict):
            raise ValidationError("contacts must be a list of objects")
        contact = LocationContact(
            contact_name=get_text(item, "contactName"),
            contact_phone=get_text(item, "contactPhone"),
            contact_email=get_text(item, "contactEmail"),
            contact_role=get_text(item, "contactRole"),
            is_primary=get_bool(item, "isPrimary"),
        )
        # blank rows from the form are dropped
        if contact.contact_name or contact.contact_phone or contact.contact_email:
            contacts.append(contact)
    return contacts


def register(app: Flask, container: Container) -> None:
    @app.route("/api/locations", methods=["GET"], endpoint="api_locations_list")
    @api_errors
    def api_locations_list():
        active_only = parse_bool(request.args.get("activeOnly"), False)
        return ok(list(container.location_service.list_all(active_only=active_only)))

    @app.route("/api/locations", methods=["POST"], endpoint="api_locations_create")
    @api_errors
    def api_locations_create():
        data = json_body()
        location_id = container.location_service.create(_location_from(data), _contacts_from(data))
        return ok({"locationId": location_id}, message="Location created", status=201)

    @app.route("/api/locations/<int:location_id>", methods=["GET"], endpoint="api_locations_get")
    @api_errors
    def api_locations_get(location_id: int):
        return ok(container.location_service.get(location_id))

    @app.route("/api/locations/<int:location_id>", methods=["PUT"], endpoint="api_locations_update")
    @api_errors
    def api_locations_update(location_id: int):
        data = json_body()
        body_id = get_int(data, "locationId")
        if body_id is not None and body_id != location_id:
            raise ValidationError("Location id mismatch")
        container.location_service.update(location_id, _location_from(data), _contacts_from(data))
        return ok(message="Location updated")

    @app.route("/api/locations/<int:location_id>", methods=["DELETE"], endpoint="api_locations_delete")
    @api_errors
    def api_locations_delete(location_id: int):
        container.location_service.delete(location_id)
        return ok(message="Location deleted")
