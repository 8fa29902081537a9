from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from flask import Flask, flash, redirect, render_template, request, url_for

from ..common.datetime_utils import default_range, parse_iso_datetime, today_utc
from ..common.http import api_errors, json_body, ok, query_date, query_int
from ..common.payload import get_decimal, get_int
from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from ..container import Container
from ..locations.geofence import Coordinate

logger = logging.getLogger(__name__)


def _coordinate_from(data: Dict[str, Any]) -> Optional[Coordinate]:
    lat = get_decimal(data, "latitude", None)
    lon = get_decimal(data, "longitude", None)
    if lat is None or lon is None:
        return None
    return Coordinate(latitude=float(lat), longitude=float(lon))


def _form_datetime(name: str, *, required: bool):
    value = (request.form.get(name) or "").strip()
    if not value:
        if required:
            raise ValidationError(f"{name} is required")
        return None
    try:
        return parse_iso_datetime(value)
    except ValueError:
        raise ValidationError(f"{name} is not a valid date/time")


def register(app: Flask, container: Container) -> None:
    # ===== Clock board (forms) =====

    @app.route("/Clock", methods=["GET"], endpoint="clock_index")
    def clock_index():
        try:
            context = {
                "active_shifts": container.attendance_service.get_active_shifts(),
                "todays_records": container.attendance_service.get_todays_records(),
                "users": container.user_service.list_users(active=True),
                "locations": container.location_service.list_all(active_only=True),
                "policy": container.attendance_service.policy,
            }
        except Exception:
            logger.exception("Error loading clock board")
            flash("Error loading clock data. Please try again.", "danger")
            context = {"active_shifts": [], "todays_records": [], "users": [], "locations": [], "policy": None}
        return render_template("clock/index.html", active_page="clock", **context)

    @app.route("/Clock/ClockIn", methods=["POST"], endpoint="clock_clock_in")
    def clock_clock_in():
        try:
            container.attendance_service.clock_in(
                int(request.form.get("userId") or 0),
                int(request.form.get("locationId") or 0),
            )
            flash("Clocked in successfully!", "success")
        except (ValidationError, ConflictError) as e:
            flash(str(e), "warning")
        except ValueError:
            flash("Employee and location are required", "warning")
        except Exception:
            logger.exception("Error clocking in user %s", request.form.get("userId"))
            flash("Error clocking in. Please try again.", "danger")
        return redirect(url_for("clock_index"))

    @app.route("/Clock/ClockOut", methods=["POST"], endpoint="clock_clock_out")
    def clock_clock_out():
        try:
            container.attendance_service.clock_out(int(request.form.get("recordId") or 0))
            flash("Clocked out successfully!", "success")
        except (ValidationError, ConflictError, NotFoundError) as e:
            flash(str(e), "warning")
        except ValueError:
            flash("Record is required", "warning")
        except Exception:
            logger.exception("Error clocking out record %s", request.form.get("recordId"))
            flash("Error clocking out. Please try again.", "danger")
        return redirect(url_for("clock_index"))

    @app.route("/Clock/EditRecord/<int:record_id>", methods=["POST"], endpoint="clock_edit_record")
    def clock_edit_record(record_id: int):
        try:
            container.attendance_service.edit_record(
                record_id,
                clock_in_time=_form_datetime("clockInTime", required=True),
                clock_out_time=_form_datetime("clockOutTime", required=False),
                location_id=int(request.form.get("locationId") or 0),
            )
            flash("Clock record updated successfully.", "success")
        except (ValidationError, ConflictError, NotFoundError) as e:
            flash(str(e), "warning")
        except ValueError:
            flash("Location is required", "warning")
        except Exception:
            logger.exception("Error updating clock record %s", record_id)
            flash("Error updating record.", "danger")
        return redirect(url_for("clock_index"))

    # ===== Mobile / JSON =====

    @app.route("/api/clock/clock-in", methods=["POST"], endpoint="api_clock_in")
    @api_errors
    def api_clock_in():
        data = json_body()
        record = container.attendance_service.clock_in(
            get_int(data, "userId", 0),
            get_int(data, "locationId", 0),
            coordinate=_coordinate_from(data),
        )
        return ok(record, message="Clocked in successfully", status=201)

    @app.route("/api/clock/clock-out", methods=["POST"], endpoint="api_clock_out")
    @api_errors
    def api_clock_out():
        data = json_body()
        record = container.attendance_service.clock_out(
            get_int(data, "recordId", 0),
            coordinate=_coordinate_from(data),
        )
        return ok(record, message="Clocked out successfully")

    @app.route("/api/clock/active", methods=["GET"], endpoint="api_clock_active")
    @api_errors
    def api_clock_active():
        return ok(list(container.attendance_service.get_active_shifts()))

    @app.route("/api/clock/history", methods=["GET"], endpoint="api_clock_history")
    @api_errors
    def api_clock_history():
        user_id = query_int("userId")
        if not user_id:
            raise ValidationError("userId is required")
        start, end = default_range(query_date("startDate"), query_date("endDate"))
        return ok(container.attendance_service.work_history(user_id, start, end))

    @app.route("/api/clock/day", methods=["GET"], endpoint="api_clock_day")
    @api_errors
    def api_clock_day():
        day = query_date("date") or today_utc()
        return ok(container.attendance_service.day_summary(day))
