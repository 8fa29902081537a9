from __future__ import annotations

from datetime import timedelta

from flask import Flask

from ..common.datetime_utils import parse_hhmm, parse_iso_date, today_utc
from ..common.http import api_errors, json_body, ok, query_date, query_int
from ..common.payload import get_int, get_text
from ..core.exceptions import ValidationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/schedules", methods=["GET"], endpoint="api_schedules_list")
    @api_errors
    def api_schedules_list():
        today = today_utc()
        start = query_date("startDate") or today
        end = query_date("endDate") or (start + timedelta(days=7))
        entries = container.schedule_service.list_range(start=start, end=end, user_id=query_int("userId"))
        return ok(list(entries))

    @app.route("/api/schedules", methods=["POST"], endpoint="api_schedules_assign")
    @api_errors
    def api_schedules_assign():
        data = json_body()
        try:
            work_date = parse_iso_date(get_text(data, "workDate") or "")
            start_time = parse_hhmm(get_text(data, "startTime") or "")
            end_time = parse_hhmm(get_text(data, "endTime") or "")
        except ValueError:
            raise ValidationError("workDate (YYYY-MM-DD), startTime and endTime (HH:MM) are required")

        schedule_id = container.schedule_service.assign(
            user_id=get_int(data, "userId", 0),
            location_id=get_int(data, "locationId", 0),
            work_date=work_date,
            start_time=start_time,
            end_time=end_time,
            note=get_text(data, "note"),
        )
        return ok({"scheduleId": schedule_id}, message="Schedule saved", status=201)

    @app.route("/api/schedules/<int:schedule_id>", methods=["DELETE"], endpoint="api_schedules_delete")
    @api_errors
    def api_schedules_delete(schedule_id: int):
        container.schedule_service.delete(schedule_id=schedule_id)
        return ok(message="Schedule deleted")
