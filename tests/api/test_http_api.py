from __future__ import annotations

from datetime import datetime

import pytest

from src.fieldops.fieldops.attendance import service as attendance_service
from src.fieldops.fieldops.main import create_app
from tests.fakes import employee, in_memory_container, location, schedule


@pytest.fixture
def container():
    return in_memory_container(users=[employee(7)], locations=[location(3)], schedules=[schedule()])


@pytest.fixture
def client(container):
    app = create_app(container)
    return app.test_client()


def _at(monkeypatch, when: datetime):
    monkeypatch.setattr(attendance_service, "now_utc", lambda: when)


def test_clock_in_and_out_over_json(client, monkeypatch):
    _at(monkeypatch, datetime(2026, 2, 2, 8, 40))
    resp = client.post("/api/clock/clock-in", json={"userId": 7, "locationId": 3})

    assert resp.status_code == 201
    body = resp.get_json()
    assert body["success"] is True
    assert body["data"]["isLate"] is True
    assert body["data"]["lateMinutes"] == 40
    record_id = body["data"]["recordId"]

    active = client.get("/api/clock/active").get_json()["data"]
    assert [r["recordId"] for r in active] == [record_id]

    _at(monkeypatch, datetime(2026, 2, 2, 17, 0))
    resp = client.post("/api/clock/clock-out", json={"recordId": record_id})

    assert resp.status_code == 200
    data = resp.get_json()["data"]
    assert data["totalHours"] == pytest.approx(25 / 3)
    assert data["statusText"] == "Completed"


def test_conflicts_map_to_409_with_code(client, monkeypatch):
    _at(monkeypatch, datetime(2026, 2, 2, 8, 40))
    client.post("/api/clock/clock-in", json={"userId": 7, "locationId": 3})

    resp = client.post("/api/clock/clock-in", json={"userId": 7, "locationId": 3})

    assert resp.status_code == 409
    body = resp.get_json()
    assert body["success"] is False
    assert body["code"] == "ALREADY_CLOCKED_IN"
    assert body["message"].startswith("ALREADY_CLOCKED_IN")


def test_unknown_record_is_404(client):
    resp = client.post("/api/clock/clock-out", json={"recordId": 999})

    assert resp.status_code == 404
    assert resp.get_json() == {"success": False, "message": "Not found"}


def test_validation_is_400(client):
    resp = client.post("/api/clock/clock-in", json={"userId": 99, "locationId": 3})

    assert resp.status_code == 400
    assert resp.get_json()["message"] == "Employee does not exist"


def test_non_object_body_is_400(client):
    resp = client.post("/api/checklist/submit", json=[1, 2])

    assert resp.status_code == 400


def test_history_requires_user(client):
    assert client.get("/api/clock/history").status_code == 400
    resp = client.get("/api/clock/history?userId=7&startDate=2026-02-01&endDate=2026-02-28")
    assert resp.status_code == 200
    assert resp.get_json()["data"]["totalDays"] == 0


def test_checklist_submit_and_fetch(client):
    resp = client.post(
        "/api/checklist/submit",
        json={
            "userId": 7,
            "locationId": 3,
            "checklistData": {"poolVacuumed": True, "cleanedCartridges": "na"},
            "chemicalReadings": [{"chlorine": 3.5, "phLevel": 7.4}],
        },
    )

    assert resp.status_code == 200
    created = resp.get_json()["data"]
    assert created["readingsSaved"] == 1
    assert created["failedReadings"] == []

    view = client.get(f"/api/checklist/{created['checklistId']}").get_json()["data"]
    assert view["completionPercentage"] == 8
    assert view["checklistData"]["cleanedCartridges"] == "na"
    assert view["chemicalReadings"][0]["chlorine"] == 3.5
    assert view["chemicalReadings"][0]["saltLevel"] is None


def test_failed_reading_hides_storage_detail(client, container):
    container.reports_repo.fail_reading_at = {0}

    resp = client.post(
        "/api/checklist/submit",
        json={"userId": 7, "locationId": 3, "chemicalReadings": [{"chlorine": 2}, {"chlorine": 3}]},
    )

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["data"]["readingsSaved"] == 1
    assert body["data"]["failedReadings"] == [{"index": 0, "error": "Chemical reading could not be saved"}]
    assert "1 chemical reading(s) were not saved" in body["message"]
    assert b"Data too long" not in resp.data
    assert b"body_of_water" not in resp.data


def test_audit_submit_and_fetch(client):
    resp = client.post(
        "/api/safety-audit/submit",
        json={"userId": 7, "locationId": 3, "auditType": "Supervisor", "auditData": {"poolOpen": True}},
    )

    body = resp.get_json()
    assert body["message"] == "Supervisor submitted successfully"
    view = client.get(f"/api/safety-audit/{body['data']['auditId']}").get_json()["data"]
    assert view["auditType"] == "Supervisor"
    assert view["safetyCompliancePercentage"] == 10
    assert view["auditData"]["poolOpen"] is True
    assert view["auditData"]["aedPresent"] is None

    assert client.get("/api/safety-audit/types").get_json()["data"] == ["Supervisor", "Manager", "Safety Audit"]


def test_user_payload_has_no_password_hash(client):
    data = client.get("/api/users/7").get_json()["data"]

    assert data["fullName"] == "Ana Lopez"
    assert "passwordHash" not in data


def test_schedule_assign_and_list(client):
    resp = client.post(
        "/api/schedules",
        json={"userId": 8, "locationId": 3, "workDate": "2026-02-05", "startTime": "07:30", "endTime": "15:00"},
    )
    assert resp.status_code == 201

    entries = client.get("/api/schedules?startDate=2026-02-01&userId=8").get_json()["data"]
    assert [(e["workDate"], e["startTime"]) for e in entries] == [("2026-02-05", "07:30:00")]


def test_clock_board_form_redirects_with_flash(client, monkeypatch):
    _at(monkeypatch, datetime(2026, 2, 2, 8, 40))
    resp = client.post("/Clock/ClockIn", data={"userId": "7", "locationId": "3"})

    assert resp.status_code == 302
    assert resp.headers["Location"].endswith("/Clock")

    resp = client.post("/Clock/ClockIn", data={"userId": "7", "locationId": "3"}, follow_redirects=True)
    assert resp.status_code == 200
    assert b"already clocked in" in resp.data
