from datetime import date, datetime
from decimal import Decimal

from src.fieldops.fieldops.attendance.model import ClockRecord
from src.fieldops.fieldops.common.serialization import camel_case, to_jsonable
from src.fieldops.fieldops.core.enums import EmployeeStatus
from src.fieldops.fieldops.locations.model import JobLocation
from src.fieldops.fieldops.users.model import Employee


def test_camel_case():
    assert camel_case("clock_in_time") == "clockInTime"
    assert camel_case("name") == "name"


def test_clock_record_includes_derived_fields():
    record = ClockRecord(
        record_id=1,
        user_id=7,
        location_id=3,
        clock_in_time=datetime(2026, 2, 2, 8, 40),
        clock_in_latitude=Decimal("30.2672"),
        clock_in_longitude=Decimal("-97.7431"),
        is_late=True,
        late_minutes=40,
    )

    out = to_jsonable(record)

    assert out["clockInTime"] == "2026-02-02T08:40:00"
    assert out["clockInLatitude"] == 30.2672
    assert out["isOpen"] is True
    assert out["statusText"] == "Active"
    assert out["lateStatus"] == "Late (40 min)"
    assert out["clockInLocation"] == "30.267200, -97.743100"


def test_employee_hides_password_hash():
    user = Employee(
        user_id=1,
        first_name="Ana",
        last_name="Lopez",
        email="ana@example.com",
        password_hash="pbkdf2:secret",
        status=EmployeeStatus.TERMINATED,
        hire_date=date(2025, 5, 1),
    )

    out = to_jsonable(user)

    assert "passwordHash" not in out
    assert out["status"] == "Terminated"
    assert out["isActive"] is False
    assert out["fullName"] == "Ana Lopez"
    assert out["displayPosition"] == "Not Assigned"
    assert out["hireDate"] == "2025-05-01"


def test_location_derived_fields():
    site = JobLocation(name="Oak", address="12 Oak St", city="Austin", state="TX", zip_code="73301", pool_depth_feet=5, pool_depth_inches=6)

    out = to_jsonable(site)

    assert out["fullAddress"] == "12 Oak St, Austin, TX 73301, USA"
    assert out["displayPoolDepth"] == "5' 6\""
    assert out["contacts"] == []
    assert to_jsonable(JobLocation(name="x"))["displayPoolDepth"] == "Not specified"
