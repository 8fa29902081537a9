from datetime import date, datetime, time
from decimal import Decimal

import pytest

from src.fieldops.fieldops.common.datetime_utils import (
    day_bounds,
    default_range,
    hours_between,
    parse_hhmm,
    parse_iso_datetime,
)
from src.fieldops.fieldops.common.payload import get_bool, get_decimal, get_int, get_optional_decimal, get_str, get_text


def test_bool_accepts_native_and_string_forms():
    data = {"a": True, "b": "true", "c": " FALSE ", "d": "yes", "e": 1}

    assert get_bool(data, "a") is True
    assert get_bool(data, "b") is True
    assert get_bool(data, "c") is False
    assert get_bool(data, "d") is False
    assert get_bool(data, "e") is False
    assert get_bool(data, "missing", None) is None


def test_decimal_accepts_numbers_and_strings():
    data = {"n": 3.5, "s": "7.4", "i": 12, "bad": "abc", "nan": "NaN", "flag": True}

    assert get_decimal(data, "n") == Decimal("3.5")
    assert get_decimal(data, "s") == Decimal("7.4")
    assert get_decimal(data, "i") == Decimal(12)
    assert get_decimal(data, "bad") == Decimal(0)
    assert get_decimal(data, "nan") == Decimal(0)
    assert get_decimal(data, "flag") == Decimal(0)


def test_optional_decimal_keeps_absence_distinct_from_zero():
    assert get_optional_decimal({"salt": None}, "salt") is None
    assert get_optional_decimal({}, "salt") is None
    assert get_optional_decimal({"salt": 0}, "salt") == Decimal(0)


def test_int_and_text():
    assert get_int({"id": "42"}, "id") == 42
    assert get_int({"id": 4.5}, "id") is None
    assert get_int(None, "id", 0) == 0
    assert get_text({"t": "  hi "}, "t") == "hi"
    assert get_text({"t": "   "}, "t", "dflt") == "dflt"
    assert get_text({"t": {"x": 1}}, "t") is None


def test_hours_between_is_exact():
    start = datetime(2026, 2, 2, 8, 40)

    assert hours_between(start, datetime(2026, 2, 2, 17, 0)) == Decimal(25) / Decimal(3)
    assert hours_between(start, start.replace(minute=55)) == Decimal("0.25")


def test_day_bounds_and_default_range():
    start, end = day_bounds(date(2026, 2, 2))

    assert start == datetime(2026, 2, 2)
    assert end == datetime(2026, 2, 3)
    assert default_range(today=date(2026, 3, 31)) == (date(2026, 3, 1), date(2026, 3, 31))
    assert default_range(date(2026, 1, 1), None, today=date(2026, 3, 31)) == (date(2026, 1, 1), date(2026, 3, 31))


def test_parse_iso_datetime_normalizes_to_naive_utc():
    assert parse_iso_datetime("2026-02-02T10:40:00+02:00") == datetime(2026, 2, 2, 8, 40)
    assert parse_iso_datetime("2026-02-02T08:40") == datetime(2026, 2, 2, 8, 40)


def test_parse_hhmm():
    assert parse_hhmm("08:05") == time(8, 5)
    with pytest.raises(ValueError):
        parse_hhmm("8am")


def test_str_ignores_non_string_scalars():
    data = {"t": " pump check ", "flag": True, "n": 12, "blank": " "}

    assert get_str(data, "t") == "pump check"
    assert get_str(data, "flag") is None
    assert get_str(data, "n") is None
    assert get_str(data, "blank", "dflt") == "dflt"
