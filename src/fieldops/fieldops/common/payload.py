"""Tolerant readers for mobile-submitted key/value payloads.

Mobile clients send checklist values as JSON booleans/numbers or as their string
forms ("true", "3.5"). These helpers never raise: absent, null or unparseable
values fall back to the caller's default.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any, Mapping, Optional, TypeVar

T = TypeVar("T")

_TRUE = {"true"}
_FALSE = {"false"}


def _lookup(data: Optional[Mapping[str, Any]], key: str) -> Any:
    if not data:
        return None
    return data.get(key)


def parse_bool(value: Any, default: T = False) -> bool | T:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        v = value.strip().lower()
        if v in _TRUE:
            return True
        if v in _FALSE:
            return False
    return default


def parse_decimal(value: Any, default: T = Decimal(0)) -> Decimal | T:
    # bool is an int subclass but never a reading
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, Decimal):
        return value if value.is_finite() else default
    if isinstance(value, int):
        return Decimal(value)
    if isinstance(value, (float, str)):
        try:
            parsed = Decimal(str(value).strip())
        except InvalidOperation:
            return default
        return parsed if parsed.is_finite() else default
    return default


def get_bool(data: Optional[Mapping[str, Any]], key: str, default: T = False) -> bool | T:
    return parse_bool(_lookup(data, key), default)


def get_decimal(data: Optional[Mapping[str, Any]], key: str, default: T = Decimal(0)) -> Decimal | T:
    return parse_decimal(_lookup(data, key), default)


def get_optional_decimal(data: Optional[Mapping[str, Any]], key: str) -> Optional[Decimal]:
    """Nullable reading: 'not measured' stays None instead of becoming 0."""
    return parse_decimal(_lookup(data, key), None)


def get_int(data: Optional[Mapping[str, Any]], key: str, default: Optional[int] = None) -> Optional[int]:
    value = parse_decimal(_lookup(data, key), None)
    if value is None or value != value.to_integral_value():
        return default
    return int(value)


def get_text(data: Optional[Mapping[str, Any]], key: str, default: Optional[str] = None) -> Optional[str]:
    value = _lookup(data, key)
    if value is None or isinstance(value, (dict, list)):
        return default
    text = str(value).strip()
    return text or default


def get_str(data: Optional[Mapping[str, Any]], key: str, default: Optional[str] = None) -> Optional[str]:
    """Free text only: numbers and booleans are treated as absent."""
    value = _lookup(data, key)
    if not isinstance(value, str):
        return default
    return value.strip() or default
