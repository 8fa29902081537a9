from __future__ import annotations

import dataclasses
from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum
from typing import Any


def camel_case(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part[:1].upper() + part[1:] for part in rest)


def to_jsonable(value: Any) -> Any:
    """Convert domain objects into JSON-ready structures.

    Dataclass fields become camelCase keys. Names listed in a model's
    `json_properties` class attribute (derived properties) are emitted too,
    fields listed in `json_exclude` are left out.
    Decimals become floats at this boundary only.
    """

    if isinstance(value, Enum):
        return value.value
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, (date, time)):
        return value.isoformat()
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        hidden = getattr(value, "json_exclude", ())
        out = {
            camel_case(f.name): to_jsonable(getattr(value, f.name))
            for f in dataclasses.fields(value)
            if f.name not in hidden
        }
        for prop in getattr(value, "json_properties", ()):
            out[camel_case(prop)] = to_jsonable(getattr(value, prop))
        return out
    if isinstance(value, dict):
        return {str(k): to_jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [to_jsonable(v) for v in value]
    raise TypeError(f"Cannot serialize {type(value)!r}")
