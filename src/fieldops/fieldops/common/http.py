"""JSON envelope and error mapping shared by the API controllers."""

from __future__ import annotations

import logging
from datetime import date
from functools import wraps
from typing import Any, Dict, Optional

from flask import jsonify, request

from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from .datetime_utils import parse_iso_date, parse_iso_datetime
from .serialization import to_jsonable

logger = logging.getLogger(__name__)

GENERIC_ERROR = "An internal error occurred. Please try again later."


def ok(data: Any = None, *, message: Optional[str] = None, status: int = 200):
    body: Dict[str, Any] = {"success": True}
    if message:
        body["message"] = message
    if data is not None:
        body["data"] = to_jsonable(data)
    return jsonify(body), status


def fail(message: str, status: int, *, code: Optional[str] = None):
    body: Dict[str, Any] = {"success": False, "message": message}
    if code:
        body["code"] = code
    return jsonify(body), status


def api_errors(view):
    """Map domain exceptions raised by a JSON view onto HTTP responses."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        try:
            return view(*args, **kwargs)
        except ValidationError as e:
            logger.info("%s rejected: %s", request.endpoint, e)
            return fail(str(e), 400)
        except NotFoundError:
            return fail("Not found", 404)
        except ConflictError as e:
            logger.warning("%s conflict %s: %s", request.endpoint, e.code, e)
            return fail(f"{e.code}: {e}", 409, code=e.code)
        except Exception:
            logger.exception("%s failed", request.endpoint)
            return fail(GENERIC_ERROR, 500)

    return wrapper


def json_body() -> Dict[str, Any]:
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def query_date(name: str) -> Optional[date]:
    value = (request.args.get(name) or "").strip()
    if not value:
        return None
    try:
        # accept a bare date or a full timestamp
        return parse_iso_date(value) if len(value) == 10 else parse_iso_datetime(value).date()
    except ValueError:
        raise ValidationError(f"{name} is not a valid date")


def query_int(name: str) -> Optional[int]:
    value = (request.args.get(name) or "").strip()
    if not value:
        return None
    try:
        return int(value)
    except ValueError:
        raise ValidationError(f"{name} is invalid")
