"""JSON envelope helpers shared by the API controllers."""

from __future__ import annotations

import logging
import re
from functools import wraps
from typing import Any, Dict, Mapping

from flask import jsonify, request

from ..core.exceptions import ConfigurationError, DocumentError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])([A-Z])")


def to_snake_case(key: str) -> str:
    """'nicNumberOld' -> 'nic_number_old', 'addressLine1' -> 'address_line1'."""
    return _CAMEL_BOUNDARY.sub(r"_\1", key).lower()


def snake_case_keys(payload: Mapping[str, Any]) -> Dict[str, Any]:
    return {to_snake_case(str(k)): v for k, v in payload.items()}


def json_payload() -> Dict[str, Any]:
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return snake_case_keys(data)


def ok(data: Any = None, **extra: Any):
    body = {"success": True, "data": data}
    body.update(extra)
    return jsonify(body)


def fail(operation: str, error: Exception, status: int):
    return jsonify({"success": False, "message": f"Failed to {operation}: {error}"}), status


def api_operation(operation: str):
    """Translate domain exceptions raised by a view into JSON error envelopes."""

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            try:
                return view(*args, **kwargs)
            except ValidationError as e:
                return fail(operation, e, 400)
            except NotFoundError as e:
                return fail(operation, e, 404)
            except (DocumentError, ConfigurationError) as e:
                logger.error("Failed to %s: %s", operation, e)
                return fail(operation, e, 500)
            except Exception as e:
                logger.exception("Unexpected error while trying to %s", operation)
                return fail(operation, e, 500)

        return wrapper

    return decorator
