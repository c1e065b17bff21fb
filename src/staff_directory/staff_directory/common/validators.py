from __future__ import annotations

import re
from typing import Any, Iterable, Optional

from ..core.exceptions import ValidationError


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def optional_str(value: Any) -> Optional[str]:
    """Strip a free-text value; empty strings become None."""
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def require_pattern(value: str, field_name: str, pattern: re.Pattern) -> str:
    if not pattern.match(value):
        raise ValidationError(f"{field_name} is not valid: {value!r}")
    return value


def require_choice(value: Optional[str], field_name: str, choices: Iterable[str]) -> str:
    value = require_non_empty(value, field_name)
    allowed = list(choices)
    if value not in allowed:
        raise ValidationError(f"{field_name} must be one of: {', '.join(allowed)}")
    return value


def require_non_negative(value: Any, field_name: str) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a number")
    if number < 0:
        raise ValidationError(f"{field_name} cannot be negative")
    return number


def optional_int(value: Any, field_name: str) -> Optional[int]:
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a whole number")
