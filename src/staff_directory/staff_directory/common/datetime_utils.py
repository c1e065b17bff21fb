from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Optional, Union

from ..core.constants import DISPLAY_DATE_FORMAT, ISO_DATE_FORMAT, RETIREMENT_AGE


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, ISO_DATE_FORMAT).date()


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def to_rfc3339(value: datetime) -> str:
    return value.astimezone(timezone.utc).isoformat()


def parse_rfc3339(value: str) -> datetime:
    # fromisoformat() only learned the trailing "Z" in Python 3.11.
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return datetime.fromisoformat(value)


def format_display_date(value: Union[str, date, None], pattern: str = DISPLAY_DATE_FORMAT) -> str:
    """Format an ISO date (or datetime) for printed documents."""
    if value is None or value == "":
        return "N/A"
    try:
        if isinstance(value, str):
            value = datetime.fromisoformat(value) if "T" in value else parse_iso_date(value)
        return value.strftime(pattern)
    except ValueError:
        return "Invalid Date"


def calculate_age(date_of_birth: date, today: Optional[date] = None) -> int:
    today = today or now_local().date()
    age = today.year - date_of_birth.year
    if (today.month, today.day) < (date_of_birth.month, date_of_birth.day):
        age -= 1
    return age


def calculate_retirement_date(date_of_birth: date, retirement_age: int = RETIREMENT_AGE) -> date:
    year = date_of_birth.year + retirement_age
    try:
        return date_of_birth.replace(year=year)
    except ValueError:
        # 29 February in a non-leap retirement year
        return date(year, 2, 28)
