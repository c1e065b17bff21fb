from __future__ import annotations

from datetime import date, datetime, timezone

import pytest

from src.staff_directory.staff_directory.common.datetime_utils import (
    calculate_age,
    calculate_retirement_date,
    format_display_date,
    parse_rfc3339,
    to_rfc3339,
)


def test_calculate_age_before_and_after_birthday():
    assert calculate_age(date(1990, 8, 23), date(2026, 8, 22)) == 35
    assert calculate_age(date(1990, 8, 23), date(2026, 8, 23)) == 36


def test_retirement_is_sixty_years_after_birth():
    assert calculate_retirement_date(date(1972, 3, 14)) == date(2032, 3, 14)


def test_leap_day_birthday_retires_on_28_february():
    assert calculate_retirement_date(date(2040, 2, 29)) == date(2100, 2, 28)


@pytest.mark.parametrize(
    "value, expected",
    [
        ("1972-03-14", "14-03-1972"),
        ("2026-03-15T09:30:00+00:00", "15-03-2026"),
        (date(2001, 1, 2), "02-01-2001"),
        ("", "N/A"),
        (None, "N/A"),
        ("14/03/1972", "Invalid Date"),
    ],
)
def test_format_display_date(value, expected):
    assert format_display_date(value) == expected


def test_rfc3339_round_trip_accepts_z_suffix():
    stamp = datetime(2026, 3, 15, 9, 30, tzinfo=timezone.utc)
    assert to_rfc3339(stamp) == "2026-03-15T09:30:00+00:00"
    assert parse_rfc3339("2026-03-15T09:30:00Z") == stamp
