from __future__ import annotations

import pytest

from src.staff_directory.staff_directory.common.api import snake_case_keys, to_snake_case


@pytest.mark.parametrize(
    "key, expected",
    [
        ("fullName", "full_name"),
        ("nicNumberOld", "nic_number_old"),
        ("addressLine1", "address_line1"),
        ("dateOfFirstAppointment", "date_of_first_appointment"),
        ("basic_salary", "basic_salary"),
        ("isBulk", "is_bulk"),
    ],
)
def test_to_snake_case(key, expected):
    assert to_snake_case(key) == expected


def test_snake_case_keys_keeps_values():
    assert snake_case_keys({"staffIds": ["a"], "age": 3}) == {"staff_ids": ["a"], "age": 3}
