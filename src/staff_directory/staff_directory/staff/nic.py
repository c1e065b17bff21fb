"""Sri Lankan National Identity Card (NIC) numbers.

Two formats are in circulation:

- old: ``YY DDD SSS C`` followed by ``V`` or ``X`` (10 characters)
- new: ``YYYY DDD SSSS C`` (12 digits)

``DDD`` is the day of the birth year; 500 is added for women.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional, Tuple

from ..core.enums import Gender
from ..core.exceptions import ValidationError

NIC_OLD_PATTERN = re.compile(r"^\d{9}[VX]$")
NIC_NEW_PATTERN = re.compile(r"^\d{12}$")

FEMALE_DAY_OFFSET = 500


@dataclass(frozen=True)
class NICInfo:
    is_valid: bool
    is_old_format: bool
    new_format: Optional[str] = None
    old_format: Optional[str] = None
    birth_year: Optional[int] = None
    day_of_year: Optional[int] = None
    gender: Optional[Gender] = None
    serial: Optional[str] = None
    check_digit: Optional[str] = None


def clean_nic(nic: str) -> str:
    return (nic or "").strip().upper()


def validate_nic(nic: str) -> Tuple[bool, bool]:
    """Return (is_valid, is_old_format)."""
    value = clean_nic(nic)
    if NIC_OLD_PATTERN.match(value):
        return True, True
    if NIC_NEW_PATTERN.match(value):
        return True, False
    return False, False


def _full_year(yy: str) -> int:
    year = int(yy)
    return 2000 + year if 0 <= year <= 30 else 1900 + year


def convert_old_to_new(old_nic: str) -> Optional[str]:
    value = clean_nic(old_nic)
    if not NIC_OLD_PATTERN.match(value):
        return None
    yy, ddd, sss, c = value[0:2], value[2:5], value[5:8], value[8:9]
    return f"{_full_year(yy)}{ddd}0{sss}{c}"


def _split_day(ddd: str) -> Tuple[int, Gender]:
    day = int(ddd)
    if day > FEMALE_DAY_OFFSET:
        return day - FEMALE_DAY_OFFSET, Gender.FEMALE
    return day, Gender.MALE


def extract_nic_info(nic: str) -> NICInfo:
    value = clean_nic(nic)
    is_valid, is_old = validate_nic(value)
    if not is_valid:
        return NICInfo(is_valid=False, is_old_format=False)

    if is_old:
        yy, ddd, sss, c = value[0:2], value[2:5], value[5:8], value[8:9]
        day, gender = _split_day(ddd)
        return NICInfo(
            is_valid=True,
            is_old_format=True,
            new_format=convert_old_to_new(value),
            old_format=value,
            birth_year=_full_year(yy),
            day_of_year=day,
            gender=gender,
            serial=sss,
            check_digit=c,
        )

    yyyy, ddd, ssss, c = value[0:4], value[4:7], value[7:11], value[11:12]
    day, gender = _split_day(ddd)
    return NICInfo(
        is_valid=True,
        is_old_format=False,
        new_format=value,
        old_format=f"{yyyy[2:4]}{ddd}{ssss[1:4]}{c}V",
        birth_year=int(yyyy),
        day_of_year=day,
        gender=gender,
        serial=ssss,
        check_digit=c,
    )


def normalize_nic(nic: str) -> Tuple[str, Optional[str]]:
    """Return (new_format, old_format) for storage."""
    info = extract_nic_info(nic)
    if not info.is_valid or not info.new_format:
        raise ValidationError("Invalid NIC number")
    return info.new_format, info.old_format
