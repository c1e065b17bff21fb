from __future__ import annotations

import logging
import re
import uuid
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Callable, Dict, Mapping, Optional, Sequence, Union

from ..common.datetime_utils import (
    calculate_age,
    calculate_retirement_date,
    parse_iso_date,
    parse_rfc3339,
    to_rfc3339,
    utc_now,
)
from ..common.validators import (
    optional_int,
    optional_str,
    require_choice,
    require_non_empty,
    require_non_negative,
    require_pattern,
)
from ..core.constants import DESIGNATIONS, ISO_DATE_FORMAT, SALARY_CODES
from ..core.enums import Gender, MaritalStatus
from ..core.exceptions import NotFoundError, ValidationError
from .model import Staff, StaffData, StaffSearchParams
from .nic import extract_nic_info, normalize_nic
from .photo import normalize_photo
from .repository import StaffRepository

logger = logging.getLogger(__name__)

APPOINTMENT_NUMBER_PATTERN = re.compile(r"^[A-Z0-9/\-]+$")
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
PHONE_PATTERN = re.compile(r"^[\d\s\-\+\(\)]+$")


@dataclass(frozen=True)
class StaffStatistics:
    total: int
    by_designation: Dict[str, int]
    by_gender: Dict[str, int]
    by_salary_code: Dict[str, int]


def _require_date(value: Any, field_name: str) -> date:
    raw = require_non_empty(value, field_name)
    try:
        # Date pickers may send a full ISO timestamp; only its date part counts.
        if len(raw) > 10 and raw[10] in "Tt ":
            return parse_rfc3339(raw).date()
        return parse_iso_date(raw)
    except ValueError:
        raise ValidationError(f"{field_name} must be a date in YYYY-MM-DD format")


def build_search_params(raw: Union[StaffSearchParams, Mapping[str, Any], None]) -> StaffSearchParams:
    """Turn loose filter input (query string, JSON) into StaffSearchParams."""
    if isinstance(raw, StaffSearchParams):
        return raw
    raw = raw or {}

    gender = optional_str(raw.get("gender"))
    if gender and gender not in {g.value for g in Gender}:
        raise ValidationError(f"Unknown gender filter: {gender}")

    age_min = optional_int(raw.get("age_min"), "Minimum age")
    age_max = optional_int(raw.get("age_max"), "Maximum age")
    if age_min is not None and age_max is not None and age_min > age_max:
        raise ValidationError("Minimum age cannot be greater than maximum age")

    nic = optional_str(raw.get("nic_number"))
    return StaffSearchParams(
        search_term=optional_str(raw.get("search_term")),
        designation=optional_str(raw.get("designation")),
        gender=gender,
        age_min=age_min,
        age_max=age_max,
        nic_number=nic.upper() if nic else None,
        salary_code=optional_str(raw.get("salary_code")),
    )


class StaffService:
    """Use cases over the staff registry: CRUD, search and NIC lookup."""

    def __init__(
        self,
        staff: StaffRepository,
        *,
        clock: Callable[[], datetime] = utc_now,
        id_factory: Callable[[], str] = lambda: str(uuid.uuid4()),
    ):
        self._staff = staff
        self._clock = clock
        self._id_factory = id_factory

    def clean(self, payload: Mapping[str, Any]) -> StaffData:
        """Validate and normalize an incoming create/update payload."""
        appointment_number = require_non_empty(payload.get("appointment_number"), "Appointment number").upper()
        require_pattern(appointment_number, "Appointment number", APPOINTMENT_NUMBER_PATTERN)

        full_name = " ".join(require_non_empty(payload.get("full_name"), "Full name").split())

        nic_raw = require_non_empty(payload.get("nic_number"), "NIC number")
        nic_number, nic_number_old = normalize_nic(nic_raw)

        gender = optional_str(payload.get("gender"))
        if gender is None:
            gender = extract_nic_info(nic_number).gender.value
        gender = require_choice(gender, "Gender", [g.value for g in Gender])

        dob = _require_date(payload.get("date_of_birth"), "Date of birth")
        today = self._clock().date()
        if dob > today:
            raise ValidationError("Date of birth cannot be in the future")

        age = optional_int(payload.get("age"), "Age")
        if age is None:
            age = calculate_age(dob, today)
        if age < 0:
            raise ValidationError("Age cannot be negative")

        first_appointment = _require_date(payload.get("date_of_first_appointment"), "Date of first appointment")
        if first_appointment < dob:
            raise ValidationError("Date of first appointment cannot be before date of birth")

        retirement_raw = optional_str(payload.get("date_of_retirement"))
        if retirement_raw:
            retirement = _require_date(retirement_raw, "Date of retirement")
        else:
            retirement = calculate_retirement_date(dob)

        contact_number = optional_str(payload.get("contact_number"))
        if contact_number:
            require_pattern(contact_number, "Contact number", PHONE_PATTERN)

        email = optional_str(payload.get("email"))
        if email:
            require_pattern(email, "Email", EMAIL_PATTERN)

        increment_amount = payload.get("increment_amount")

        return StaffData(
            appointment_number=appointment_number,
            full_name=full_name,
            gender=gender,
            date_of_birth=dob.strftime(ISO_DATE_FORMAT),
            age=age,
            nic_number=nic_number,
            nic_number_old=nic_number_old,
            marital_status=require_choice(payload.get("marital_status"), "Marital status", [m.value for m in MaritalStatus]),
            address_line1=optional_str(payload.get("address_line1")),
            address_line2=optional_str(payload.get("address_line2")),
            address_line3=optional_str(payload.get("address_line3")),
            contact_number=contact_number,
            email=email,
            designation=require_choice(payload.get("designation"), "Designation", DESIGNATIONS),
            date_of_first_appointment=first_appointment.strftime(ISO_DATE_FORMAT),
            date_of_retirement=retirement.strftime(ISO_DATE_FORMAT),
            increment_date=optional_str(payload.get("increment_date")),
            salary_code=require_choice(payload.get("salary_code"), "Salary code", SALARY_CODES),
            basic_salary=require_non_negative(payload.get("basic_salary"), "Basic salary"),
            increment_amount=require_non_negative(
                0 if increment_amount in (None, "") else increment_amount, "Increment amount"
            ),
            image_data=normalize_photo(payload.get("image_data")),
        )

    def _ensure_unique(self, data: StaffData, *, current_id: Optional[str] = None) -> None:
        for nic in filter(None, (data.nic_number, data.nic_number_old)):
            existing = self._staff.get_by_nic(nic)
            if existing and existing.id != current_id:
                raise ValidationError(f"A staff record with NIC {data.nic_number} already exists")

        existing = self._staff.get_by_appointment_number(data.appointment_number)
        if existing and existing.id != current_id:
            raise ValidationError(f"Appointment number {data.appointment_number} is already in use")

    def create_staff(self, payload: Mapping[str, Any]) -> Staff:
        data = self.clean(payload)
        self._ensure_unique(data)

        staff_id = self._id_factory()
        self._staff.create(staff_id=staff_id, data=data, created_at=to_rfc3339(self._clock()))
        logger.info("Created staff %s (%s)", staff_id, data.appointment_number)
        return self.get_staff_by_id(staff_id)

    def get_all_staff(self) -> Sequence[Staff]:
        return self._staff.list_all()

    def get_staff_by_id(self, staff_id: str) -> Staff:
        staff = self._staff.get_by_id(str(staff_id))
        if not staff:
            raise NotFoundError(f"Staff not found: {staff_id}")
        return staff

    def get_staff_by_ids(self, staff_ids: Sequence[str]) -> Sequence[Staff]:
        ids = [str(i) for i in staff_ids]
        found = self._staff.list_by_ids(ids)
        missing = set(ids) - {s.id for s in found}
        if missing:
            raise NotFoundError(f"Staff not found: {', '.join(sorted(missing))}")
        return found

    def update_staff(self, staff_id: str, payload: Mapping[str, Any]) -> Staff:
        self.get_staff_by_id(staff_id)
        data = self.clean(payload)
        self._ensure_unique(data, current_id=staff_id)

        if not self._staff.update(staff_id=staff_id, data=data, updated_at=to_rfc3339(self._clock())):
            raise NotFoundError(f"Staff not found: {staff_id}")
        logger.info("Updated staff %s", staff_id)
        return self.get_staff_by_id(staff_id)

    def delete_staff(self, staff_id: str) -> None:
        if not self._staff.delete_by_id(str(staff_id)):
            raise NotFoundError(f"Staff not found: {staff_id}")
        logger.info("Deleted staff %s", staff_id)

    def search_staff(self, params: Union[StaffSearchParams, Mapping[str, Any], None]) -> Sequence[Staff]:
        params = build_search_params(params)
        if params.is_empty():
            return self._staff.list_all()
        return self._staff.search(params)

    def get_staff_by_nic(self, nic: str) -> Optional[Staff]:
        info = extract_nic_info(nic)
        key = info.new_format if info.is_valid else (nic or "").strip().upper()
        if not key:
            raise ValidationError("NIC number is required")
        return self._staff.get_by_nic(key)

    def statistics(self) -> StaffStatistics:
        by_designation = self._staff.count_by("designation")
        return StaffStatistics(
            total=sum(by_designation.values()),
            by_designation=by_designation,
            by_gender=self._staff.count_by("gender"),
            by_salary_code=self._staff.count_by("salary_code"),
        )
