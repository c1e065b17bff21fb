from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class StaffData:
    """Editable fields of a staff record, already validated and normalized."""

    # Identification & personal details
    appointment_number: str
    full_name: str
    gender: str
    date_of_birth: str
    age: int
    nic_number: str
    nic_number_old: Optional[str]
    marital_status: str
    address_line1: Optional[str]
    address_line2: Optional[str]
    address_line3: Optional[str]
    contact_number: Optional[str]
    email: Optional[str]

    # Employment details
    designation: str
    date_of_first_appointment: str
    date_of_retirement: str
    increment_date: Optional[str]

    # Salary information
    salary_code: str
    basic_salary: float
    increment_amount: float

    # Base64 JPEG
    image_data: Optional[str] = None


@dataclass(frozen=True)
class Staff(StaffData):
    """Domain entity: a stored staff record.

    Plain data object; no DB access code lives here.
    """

    id: str = ""
    created_at: str = ""
    updated_at: str = ""

    @property
    def total_salary(self) -> float:
        return float(self.basic_salary) + float(self.increment_amount)

    @property
    def has_photo(self) -> bool:
        return bool(self.image_data)

    def to_dict(self, *, include_image: bool = True) -> Dict[str, Any]:
        out = asdict(self)
        if not include_image:
            out.pop("image_data", None)
        return out

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "Staff":
        names = {f.name for f in fields(cls)}
        values = {k: v for k, v in row.items() if k in names}
        values["age"] = int(values["age"])
        values["basic_salary"] = float(values["basic_salary"] or 0)
        values["increment_amount"] = float(values["increment_amount"] or 0)
        return cls(**values)


STAFF_COLUMNS = tuple(f.name for f in fields(StaffData))


@dataclass(frozen=True)
class StaffSearchParams:
    search_term: Optional[str] = None
    designation: Optional[str] = None
    gender: Optional[str] = None
    age_min: Optional[int] = None
    age_max: Optional[int] = None
    nic_number: Optional[str] = None
    salary_code: Optional[str] = None

    def is_empty(self) -> bool:
        return all(getattr(self, f.name) in (None, "") for f in fields(self))
