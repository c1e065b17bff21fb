"""Insert a few demo staff records (skips NICs that already exist)."""

from __future__ import annotations

import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import load_settings

from src.staff_directory.staff_directory.container import build_container_from_settings
from src.staff_directory.staff_directory.database.bootstrap import apply_schema

DEMO_STAFF = [
    {
        "appointment_number": "DFO/VAV/001",
        "full_name": "K. Sivakumar",
        "gender": "Male",
        "date_of_birth": "1972-03-14",
        "nic_number": "720734567V",
        "marital_status": "Married",
        "address_line1": "12, Station Road",
        "address_line2": "Vavuniya",
        "contact_number": "024 222 1234",
        "email": "sivakumar@forest.gov.lk",
        "designation": "District Forest Officer",
        "date_of_first_appointment": "1998-07-01",
        "increment_date": "01-07",
        "salary_code": "S1",
        "basic_salary": 98500,
        "increment_amount": 2450,
    },
    {
        "appointment_number": "DFO/VAV/014",
        "full_name": "R. Tharshini",
        "gender": "Female",
        "date_of_birth": "1990-08-22",
        "nic_number": "199073512345",
        "marital_status": "Single",
        "address_line1": "45/2, Kandy Road",
        "address_line2": "Thandikulam",
        "address_line3": "Vavuniya",
        "contact_number": "077 123 4567",
        "designation": "Management Service Officer",
        "date_of_first_appointment": "2015-02-16",
        "increment_date": "16-02",
        "salary_code": "A1",
        "basic_salary": 45200,
        "increment_amount": 780,
    },
    {
        "appointment_number": "DFO/VAV/027",
        "full_name": "M. N. Fernando",
        "gender": "Male",
        "date_of_birth": "1985-11-30",
        "nic_number": "853341234V",
        "marital_status": "Married",
        "address_line1": "Forest Quarters",
        "address_line2": "Nedunkeni",
        "designation": "Range Forest officer",
        "date_of_first_appointment": "2009-04-01",
        "salary_code": "D2",
        "basic_salary": 58750,
        "increment_amount": 1120,
    },
]


def main() -> None:
    load_dotenv(override=False)
    container = build_container_from_settings(load_settings())
    apply_schema(container.conn)

    service = container.staff_service
    created = 0
    for payload in DEMO_STAFF:
        if service.get_staff_by_nic(payload["nic_number"]):
            continue
        service.create_staff(payload)
        created += 1

    print(f"OK: Seeded {created} staff -> {container.conn.describe()}")


if __name__ == "__main__":
    main()
