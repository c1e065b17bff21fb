from __future__ import annotations

import base64
import io
from datetime import datetime, timezone
from typing import Dict, List, Optional

import pytest
from PIL import Image

from src.staff_directory.staff_directory.documents.service import DocumentService
from src.staff_directory.staff_directory.staff.model import Staff, StaffData, StaffSearchParams
from src.staff_directory.staff_directory.staff.service import StaffService

FIXED_NOW = datetime(2026, 3, 15, 9, 30, tzinfo=timezone.utc)


class InMemoryStaff:
    """Dict-backed stand-in for SQLStaffRepository."""

    def __init__(self):
        self._rows: Dict[str, Staff] = {}

    def create(self, *, staff_id, data: StaffData, created_at):
        self._rows[staff_id] = Staff(**data.__dict__, id=staff_id, created_at=created_at, updated_at=created_at)

    def get_by_id(self, staff_id) -> Optional[Staff]:
        return self._rows.get(staff_id)

    def get_by_nic(self, nic) -> Optional[Staff]:
        for s in self._rows.values():
            if nic in (s.nic_number, s.nic_number_old):
                return s
        return None

    def get_by_appointment_number(self, appointment_number) -> Optional[Staff]:
        for s in self._rows.values():
            if s.appointment_number == appointment_number:
                return s
        return None

    def list_all(self) -> List[Staff]:
        return sorted(self._rows.values(), key=lambda s: s.full_name)

    def list_by_ids(self, staff_ids) -> List[Staff]:
        return [self._rows[i] for i in staff_ids if i in self._rows]

    def search(self, params: StaffSearchParams) -> List[Staff]:
        def matches(s: Staff) -> bool:
            if params.search_term:
                term = params.search_term.lower()
                haystack = [s.full_name, s.appointment_number, s.nic_number, s.nic_number_old or ""]
                if not any(term in h.lower() for h in haystack):
                    return False
            if params.designation and s.designation != params.designation:
                return False
            if params.gender and s.gender != params.gender:
                return False
            if params.age_min is not None and s.age < params.age_min:
                return False
            if params.age_max is not None and s.age > params.age_max:
                return False
            if params.nic_number and not any(
                params.nic_number in (n or "") for n in (s.nic_number, s.nic_number_old)
            ):
                return False
            if params.salary_code and s.salary_code != params.salary_code:
                return False
            return True

        return [s for s in self.list_all() if matches(s)]

    def update(self, *, staff_id, data: StaffData, updated_at) -> bool:
        current = self._rows.get(staff_id)
        if not current:
            return False
        self._rows[staff_id] = Staff(
            **data.__dict__, id=staff_id, created_at=current.created_at, updated_at=updated_at
        )
        return True

    def delete_by_id(self, staff_id) -> bool:
        return self._rows.pop(staff_id, None) is not None

    def count_by(self, column) -> Dict[str, int]:
        out: Dict[str, int] = {}
        for s in self._rows.values():
            key = getattr(s, column)
            out[key] = out.get(key, 0) + 1
        return out


class SequentialIds:
    def __init__(self):
        self.n = 0

    def __call__(self) -> str:
        self.n += 1
        return f"staff-{self.n}"


def make_payload(**overrides) -> dict:
    payload = {
        "appointment_number": "dfo/vav/001",
        "full_name": "K.  Sivakumar",
        "gender": "Male",
        "date_of_birth": "1972-03-14",
        "nic_number": "720734567v",
        "marital_status": "Married",
        "address_line1": "12, Station Road",
        "address_line2": "Vavuniya",
        "address_line3": "",
        "contact_number": "024 222 1234",
        "email": "sivakumar@forest.gov.lk",
        "designation": "District Forest Officer",
        "date_of_first_appointment": "1998-07-01",
        "increment_date": "01-07",
        "salary_code": "S1",
        "basic_salary": 98500,
        "increment_amount": 2450.5,
    }
    payload.update(overrides)
    return payload


def make_photo_b64(size=(400, 400), fmt="PNG", color=(30, 120, 60)) -> str:
    buf = io.BytesIO()
    Image.new("RGB", size, color).save(buf, format=fmt)
    return base64.b64encode(buf.getvalue()).decode("ascii")


@pytest.fixture
def payload() -> dict:
    return make_payload()


@pytest.fixture
def staff_repo() -> InMemoryStaff:
    return InMemoryStaff()


@pytest.fixture
def staff_service(staff_repo) -> StaffService:
    return StaffService(staff_repo, clock=lambda: FIXED_NOW, id_factory=SequentialIds())


@pytest.fixture
def downloads_dir(tmp_path):
    path = tmp_path / "Downloads"
    path.mkdir()
    return path


@pytest.fixture
def document_service(staff_service, downloads_dir) -> DocumentService:
    return DocumentService(
        staff_service,
        downloads_dir=downloads_dir,
        clock=lambda: datetime(2026, 3, 15, 9, 30),
    )


@pytest.fixture
def app(tmp_path, downloads_dir, monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    from src.staff_directory.staff_directory.main import create_app

    app = create_app({"DATA_DIR": str(tmp_path / "data"), "DOWNLOADS_DIR": str(downloads_dir)})
    return app


@pytest.fixture
def client(app):
    return app.test_client()
