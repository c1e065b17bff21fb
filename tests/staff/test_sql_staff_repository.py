from __future__ import annotations

import pytest

from conftest import FIXED_NOW, SequentialIds, make_payload

from src.staff_directory.staff_directory.database.bootstrap import apply_schema, list_tables
from src.staff_directory.staff_directory.database.connection import DatabaseConnection, SQLiteConfig
from src.staff_directory.staff_directory.staff.model import StaffSearchParams
from src.staff_directory.staff_directory.staff.service import StaffService
from src.staff_directory.staff_directory.staff.sql_staff_repository import SQLStaffRepository


@pytest.fixture
def repo(tmp_path):
    conn = DatabaseConnection.get_instance(SQLiteConfig(path=tmp_path / "db" / "staff_database.db"))
    apply_schema(conn)
    return SQLStaffRepository(conn)


@pytest.fixture
def service(repo):
    return StaffService(repo, clock=lambda: FIXED_NOW, id_factory=SequentialIds())


def test_schema_is_idempotent(repo, tmp_path):
    conn = DatabaseConnection.get_instance(SQLiteConfig(path=tmp_path / "db" / "staff_database.db"))
    apply_schema(conn)
    assert "staff" in list_tables(conn)


def test_create_and_read_back(service, repo):
    created = service.create_staff(make_payload())
    row = repo.get_by_id(created.id)

    assert row == created
    assert row.basic_salary == 98500.0
    assert row.address_line3 is None
    assert repo.get_by_nic("720734567V").id == created.id
    assert repo.get_by_appointment_number("DFO/VAV/001").id == created.id


def test_list_by_ids_keeps_requested_order(service, repo):
    a = service.create_staff(make_payload())
    b = service.create_staff(make_payload(appointment_number="X/2", full_name="A. Perera", nic_number="853341234V"))

    assert [s.id for s in repo.list_all()] == [b.id, a.id]
    assert [s.id for s in repo.list_by_ids([a.id, "missing", b.id])] == [a.id, b.id]


def test_search_is_case_insensitive_and_anded(service, repo):
    service.create_staff(make_payload())
    service.create_staff(
        make_payload(
            appointment_number="DFO/VAV/014",
            full_name="R. Tharshini",
            gender="Female",
            date_of_birth="1990-08-23",
            nic_number="199073512345",
            salary_code="A1",
            date_of_first_appointment="2015-02-16",
        )
    )

    assert [s.full_name for s in repo.search(StaffSearchParams(search_term="THAR"))] == ["R. Tharshini"]
    assert [s.full_name for s in repo.search(StaffSearchParams(nic_number="907352"))] == ["R. Tharshini"]
    assert repo.search(StaffSearchParams(gender="Female", salary_code="S1")) == []
    assert len(repo.search(StaffSearchParams(age_min=30, age_max=60))) == 2


def test_search_treats_wildcards_literally(service, repo):
    service.create_staff(make_payload())
    service.create_staff(
        make_payload(appointment_number="DFO/VAV/020", full_name="K_Perera 100%", nic_number="853341234V")
    )

    assert [s.full_name for s in repo.search(StaffSearchParams(search_term="_"))] == ["K_Perera 100%"]
    assert [s.full_name for s in repo.search(StaffSearchParams(search_term="%"))] == ["K_Perera 100%"]
    assert repo.search(StaffSearchParams(search_term="!")) == []
    assert repo.search(StaffSearchParams(nic_number="_")) == []
    assert repo.search(StaffSearchParams(nic_number="%")) == []
    assert len(repo.search(StaffSearchParams(search_term="perera"))) == 1


def test_update_and_delete_report_missing_rows(service, repo):
    created = service.create_staff(make_payload())
    data = service.clean(make_payload(full_name="Renamed"))

    assert repo.update(staff_id=created.id, data=data, updated_at="2026-04-01T00:00:00+00:00")
    assert repo.get_by_id(created.id).full_name == "Renamed"
    assert repo.get_by_id(created.id).created_at == created.created_at
    assert not repo.update(staff_id="missing", data=data, updated_at="x")

    assert repo.delete_by_id(created.id)
    assert not repo.delete_by_id(created.id)


def test_count_by_whitelists_columns(service, repo):
    service.create_staff(make_payload())
    assert repo.count_by("designation") == {"District Forest Officer": 1}
    with pytest.raises(ValueError):
        repo.count_by("full_name; DROP TABLE staff")
