from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence, Tuple

from ..database.base import db_cursor, fetchall, fetchone
from ..database.connection import DatabaseConnection
from .model import STAFF_COLUMNS, Staff, StaffData, StaffSearchParams
from .repository import StaffRepository

SELECT_COLUMNS = ", ".join(("id",) + STAFF_COLUMNS + ("created_at", "updated_at"))

COUNTABLE_COLUMNS = {"designation", "gender", "salary_code", "marital_status"}

# Backslash is a string escape in MySQL but not in SQLite; "!" reads the same in both.
LIKE_ESCAPE = "!"


def contains_pattern(term: str) -> str:
    """LIKE pattern matching ``term`` literally anywhere in the column."""
    for ch in (LIKE_ESCAPE, "%", "_"):
        term = term.replace(ch, LIKE_ESCAPE + ch)
    return f"%{term}%"


class SQLStaffRepository(StaffRepository):
    """Staff repository over a DB-API connection (SQLite or MySQL).

    Both backends share the SQL below; only the parameter placeholder differs.
    """

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory
        self._p = conn_factory.placeholder

    def _select(self, where: str = "", params: Tuple[Any, ...] = (), order: str = "ORDER BY full_name") -> List[Staff]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {SELECT_COLUMNS} FROM staff {where} {order}", params)
            return [Staff.from_row(r) for r in fetchall(cur)]

    def _select_one(self, where: str, params: Tuple[Any, ...]) -> Optional[Staff]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {SELECT_COLUMNS} FROM staff {where}", params)
            row = fetchone(cur)
            return Staff.from_row(row) if row else None

    def create(self, *, staff_id: str, data: StaffData, created_at: str) -> None:
        columns = ("id",) + STAFF_COLUMNS + ("created_at", "updated_at")
        values = (staff_id,) + tuple(getattr(data, c) for c in STAFF_COLUMNS) + (created_at, created_at)
        marks = ", ".join([self._p] * len(columns))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"INSERT INTO staff ({', '.join(columns)}) VALUES ({marks})", values)

    def get_by_id(self, staff_id: str) -> Optional[Staff]:
        return self._select_one(f"WHERE id={self._p}", (staff_id,))

    def get_by_nic(self, nic: str) -> Optional[Staff]:
        return self._select_one(f"WHERE nic_number={self._p} OR nic_number_old={self._p}", (nic, nic))

    def get_by_appointment_number(self, appointment_number: str) -> Optional[Staff]:
        return self._select_one(f"WHERE appointment_number={self._p}", (appointment_number,))

    def list_all(self) -> Sequence[Staff]:
        return self._select()

    def list_by_ids(self, staff_ids: Sequence[str]) -> Sequence[Staff]:
        if not staff_ids:
            return []
        marks = ", ".join([self._p] * len(staff_ids))
        found = {s.id: s for s in self._select(f"WHERE id IN ({marks})", tuple(staff_ids))}
        # Keep the caller's order (selection order in the UI).
        return [found[i] for i in staff_ids if i in found]

    def search(self, params: StaffSearchParams) -> Sequence[Staff]:
        p = self._p
        like = f"LIKE {p} ESCAPE '{LIKE_ESCAPE}'"
        clauses: list[str] = []
        args: list[Any] = []

        if params.search_term:
            term = contains_pattern(params.search_term)
            clauses.append(
                f"(full_name {like} OR appointment_number {like} OR nic_number {like} OR nic_number_old {like})"
            )
            args.extend([term] * 4)

        if params.designation:
            clauses.append(f"designation={p}")
            args.append(params.designation)

        if params.gender:
            clauses.append(f"gender={p}")
            args.append(params.gender)

        if params.age_min is not None:
            clauses.append(f"age >= {p}")
            args.append(int(params.age_min))

        if params.age_max is not None:
            clauses.append(f"age <= {p}")
            args.append(int(params.age_max))

        if params.nic_number:
            nic = contains_pattern(params.nic_number)
            clauses.append(f"(nic_number {like} OR nic_number_old {like})")
            args.extend([nic, nic])

        if params.salary_code:
            clauses.append(f"salary_code={p}")
            args.append(params.salary_code)

        where = ("WHERE " + " AND ".join(clauses)) if clauses else ""
        return self._select(where, tuple(args))

    def update(self, *, staff_id: str, data: StaffData, updated_at: str) -> bool:
        assignments = ", ".join(f"{c}={self._p}" for c in STAFF_COLUMNS)
        values = tuple(getattr(data, c) for c in STAFF_COLUMNS) + (updated_at, staff_id)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"UPDATE staff SET {assignments}, updated_at={self._p} WHERE id={self._p}", values)
            return cur.rowcount > 0

    def delete_by_id(self, staff_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"DELETE FROM staff WHERE id={self._p}", (staff_id,))
            return cur.rowcount > 0

    def count_by(self, column: str) -> Dict[str, int]:
        if column not in COUNTABLE_COLUMNS:
            raise ValueError(f"Unsupported grouping column: {column}")
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {column} AS label, COUNT(*) AS total FROM staff GROUP BY {column} ORDER BY {column}")
            return {r["label"]: int(r["total"]) for r in fetchall(cur)}
