"""Tabular staff exports (CSV / Excel)."""

from __future__ import annotations

import csv
import io
from typing import Any, Dict, List, Sequence

import pandas as pd

from ..staff.model import Staff
from .formatting import join_address

EXPORT_FIELDS = [
    "appointment_number",
    "full_name",
    "gender",
    "date_of_birth",
    "age",
    "nic_number",
    "nic_number_old",
    "marital_status",
    "address",
    "contact_number",
    "email",
    "designation",
    "date_of_first_appointment",
    "date_of_retirement",
    "increment_date",
    "salary_code",
    "basic_salary",
    "increment_amount",
    "total_salary",
]


def staff_rows(staff_list: Sequence[Staff]) -> List[Dict[str, Any]]:
    rows = []
    for s in staff_list:
        row = s.to_dict(include_image=False)
        row["address"] = join_address(s, default="")
        row["total_salary"] = s.total_salary
        rows.append({k: ("" if row.get(k) is None else row[k]) for k in EXPORT_FIELDS})
    return rows


def to_csv_bytes(rows: Sequence[Dict[str, Any]]) -> bytes:
    out = io.StringIO()
    writer = csv.DictWriter(out, fieldnames=EXPORT_FIELDS)
    writer.writeheader()
    for row in rows:
        writer.writerow(row)
    # BOM so Excel opens Sinhala/Tamil names correctly
    return out.getvalue().encode("utf-8-sig")


def to_xlsx_bytes(rows: Sequence[Dict[str, Any]]) -> bytes:
    df = pd.DataFrame(list(rows), columns=EXPORT_FIELDS)
    output = io.BytesIO()
    with pd.ExcelWriter(output, engine="openpyxl") as writer:
        df.to_excel(writer, index=False, sheet_name="Staff")
    return output.getvalue()
