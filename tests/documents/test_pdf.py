from __future__ import annotations

import io
from datetime import datetime

import pytest
from reportlab.lib.pagesizes import A4, landscape, portrait

from conftest import make_payload, make_photo_b64

from src.staff_directory.staff_directory.core.exceptions import DocumentError
from src.staff_directory.staff_directory.documents import pdf
from src.staff_directory.staff_directory.documents.pdf import (
    NumberedCanvas,
    render_directory_pdf,
    render_staff_pdf,
)

GENERATED = datetime(2026, 3, 15, 9, 30)


def _many_staff(staff_service, n):
    for i in range(n):
        staff_service.create_staff(
            make_payload(
                appointment_number=f"DFO/VAV/{i:03d}",
                full_name=f"Officer Number {i:03d} With A Rather Long Family Name",
                nic_number=f"72{100 + i:03d}{i:03d}1V",
            )
        )
    return staff_service.get_all_staff()


class RecordingTable(pdf._DirectoryTable):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.header_pages = []
        self.row_pages = []

    def draw_table_header(self):
        self.header_pages.append(self.cursor.page_number)
        super().draw_table_header()

    def draw_row(self, index, staff):
        super().draw_row(index, staff)
        assert self.cursor.y >= self.geometry.bottom
        self.row_pages.append(self.cursor.page_number)


class TextRecordingCanvas(NumberedCanvas):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.drawn = []

    def drawString(self, x, y, text, *args, **kwargs):
        self.drawn.append((y, text))
        return super().drawString(x, y, text, *args, **kwargs)


def test_staff_pdf_is_a_pdf(staff_service):
    staff = staff_service.create_staff(make_payload(image_data=make_photo_b64()))
    data = render_staff_pdf(staff, generated_at=GENERATED)
    assert data.startswith(b"%PDF")
    assert len(data) > 1000


def test_staff_pdf_without_photo_and_with_long_address(staff_service):
    staff = staff_service.create_staff(make_payload(address_line1="Forest Quarters, " * 30))
    assert render_staff_pdf(staff).startswith(b"%PDF")


def test_staff_sheet_rows_stay_inside_margins(staff_service):
    staff = staff_service.create_staff(make_payload(address_line1="Forest Quarters, " * 80))
    c = NumberedCanvas(io.BytesIO(), pagesize=portrait(A4))
    sheet = pdf._StaffSheet(c, staff, "Divisional Forest Office", "Vavuniya, Sri Lanka")

    draw_row = sheet.draw_row

    def checked(label, value, *, bold=False):
        draw_row(label, value, bold=bold)
        assert sheet.cursor.y >= sheet.geometry.bottom

    sheet.draw_row = checked
    sheet.render()
    assert sheet.cursor.page_number >= 2
    assert len(c._saved_page_states) == sheet.cursor.page_number


def test_staff_sheet_continues_a_page_tall_row(staff_service):
    staff = staff_service.create_staff(make_payload(address_line1="Forest Quarters, " * 300))
    c = TextRecordingCanvas(io.BytesIO(), pagesize=portrait(A4))
    sheet = pdf._StaffSheet(c, staff, "Divisional Forest Office", "Vavuniya, Sri Lanka")
    sheet.render()

    assert sheet.cursor.page_number >= 2
    assert all(y >= sheet.geometry.bottom for y, _ in c.drawn)
    labels = [text for _, text in c.drawn]
    assert labels.count("Address:") == 1
    assert "Address (cont.):" in labels
    assert "Total Salary:" in labels


def test_directory_repeats_header_on_every_page(staff_service):
    staff_list = _many_staff(staff_service, 60)
    c = NumberedCanvas(io.BytesIO(), pagesize=landscape(A4))
    table = RecordingTable(c, staff_list, "Divisional Forest Office", "Vavuniya, Sri Lanka", GENERATED)
    table.render()

    pages = len(c._saved_page_states)
    assert pages >= 2
    assert table.header_pages == sorted(set(table.row_pages))
    assert len(table.row_pages) == 60
    assert table.row_pages == sorted(table.row_pages)


def test_directory_header_only_on_pages_with_rows(staff_service):
    staff_list = _many_staff(staff_service, 70)
    for n in range(1, 71):
        c = NumberedCanvas(io.BytesIO(), pagesize=landscape(A4))
        table = RecordingTable(c, staff_list[:n], "Divisional Forest Office", "Vavuniya, Sri Lanka", GENERATED)
        table.render()

        pages = len(c._saved_page_states)
        assert table.header_pages == sorted(set(table.row_pages)), n
        assert pages in (table.row_pages[-1], table.row_pages[-1] + 1), n
        assert table.cursor.y >= table.geometry.bottom, n


def test_directory_pdf_bytes(staff_service):
    data = render_directory_pdf(_many_staff(staff_service, 3), generated_at=GENERATED)
    assert data.startswith(b"%PDF")


def test_directory_pdf_requires_staff():
    with pytest.raises(DocumentError, match="No staff data to export"):
        render_directory_pdf([])


def test_render_failures_are_wrapped(staff_service, monkeypatch):
    staff = staff_service.create_staff(make_payload())

    def boom(self):
        raise RuntimeError("disk on fire")

    monkeypatch.setattr(pdf._StaffSheet, "render", boom)
    with pytest.raises(DocumentError, match="Failed to generate PDF: disk on fire"):
        render_staff_pdf(staff)
