"""PDF rendering of staff records with the reportlab canvas.

Two documents are produced:

- the staff information sheet (one person, A4 portrait), and
- the staff directory (many people, A4 landscape table).

Both are drawn by hand on a canvas; the :mod:`.layout` cursor decides where
each block goes and when a page has to be broken.
"""

from __future__ import annotations

import io
import logging
from datetime import datetime
from typing import List, Optional, Sequence, Tuple

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4, landscape, portrait
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from ..common.datetime_utils import format_display_date, now_local
from ..core.constants import DISPLAY_DATETIME_FORMAT, LOCATION, ORGANIZATION
from ..core.exceptions import DocumentError
from ..staff.model import Staff
from ..staff.photo import decode_photo
from .formatting import display, format_currency, format_currency_short, join_address
from .layout import LayoutCursor, PageGeometry, columns, fit_text, line_height, wrap_text

logger = logging.getLogger(__name__)

FONT = "Helvetica"
FONT_BOLD = "Helvetica-Bold"
FONT_ITALIC = "Helvetica-Oblique"

INK = colors.HexColor("#2c3e50")
MUTED = colors.HexColor("#7f8c8d")
ACCENT = colors.HexColor("#2980b9")
HEADER_FILL = colors.HexColor("#34495e")
RULE = colors.HexColor("#bdc3c7")
ZEBRA = colors.HexColor("#f8f9fa")
PHOTO_FILL = colors.HexColor("#ecf0f1")

DIRECTORY_HEADERS = (
    "#",
    "Appointment No.",
    "Full Name",
    "Designation",
    "Age",
    "NIC Number",
    "Contact",
    "Salary Code",
    "Basic Salary",
)
DIRECTORY_WEIGHTS = (1, 2, 3, 2, 1, 2, 2, 1, 2)


class NumberedCanvas(canvas.Canvas):
    """Canvas that defers pages so the footer can print "Page n of m"."""

    def __init__(self, *args, footer_text: str = "", **kwargs):
        super().__init__(*args, **kwargs)
        self._saved_page_states: List[dict] = []
        self._footer_text = footer_text

    def showPage(self):
        self._saved_page_states.append(dict(self.__dict__))
        self._startPage()

    def save(self):
        total = len(self._saved_page_states)
        for state in self._saved_page_states:
            self.__dict__.update(state)
            self._draw_footer(total)
            super().showPage()
        super().save()

    def _draw_footer(self, total: int) -> None:
        width, _ = self._pagesize
        self.saveState()
        self.setStrokeColor(RULE)
        self.setLineWidth(0.5)
        self.line(40, 36, width - 40, 36)
        self.setFont(FONT, 8)
        self.setFillColor(MUTED)
        self.drawString(40, 24, self._footer_text)
        self.drawRightString(width - 40, 24, f"Page {self._pageNumber} of {total}")
        self.restoreState()


def _new_canvas(buf: io.BytesIO, pagesize: Tuple[float, float], *, title: str, footer_text: str) -> NumberedCanvas:
    c = NumberedCanvas(buf, pagesize=pagesize, footer_text=footer_text)
    c.setTitle(title)
    c.setAuthor(ORGANIZATION)
    return c


def _draw_centered(c: canvas.Canvas, text: str, cursor: LayoutCursor, *, font: str, size: float, color=INK) -> None:
    top = cursor.take(line_height(size))
    c.setFont(font, size)
    c.setFillColor(color)
    c.drawCentredString(cursor.geometry.width / 2, top - size, text)


class _StaffSheet:
    """Lays out one staff information sheet."""

    LABEL_WIDTH = 170
    PHOTO_SIZE = (90, 120)
    PHOTO_GAP = 15
    BODY_SIZE = 10
    SECTION_SIZE = 11
    SECTION_HEIGHT = 20
    ROW_PADDING = 5

    def __init__(self, c: canvas.Canvas, staff: Staff, organization: str, location: str):
        self.c = c
        self.staff = staff
        self.organization = organization
        self.location = location
        self.geometry = PageGeometry(*portrait(A4), margin_top=45, margin_bottom=55)
        self.cursor = LayoutCursor(self.geometry, on_new_page=self._on_new_page)
        self._photo_bottom: Optional[float] = None

    def _on_new_page(self, cursor: LayoutCursor) -> None:
        self.c.showPage()
        self._photo_bottom = None

    def _value_width(self, top: float) -> float:
        width = self.geometry.content_width - self.LABEL_WIDTH
        # Rows level with the photo must stay clear of it.
        if self._photo_bottom is not None and top > self._photo_bottom:
            width -= self.PHOTO_SIZE[0] + self.PHOTO_GAP
        return width

    def draw_header(self) -> None:
        _draw_centered(self.c, self.organization, self.cursor, font=FONT_BOLD, size=20)
        _draw_centered(self.c, self.location, self.cursor, font=FONT, size=14, color=MUTED)
        _draw_centered(self.c, "Staff Information Sheet", self.cursor, font=FONT_BOLD, size=16)

        self.cursor.advance(6)
        self.c.setStrokeColor(HEADER_FILL)
        self.c.setLineWidth(2)
        self.c.line(self.geometry.left, self.cursor.y, self.geometry.right, self.cursor.y)
        self.cursor.advance(14)

    def draw_photo(self) -> None:
        w, h = self.PHOTO_SIZE
        x = self.geometry.right - w
        top = self.cursor.y
        y = top - h

        self.c.setStrokeColor(RULE)
        self.c.setLineWidth(1)
        photo = decode_photo(self.staff.image_data)
        drawn = False
        if photo:
            try:
                self.c.drawImage(ImageReader(io.BytesIO(photo)), x, y, width=w, height=h, preserveAspectRatio=True, anchor="c")
                drawn = True
            except (OSError, ValueError) as e:
                logger.warning("Could not draw photo for staff %s: %s", self.staff.id, e)

        if not drawn:
            self.c.setFillColor(PHOTO_FILL)
            self.c.rect(x, y, w, h, stroke=0, fill=1)
            self.c.setFillColor(MUTED)
            self.c.setFont(FONT, 8)
            self.c.drawCentredString(x + w / 2, y + h / 2 + 2, "No Photo")
            self.c.drawCentredString(x + w / 2, y + h / 2 - 8, "Available")
        self.c.rect(x, y, w, h, stroke=1, fill=0)
        self._photo_bottom = y - self.PHOTO_GAP

    def _row_lines(self, value: str, width: float) -> List[str]:
        return wrap_text(value, FONT, self.BODY_SIZE, width - 4)

    def draw_section(self, title: str, rows: Sequence[Tuple[str, str, bool]]) -> None:
        first_height = self._row_height(rows[0][1]) if rows else 0
        # Keep the section title together with its first row.
        self.cursor.ensure_space(self.SECTION_HEIGHT + first_height + 6)

        top = self.cursor.take(self.SECTION_HEIGHT)
        bar_width = self.LABEL_WIDTH + self._value_width(top)
        self.c.setFillColor(ACCENT)
        self.c.rect(self.geometry.left, top - self.SECTION_HEIGHT, bar_width, self.SECTION_HEIGHT, stroke=0, fill=1)
        self.c.setFillColor(colors.white)
        self.c.setFont(FONT_BOLD, self.SECTION_SIZE)
        self.c.drawString(self.geometry.left + 8, top - self.SECTION_HEIGHT + 6, title.upper())
        self.cursor.advance(4)

        for label, value, bold in rows:
            self.draw_row(label, value, bold=bold)
        self.cursor.advance(12)

    def _row_height(self, value: str) -> float:
        lines = self._row_lines(value, self._value_width(self.cursor.y))
        return len(lines) * line_height(self.BODY_SIZE) + 2 * self.ROW_PADDING

    def draw_row(self, label: str, value: str, *, bold: bool = False) -> None:
        """Draw one label/value row, continuing it on the next page when the
        wrapped value is taller than the space left."""
        self.cursor.ensure_space(self._row_height(value))
        lines = self._row_lines(value, self._value_width(self.cursor.y))
        caption = label
        while True:
            room = int((self.cursor.remaining - 2 * self.ROW_PADDING) // line_height(self.BODY_SIZE))
            chunk, lines = lines[: max(room, 1)], lines[max(room, 1):]
            self._draw_row_lines(caption, chunk, bold=bold)
            if not lines:
                return
            self.cursor.new_page()
            caption = f"{label} (cont.)"

    def _draw_row_lines(self, label: str, lines: Sequence[str], *, bold: bool) -> None:
        top = self.cursor.y
        value_width = self._value_width(top)
        height = len(lines) * line_height(self.BODY_SIZE) + 2 * self.ROW_PADDING
        self.cursor.advance(height)

        baseline = top - self.ROW_PADDING - self.BODY_SIZE
        self.c.setFillColor(HEADER_FILL)
        self.c.setFont(FONT_BOLD, self.BODY_SIZE)
        self.c.drawString(self.geometry.left + 8, baseline, fit_text(f"{label}:", FONT_BOLD, self.BODY_SIZE, self.LABEL_WIDTH - 12))

        self.c.setFillColor(INK)
        self.c.setFont(FONT_BOLD if bold else FONT, self.BODY_SIZE)
        x = self.geometry.left + self.LABEL_WIDTH
        for i, line in enumerate(lines):
            self.c.drawString(x, baseline - i * line_height(self.BODY_SIZE), line)

        self.c.setStrokeColor(PHOTO_FILL)
        self.c.setLineWidth(0.5)
        self.c.line(self.geometry.left, self.cursor.y, x + value_width, self.cursor.y)

    def render(self) -> None:
        s = self.staff
        self.draw_header()
        self.draw_photo()

        self.draw_section(
            "Personal Information",
            [
                ("Appointment Number", display(s.appointment_number), False),
                ("Full Name", display(s.full_name), False),
                ("Gender", display(s.gender), False),
                ("Date of Birth", format_display_date(s.date_of_birth), False),
                ("Age", f"{s.age} years", False),
                ("NIC Number", display(s.nic_number), False),
                ("Old NIC Number", display(s.nic_number_old), False),
                ("Marital Status", display(s.marital_status), False),
                ("Address", join_address(s), False),
                ("Contact Number", display(s.contact_number), False),
                ("Email", display(s.email), False),
            ],
        )
        self.draw_section(
            "Employment Details",
            [
                ("Designation", display(s.designation), False),
                ("Date of First Appointment", format_display_date(s.date_of_first_appointment), False),
                ("Date of Retirement", format_display_date(s.date_of_retirement), False),
                ("Increment Date", display(s.increment_date), False),
            ],
        )
        self.draw_section(
            "Salary Information",
            [
                ("Salary Code", display(s.salary_code), False),
                ("Basic Salary", format_currency(s.basic_salary), False),
                ("Increment Amount", format_currency(s.increment_amount), False),
                ("Total Salary", format_currency(s.total_salary), True),
            ],
        )
        self.c.showPage()


class _DirectoryTable:
    """Lays out the staff directory as a paginated table."""

    TITLE_SIZE = 18
    HEADER_SIZE = 8.5
    BODY_SIZE = 8.5
    HEADER_ROW = 20
    BODY_ROW = 16
    CELL_PADDING = 4

    def __init__(self, c: canvas.Canvas, staff_list: Sequence[Staff], organization: str, location: str, generated_at: datetime):
        self.c = c
        self.staff_list = staff_list
        self.organization = organization
        self.location = location
        self.generated_at = generated_at
        self.geometry = PageGeometry(*landscape(A4), margin_left=30, margin_right=30, margin_top=35, margin_bottom=50)
        self.cols = columns(self.geometry.content_width, DIRECTORY_WEIGHTS, x0=self.geometry.left)
        self.cursor = LayoutCursor(self.geometry, on_new_page=self._on_new_page)
        self._rows_done = False

    def _on_new_page(self, cursor: LayoutCursor) -> None:
        self.c.showPage()
        if not self._rows_done:
            self.draw_table_header()

    def draw_title(self) -> None:
        _draw_centered(self.c, self.organization, self.cursor, font=FONT_BOLD, size=self.TITLE_SIZE)
        _draw_centered(self.c, self.location, self.cursor, font=FONT, size=12, color=MUTED)
        _draw_centered(self.c, "Staff Directory", self.cursor, font=FONT_BOLD, size=14)

        summary = (
            f"Total Staff: {len(self.staff_list)} | Generated: {self.generated_at.strftime(DISPLAY_DATETIME_FORMAT)}"
        )
        top = self.cursor.take(line_height(10) + 6)
        self.c.setFont(FONT, 10)
        self.c.setFillColor(INK)
        self.c.drawRightString(self.geometry.right, top - 10, summary)

    def _draw_cells(self, values: Sequence[str], top: float, height: float, *, font: str, size: float, color) -> None:
        baseline = top - height / 2 - size / 2 + 2
        self.c.setFont(font, size)
        self.c.setFillColor(color)
        for idx, (col, value) in enumerate(zip(self.cols, values)):
            text = fit_text(value, font, size, col.width - 2 * self.CELL_PADDING)
            if idx == len(self.cols) - 1:
                self.c.drawRightString(col.right - self.CELL_PADDING, baseline, text)
            else:
                self.c.drawString(col.x + self.CELL_PADDING, baseline, text)

    def draw_table_header(self) -> None:
        top = self.cursor.take(self.HEADER_ROW)
        self.c.setFillColor(HEADER_FILL)
        self.c.rect(self.geometry.left, top - self.HEADER_ROW, self.geometry.content_width, self.HEADER_ROW, stroke=0, fill=1)
        self._draw_cells(
            [h.upper() for h in DIRECTORY_HEADERS],
            top,
            self.HEADER_ROW,
            font=FONT_BOLD,
            size=self.HEADER_SIZE,
            color=colors.white,
        )

    def draw_row(self, index: int, staff: Staff) -> None:
        top = self.cursor.take(self.BODY_ROW)
        if index % 2 == 0:
            self.c.setFillColor(ZEBRA)
            self.c.rect(self.geometry.left, top - self.BODY_ROW, self.geometry.content_width, self.BODY_ROW, stroke=0, fill=1)

        self.c.setStrokeColor(colors.HexColor("#e5e5e5"))
        self.c.setLineWidth(0.5)
        self.c.rect(self.geometry.left, top - self.BODY_ROW, self.geometry.content_width, self.BODY_ROW, stroke=1, fill=0)
        for col in self.cols[1:]:
            self.c.line(col.x, top, col.x, top - self.BODY_ROW)

        values = [
            str(index + 1),
            staff.appointment_number,
            staff.full_name,
            staff.designation,
            str(staff.age),
            staff.nic_number,
            display(staff.contact_number),
            staff.salary_code,
            format_currency_short(staff.basic_salary),
        ]
        self._draw_cells(values, top, self.BODY_ROW, font=FONT, size=self.BODY_SIZE, color=INK)

    def render(self) -> None:
        self.draw_title()
        self.cursor.advance(6)
        self.draw_table_header()
        for index, staff in enumerate(self.staff_list):
            self.draw_row(index, staff)

        # The closing note may spill onto a page of its own, without a header.
        self._rows_done = True
        self.cursor.ensure_space(12 + line_height(8))
        self.cursor.advance(12)
        top = self.cursor.take(line_height(8))
        self.c.setFont(FONT_ITALIC, 8)
        self.c.setFillColor(MUTED)
        self.c.drawCentredString(
            self.geometry.width / 2,
            top - 8,
            "This document is computer generated and does not require a signature.",
        )
        self.c.showPage()


def render_staff_pdf(
    staff: Staff,
    *,
    organization: str = ORGANIZATION,
    location: str = LOCATION,
    generated_at: Optional[datetime] = None,
) -> bytes:
    generated_at = generated_at or now_local()
    footer = f"Generated on {generated_at.strftime(DISPLAY_DATETIME_FORMAT)} | {organization} - {location}"
    buf = io.BytesIO()
    try:
        c = _new_canvas(buf, portrait(A4), title=f"Staff Details - {staff.full_name}", footer_text=footer)
        _StaffSheet(c, staff, organization, location).render()
        c.save()
    except Exception as e:
        raise DocumentError(f"Failed to generate PDF: {e}") from e
    return buf.getvalue()


def render_directory_pdf(
    staff_list: Sequence[Staff],
    *,
    organization: str = ORGANIZATION,
    location: str = LOCATION,
    generated_at: Optional[datetime] = None,
) -> bytes:
    if not staff_list:
        raise DocumentError("No staff data to export")
    generated_at = generated_at or now_local()
    footer = f"{organization} - {location}"
    buf = io.BytesIO()
    try:
        c = _new_canvas(buf, landscape(A4), title="Staff Directory", footer_text=footer)
        _DirectoryTable(c, staff_list, organization, location, generated_at).render()
        c.save()
    except Exception as e:
        raise DocumentError(f"Failed to generate PDF: {e}") from e
    return buf.getvalue()
