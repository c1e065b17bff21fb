from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Mapping, Optional, Sequence, Tuple, Union

from ..common.datetime_utils import now_local
from ..core.constants import FILENAME_DATE_FORMAT, LOCATION, ORGANIZATION
from ..core.enums import ExportFormat
from ..core.exceptions import DocumentError, ValidationError
from ..staff.model import Staff
from ..staff.service import StaffService
from .downloads import get_downloads_dir, open_in_file_manager
from .export import staff_rows, to_csv_bytes, to_xlsx_bytes
from .formatting import safe_filename_part
from .html import render_directory_html, render_staff_html
from .pdf import render_directory_pdf, render_staff_pdf

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SavedDocument:
    path: Path
    message: str
    record_count: int = 1


class DocumentService:
    """Print previews, PDF/HTML files in Downloads and tabular exports."""

    def __init__(
        self,
        staff_service: StaffService,
        *,
        downloads_dir: Optional[Union[str, Path]] = None,
        organization: str = ORGANIZATION,
        location: str = LOCATION,
        clock: Callable[[], datetime] = now_local,
    ):
        self._staff = staff_service
        self._downloads_override = downloads_dir
        self._organization = organization
        self._location = location
        self._clock = clock

    def _resolve_bulk(self, staff_ids: Sequence[str], filters: Optional[Mapping[str, Any]] = None) -> Sequence[Staff]:
        if staff_ids:
            return self._staff.get_staff_by_ids(staff_ids)
        if filters:
            return self._staff.search_staff(filters)
        return self._staff.get_all_staff()

    def _write(self, filename: str, content: Union[bytes, str]) -> Path:
        path = get_downloads_dir(self._downloads_override) / filename
        try:
            if isinstance(content, str):
                path.write_text(content, encoding="utf-8")
            else:
                path.write_bytes(content)
        except OSError as e:
            raise DocumentError(f"Failed to write file: {e}") from e
        logger.info("Saved %s", path)
        return path

    def _date_stamp(self, now: datetime) -> str:
        return now.strftime(FILENAME_DATE_FORMAT)

    # Previews
    def generate_staff_preview(self, staff_id: str) -> str:
        staff = self._staff.get_staff_by_id(staff_id)
        return render_staff_html(
            staff, organization=self._organization, location=self._location, generated_at=self._clock()
        )

    def generate_bulk_staff_preview(self, staff_ids: Sequence[str], filters: Optional[Mapping[str, Any]] = None) -> str:
        staff_list = self._resolve_bulk(staff_ids, filters)
        return render_directory_html(
            staff_list, organization=self._organization, location=self._location, generated_at=self._clock()
        )

    # PDF files
    def generate_staff_pdf(self, staff_id: str) -> SavedDocument:
        staff = self._staff.get_staff_by_id(staff_id)
        now = self._clock()
        pdf = render_staff_pdf(staff, organization=self._organization, location=self._location, generated_at=now)
        filename = f"staff-details-{safe_filename_part(staff.full_name)}-{self._date_stamp(now)}.pdf"
        path = self._write(filename, pdf)
        return SavedDocument(path=path, message=f"PDF saved to Downloads: {filename}")

    def generate_bulk_staff_pdf(
        self, staff_ids: Sequence[str], filters: Optional[Mapping[str, Any]] = None
    ) -> SavedDocument:
        staff_list = self._resolve_bulk(staff_ids, filters)
        if not staff_list:
            raise DocumentError("No staff data to export")
        now = self._clock()
        pdf = render_directory_pdf(
            staff_list, organization=self._organization, location=self._location, generated_at=now
        )
        count = len(staff_list)
        filename = f"staff-directory-{count}-{self._date_stamp(now)}.pdf"
        path = self._write(filename, pdf)
        return SavedDocument(
            path=path,
            message=f"PDF saved to Downloads: {filename} ({count} staff records)",
            record_count=count,
        )

    def export_staff_pdf(self, staff_ids: Sequence[str], is_bulk: bool = False) -> SavedDocument:
        if is_bulk or len(staff_ids) > 1:
            return self.generate_bulk_staff_pdf(staff_ids)
        if not staff_ids:
            raise ValidationError("No staff ID provided")
        return self.generate_staff_pdf(staff_ids[0])

    def print_staff_individual(self, staff_id: str) -> SavedDocument:
        return self.generate_staff_pdf(staff_id)

    def print_staff_bulk(self, staff_ids: Sequence[str]) -> SavedDocument:
        return self.generate_bulk_staff_pdf(staff_ids)

    # HTML files for browser printing
    def save_html(self, staff_ids: Sequence[str], is_bulk: bool = False) -> SavedDocument:
        now = self._clock()
        stamp = self._date_stamp(now)
        if is_bulk or len(staff_ids) != 1:
            staff_list = self._resolve_bulk(staff_ids)
            html = render_directory_html(
                staff_list, organization=self._organization, location=self._location, generated_at=now
            )
            filename = f"staff-directory-{len(staff_list)}-{stamp}.html"
            count = len(staff_list)
        else:
            staff = self._staff.get_staff_by_id(staff_ids[0])
            html = render_staff_html(staff, organization=self._organization, location=self._location, generated_at=now)
            filename = f"staff-details-{safe_filename_part(staff.full_name)}-{stamp}.html"
            count = 1
        path = self._write(filename, html)
        return SavedDocument(path=path, message=f"HTML saved to Downloads: {filename}", record_count=count)

    # Tabular exports
    def export_table(
        self,
        staff_ids: Sequence[str],
        fmt: Union[ExportFormat, str],
        filters: Optional[Mapping[str, Any]] = None,
    ) -> Tuple[bytes, str]:
        try:
            fmt = ExportFormat(fmt)
        except ValueError:
            raise ValidationError(f"Unsupported export format: {fmt}") from None

        rows = staff_rows(self._resolve_bulk(staff_ids, filters))
        if fmt == ExportFormat.XLSX:
            content = to_xlsx_bytes(rows)
        else:
            content = to_csv_bytes(rows)
        return content, f"staff-directory-{self._date_stamp(self._clock())}.{fmt.value}"

    def open_downloads_folder(self) -> str:
        path = get_downloads_dir(self._downloads_override)
        open_in_file_manager(path)
        return f"Downloads folder opened: {path}"
