"""HTML print documents (browser print stands in for PDF).

Rendered from Jinja2 templates shipped in ``templates/print``.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Optional, Sequence

from jinja2 import Environment, FileSystemLoader, TemplateError, select_autoescape

from ..common.datetime_utils import format_display_date, now_local
from ..core.constants import DISPLAY_DATETIME_FORMAT, LOCATION, ORGANIZATION
from ..core.exceptions import DocumentError
from ..staff.model import Staff
from ..staff.photo import decode_photo
from .formatting import address_lines, display, format_currency

TEMPLATE_DIR = Path(__file__).resolve().parents[1] / "templates"

_env = Environment(
    loader=FileSystemLoader(str(TEMPLATE_DIR)),
    autoescape=select_autoescape(["html"]),
    trim_blocks=True,
    lstrip_blocks=True,
)
_env.filters["display_date"] = format_display_date
_env.filters["currency"] = format_currency
_env.filters["na"] = display


def _photo_src(staff: Staff) -> Optional[str]:
    if not decode_photo(staff.image_data):
        return None
    return f"data:image/jpeg;base64,{staff.image_data}"


def _render(template_name: str, **context) -> str:
    try:
        return _env.get_template(template_name).render(**context)
    except TemplateError as e:
        raise DocumentError(f"Failed to generate preview: {e}") from e


def render_staff_html(
    staff: Staff,
    *,
    organization: str = ORGANIZATION,
    location: str = LOCATION,
    generated_at: Optional[datetime] = None,
) -> str:
    generated_at = generated_at or now_local()
    return _render(
        "print/staff_sheet.html",
        staff=staff,
        photo_src=_photo_src(staff),
        address=address_lines(staff),
        organization=organization,
        location=location,
        generated_at=generated_at.strftime(DISPLAY_DATETIME_FORMAT),
    )


def render_directory_html(
    staff_list: Sequence[Staff],
    *,
    organization: str = ORGANIZATION,
    location: str = LOCATION,
    generated_at: Optional[datetime] = None,
) -> str:
    if not staff_list:
        raise DocumentError("No staff data to export")
    generated_at = generated_at or now_local()
    return _render(
        "print/staff_directory.html",
        staff_list=staff_list,
        organization=organization,
        location=location,
        generated_at=generated_at.strftime(DISPLAY_DATETIME_FORMAT),
    )
