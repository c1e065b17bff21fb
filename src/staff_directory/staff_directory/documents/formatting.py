"""Value formatting shared by the PDF and HTML renderers."""

from __future__ import annotations

from typing import Any, List, Optional

from werkzeug.utils import secure_filename

NOT_AVAILABLE = "N/A"


def display(value: Any, default: str = NOT_AVAILABLE) -> str:
    if value is None:
        return default
    text = str(value).strip()
    return text or default


def format_currency(amount: Optional[float]) -> str:
    return f"Rs. {float(amount or 0):,.2f}"


def format_currency_short(amount: Optional[float]) -> str:
    return f"Rs. {float(amount or 0):,.0f}"


def address_lines(staff) -> List[str]:
    lines = (staff.address_line1, staff.address_line2, staff.address_line3)
    return [line.strip() for line in lines if line and line.strip()]


def join_address(staff, default: str = "Not provided") -> str:
    return ", ".join(address_lines(staff)) or default


def truncate_text(text: str, max_length: int) -> str:
    if len(text) <= max_length:
        return text
    return text[:max_length].strip() + "..."


def safe_filename_part(name: str) -> str:
    """Filename-safe form of a person's name ('A. B. Perera' -> 'A._B._Perera')."""
    return secure_filename("_".join(name.split())) or "staff"
