from __future__ import annotations

from enum import Enum


class Gender(str, Enum):
    MALE = "Male"
    FEMALE = "Female"


class MaritalStatus(str, Enum):
    SINGLE = "Single"
    MARRIED = "Married"
    DIVORCED = "Divorced"
    WIDOWED = "Widowed"


class DocumentFormat(str, Enum):
    """Printable output formats."""

    PDF = "pdf"
    HTML = "html"


class ExportFormat(str, Enum):
    """Tabular export formats for the staff directory."""

    CSV = "csv"
    XLSX = "xlsx"
