from __future__ import annotations

from typing import Any, Dict, List

from flask import Flask, request

from ..common.api import api_operation, json_payload, ok, snake_case_keys
from ..container import Container
from ..core.enums import DocumentFormat, ExportFormat
from ..core.exceptions import ValidationError
from .service import SavedDocument


def _staff_ids(payload: Dict[str, Any]) -> List[str]:
    ids = payload.get("staff_ids") or []
    if isinstance(ids, str):
        ids = [ids]
    if not isinstance(ids, list):
        raise ValidationError("staff_ids must be a list")
    return [str(i) for i in ids if str(i).strip()]


def _saved(doc: SavedDocument):
    return ok({"path": str(doc.path), "record_count": doc.record_count}, message=doc.message)


def register(app: Flask, container: Container) -> None:
    documents = container.document_service

    def _html_response(html: str):
        return app.response_class(html, mimetype="text/html")

    @app.route("/api/print/preview/<staff_id>", methods=["GET"], endpoint="staff_preview")
    @api_operation("generate preview")
    def staff_preview(staff_id: str):
        return _html_response(documents.generate_staff_preview(staff_id))

    @app.route("/api/print/preview", methods=["POST"], endpoint="bulk_staff_preview")
    @api_operation("generate bulk preview")
    def bulk_staff_preview():
        payload = json_payload()
        filters = snake_case_keys(payload.get("filters") or {})
        return _html_response(documents.generate_bulk_staff_preview(_staff_ids(payload), filters))

    @app.route("/api/print/staff/<staff_id>", methods=["POST"], endpoint="print_staff_individual")
    @api_operation("generate PDF")
    def print_staff_individual(staff_id: str):
        return _saved(documents.generate_staff_pdf(staff_id))

    @app.route("/api/print/bulk", methods=["POST"], endpoint="print_staff_bulk")
    @api_operation("generate PDF")
    def print_staff_bulk():
        payload = json_payload()
        filters = snake_case_keys(payload.get("filters") or {})
        return _saved(documents.generate_bulk_staff_pdf(_staff_ids(payload), filters))

    @app.route("/api/print/export", methods=["POST"], endpoint="export_staff")
    @api_operation("export staff")
    def export_staff():
        payload = json_payload()
        try:
            fmt = DocumentFormat(str(payload.get("format") or DocumentFormat.PDF.value).lower())
        except ValueError:
            raise ValidationError(f"Unsupported document format: {payload.get('format')}") from None

        ids = _staff_ids(payload)
        is_bulk = bool(payload.get("is_bulk", False))
        if fmt == DocumentFormat.HTML:
            return _saved(documents.save_html(ids, is_bulk))
        return _saved(documents.export_staff_pdf(ids, is_bulk))

    @app.route("/api/print/html", methods=["POST"], endpoint="save_html")
    @api_operation("save HTML")
    def save_html():
        payload = json_payload()
        return _saved(documents.save_html(_staff_ids(payload), bool(payload.get("is_bulk", False))))

    def _table_export(fmt: ExportFormat):
        args = snake_case_keys(request.args.to_dict())
        ids = [i for i in (args.pop("ids", "") or "").split(",") if i.strip()]
        content, filename = documents.export_table(ids, fmt, filters=args or None)
        mimetype = (
            "text/csv"
            if fmt == ExportFormat.CSV
            else "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
        )
        return app.response_class(
            content,
            mimetype=mimetype,
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )

    @app.route("/api/export.csv", methods=["GET"], endpoint="export_csv")
    @api_operation("export CSV")
    def export_csv():
        return _table_export(ExportFormat.CSV)

    @app.route("/api/export.xlsx", methods=["GET"], endpoint="export_xlsx")
    @api_operation("export Excel")
    def export_xlsx():
        return _table_export(ExportFormat.XLSX)

    @app.route("/api/downloads/open", methods=["POST"], endpoint="open_downloads_folder")
    @api_operation("open Downloads folder")
    def open_downloads_folder():
        return ok(None, message=documents.open_downloads_folder())
