from __future__ import annotations

from dataclasses import asdict

from flask import Flask, request

from ..common.api import api_operation, json_payload, ok, snake_case_keys
from ..container import Container
from .nic import extract_nic_info


def register(app: Flask, container: Container) -> None:
    service = container.staff_service

    @app.route("/api/staff", methods=["POST"], endpoint="create_staff")
    @api_operation("create staff")
    def create_staff():
        staff = service.create_staff(json_payload())
        return ok(staff.to_dict()), 201

    @app.route("/api/staff", methods=["GET"], endpoint="get_all_staff")
    @api_operation("get staff")
    def get_all_staff():
        include_image = request.args.get("include_image", "1") != "0"
        return ok([s.to_dict(include_image=include_image) for s in service.get_all_staff()])

    @app.route("/api/staff/search", methods=["GET"], endpoint="search_staff")
    @api_operation("search staff")
    def search_staff():
        params = snake_case_keys(request.args.to_dict())
        include_image = params.pop("include_image", "1") != "0"
        return ok([s.to_dict(include_image=include_image) for s in service.search_staff(params)])

    @app.route("/api/staff/stats", methods=["GET"], endpoint="staff_statistics")
    @api_operation("get staff statistics")
    def staff_statistics():
        return ok(asdict(service.statistics()))

    @app.route("/api/staff/nic/<nic>", methods=["GET"], endpoint="get_staff_by_nic")
    @api_operation("get staff by NIC")
    def get_staff_by_nic(nic: str):
        staff = service.get_staff_by_nic(nic)
        return ok(staff.to_dict() if staff else None)

    @app.route("/api/staff/<staff_id>", methods=["GET"], endpoint="get_staff_by_id")
    @api_operation("get staff")
    def get_staff_by_id(staff_id: str):
        return ok(service.get_staff_by_id(staff_id).to_dict())

    @app.route("/api/staff/<staff_id>", methods=["PUT"], endpoint="update_staff")
    @api_operation("update staff")
    def update_staff(staff_id: str):
        return ok(service.update_staff(staff_id, json_payload()).to_dict())

    @app.route("/api/staff/<staff_id>", methods=["DELETE"], endpoint="delete_staff")
    @api_operation("delete staff")
    def delete_staff(staff_id: str):
        service.delete_staff(staff_id)
        return ok(None, message="Staff deleted successfully")

    @app.route("/api/nic/<nic>", methods=["GET"], endpoint="nic_info")
    @api_operation("read NIC")
    def nic_info(nic: str):
        return ok(asdict(extract_nic_info(nic)))
