from __future__ import annotations

from flask import Flask, jsonify, session

from ..common.serialization import to_dict, to_list
from ..container import Container
from ..core.enums import MemberRole
from ..web.guards import admin_required, json_body, roles_required, setup_required

_FIELD_NAMES = {"parentId": "parent_id"}


def _values(data: dict) -> dict:
    return {_FIELD_NAMES.get(k, k): v for k, v in data.items()}


def register(app: Flask, container: Container) -> None:
    service = container.department_service

    @app.get("/api/departments", endpoint="departments")
    @roles_required(MemberRole.ADMIN, MemberRole.MANAGER)
    def departments():
        return jsonify(to_list(service.list_all(session["org_id"])))

    @app.post("/api/departments", endpoint="create_department")
    @admin_required
    @setup_required
    def create_department():
        return jsonify(to_dict(service.create(session["org_id"], _values(json_body())))), 201

    @app.get("/api/departments/<int:dept_id>", endpoint="department")
    @roles_required(MemberRole.ADMIN, MemberRole.MANAGER)
    def department(dept_id: int):
        return jsonify(to_dict(service.get(session["org_id"], dept_id)))

    @app.put("/api/departments/<int:dept_id>", endpoint="update_department")
    @admin_required
    @setup_required
    def update_department(dept_id: int):
        return jsonify(to_dict(service.update(session["org_id"], dept_id, _values(json_body()))))

    @app.delete("/api/departments/<int:dept_id>", endpoint="delete_department")
    @admin_required
    def delete_department(dept_id: int):
        service.delete(session["org_id"], dept_id)
        return jsonify({"ok": True})
