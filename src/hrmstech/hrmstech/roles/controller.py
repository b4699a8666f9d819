from __future__ import annotations

from flask import Flask, jsonify, request, session

from ..common.serialization import to_dict, to_list
from ..container import Container
from ..core.enums import MemberRole
from ..web.guards import admin_required, json_body, roles_required, setup_required

_FIELD_NAMES = {
    "departmentIds": "department_ids",
    "primaryDepartmentId": "primary_department_id",
}


def _values(data: dict) -> dict:
    return {_FIELD_NAMES.get(k, k): v for k, v in data.items()}


def register(app: Flask, container: Container) -> None:
    service = container.role_service

    @app.get("/api/roles", endpoint="roles")
    @roles_required(MemberRole.ADMIN, MemberRole.MANAGER)
    def roles():
        department_id = request.args.get("department", type=int)
        return jsonify(to_list(service.list_all(session["org_id"], department_id=department_id)))

    @app.post("/api/roles", endpoint="create_role")
    @admin_required
    @setup_required
    def create_role():
        role = service.create(session["org_id"], _values(json_body()), created_by=session["uid"])
        return jsonify(to_dict(role)), 201

    @app.get("/api/roles/<int:role_id>", endpoint="role")
    @roles_required(MemberRole.ADMIN, MemberRole.MANAGER)
    def role(role_id: int):
        return jsonify(to_dict(service.get(session["org_id"], role_id)))

    @app.put("/api/roles/<int:role_id>", endpoint="update_role")
    @admin_required
    @setup_required
    def update_role(role_id: int):
        return jsonify(to_dict(service.update(session["org_id"], role_id, _values(json_body()))))

    @app.delete("/api/roles/<int:role_id>", endpoint="delete_role")
    @admin_required
    def delete_role(role_id: int):
        service.delete(session["org_id"], role_id)
        return jsonify({"ok": True})
