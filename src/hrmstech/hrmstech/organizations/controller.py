from __future__ import annotations

from flask import Flask, jsonify, request, session

from ..common.serialization import to_dict
from ..container import Container
from ..web.guards import admin_required, json_body, login_required, setup_required
from .setup_guard import check_setup_status, is_allowed_without_setup


def _org_payload(org) -> dict:
    data = to_dict(org)
    data["displayName"] = org.display_name
    return data


def register(app: Flask, container: Container) -> None:
    service = container.organization_service

    @app.get("/api/setup-status", endpoint="setup_status")
    def setup_status():
        path = request.args.get("path", "")
        if path and is_allowed_without_setup(path):
            return jsonify({"isSetupComplete": True, "redirectTo": None, "allowed": True})
        status = check_setup_status(container.orgs_repo, session.get("org_id"))
        return jsonify({"isSetupComplete": status.is_setup_complete, "redirectTo": status.redirect_to, "allowed": False})

    @app.get("/api/organization", endpoint="organization")
    @login_required
    def organization():
        return jsonify(_org_payload(service.get(session["org_id"])))

    @app.post("/api/organization/setup", endpoint="company_setup")
    @admin_required
    def company_setup():
        org = service.complete_setup(session["org_id"], json_body())
        return jsonify({**_org_payload(org), "redirectTo": "/admin"})

    @app.put("/api/organization/settings/<section>", endpoint="organization_settings")
    @admin_required
    @setup_required
    def organization_settings(section: str):
        return jsonify(_org_payload(service.update_settings(session["org_id"], section, json_body())))

    @app.get("/api/organization/employee-id-format", endpoint="employee_id_format")
    @admin_required
    def employee_id_format():
        org = service.get(session["org_id"])
        return jsonify(service.employee_id_preview(org.employee_id_format))

    @app.put("/api/organization/employee-id-format", endpoint="update_employee_id_format")
    @admin_required
    @setup_required
    def update_employee_id_format():
        org = service.update_employee_id_format(session["org_id"], json_body().get("format", ""))
        return jsonify(service.employee_id_preview(org.employee_id_format))

    @app.get("/api/employee-id/preview", endpoint="employee_id_preview")
    @admin_required
    def employee_id_preview():
        count = request.args.get("count", type=int)
        return jsonify(service.employee_id_preview(request.args.get("format", ""), count))
