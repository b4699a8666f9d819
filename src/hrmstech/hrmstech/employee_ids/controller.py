from __future__ import annotations

from dataclasses import asdict

from flask import Flask, jsonify, session

from ..container import Container
from ..web.guards import admin_required, setup_required


def register(app: Flask, container: Container) -> None:
    sync = container.employee_id_sync_service

    @app.get("/api/employee-ids/status", endpoint="employee_id_status")
    @admin_required
    def employee_id_status():
        return jsonify(asdict(sync.status(session["org_id"])))

    @app.get("/api/employee-ids/mismatches", endpoint="employee_id_mismatches")
    @admin_required
    def employee_id_mismatches():
        return jsonify([asdict(m) for m in sync.find_mismatches(session["org_id"])])

    @app.post("/api/employee-ids/sync", endpoint="employee_id_sync")
    @admin_required
    @setup_required
    def employee_id_sync():
        result = sync.sync(session["org_id"])
        status = 200 if not result.errors else 207
        return jsonify(asdict(result)), status
