from __future__ import annotations

from flask import Flask, jsonify, session

from ..common.serialization import to_dict, to_list
from ..container import Container
from ..web.guards import admin_required, json_body, setup_required


def register(app: Flask, container: Container) -> None:
    service = container.payroll_service

    @app.get("/api/payroll/runs", endpoint="payroll_runs")
    @admin_required
    def payroll_runs():
        return jsonify(to_list(service.list_runs(session["org_id"])))

    @app.post("/api/payroll/runs", endpoint="create_payroll_run")
    @admin_required
    @setup_required
    def create_payroll_run():
        data = json_body()
        run = service.create_run(session["org_id"], data.get("period", ""), data.get("notes", ""))
        return jsonify(to_dict(run)), 201

    @app.get("/api/payroll/runs/<int:run_id>", endpoint="payroll_run")
    @admin_required
    def payroll_run(run_id: int):
        org_id = session["org_id"]
        return jsonify(
            {
                "run": to_dict(service.get_run(org_id, run_id)),
                "items": to_list(service.list_items(org_id, run_id)),
                "totals": to_dict(service.run_totals(org_id, run_id)),
            }
        )

    @app.put("/api/payroll/runs/<int:run_id>/status", endpoint="payroll_run_status")
    @admin_required
    def payroll_run_status(run_id: int):
        return jsonify(to_dict(service.set_run_status(session["org_id"], run_id, json_body().get("status", ""))))

    @app.post("/api/payroll/runs/<int:run_id>/generate", endpoint="generate_payroll_items")
    @admin_required
    def generate_payroll_items(run_id: int):
        return jsonify({"added": service.generate_items(session["org_id"], run_id)})

    @app.put("/api/payroll/runs/<int:run_id>/items/<uid>", endpoint="save_payroll_item")
    @admin_required
    def save_payroll_item(run_id: int, uid: str):
        data = json_body()
        item = service.save_item(
            session["org_id"],
            run_id,
            uid,
            base=data.get("base"),
            allowances=data.get("allowances"),
            deductions=data.get("deductions"),
        )
        return jsonify(to_dict(item))

    @app.delete("/api/payroll/runs/<int:run_id>", endpoint="delete_payroll_run")
    @admin_required
    def delete_payroll_run(run_id: int):
        service.delete_run(session["org_id"], run_id)
        return jsonify({"ok": True})
