from __future__ import annotations

from flask import Flask, jsonify, session

from ..common.serialization import to_dict, to_list
from ..container import Container
from ..core.exceptions import ValidationError
from ..web.guards import admin_required, json_body, setup_required
from .template_utils import AVAILABLE_FIELDS, DEFAULT_LETTER_TEMPLATE, extract_placeholders, validate_template


def register(app: Flask, container: Container) -> None:
    service = container.letter_service

    @app.get("/api/letters/fields", endpoint="letter_fields")
    @admin_required
    def letter_fields():
        return jsonify({"fields": list(AVAILABLE_FIELDS), "defaultTemplate": DEFAULT_LETTER_TEMPLATE})

    @app.post("/api/letters/validate", endpoint="validate_letter")
    @admin_required
    def validate_letter():
        content = json_body().get("content", "")
        check = validate_template(content)
        return jsonify(
            {"isValid": check.is_valid, "errors": check.errors, "placeholders": extract_placeholders(content)}
        )

    @app.get("/api/letters/templates", endpoint="letter_templates")
    @admin_required
    def letter_templates():
        return jsonify(to_list(service.list_all(session["org_id"])))

    @app.post("/api/letters/templates", endpoint="create_letter_template")
    @admin_required
    @setup_required
    def create_letter_template():
        data = json_body()
        template = service.create(session["org_id"], data.get("name", ""), data.get("content"))
        return jsonify(to_dict(template)), 201

    @app.get("/api/letters/templates/<int:template_id>", endpoint="letter_template")
    @admin_required
    def letter_template(template_id: int):
        return jsonify(to_dict(service.get(session["org_id"], template_id)))

    @app.put("/api/letters/templates/<int:template_id>", endpoint="update_letter_template")
    @admin_required
    def update_letter_template(template_id: int):
        data = json_body()
        template = service.update(session["org_id"], template_id, data.get("name", ""), data.get("content"))
        return jsonify(to_dict(template))

    @app.delete("/api/letters/templates/<int:template_id>", endpoint="delete_letter_template")
    @admin_required
    def delete_letter_template(template_id: int):
        service.delete(session["org_id"], template_id)
        return jsonify({"ok": True})

    @app.post("/api/letters/templates/<int:template_id>/render", endpoint="render_letter")
    @admin_required
    def render_letter(template_id: int):
        data = json_body()
        uid = data.get("uid")
        if not uid:
            raise ValidationError("Employee is required")
        hr = data.get("hr") or {"name": session.get("name") or "", "email": session.get("email") or ""}
        content = service.render_for_employee(session["org_id"], template_id, uid, hr, extra=data.get("fields"))
        return jsonify({"content": content})
