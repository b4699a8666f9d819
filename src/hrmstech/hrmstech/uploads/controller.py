from __future__ import annotations

import os

from flask import Flask, jsonify, request, send_file, session

from ..common.serialization import to_dict
from ..container import Container
from ..core.enums import MemberRole
from ..core.exceptions import AuthorizationError, ValidationError
from ..web.guards import login_required
from .service import format_file_size


def _target_uid(requested) -> str:
    """Admins may act on any employee; everyone else only on themselves."""
    uid = requested or session["uid"]
    if uid != session["uid"] and session.get("role") != MemberRole.ADMIN.value:
        raise AuthorizationError("You can only manage your own documents")
    return uid


def _payload(document) -> dict:
    data = to_dict(document, exclude=("storage_path",))
    data["sizeLabel"] = format_file_size(document.size)
    return data


def register(app: Flask, container: Container) -> None:
    service = container.upload_service

    @app.post("/api/uploads", endpoint="upload_document")
    @login_required
    def upload_document():
        f = request.files.get("file")
        if f is None or not f.filename:
            raise ValidationError("No file provided")

        f.stream.seek(0, os.SEEK_END)
        size = f.stream.tell()
        f.stream.seek(0)

        document = service.upload(
            session["org_id"],
            _target_uid(request.form.get("uid")),
            request.form.get("documentType", ""),
            filename=f.filename,
            content_type=f.mimetype,
            size=size,
            stream=f.stream,
        )
        return jsonify(_payload(document)), 201

    @app.get("/api/uploads", endpoint="documents")
    @login_required
    def documents():
        uid = _target_uid(request.args.get("uid"))
        return jsonify([_payload(d) for d in service.list_for_employee(session["org_id"], uid)])

    @app.get("/api/uploads/<int:document_id>", endpoint="download_document")
    @login_required
    def download_document(document_id: int):
        _target_uid(service.get(session["org_id"], document_id).uid)
        document, fh = service.open(session["org_id"], document_id)
        return send_file(fh, mimetype=document.content_type, as_attachment=True, download_name=document.name)

    @app.delete("/api/uploads/<int:document_id>", endpoint="delete_document")
    @login_required
    def delete_document(document_id: int):
        _target_uid(service.get(session["org_id"], document_id).uid)
        service.delete(session["org_id"], document_id)
        return jsonify({"ok": True})
