from __future__ import annotations

from flask import Flask, jsonify, request, session

from ..common.serialization import to_list
from ..container import Container
from ..web.guards import login_required


def register(app: Flask, container: Container) -> None:
    service = container.notification_service

    @app.get("/api/notifications", endpoint="notifications")
    @login_required
    def notifications():
        unread = request.args.get("unread") in ("1", "true")
        return jsonify(to_list(service.list_for_user(session["org_id"], session["uid"], unread_only=unread)))

    @app.post("/api/notifications/<int:notification_id>/read", endpoint="read_notification")
    @login_required
    def read_notification(notification_id: int):
        service.mark_read(session["org_id"], session["uid"], notification_id)
        return jsonify({"ok": True})

    @app.post("/api/notifications/read-all", endpoint="read_all_notifications")
    @login_required
    def read_all_notifications():
        return jsonify({"updated": service.mark_all_read(session["org_id"], session["uid"])})
