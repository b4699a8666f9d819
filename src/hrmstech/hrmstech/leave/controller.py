from __future__ import annotations

from flask import Flask, jsonify, request, session

from ..common.datetime_utils import now_local
from ..common.serialization import to_dict, to_list
from ..container import Container
from ..core.enums import MemberRole
from ..core.exceptions import ValidationError
from ..web.guards import json_body, login_required, roles_required


def register(app: Flask, container: Container) -> None:
    service = container.leave_service

    @app.post("/api/leave", endpoint="submit_leave")
    @login_required
    def submit_leave():
        data = json_body()
        request_id = service.submit(
            session["org_id"],
            session["uid"],
            leave_type=data.get("type", ""),
            from_date=data.get("fromDate"),
            to_date=data.get("toDate"),
            reason=data.get("reason", ""),
        )
        return jsonify({"requestId": request_id, "message": "Leave request submitted."}), 201

    @app.get("/api/leave/mine", endpoint="my_leave")
    @login_required
    def my_leave():
        return jsonify(to_list(service.list_mine(session["org_id"], session["uid"])))

    @app.get("/api/leave", endpoint="leave_requests")
    @roles_required(MemberRole.ADMIN, MemberRole.MANAGER)
    def leave_requests():
        return jsonify(to_list(service.list_for_org(session["org_id"], status=request.args.get("status"))))

    @app.put("/api/leave/<int:request_id>/status", endpoint="decide_leave")
    @roles_required(MemberRole.ADMIN, MemberRole.MANAGER)
    def decide_leave(request_id: int):
        req = service.set_status(
            session["org_id"], request_id, json_body().get("status", ""), reviewer_uid=session["uid"]
        )
        return jsonify(to_dict(req))

    @app.get("/api/leave/calendar", endpoint="leave_calendar")
    @roles_required(MemberRole.ADMIN, MemberRole.MANAGER)
    def leave_calendar():
        today = now_local().date()
        try:
            year = int(request.args.get("year", today.year))
            month = int(request.args.get("month", today.month))
        except ValueError:
            raise ValidationError("Year and month must be numbers")
        return jsonify({"year": year, "month": month, "days": service.calendar(session["org_id"], year, month)})
