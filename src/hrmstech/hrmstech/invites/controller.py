from __future__ import annotations

from flask import Flask, jsonify, request, session

from ..common.serialization import to_dict, to_list
from ..container import Container
from ..core.exceptions import EmailDeliveryError
from ..web.guards import admin_required, json_body, setup_required, start_session


def register(app: Flask, container: Container) -> None:
    service = container.invite_service

    @app.get("/api/invites", endpoint="invites")
    @admin_required
    def invites():
        return jsonify(to_list(service.list_invites(session["org_id"])))

    @app.post("/api/invites", endpoint="create_invite")
    @admin_required
    @setup_required
    def create_invite():
        data = json_body()
        result = service.create_invite(
            session["org_id"],
            name=data.get("fullName", ""),
            email=data.get("email", ""),
            department_id=data.get("departmentId"),
            role_id=data.get("roleId"),
            employment_status=data.get("employmentStatus", ""),
            base_url=app.config["APP_BASE_URL"],
            send_email=bool(data.get("sendEmail", True)),
        )
        return (
            jsonify(
                {
                    "invite": to_dict(result.invite),
                    "inviteUrl": result.invite_url,
                    "emailSent": result.email_sent,
                    "emailError": result.email_error,
                    "message": "Invite created. Copy the link below and share it.",
                }
            ),
            201,
        )

    @app.delete("/api/invites/<email>", endpoint="revoke_invite")
    @admin_required
    def revoke_invite(email: str):
        service.revoke(session["org_id"], email)
        return jsonify({"ok": True})

    @app.get("/api/invite", endpoint="invite_lookup")
    def invite_lookup():
        invite = service.get(request.args.get("org", ""), request.args.get("email", ""))
        return jsonify(
            {
                "email": invite.email,
                "name": invite.name,
                "departmentName": invite.department_name,
                "roleName": invite.role_name,
                "status": invite.status.value,
            }
        )

    @app.post("/api/invite/accept", endpoint="accept_invite")
    def accept_invite():
        data = json_body()
        user = service.accept_invite(data.get("org", ""), data.get("email", ""), data.get("password", ""))
        start_session(user)
        payload = {"uid": user.uid, "orgId": user.org_id, "role": user.role.value, "redirectTo": "/employee/onboarding"}
        return jsonify(payload), 201

    @app.post("/api/send-invite", endpoint="send_invite")
    def send_invite():
        data = json_body()
        to, invite_url = data.get("to"), data.get("inviteUrl")
        if not to or not invite_url:
            return jsonify({"error": "Missing 'to' or 'inviteUrl'"}), 400
        if not container.mailer.configured:
            return jsonify({"error": "Server missing RESEND_API_KEY or RESEND_FROM_EMAIL"}), 500
        try:
            container.mailer.send_invite(to=to, invite_url=invite_url, org_name=data.get("orgName"))
        except EmailDeliveryError as e:
            return jsonify({"error": str(e) or "Failed to send"}), 500
        return jsonify({"ok": True})
