from __future__ import annotations

import logging

from flask import Flask, jsonify, session

from ..common.serialization import to_list
from ..common.validators import require_choice
from ..container import Container
from ..core.enums import MemberRole
from ..core.exceptions import EmailDeliveryError
from ..web.guards import admin_required, current_user, json_body, login_required, start_session

logger = logging.getLogger(__name__)

RESET_SENT_MESSAGE = "If an account exists for that email, a reset link has been sent."


def _user_payload(user) -> dict:
    return {
        "uid": user.uid,
        "email": user.email,
        "orgId": user.org_id,
        "role": user.role.value,
        "name": user.name,
        "redirectTo": f"/{user.role.value}",
    }


def register(app: Flask, container: Container) -> None:
    @app.post("/api/auth/register", endpoint="register")
    def register_owner():
        data = json_body()
        user = container.auth_service.register_owner(
            company=data.get("company", ""),
            full_name=data.get("fullName", ""),
            email=data.get("email", ""),
            password=data.get("password", ""),
            phone=data.get("phone"),
            company_size=data.get("companySize"),
        )
        start_session(user)
        payload = _user_payload(user)
        payload["redirectTo"] = "/onboarding/company-setup"
        return jsonify(payload), 201

    @app.post("/api/auth/login", endpoint="login")
    def login():
        data = json_body()
        user = container.auth_service.authenticate(
            data.get("email", ""),
            data.get("password", ""),
            org_id=data.get("orgId") or None,
        )
        start_session(user, remember=bool(data.get("remember")))
        return jsonify(_user_payload(user))

    @app.post("/api/auth/logout", endpoint="logout")
    def logout():
        session.clear()
        return jsonify({"ok": True})

    @app.get("/api/auth/me", endpoint="me")
    @login_required
    def me():
        return jsonify(_user_payload(current_user()))

    @app.post("/api/auth/forgot", endpoint="forgot_password")
    def forgot_password():
        email = json_body().get("email", "")
        token = container.auth_service.request_password_reset(email)
        if token and container.mailer.configured:
            reset_url = f"{app.config['APP_BASE_URL'].rstrip('/')}/login/reset?token={token}"
            try:
                container.mailer.send_password_reset(
                    to=email.strip().lower(),
                    reset_url=reset_url,
                    ttl_minutes=app.config["PASSWORD_RESET_TTL_MINUTES"],
                )
            except EmailDeliveryError:
                # Same answer either way so the form does not reveal which emails exist.
                logger.exception("password reset email failed")
        elif token:
            logger.warning("password reset requested but email is not configured")
        return jsonify({"ok": True, "message": RESET_SENT_MESSAGE})

    @app.post("/api/auth/reset", endpoint="reset_password")
    def reset_password():
        data = json_body()
        container.auth_service.reset_password(data.get("token", ""), data.get("password", ""))
        return jsonify({"ok": True, "redirectTo": "/login"})

    @app.post("/api/auth/change-password", endpoint="change_password")
    @login_required
    def change_password():
        data = json_body()
        container.auth_service.change_password(
            session["uid"], data.get("currentPassword", ""), data.get("newPassword", "")
        )
        return jsonify({"ok": True})

    @app.get("/api/members", endpoint="members")
    @admin_required
    def members():
        return jsonify(to_list(container.user_service.list_members(session["org_id"])))

    @app.put("/api/members/<uid>/role", endpoint="member_role")
    @admin_required
    def member_role(uid: str):
        role = require_choice(json_body().get("role"), MemberRole, "Role")
        container.user_service.set_role(org_id=session["org_id"], acting_uid=session["uid"], uid=uid, role=role)
        return jsonify({"ok": True})

    @app.put("/api/members/<uid>/active", endpoint="member_active")
    @admin_required
    def member_active(uid: str):
        container.user_service.set_active(
            org_id=session["org_id"],
            acting_uid=session["uid"],
            uid=uid,
            is_active=bool(json_body().get("active")),
        )
        return jsonify({"ok": True})
