from __future__ import annotations

from functools import wraps
from typing import Optional

from flask import current_app, jsonify, request, session

from ..core.enums import MemberRole
from ..core.exceptions import AuthorizationError
from ..organizations.setup_guard import check_setup_status
from ..users.service import SessionUser

CONTAINER_KEY = "hrmstech.container"


def container():
    return current_app.extensions[CONTAINER_KEY]


def json_body() -> dict:
    return request.get_json(silent=True) or {}


def start_session(user: SessionUser, *, remember: bool = False) -> None:
    session.clear()
    session.permanent = bool(remember)
    session["uid"] = user.uid
    session["email"] = user.email
    session["org_id"] = user.org_id
    session["role"] = user.role.value
    session["name"] = user.name


def current_user() -> Optional[SessionUser]:
    if "uid" not in session:
        return None
    return SessionUser(
        uid=session["uid"],
        email=session.get("email", ""),
        org_id=session.get("org_id", ""),
        role=MemberRole(session.get("role", MemberRole.EMPLOYEE.value)),
        name=session.get("name"),
    )


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "uid" not in session:
            return jsonify({"error": "Please sign in to continue.", "redirectTo": "/login"}), 401
        return view(*args, **kwargs)

    return wrapper


def roles_required(*roles: MemberRole):
    allowed = {r.value for r in roles}

    def decorator(view):
        @wraps(view)
        @login_required
        def wrapper(*args, **kwargs):
            if session.get("role") not in allowed:
                raise AuthorizationError("You do not have access to this page")
            return view(*args, **kwargs)

        return wrapper

    return decorator


def setup_required(view):
    """Block organization pages until company setup has been completed."""

    @wraps(view)
    @login_required
    def wrapper(*args, **kwargs):
        status = check_setup_status(container().orgs_repo, session.get("org_id"))
        if not status.is_setup_complete:
            return jsonify({"error": "Company setup is not complete", "redirectTo": status.redirect_to}), 409
        return view(*args, **kwargs)

    return wrapper


admin_required = roles_required(MemberRole.ADMIN)
