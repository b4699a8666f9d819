from __future__ import annotations

from flask import Flask, jsonify, request, session

from ..common.serialization import to_dict, to_list
from ..container import Container
from ..core.enums import MemberRole
from ..core.exceptions import ValidationError
from ..employee_ids.formatter import EmployeeIdContext
from ..web.guards import admin_required, json_body, login_required, roles_required, setup_required

_FIELD_NAMES = {
    "name": "name",
    "departmentId": "department_id",
    "department": "department",
    "jobTitle": "job_title",
    "roleId": "role_id",
    "manager": "manager",
    "hireDate": "hire_date",
    "status": "status",
    "location": "location",
    "employeeType": "employee_type",
}

_ONBOARDING_NAMES = {
    "phoneNumber": "phone_number",
    "dob": "dob",
    "nidNumber": "nid_number",
    "passportNumber": "passport_number",
    "emergencyContactName": "emergency_contact_name",
    "emergencyContactPhone": "emergency_contact_phone",
    "emergencyContactRelation": "emergency_contact_relation",
    "presentAddress": "present_address",
    "permanentAddress": "permanent_address",
}


def _rename(data: dict, names: dict) -> dict:
    unknown = set(data) - set(names)
    if unknown:
        raise ValidationError(f"Unknown fields: {', '.join(sorted(unknown))}")
    return {names[k]: v for k, v in data.items()}


def register(app: Flask, container: Container) -> None:
    service = container.employee_service

    @app.get("/api/employees", endpoint="employees")
    @roles_required(MemberRole.ADMIN, MemberRole.MANAGER)
    def employees():
        items = service.list_directory(
            session["org_id"],
            search=request.args.get("q"),
            department=request.args.get("department"),
            status=request.args.get("status"),
            sort_key=request.args.get("sort", "name"),
            descending=request.args.get("dir", "asc") == "desc",
        )
        return jsonify(to_list(items))

    @app.get("/api/employees/departments", endpoint="employee_departments")
    @roles_required(MemberRole.ADMIN, MemberRole.MANAGER)
    def employee_departments():
        return jsonify(list(service.departments_in_use(session["org_id"])))

    @app.get("/api/employees/next-id", endpoint="next_employee_id")
    @admin_required
    def next_employee_id():
        ctx = EmployeeIdContext(
            department=request.args.get("department"),
            location=request.args.get("location"),
            employee_type=request.args.get("type"),
        )
        return jsonify({"employeeId": service.next_employee_id(session["org_id"], ctx)})

    @app.get("/api/employees/<uid>", endpoint="employee")
    @roles_required(MemberRole.ADMIN, MemberRole.MANAGER)
    def employee(uid: str):
        return jsonify(to_dict(service.get(session["org_id"], uid)))

    @app.patch("/api/employees/<uid>", endpoint="update_employee")
    @admin_required
    @setup_required
    def update_employee(uid: str):
        values = _rename(json_body(), _FIELD_NAMES)
        employee = service.update_profile(session["org_id"], uid, values, updated_by=session["uid"])
        return jsonify(to_dict(employee))

    @app.put("/api/employees/<uid>/role", endpoint="assign_role")
    @admin_required
    @setup_required
    def assign_role(uid: str):
        role_id = json_body().get("roleId")
        if not role_id:
            raise ValidationError("Role is required")
        employee = service.assign_role(session["org_id"], uid, role_id, updated_by=session["uid"])
        return jsonify(to_dict(employee))

    @app.delete("/api/employees/<uid>", endpoint="delete_employee")
    @admin_required
    def delete_employee(uid: str):
        service.delete(session["org_id"], uid)
        return jsonify({"ok": True})

    @app.get("/api/team", endpoint="team")
    @roles_required(MemberRole.MANAGER)
    def team():
        return jsonify(to_list(service.list_team(session["org_id"], session.get("name") or "")))

    @app.get("/api/me/profile", endpoint="my_profile")
    @login_required
    def my_profile():
        return jsonify(to_dict(service.get(session["org_id"], session["uid"])))

    @app.post("/api/me/onboarding", endpoint="complete_onboarding")
    @login_required
    def complete_onboarding():
        profile = _rename(json_body(), _ONBOARDING_NAMES)
        employee = service.complete_onboarding(session["org_id"], session["uid"], profile)
        return jsonify({**to_dict(employee), "redirectTo": "/employee"})
