from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..common.datetime_utils import parse_optional_date
from ..common.validators import require_choice, require_int, require_non_empty
from ..core.enums import EmployeeStatus, EmployeeType
from ..core.exceptions import NotFoundError, ValidationError
from ..departments.repository import DepartmentRepository
from ..employee_ids import formatter
from ..invites.repository import InviteRepository
from ..organizations.repository import OrganizationRepository
from ..roles.repository import JobRoleRepository
from .model import ADMIN_EDITABLE, Employee
from .repository import EmployeeRepository

SORT_KEYS = ("name", "employee_id", "email", "department", "job_title", "manager", "hire_date", "status")


def _sort_value(employee: Employee, key: str):
    value = getattr(employee, key)
    if value is None:
        return ""
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, EmployeeStatus):
        return value.value
    return str(value).lower()


class EmployeeService:
    """Use cases around the employee directory."""

    def __init__(
        self,
        employees: EmployeeRepository,
        orgs: OrganizationRepository,
        invites: InviteRepository,
        departments: DepartmentRepository,
        roles: JobRoleRepository,
    ):
        self._employees = employees
        self._orgs = orgs
        self._invites = invites
        self._departments = departments
        self._roles = roles

    def get(self, org_id: str, uid: str) -> Employee:
        employee = self._employees.get(org_id, uid)
        if not employee:
            raise NotFoundError("Employee not found")
        return employee

    def list_directory(
        self,
        org_id: str,
        *,
        search: Optional[str] = None,
        department: Optional[str] = None,
        status: Optional[str] = None,
        sort_key: str = "name",
        descending: bool = False,
    ) -> list[Employee]:
        if sort_key not in SORT_KEYS:
            raise ValidationError(f"Cannot sort by {sort_key}")

        items = list(self._employees.list_for_org(org_id))
        needle = (search or "").strip().lower()
        if needle:
            items = [
                e
                for e in items
                if needle in e.name.lower() or needle in e.email.lower() or needle in e.employee_id.lower()
            ]
        if department:
            items = [e for e in items if e.department == department]
        if status:
            items = [e for e in items if e.status.value == status]

        items.sort(key=lambda e: _sort_value(e, sort_key), reverse=descending)
        return items

    def list_team(self, org_id: str, manager_name: str) -> list[Employee]:
        manager_name = require_non_empty(manager_name, "Manager")
        return [e for e in self._employees.list_for_org(org_id) if e.manager == manager_name]

    def next_employee_id(
        self,
        org_id: str,
        context: Optional[formatter.EmployeeIdContext] = None,
        *,
        today: Optional[date] = None,
    ) -> str:
        """Render the next free identifier for ``org_id``.

        Identifiers already handed out to pending invites count as used.
        """

        org = self._orgs.get_by_id(org_id)
        if not org:
            raise NotFoundError("Organization not found")

        existing = list(self._employees.list_employee_ids(org_id))
        existing.extend(i.employee_id for i in self._invites.list_for_org(org_id) if i.employee_id)

        today = today or date.today()
        sequence = formatter.next_sequence(org.employee_id_format, existing, today)
        ctx = context or formatter.EmployeeIdContext()
        ctx = formatter.EmployeeIdContext(
            sequence=sequence,
            department=ctx.department,
            location=ctx.location,
            employee_type=ctx.employee_type,
        )
        return formatter.generate(org.employee_id_format, ctx, today=today)

    def update_profile(self, org_id: str, uid: str, values: dict, *, updated_by: str) -> Employee:
        self.get(org_id, uid)

        unknown = set(values) - set(ADMIN_EDITABLE)
        if unknown:
            raise ValidationError(f"Fields cannot be edited: {', '.join(sorted(unknown))}")

        changes = dict(values)
        if "name" in changes:
            changes["name"] = require_non_empty(changes["name"], "Name")
        if "status" in changes:
            changes["status"] = require_choice(changes["status"], EmployeeStatus, "Status")
        if "employee_type" in changes:
            changes["employee_type"] = require_choice(changes["employee_type"], EmployeeType, "Employee type")
        if "hire_date" in changes:
            changes["hire_date"] = parse_optional_date(changes["hire_date"], "Hire date")
        if changes.get("department_id"):
            dept = self._departments.get(org_id, require_int(changes["department_id"], "Department"))
            if not dept:
                raise ValidationError("Department not found")
            changes["department_id"] = dept.dept_id
            changes.setdefault("department", dept.name)
        if changes.get("role_id"):
            role = self._roles.get(org_id, require_int(changes["role_id"], "Role"))
            if not role:
                raise ValidationError("Role not found")
            changes["role_id"] = role.role_id
            changes.setdefault("job_title", role.title)

        self._employees.update_fields(org_id, uid, changes, updated_by=updated_by)
        return self.get(org_id, uid)

    def assign_role(self, org_id: str, uid: str, role_id, *, updated_by: str) -> Employee:
        return self.update_profile(org_id, uid, {"role_id": require_int(role_id, "Role")}, updated_by=updated_by)

    def complete_onboarding(self, org_id: str, uid: str, profile: dict) -> Employee:
        self.get(org_id, uid)

        changes = {
            "phone_number": require_non_empty(profile.get("phone_number"), "Phone number"),
            "dob": parse_optional_date(profile.get("dob"), "Date of birth"),
            "nid_number": require_non_empty(profile.get("nid_number"), "NID number"),
            "passport_number": (profile.get("passport_number") or "").strip(),
            "emergency_contact_name": (profile.get("emergency_contact_name") or "").strip() or None,
            "emergency_contact_phone": (profile.get("emergency_contact_phone") or "").strip() or None,
            "emergency_contact_relation": (profile.get("emergency_contact_relation") or "").strip() or None,
            "present_address": (profile.get("present_address") or "").strip() or None,
            "permanent_address": (profile.get("permanent_address") or "").strip() or None,
            "onboarding_completed": True,
        }
        if changes["dob"] is None:
            raise ValidationError("Date of birth is required")

        self._employees.update_fields(org_id, uid, changes, updated_by=uid)
        return self.get(org_id, uid)

    def delete(self, org_id: str, uid: str) -> None:
        if not self._employees.delete(org_id, uid):
            raise NotFoundError("Employee not found")

    def departments_in_use(self, org_id: str) -> Sequence[str]:
        return sorted({e.department for e in self._employees.list_for_org(org_id) if e.department})
