from __future__ import annotations

from typing import Optional, Sequence

from ..common.validators import require_choice, require_int, require_non_empty
from ..core.enums import RoleCategory, RoleStatus, Seniority
from ..core.exceptions import NotFoundError, ValidationError
from ..departments.repository import DepartmentRepository
from ..employees.repository import EmployeeRepository
from .model import JobRole
from .repository import JobRoleRepository


class JobRoleService:
    """Use case: job-role catalogue (admin)."""

    def __init__(self, roles: JobRoleRepository, departments: DepartmentRepository, employees: EmployeeRepository):
        self._roles = roles
        self._departments = departments
        self._employees = employees

    def list_all(self, org_id: str, *, department_id: Optional[int] = None) -> Sequence[JobRole]:
        return self._roles.list_all(org_id, department_id=department_id)

    def get(self, org_id: str, role_id: int) -> JobRole:
        role = self._roles.get(org_id, int(role_id))
        if not role:
            raise NotFoundError("Role not found")
        return role

    def _clean(self, org_id: str, values: dict, *, role_id: Optional[int] = None) -> dict:
        creating = role_id is None
        out: dict = {}

        if "title" in values or creating:
            out["title"] = require_non_empty(values.get("title"), "Role title")
        if "category" in values or creating:
            out["category"] = require_choice(values.get("category"), RoleCategory, "Category")
        if "seniority" in values or creating:
            out["seniority"] = require_choice(values.get("seniority"), Seniority, "Seniority")
        if "status" in values:
            out["status"] = require_choice(values.get("status"), RoleStatus, "Status")

        if "code" in values:
            code = (values.get("code") or "").strip().upper() or None
            if code:
                existing = self._roles.get_by_code(org_id, code)
                if existing and existing.role_id != role_id:
                    raise ValidationError(f"Role code {code} is already in use")
            out["code"] = code

        if "level" in values:
            try:
                level = int(values.get("level"))
            except (TypeError, ValueError):
                raise ValidationError("Level must be a whole number")
            if level < 1:
                raise ValidationError("Level must be at least 1")
            out["level"] = level

        if "department_ids" in values:
            dept_ids = [require_int(d, "Department") for d in values.get("department_ids") or []]
            for dept_id in dept_ids:
                if not self._departments.get(org_id, dept_id):
                    raise ValidationError(f"Department {dept_id} not found")
            out["department_ids"] = dept_ids
        if "primary_department_id" in values:
            primary = values.get("primary_department_id")
            primary = require_int(primary, "Primary department") if primary else None
            dept_ids = out.get("department_ids")
            if primary is not None and dept_ids is not None and primary not in dept_ids:
                raise ValidationError("Primary department must be one of the role's departments")
            out["primary_department_id"] = primary

        if "description" in values:
            out["description"] = (values.get("description") or "").strip()
        if "responsibilities" in values:
            out["responsibilities"] = [r.strip() for r in values.get("responsibilities") or [] if r and r.strip()]
        return out

    def create(self, org_id: str, values: dict, *, created_by: str) -> JobRole:
        role_id = self._roles.create(org_id, self._clean(org_id, values), created_by=created_by)
        return self.get(org_id, role_id)

    def update(self, org_id: str, role_id: int, values: dict) -> JobRole:
        self.get(org_id, role_id)
        self._roles.update(org_id, int(role_id), self._clean(org_id, values, role_id=int(role_id)))
        return self.get(org_id, role_id)

    def delete(self, org_id: str, role_id: int) -> None:
        self.get(org_id, role_id)
        if self._employees.count_with_role(org_id, int(role_id)) > 0:
            raise ValidationError("Cannot delete a role that is assigned to employees")
        self._roles.delete(org_id, int(role_id))
