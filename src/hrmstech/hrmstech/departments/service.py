from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Optional, Sequence

from ..common.validators import require_choice, require_int, require_non_empty
from ..core.enums import DepartmentStatus
from ..core.exceptions import NotFoundError, ValidationError
from ..employees.repository import EmployeeRepository
from .model import Department
from .repository import DepartmentRepository


class DepartmentService:
    """Use case: organization structure (admin)."""

    def __init__(self, departments: DepartmentRepository, employees: EmployeeRepository):
        self._departments = departments
        self._employees = employees

    def list_all(self, org_id: str) -> Sequence[Department]:
        return self._departments.list_all(org_id)

    def get(self, org_id: str, dept_id: int) -> Department:
        dept = self._departments.get(org_id, int(dept_id))
        if not dept:
            raise NotFoundError("Department not found")
        return dept

    def _clean(self, org_id: str, values: dict, *, dept_id: Optional[int] = None) -> dict:
        out: dict = {}
        if "name" in values or dept_id is None:
            out["name"] = require_non_empty(values.get("name"), "Department name")
        if "code" in values:
            code = (values.get("code") or "").strip().upper() or None
            if code:
                existing = self._departments.get_by_code(org_id, code)
                if existing and existing.dept_id != dept_id:
                    raise ValidationError(f"Department code {code} is already in use")
            out["code"] = code
        for key in ("description", "type", "head", "location"):
            if key in values:
                out[key] = (values.get(key) or "").strip() or None
        if "parent_id" in values:
            parent_id = require_int(values["parent_id"], "Parent department") if values.get("parent_id") else None
            if parent_id is not None:
                if parent_id == dept_id:
                    raise ValidationError("A department cannot be its own parent")
                self.get(org_id, parent_id)
            out["parent_id"] = parent_id
        if "budget" in values:
            out["budget"] = self._budget(values.get("budget"))
        if "status" in values:
            out["status"] = require_choice(values.get("status"), DepartmentStatus, "Status")
        return out

    @staticmethod
    def _budget(value) -> Optional[Decimal]:
        if value in (None, ""):
            return None
        try:
            budget = Decimal(str(value))
        except InvalidOperation:
            raise ValidationError("Budget must be a number")
        if budget < 0:
            raise ValidationError("Budget cannot be negative")
        return budget

    def create(self, org_id: str, values: dict) -> Department:
        dept_id = self._departments.create(org_id, self._clean(org_id, values))
        return self.get(org_id, dept_id)

    def update(self, org_id: str, dept_id: int, values: dict) -> Department:
        self.get(org_id, dept_id)
        self._departments.update(org_id, int(dept_id), self._clean(org_id, values, dept_id=int(dept_id)))
        return self.get(org_id, dept_id)

    def delete(self, org_id: str, dept_id: int) -> None:
        self.get(org_id, dept_id)
        if self._employees.count_in_department(org_id, int(dept_id)) > 0:
            raise ValidationError("Cannot delete a department that still has employees")
        self._departments.delete(org_id, int(dept_id))
