from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Employee


class EmployeeRepository(Protocol):
    def get(self, org_id: str, uid: str) -> Optional[Employee]:
        raise NotImplementedError

    def get_by_email(self, org_id: str, email: str) -> Optional[Employee]:
        raise NotImplementedError

    def list_for_org(self, org_id: str) -> Sequence[Employee]:
        raise NotImplementedError

    def list_employee_ids(self, org_id: str) -> Sequence[str]:
        raise NotImplementedError

    def create(self, employee: Employee) -> None:
        raise NotImplementedError

    def update_fields(self, org_id: str, uid: str, fields: dict, *, updated_by: str) -> bool:
        """Write a subset of columns and stamp ``last_updated``/``updated_by``."""

        raise NotImplementedError

    def delete(self, org_id: str, uid: str) -> bool:
        raise NotImplementedError

    def count_in_department(self, org_id: str, department_id: int) -> int:
        raise NotImplementedError

    def count_with_role(self, org_id: str, role_id: int) -> int:
        raise NotImplementedError
