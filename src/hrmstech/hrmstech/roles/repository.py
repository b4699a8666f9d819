from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import JobRole


class JobRoleRepository(Protocol):
    def list_all(self, org_id: str, *, department_id: Optional[int] = None) -> Sequence[JobRole]:
        raise NotImplementedError

    def get(self, org_id: str, role_id: int) -> Optional[JobRole]:
        raise NotImplementedError

    def get_by_code(self, org_id: str, code: str) -> Optional[JobRole]:
        raise NotImplementedError

    def create(self, org_id: str, values: dict, *, created_by: str) -> int:
        raise NotImplementedError

    def update(self, org_id: str, role_id: int, values: dict) -> bool:
        raise NotImplementedError

    def delete(self, org_id: str, role_id: int) -> bool:
        raise NotImplementedError
