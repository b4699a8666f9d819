from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Department


class DepartmentRepository(Protocol):
    def list_all(self, org_id: str) -> Sequence[Department]:
        raise NotImplementedError

    def get(self, org_id: str, dept_id: int) -> Optional[Department]:
        raise NotImplementedError

    def get_by_code(self, org_id: str, code: str) -> Optional[Department]:
        raise NotImplementedError

    def create(self, org_id: str, values: dict) -> int:
        raise NotImplementedError

    def update(self, org_id: str, dept_id: int, values: dict) -> bool:
        raise NotImplementedError

    def delete(self, org_id: str, dept_id: int) -> bool:
        raise NotImplementedError
