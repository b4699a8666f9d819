from __future__ import annotations

from typing import Optional, Protocol

from .model import Organization


class OrganizationRepository(Protocol):
    def get_by_id(self, org_id: str) -> Optional[Organization]:
        raise NotImplementedError

    def create(self, *, org_id: str, name: str, size: Optional[str], created_by: str) -> None:
        raise NotImplementedError

    def save_settings(self, org_id: str, *, settings: dict, setup_completed: bool) -> bool:
        raise NotImplementedError

    def set_employee_id_format(self, org_id: str, employee_id_format: str) -> bool:
        raise NotImplementedError
