from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import EmployeeDocument


class DocumentRepository(Protocol):
    def create(
        self,
        *,
        org_id: str,
        uid: str,
        document_type: str,
        name: str,
        size: int,
        content_type: str,
        storage_path: str,
    ) -> int:
        raise NotImplementedError

    def get(self, org_id: str, document_id: int) -> Optional[EmployeeDocument]:
        raise NotImplementedError

    def list_for_employee(self, org_id: str, uid: str) -> Sequence[EmployeeDocument]:
        raise NotImplementedError

    def delete(self, org_id: str, document_id: int) -> bool:
        raise NotImplementedError
