from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class EmployeeDocument:
    """Metadata of a file an employee uploaded (ID scan, resume...)."""

    document_id: int
    org_id: str
    uid: str
    document_type: str
    name: str
    size: int
    content_type: str
    storage_path: str
    uploaded_at: Optional[datetime] = None
