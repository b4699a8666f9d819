from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from ..core.enums import RoleCategory, RoleStatus, Seniority


@dataclass(frozen=True)
class JobRole:
    """A position employees can be assigned to (not a portal permission)."""

    role_id: int
    org_id: str
    title: str
    category: RoleCategory
    seniority: Seniority
    code: Optional[str] = None
    department_ids: list[int] = field(default_factory=list)
    primary_department_id: Optional[int] = None
    level: int = 1
    description: str = ""
    responsibilities: list[str] = field(default_factory=list)
    status: RoleStatus = RoleStatus.DRAFT
    employee_count: int = 0
    created_by: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
