from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional

from ..core.enums import DepartmentStatus


@dataclass(frozen=True)
class Department:
    dept_id: int
    org_id: str
    name: str
    code: Optional[str] = None
    description: Optional[str] = None
    type: str = "operational"
    parent_id: Optional[int] = None
    head: Optional[str] = None
    location: Optional[str] = None
    budget: Optional[Decimal] = None
    status: DepartmentStatus = DepartmentStatus.ACTIVE
    created_at: Optional[datetime] = None
