from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import EmployeeStatus, EmployeeType, InviteStatus

# Choices offered on the invite form, and what each becomes on the employee record.
EMPLOYMENT_STATUSES = {
    "Probationary": (EmployeeStatus.PROBATION, EmployeeType.FULL_TIME),
    "Part-time": (EmployeeStatus.ACTIVE, EmployeeType.PART_TIME),
    "Full-time": (EmployeeStatus.ACTIVE, EmployeeType.FULL_TIME),
}


@dataclass(frozen=True)
class Invite:
    """Pending seat in an organization, keyed by the invitee's email."""

    org_id: str
    email: str
    name: str
    employment_status: str
    department_id: Optional[int] = None
    department_name: Optional[str] = None
    role_id: Optional[int] = None
    role_name: Optional[str] = None
    employee_id: Optional[str] = None
    status: InviteStatus = InviteStatus.PENDING
    created_at: Optional[datetime] = None
    accepted_at: Optional[datetime] = None

    @property
    def is_pending(self) -> bool:
        return self.status == InviteStatus.PENDING
