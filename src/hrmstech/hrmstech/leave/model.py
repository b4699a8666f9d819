from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import LeaveStatus, LeaveType


@dataclass(frozen=True)
class LeaveRequest:
    request_id: int
    org_id: str
    user_id: str
    type: LeaveType
    from_date: date
    to_date: date
    reason: str = ""
    status: LeaveStatus = LeaveStatus.PENDING
    created_at: Optional[datetime] = None
    reviewed_at: Optional[datetime] = None
    reviewed_by: Optional[str] = None

    # Joined from employees for the admin list.
    employee_name: Optional[str] = None

    @property
    def days(self) -> int:
        return (self.to_date - self.from_date).days + 1
