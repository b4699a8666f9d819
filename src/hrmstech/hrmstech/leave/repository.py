from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import LeaveStatus, LeaveType
from .model import LeaveRequest


class LeaveRepository(Protocol):
    def create(
        self,
        *,
        org_id: str,
        user_id: str,
        leave_type: LeaveType,
        from_date: date,
        to_date: date,
        reason: str,
    ) -> int:
        raise NotImplementedError

    def get(self, org_id: str, request_id: int) -> Optional[LeaveRequest]:
        raise NotImplementedError

    def list_for_user(self, org_id: str, user_id: str) -> Sequence[LeaveRequest]:
        raise NotImplementedError

    def list_for_org(self, org_id: str, *, status: Optional[LeaveStatus] = None) -> Sequence[LeaveRequest]:
        """Requests of the organization with ``employee_name`` filled in."""

        raise NotImplementedError

    def list_overlapping(self, org_id: str, start: date, end: date) -> Sequence[LeaveRequest]:
        raise NotImplementedError

    def decide(self, org_id: str, request_id: int, *, status: LeaveStatus, reviewed_by: str) -> bool:
        """Set the status of a pending request; False if it was not pending."""

        raise NotImplementedError
