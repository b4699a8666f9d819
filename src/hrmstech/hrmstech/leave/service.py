from __future__ import annotations

import calendar as _calendar
import logging
from datetime import date, timedelta
from typing import Optional, Sequence

from ..common.datetime_utils import parse_optional_date
from ..common.validators import require_choice
from ..core.enums import LeaveStatus, LeaveType
from ..core.exceptions import NotFoundError, ValidationError
from ..notifications.service import NotificationService
from .model import LeaveRequest
from .repository import LeaveRepository

logger = logging.getLogger(__name__)


class LeaveService:
    def __init__(self, leave: LeaveRepository, notifications: NotificationService):
        self._leave = leave
        self._notifications = notifications

    def submit(
        self,
        org_id: str,
        user_id: str,
        *,
        leave_type: str,
        from_date: Optional[str],
        to_date: Optional[str],
        reason: str = "",
    ) -> int:
        start = parse_optional_date(from_date, "From date")
        end = parse_optional_date(to_date, "To date")
        if not start or not end:
            raise ValidationError("Please select both from and to dates.")
        if end < start:
            raise ValidationError("'To' date cannot be before 'From' date.")

        return self._leave.create(
            org_id=org_id,
            user_id=user_id,
            leave_type=require_choice(leave_type, LeaveType, "Leave type"),
            from_date=start,
            to_date=end,
            reason=(reason or "").strip(),
        )

    def list_mine(self, org_id: str, user_id: str) -> Sequence[LeaveRequest]:
        return self._leave.list_for_user(org_id, user_id)

    def list_for_org(self, org_id: str, *, status: Optional[str] = None) -> Sequence[LeaveRequest]:
        wanted = require_choice(status, LeaveStatus, "Status") if status else None
        return self._leave.list_for_org(org_id, status=wanted)

    def set_status(self, org_id: str, request_id: int, status: str, *, reviewer_uid: str) -> LeaveRequest:
        decision = require_choice(status, LeaveStatus, "Status")
        if decision == LeaveStatus.PENDING:
            raise ValidationError("A request can only be approved or rejected")

        req = self._leave.get(org_id, int(request_id))
        if not req:
            raise NotFoundError("Leave request not found")
        if req.status != LeaveStatus.PENDING:
            raise ValidationError("This request has already been reviewed")
        if not self._leave.decide(org_id, req.request_id, status=decision, reviewed_by=reviewer_uid):
            raise ValidationError("This request has already been reviewed")

        self._notifications.notify(
            org_id,
            req.user_id,
            f"Leave request {decision.value}",
            f"Your {req.type.value} leave ({req.from_date.isoformat()} to {req.to_date.isoformat()}) "
            f"was {decision.value}.",
            link="/employee/leave",
        )
        logger.info("leave request %s %s by %s", req.request_id, decision.value, reviewer_uid)
        return self._leave.get(org_id, req.request_id)

    def calendar(self, org_id: str, year: int, month: int) -> dict[str, list[dict]]:
        """Who is away on each day of ``year``/``month``, keyed by ISO date."""

        if not 1 <= int(month) <= 12:
            raise ValidationError("Month must be between 1 and 12")
        first = date(int(year), int(month), 1)
        last = first.replace(day=_calendar.monthrange(first.year, first.month)[1])

        days: dict[str, list[dict]] = {}
        for req in self._leave.list_overlapping(org_id, first, last):
            day = max(req.from_date, first)
            end = min(req.to_date, last)
            while day <= end:
                days.setdefault(day.isoformat(), []).append(
                    {"name": req.employee_name or req.user_id, "type": req.type.value, "status": req.status.value}
                )
                day += timedelta(days=1)
        return days
