from datetime import date

import pytest

from src.hrmstech.hrmstech.core.enums import LeaveStatus, LeaveType
from src.hrmstech.hrmstech.core.exceptions import NotFoundError, ValidationError
from src.hrmstech.hrmstech.employees.model import Employee
from src.hrmstech.hrmstech.leave.model import LeaveRequest
from src.hrmstech.hrmstech.leave.service import LeaveService
from src.hrmstech.hrmstech.notifications.service import NotificationService

ORG = "org-1"


@pytest.fixture()
def svc(repos):
    repos.employees.create(Employee(org_id=ORG, uid="u1", employee_id="E1", name="Ana", email="ana@x.io"))
    return LeaveService(repos.leave, NotificationService(repos.notifications))


def test_submit_validates_dates(svc):
    with pytest.raises(ValidationError, match="Please select both from and to dates."):
        svc.submit(ORG, "u1", leave_type="Casual", from_date="2024-05-01", to_date="")
    with pytest.raises(ValidationError, match="'To' date cannot be before 'From' date."):
        svc.submit(ORG, "u1", leave_type="Casual", from_date="2024-05-03", to_date="2024-05-01")
    with pytest.raises(ValidationError, match="Leave type"):
        svc.submit(ORG, "u1", leave_type="Holiday", from_date="2024-05-01", to_date="2024-05-01")


def test_submit_and_list(svc):
    request_id = svc.submit(ORG, "u1", leave_type="Sick", from_date="2024-05-01", to_date="2024-05-03", reason=" flu ")

    mine = svc.list_mine(ORG, "u1")
    assert [r.request_id for r in mine] == [request_id]
    assert mine[0].reason == "flu"
    assert mine[0].days == 3
    assert mine[0].employee_name == "Ana"
    assert len(svc.list_for_org(ORG, status="pending")) == 1
    assert svc.list_for_org(ORG, status="approved") == []


def test_set_status_notifies_and_locks(svc, repos):
    request_id = svc.submit(ORG, "u1", leave_type="Annual", from_date="2024-05-01", to_date="2024-05-02")

    decided = svc.set_status(ORG, request_id, "approved", reviewer_uid="admin")

    assert decided.status == LeaveStatus.APPROVED
    assert decided.reviewed_by == "admin"
    notes = repos.notifications.list_for_user(ORG, "u1")
    assert notes[0].title == "Leave request approved"
    assert notes[0].link == "/employee/leave"

    with pytest.raises(ValidationError, match="already been reviewed"):
        svc.set_status(ORG, request_id, "rejected", reviewer_uid="admin")


def test_set_status_rejects_pending_target_and_unknown_request(svc):
    with pytest.raises(ValidationError):
        svc.set_status(ORG, 1, "pending", reviewer_uid="admin")
    with pytest.raises(NotFoundError):
        svc.set_status(ORG, 99, "approved", reviewer_uid="admin")


def test_calendar_clips_to_month(svc):
    svc.submit(ORG, "u1", leave_type="Casual", from_date="2024-04-29", to_date="2024-05-02")
    svc.submit(ORG, "u2", leave_type="Sick", from_date="2024-05-31", to_date="2024-06-01")

    days = svc.calendar(ORG, 2024, 5)

    assert sorted(days) == ["2024-05-01", "2024-05-02", "2024-05-31"]
    assert days["2024-05-01"] == [{"name": "Ana", "type": "Casual", "status": "pending"}]
    assert days["2024-05-31"][0]["name"] == "u2"


def test_calendar_rejects_bad_month(svc):
    with pytest.raises(ValidationError):
        svc.calendar(ORG, 2024, 13)


def test_days_property_counts_inclusive():
    req = LeaveRequest(
        request_id=1, org_id=ORG, user_id="u1", type=LeaveType.CASUAL, from_date=date(2024, 2, 28), to_date=date(2024, 3, 1)
    )
    assert req.days == 3
