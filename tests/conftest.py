from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from types import SimpleNamespace
from typing import Optional

import pytest

from src.hrmstech.hrmstech.container import wire
from src.hrmstech.hrmstech.core.enums import InviteStatus, LeaveStatus, MemberRole, PayrollStatus
from src.hrmstech.hrmstech.core.exceptions import EmailDeliveryError
from src.hrmstech.hrmstech.departments.model import Department
from src.hrmstech.hrmstech.employees.model import Employee
from src.hrmstech.hrmstech.invites.model import Invite
from src.hrmstech.hrmstech.leave.model import LeaveRequest
from src.hrmstech.hrmstech.letters.model import LetterTemplate
from src.hrmstech.hrmstech.notifications.model import Notification
from src.hrmstech.hrmstech.organizations.model import Organization
from src.hrmstech.hrmstech.payroll.model import PayrollRun
from src.hrmstech.hrmstech.roles.model import JobRole
from src.hrmstech.hrmstech.uploads.model import EmployeeDocument
from src.hrmstech.hrmstech.uploads.storage import LocalFileStorage
from src.hrmstech.hrmstech.users.model import Membership, PasswordReset, UserAccount


class InMemoryOrganizations:
    def __init__(self):
        self.orgs: dict[str, Organization] = {}

    def get_by_id(self, org_id: str) -> Optional[Organization]:
        return self.orgs.get(org_id)

    def create(self, *, org_id: str, name: str, size: Optional[str], created_by: str) -> None:
        self.orgs[org_id] = Organization(org_id=org_id, name=name, size=size, created_by=created_by)

    def save_settings(self, org_id: str, *, settings: dict, setup_completed: bool) -> bool:
        self.orgs[org_id] = replace(self.orgs[org_id], settings=dict(settings), setup_completed=setup_completed)
        return True

    def set_employee_id_format(self, org_id: str, employee_id_format: str) -> bool:
        self.orgs[org_id] = replace(self.orgs[org_id], employee_id_format=employee_id_format)
        return True


class InMemoryUsers:
    def __init__(self):
        self.accounts: dict[str, UserAccount] = {}
        self.resets: dict[str, PasswordReset] = {}

    def get_by_uid(self, uid: str) -> Optional[UserAccount]:
        return self.accounts.get(uid)

    def get_by_email(self, email: str) -> Optional[UserAccount]:
        return next((a for a in self.accounts.values() if a.email == email), None)

    def create_account(self, *, uid: str, email: str, password_hash: str) -> None:
        self.accounts[uid] = UserAccount(uid=uid, email=email, password_hash=password_hash)

    def set_password(self, uid: str, password_hash: str) -> bool:
        self.accounts[uid] = replace(self.accounts[uid], password_hash=password_hash)
        return True

    def set_active(self, uid: str, *, is_active: bool) -> bool:
        self.accounts[uid] = replace(self.accounts[uid], is_active=is_active)
        return True

    def create_reset(self, *, token: str, uid: str, expires_at: datetime) -> None:
        self.resets[token] = PasswordReset(token=token, uid=uid, expires_at=expires_at)

    def get_reset(self, token: str) -> Optional[PasswordReset]:
        return self.resets.get(token)

    def mark_reset_used(self, token: str) -> bool:
        reset = self.resets.get(token)
        if not reset or reset.used:
            return False
        self.resets[token] = replace(reset, used=True)
        return True


class InMemoryMemberships:
    def __init__(self):
        self.items: dict[tuple[str, str], Membership] = {}

    def get(self, org_id: str, uid: str) -> Optional[Membership]:
        return self.items.get((org_id, uid))

    def find_by_uid(self, uid: str):
        return [m for m in self.items.values() if m.uid == uid]

    def create(self, *, org_id, uid, email, role, name=None, phone=None) -> None:
        self.items[(org_id, uid)] = Membership(org_id=org_id, uid=uid, email=email, role=role, name=name, phone=phone)

    def set_role(self, org_id: str, uid: str, role: MemberRole) -> bool:
        self.items[(org_id, uid)] = replace(self.items[(org_id, uid)], role=role)
        return True

    def list_for_org(self, org_id: str):
        return [m for m in self.items.values() if m.org_id == org_id]

    def delete(self, org_id: str, uid: str) -> bool:
        return self.items.pop((org_id, uid), None) is not None


class InMemoryEmployees:
    def __init__(self):
        self.items: dict[tuple[str, str], Employee] = {}
        self.updates: list[tuple[str, dict, str]] = []

    def get(self, org_id: str, uid: str) -> Optional[Employee]:
        return self.items.get((org_id, uid))

    def get_by_email(self, org_id: str, email: str) -> Optional[Employee]:
        return next((e for e in self.list_for_org(org_id) if e.email == email), None)

    def list_for_org(self, org_id: str):
        return sorted((e for e in self.items.values() if e.org_id == org_id), key=lambda e: e.name)

    def list_employee_ids(self, org_id: str):
        return [e.employee_id for e in self.list_for_org(org_id) if e.employee_id]

    def create(self, employee: Employee) -> None:
        self.items[(employee.org_id, employee.uid)] = employee

    def update_fields(self, org_id: str, uid: str, fields: dict, *, updated_by: str) -> bool:
        if (org_id, uid) not in self.items:
            return False
        self.updates.append((uid, dict(fields), updated_by))
        self.items[(org_id, uid)] = replace(self.items[(org_id, uid)], updated_by=updated_by, **fields)
        return True

    def delete(self, org_id: str, uid: str) -> bool:
        return self.items.pop((org_id, uid), None) is not None

    def count_in_department(self, org_id: str, department_id: int) -> int:
        return sum(1 for e in self.list_for_org(org_id) if e.department_id == department_id)

    def count_with_role(self, org_id: str, role_id: int) -> int:
        return sum(1 for e in self.list_for_org(org_id) if e.role_id == role_id)


class InMemoryDepartments:
    def __init__(self):
        self.items: dict[int, Department] = {}

    def list_all(self, org_id: str):
        return [d for d in self.items.values() if d.org_id == org_id]

    def get(self, org_id: str, dept_id: int) -> Optional[Department]:
        d = self.items.get(int(dept_id))
        return d if d and d.org_id == org_id else None

    def get_by_code(self, org_id: str, code: str) -> Optional[Department]:
        return next((d for d in self.list_all(org_id) if d.code == code), None)

    def create(self, org_id: str, values: dict) -> int:
        dept_id = len(self.items) + 1
        self.items[dept_id] = Department(dept_id=dept_id, org_id=org_id, **values)
        return dept_id

    def update(self, org_id: str, dept_id: int, values: dict) -> bool:
        self.items[dept_id] = replace(self.items[dept_id], **values)
        return True

    def delete(self, org_id: str, dept_id: int) -> bool:
        return self.items.pop(int(dept_id), None) is not None


class InMemoryRoles:
    def __init__(self):
        self.items: dict[int, JobRole] = {}

    def list_all(self, org_id: str, *, department_id: Optional[int] = None):
        roles = [r for r in self.items.values() if r.org_id == org_id]
        if department_id is not None:
            roles = [r for r in roles if department_id in r.department_ids]
        return roles

    def get(self, org_id: str, role_id: int) -> Optional[JobRole]:
        r = self.items.get(int(role_id))
        return r if r and r.org_id == org_id else None

    def get_by_code(self, org_id: str, code: str) -> Optional[JobRole]:
        return next((r for r in self.list_all(org_id) if r.code == code), None)

    def create(self, org_id: str, values: dict, *, created_by: str) -> int:
        role_id = len(self.items) + 1
        self.items[role_id] = JobRole(role_id=role_id, org_id=org_id, created_by=created_by, **values)
        return role_id

    def update(self, org_id: str, role_id: int, values: dict) -> bool:
        self.items[role_id] = replace(self.items[role_id], **values)
        return True

    def delete(self, org_id: str, role_id: int) -> bool:
        return self.items.pop(int(role_id), None) is not None


class InMemoryInvites:
    def __init__(self):
        self.items: dict[tuple[str, str], Invite] = {}

    def get(self, org_id: str, email: str) -> Optional[Invite]:
        return self.items.get((org_id, email))

    def list_for_org(self, org_id: str):
        return [i for i in self.items.values() if i.org_id == org_id]

    def upsert(self, invite: Invite) -> None:
        self.items[(invite.org_id, invite.email)] = invite

    def set_status(self, org_id: str, email: str, status: InviteStatus) -> bool:
        self.items[(org_id, email)] = replace(self.items[(org_id, email)], status=status)
        return True


class InMemoryLeave:
    def __init__(self, employees: InMemoryEmployees):
        self.items: dict[int, LeaveRequest] = {}
        self._employees = employees

    def _named(self, req: LeaveRequest) -> LeaveRequest:
        employee = self._employees.get(req.org_id, req.user_id)
        return replace(req, employee_name=employee.name if employee else None)

    def create(self, *, org_id, user_id, leave_type, from_date, to_date, reason) -> int:
        request_id = len(self.items) + 1
        self.items[request_id] = LeaveRequest(
            request_id=request_id,
            org_id=org_id,
            user_id=user_id,
            type=leave_type,
            from_date=from_date,
            to_date=to_date,
            reason=reason,
        )
        return request_id

    def get(self, org_id: str, request_id: int) -> Optional[LeaveRequest]:
        req = self.items.get(int(request_id))
        return self._named(req) if req and req.org_id == org_id else None

    def list_for_user(self, org_id: str, user_id: str):
        return [self._named(r) for r in self.items.values() if r.org_id == org_id and r.user_id == user_id]

    def list_for_org(self, org_id: str, *, status=None):
        return [
            self._named(r)
            for r in self.items.values()
            if r.org_id == org_id and (status is None or r.status == status)
        ]

    def list_overlapping(self, org_id: str, start, end):
        return [
            self._named(r)
            for r in self.items.values()
            if r.org_id == org_id and r.from_date <= end and r.to_date >= start
        ]

    def decide(self, org_id: str, request_id: int, *, status: LeaveStatus, reviewed_by: str) -> bool:
        req = self.items.get(int(request_id))
        if not req or req.status != LeaveStatus.PENDING:
            return False
        self.items[req.request_id] = replace(req, status=status, reviewed_by=reviewed_by, reviewed_at=datetime.now())
        return True


class InMemoryPayroll:
    def __init__(self):
        self.runs: dict[int, PayrollRun] = {}
        self.items: dict[tuple[int, str], object] = {}

    def create_run(self, *, org_id: str, period: str, notes: str) -> int:
        run_id = len(self.runs) + 1
        self.runs[run_id] = PayrollRun(run_id=run_id, org_id=org_id, period=period, notes=notes)
        return run_id

    def get_run(self, org_id: str, run_id: int):
        run = self.runs.get(int(run_id))
        return run if run and run.org_id == org_id else None

    def list_runs(self, org_id: str):
        return [r for r in self.runs.values() if r.org_id == org_id]

    def set_run_status(self, org_id: str, run_id: int, status: PayrollStatus) -> bool:
        self.runs[run_id] = replace(self.runs[run_id], status=status)
        return True

    def delete_run(self, org_id: str, run_id: int) -> bool:
        return self.runs.pop(int(run_id), None) is not None

    def list_items(self, run_id: int):
        return sorted((i for (r, _), i in self.items.items() if r == run_id), key=lambda i: i.name)

    def save_item(self, item) -> None:
        self.items[(item.run_id, item.uid)] = item

    def delete_items(self, run_id: int) -> int:
        keys = [k for k in self.items if k[0] == run_id]
        for k in keys:
            del self.items[k]
        return len(keys)


class InMemoryNotifications:
    def __init__(self):
        self.items: dict[int, Notification] = {}

    def create(self, *, org_id, uid, title, message, link=None) -> int:
        notification_id = len(self.items) + 1
        self.items[notification_id] = Notification(
            notification_id=notification_id, org_id=org_id, uid=uid, title=title, message=message, link=link
        )
        return notification_id

    def list_for_user(self, org_id: str, uid: str, *, unread_only: bool = False):
        return [
            n
            for n in self.items.values()
            if n.org_id == org_id and n.uid == uid and not (unread_only and n.is_read)
        ]

    def mark_read(self, org_id: str, uid: str, notification_id: int) -> bool:
        n = self.items.get(int(notification_id))
        if not n or n.org_id != org_id or n.uid != uid:
            return False
        self.items[n.notification_id] = replace(n, is_read=True)
        return True

    def mark_all_read(self, org_id: str, uid: str) -> int:
        unread = self.list_for_user(org_id, uid, unread_only=True)
        for n in unread:
            self.items[n.notification_id] = replace(n, is_read=True)
        return len(unread)


class InMemoryDocuments:
    def __init__(self):
        self.items: dict[int, EmployeeDocument] = {}

    def create(self, *, org_id, uid, document_type, name, size, content_type, storage_path) -> int:
        document_id = len(self.items) + 1
        self.items[document_id] = EmployeeDocument(
            document_id=document_id,
            org_id=org_id,
            uid=uid,
            document_type=document_type,
            name=name,
            size=size,
            content_type=content_type,
            storage_path=storage_path,
        )
        return document_id

    def get(self, org_id: str, document_id: int):
        d = self.items.get(int(document_id))
        return d if d and d.org_id == org_id else None

    def list_for_employee(self, org_id: str, uid: str):
        return [d for d in self.items.values() if d.org_id == org_id and d.uid == uid]

    def delete(self, org_id: str, document_id: int) -> bool:
        return self.items.pop(int(document_id), None) is not None


class InMemoryLetters:
    def __init__(self):
        self.items: dict[int, LetterTemplate] = {}

    def list_all(self, org_id: str):
        return [t for t in self.items.values() if t.org_id == org_id]

    def get(self, org_id: str, template_id: int):
        t = self.items.get(int(template_id))
        return t if t and t.org_id == org_id else None

    def create(self, *, org_id: str, name: str, content: str) -> int:
        template_id = len(self.items) + 1
        self.items[template_id] = LetterTemplate(template_id=template_id, org_id=org_id, name=name, content=content)
        return template_id

    def update(self, org_id: str, template_id: int, *, name: str, content: str) -> bool:
        self.items[template_id] = replace(self.items[template_id], name=name, content=content)
        return True

    def delete(self, org_id: str, template_id: int) -> bool:
        return self.items.pop(int(template_id), None) is not None


class FakeMailer:
    def __init__(self, *, configured: bool = True, fail_with: Optional[str] = None):
        self.configured = configured
        self.fail_with = fail_with
        self.sent: list[dict] = []

    def _deliver(self, **message) -> str:
        if self.fail_with:
            raise EmailDeliveryError(self.fail_with)
        self.sent.append(message)
        return f"msg-{len(self.sent)}"

    def send_invite(self, *, to, invite_url, org_name=None) -> str:
        return self._deliver(kind="invite", to=to, invite_url=invite_url, org_name=org_name)

    def send_password_reset(self, *, to, reset_url, ttl_minutes) -> str:
        return self._deliver(kind="reset", to=to, reset_url=reset_url, ttl_minutes=ttl_minutes)


@pytest.fixture()
def repos():
    employees = InMemoryEmployees()
    return SimpleNamespace(
        orgs=InMemoryOrganizations(),
        users=InMemoryUsers(),
        memberships=InMemoryMemberships(),
        employees=employees,
        departments=InMemoryDepartments(),
        roles=InMemoryRoles(),
        invites=InMemoryInvites(),
        leave=InMemoryLeave(employees),
        payroll=InMemoryPayroll(),
        notifications=InMemoryNotifications(),
        documents=InMemoryDocuments(),
        letters=InMemoryLetters(),
    )


@pytest.fixture()
def mailer():
    return FakeMailer()


@pytest.fixture()
def container(repos, mailer, tmp_path):
    return wire(
        orgs_repo=repos.orgs,
        users_repo=repos.users,
        memberships_repo=repos.memberships,
        employees_repo=repos.employees,
        departments_repo=repos.departments,
        roles_repo=repos.roles,
        invites_repo=repos.invites,
        leave_repo=repos.leave,
        payroll_repo=repos.payroll,
        notifications_repo=repos.notifications,
        documents_repo=repos.documents,
        letters_repo=repos.letters,
        mailer=mailer,
        storage=LocalFileStorage(tmp_path / "uploads"),
    )


@pytest.fixture()
def app(container, monkeypatch):
    from src.hrmstech.hrmstech.main import create_app

    monkeypatch.setenv("APP_ENV", "testing")
    return create_app(container)


@pytest.fixture()
def client(app):
    return app.test_client()
