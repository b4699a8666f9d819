from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Optional, Sequence
from urllib.parse import urlencode

from ..common.validators import normalize_email, require_int, require_non_empty
from ..core.enums import InviteStatus, MemberRole
from ..core.exceptions import EmailDeliveryError, NotFoundError, ValidationError
from ..departments.repository import DepartmentRepository
from ..employee_ids.formatter import EmployeeIdContext
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from ..employees.service import EmployeeService
from ..mail.resend_mailer import ResendMailer
from ..organizations.repository import OrganizationRepository
from ..roles.repository import JobRoleRepository
from ..users.repository import MembershipRepository
from ..users.service import AuthService, SessionUser
from .model import EMPLOYMENT_STATUSES, Invite
from .repository import InviteRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InviteResult:
    invite: Invite
    invite_url: str
    email_sent: bool
    email_error: Optional[str] = None


def build_invite_url(base_url: str, org_id: str, email: str) -> str:
    return f"{base_url.rstrip('/')}/invite?{urlencode({'org': org_id, 'email': email})}"


class InviteService:
    """Use case: invite people into an organization and let them join."""

    def __init__(
        self,
        invites: InviteRepository,
        orgs: OrganizationRepository,
        departments: DepartmentRepository,
        roles: JobRoleRepository,
        employees: EmployeeRepository,
        memberships: MembershipRepository,
        employee_service: EmployeeService,
        auth: AuthService,
        mailer: Optional[ResendMailer] = None,
    ):
        self._invites = invites
        self._orgs = orgs
        self._departments = departments
        self._roles = roles
        self._employees = employees
        self._memberships = memberships
        self._employee_service = employee_service
        self._auth = auth
        self._mailer = mailer

    def create_invite(
        self,
        org_id: str,
        *,
        name: str,
        email: str,
        department_id,
        role_id,
        employment_status: str,
        base_url: str,
        send_email: bool = True,
        today: Optional[date] = None,
    ) -> InviteResult:
        if not (name and email and department_id and role_id and employment_status):
            raise ValidationError("Please fill all required fields.")

        name = require_non_empty(name, "Full name")
        email = normalize_email(email)
        if employment_status not in EMPLOYMENT_STATUSES:
            raise ValidationError(f"Employment status must be one of: {', '.join(EMPLOYMENT_STATUSES)}")

        org = self._orgs.get_by_id(org_id)
        if not org:
            raise NotFoundError("No organization context found.")
        department = self._departments.get(org_id, require_int(department_id, "Department"))
        if not department:
            raise ValidationError("Department not found")
        role = self._roles.get(org_id, require_int(role_id, "Role"))
        if not role:
            raise ValidationError("Role not found")

        _, employee_type = EMPLOYMENT_STATUSES[employment_status]
        id_context = EmployeeIdContext(department=department.code or department.name, employee_type=employee_type.value)

        invite = Invite(
            org_id=org_id,
            email=email,
            name=name,
            department_id=department.dept_id,
            department_name=department.name,
            role_id=role.role_id,
            role_name=role.title,
            employment_status=employment_status,
            employee_id=self._employee_service.next_employee_id(org_id, id_context, today=today),
        )
        self._invites.upsert(invite)
        invite_url = build_invite_url(base_url, org_id, email)
        logger.info("invite %s created for %s in %s", invite.employee_id, email, org_id)

        if not send_email or self._mailer is None:
            return InviteResult(invite=invite, invite_url=invite_url, email_sent=False)

        try:
            self._mailer.send_invite(to=email, invite_url=invite_url, org_name=org.display_name)
        except EmailDeliveryError as exc:
            # The invite stays; the admin can share the link by hand.
            return InviteResult(invite=invite, invite_url=invite_url, email_sent=False, email_error=str(exc))
        return InviteResult(invite=invite, invite_url=invite_url, email_sent=True)

    def list_invites(self, org_id: str) -> Sequence[Invite]:
        return self._invites.list_for_org(org_id)

    def get(self, org_id: str, email: str) -> Invite:
        invite = self._invites.get(org_id, normalize_email(email))
        if not invite:
            raise NotFoundError("Invite not found")
        return invite

    def revoke(self, org_id: str, email: str) -> None:
        invite = self.get(org_id, email)
        if not invite.is_pending:
            raise ValidationError(f"Invite is already {invite.status.value}")
        self._invites.set_status(org_id, invite.email, InviteStatus.REVOKED)

    def accept_invite(self, org_id: str, email: str, password: str, *, today: Optional[date] = None) -> SessionUser:
        """Create the invitee's account, membership and employee record."""

        invite = self.get(org_id, email)
        if not invite.is_pending:
            raise ValidationError("This invite is no longer valid")

        uid = self._auth.create_account(invite.email, password)
        self._memberships.create(
            org_id=org_id,
            uid=uid,
            email=invite.email,
            role=MemberRole.EMPLOYEE,
            name=invite.name,
        )

        status, employee_type = EMPLOYMENT_STATUSES[invite.employment_status]
        self._employees.create(
            Employee(
                org_id=org_id,
                uid=uid,
                employee_id=invite.employee_id or uid,
                name=invite.name,
                email=invite.email,
                department_id=invite.department_id,
                department=invite.department_name or "",
                role_id=invite.role_id,
                job_title=invite.role_name or "",
                hire_date=today or date.today(),
                status=status,
                employee_type=employee_type,
            )
        )
        self._invites.set_status(org_id, invite.email, InviteStatus.ACCEPTED)
        logger.info("invite accepted: %s joined %s as %s", invite.email, org_id, invite.employee_id)
        return SessionUser(uid=uid, email=invite.email, org_id=org_id, role=MemberRole.EMPLOYEE, name=invite.name)
