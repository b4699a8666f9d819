from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from .core.constants import DEFAULT_RESET_TTL_MINUTES, MAX_UPLOAD_BYTES
from .database.connection import DBConfig, DatabaseConnection
from .departments.mysql_department_repository import MySQLDepartmentRepository
from .departments.service import DepartmentService
from .employee_ids.sync import EmployeeIdSyncService
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.service import EmployeeService
from .invites.mysql_invite_repository import MySQLInviteRepository
from .invites.service import InviteService
from .leave.mysql_leave_repository import MySQLLeaveRepository
from .leave.service import LeaveService
from .letters.mysql_letter_repository import MySQLLetterTemplateRepository
from .letters.service import LetterService
from .mail.resend_mailer import ResendMailer
from .notifications.mysql_notification_repository import MySQLNotificationRepository
from .notifications.service import NotificationService
from .organizations.mysql_organization_repository import MySQLOrganizationRepository
from .organizations.service import OrganizationService
from .payroll.mysql_payroll_repository import MySQLPayrollRepository
from .payroll.service import PayrollService
from .roles.mysql_role_repository import MySQLJobRoleRepository
from .roles.service import JobRoleService
from .uploads.mysql_document_repository import MySQLDocumentRepository
from .uploads.service import UploadService
from .uploads.storage import LocalFileStorage
from .users.mysql_membership_repository import MySQLMembershipRepository
from .users.mysql_user_repository import MySQLUserRepository
from .users.service import AuthService, UserService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    orgs_repo: Any
    users_repo: Any
    memberships_repo: Any
    employees_repo: Any
    departments_repo: Any
    roles_repo: Any
    invites_repo: Any
    leave_repo: Any
    payroll_repo: Any
    notifications_repo: Any
    documents_repo: Any
    letters_repo: Any

    mailer: ResendMailer
    storage: LocalFileStorage

    auth_service: AuthService
    user_service: UserService
    organization_service: OrganizationService
    employee_service: EmployeeService
    department_service: DepartmentService
    role_service: JobRoleService
    invite_service: InviteService
    employee_id_sync_service: EmployeeIdSyncService
    leave_service: LeaveService
    payroll_service: PayrollService
    notification_service: NotificationService
    upload_service: UploadService
    letter_service: LetterService


def wire(
    *,
    orgs_repo,
    users_repo,
    memberships_repo,
    employees_repo,
    departments_repo,
    roles_repo,
    invites_repo,
    leave_repo,
    payroll_repo,
    notifications_repo,
    documents_repo,
    letters_repo,
    mailer: ResendMailer,
    storage: LocalFileStorage,
    conn: Optional[DatabaseConnection] = None,
    reset_ttl_minutes: int = DEFAULT_RESET_TTL_MINUTES,
    max_upload_bytes: int = MAX_UPLOAD_BYTES,
) -> Container:
    """Build the services on top of the given repositories."""

    auth_service = AuthService(users_repo, memberships_repo, orgs_repo, reset_ttl_minutes=reset_ttl_minutes)
    user_service = UserService(users_repo, memberships_repo)
    organization_service = OrganizationService(orgs_repo)
    employee_service = EmployeeService(employees_repo, orgs_repo, invites_repo, departments_repo, roles_repo)
    department_service = DepartmentService(departments_repo, employees_repo)
    role_service = JobRoleService(roles_repo, departments_repo, employees_repo)
    invite_service = InviteService(
        invites_repo,
        orgs_repo,
        departments_repo,
        roles_repo,
        employees_repo,
        memberships_repo,
        employee_service,
        auth_service,
        mailer=mailer,
    )
    employee_id_sync_service = EmployeeIdSyncService(invites_repo, employees_repo)
    notification_service = NotificationService(notifications_repo)
    leave_service = LeaveService(leave_repo, notification_service)
    payroll_service = PayrollService(payroll_repo, employees_repo)
    upload_service = UploadService(documents_repo, storage, max_bytes=max_upload_bytes)
    letter_service = LetterService(letters_repo, employees_repo, orgs_repo)

    return Container(
        conn=conn,
        orgs_repo=orgs_repo,
        users_repo=users_repo,
        memberships_repo=memberships_repo,
        employees_repo=employees_repo,
        departments_repo=departments_repo,
        roles_repo=roles_repo,
        invites_repo=invites_repo,
        leave_repo=leave_repo,
        payroll_repo=payroll_repo,
        notifications_repo=notifications_repo,
        documents_repo=documents_repo,
        letters_repo=letters_repo,
        mailer=mailer,
        storage=storage,
        auth_service=auth_service,
        user_service=user_service,
        organization_service=organization_service,
        employee_service=employee_service,
        department_service=department_service,
        role_service=role_service,
        invite_service=invite_service,
        employee_id_sync_service=employee_id_sync_service,
        leave_service=leave_service,
        payroll_service=payroll_service,
        notification_service=notification_service,
        upload_service=upload_service,
        letter_service=letter_service,
    )


def build_container(*, db_config: dict, settings: Any = None) -> Container:
    conn = DatabaseConnection(DBConfig.from_mapping(db_config))

    return wire(
        conn=conn,
        orgs_repo=MySQLOrganizationRepository(conn),
        users_repo=MySQLUserRepository(conn),
        memberships_repo=MySQLMembershipRepository(conn),
        employees_repo=MySQLEmployeeRepository(conn),
        departments_repo=MySQLDepartmentRepository(conn),
        roles_repo=MySQLJobRoleRepository(conn),
        invites_repo=MySQLInviteRepository(conn),
        leave_repo=MySQLLeaveRepository(conn),
        payroll_repo=MySQLPayrollRepository(conn),
        notifications_repo=MySQLNotificationRepository(conn),
        documents_repo=MySQLDocumentRepository(conn),
        letters_repo=MySQLLetterTemplateRepository(conn),
        mailer=ResendMailer(getattr(settings, "RESEND_API_KEY", None), getattr(settings, "RESEND_FROM_EMAIL", None)),
        storage=LocalFileStorage(getattr(settings, "UPLOAD_ROOT", "uploads")),
        reset_ttl_minutes=int(getattr(settings, "PASSWORD_RESET_TTL_MINUTES", DEFAULT_RESET_TTL_MINUTES)),
        max_upload_bytes=int(getattr(settings, "MAX_UPLOAD_BYTES", MAX_UPLOAD_BYTES)),
    )
