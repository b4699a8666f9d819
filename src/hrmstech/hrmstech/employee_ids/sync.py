"""Keep employee records in line with the identifier their invite promised."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field

from ..core.constants import SYSTEM_SYNC_USER
from ..employees.repository import EmployeeRepository
from ..invites.repository import InviteRepository

logger = logging.getLogger(__name__)

HEALTHY = "healthy"
HAS_MISMATCHES = "has_mismatches"
ERROR = "error"


@dataclass(frozen=True)
class IdMismatch:
    uid: str
    email: str
    name: str
    employee_id: str
    invite_employee_id: str


@dataclass(frozen=True)
class SyncResult:
    fixed: int
    errors: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class IdStatus:
    total_employees: int
    total_invites: int
    mismatches: int
    status: str


class EmployeeIdSyncService:
    def __init__(self, invites: InviteRepository, employees: EmployeeRepository):
        self._invites = invites
        self._employees = employees

    def find_mismatches(self, org_id: str) -> list[IdMismatch]:
        by_email = {i.email: i.employee_id for i in self._invites.list_for_org(org_id) if i.employee_id}
        out: list[IdMismatch] = []
        for employee in self._employees.list_for_org(org_id):
            expected = by_email.get(employee.email)
            if expected and employee.employee_id != expected:
                out.append(
                    IdMismatch(
                        uid=employee.uid,
                        email=employee.email,
                        name=employee.name,
                        employee_id=employee.employee_id,
                        invite_employee_id=expected,
                    )
                )
        return out

    def fix_mismatches(self, org_id: str, mismatches: list[IdMismatch]) -> SyncResult:
        fixed = 0
        errors: list[str] = []
        for m in mismatches:
            try:
                self._employees.update_fields(
                    org_id, m.uid, {"employee_id": m.invite_employee_id}, updated_by=SYSTEM_SYNC_USER
                )
                fixed += 1
            except Exception as exc:
                logger.exception("failed to fix employee id for %s", m.email)
                errors.append(f"Failed to fix {m.email}: {exc}")
        return SyncResult(fixed=fixed, errors=errors)

    def sync(self, org_id: str) -> SyncResult:
        try:
            mismatches = self.find_mismatches(org_id)
        except Exception as exc:
            logger.exception("employee id sync failed for %s", org_id)
            return SyncResult(fixed=0, errors=[f"Sync failed: {exc}"])
        if not mismatches:
            return SyncResult(fixed=0)
        result = self.fix_mismatches(org_id, mismatches)
        logger.info("employee id sync for %s: fixed %d, errors %d", org_id, result.fixed, len(result.errors))
        return result

    def status(self, org_id: str) -> IdStatus:
        try:
            employees = list(self._employees.list_for_org(org_id))
            invites = list(self._invites.list_for_org(org_id))
            mismatches = self.find_mismatches(org_id)
        except Exception:
            logger.exception("could not read employee id status for %s", org_id)
            return IdStatus(total_employees=0, total_invites=0, mismatches=0, status=ERROR)
        return IdStatus(
            total_employees=len(employees),
            total_invites=len(invites),
            mismatches=len(mismatches),
            status=HAS_MISMATCHES if mismatches else HEALTHY,
        )
