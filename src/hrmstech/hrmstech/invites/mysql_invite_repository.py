from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import InviteStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Invite
from .repository import InviteRepository

_SELECT = """
    SELECT org_id, email, name, department_id, department_name, role_id, role_name,
           employment_status, employee_id, status, created_at, accepted_at
    FROM invites
"""


def _to_invite(r: dict) -> Invite:
    return Invite(
        org_id=r["org_id"],
        email=r["email"],
        name=r["name"],
        department_id=r.get("department_id"),
        department_name=r.get("department_name"),
        role_id=r.get("role_id"),
        role_name=r.get("role_name"),
        employment_status=r["employment_status"],
        employee_id=r.get("employee_id"),
        status=InviteStatus(r.get("status") or InviteStatus.PENDING.value),
        created_at=r.get("created_at"),
        accepted_at=r.get("accepted_at"),
    )


class MySQLInviteRepository(InviteRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, org_id: str, email: str) -> Optional[Invite]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE org_id=%s AND email=%s", (org_id, email))
            row = fetchone(cur)
            return _to_invite(row) if row else None

    def list_for_org(self, org_id: str) -> Sequence[Invite]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE org_id=%s ORDER BY created_at DESC", (org_id,))
            return [_to_invite(r) for r in fetchall(cur)]

    def upsert(self, invite: Invite) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO invites(org_id, email, name, department_id, department_name, role_id, role_name,
                                    employment_status, employee_id, status)
                VALUES(%s, %s, %s, %s, %s, %s, %s, %s, %s, %s)
                ON DUPLICATE KEY UPDATE
                    name=VALUES(name), department_id=VALUES(department_id),
                    department_name=VALUES(department_name), role_id=VALUES(role_id),
                    role_name=VALUES(role_name), employment_status=VALUES(employment_status),
                    employee_id=VALUES(employee_id), status=VALUES(status),
                    created_at=CURRENT_TIMESTAMP, accepted_at=NULL
                """,
                (
                    invite.org_id,
                    invite.email,
                    invite.name,
                    invite.department_id,
                    invite.department_name,
                    invite.role_id,
                    invite.role_name,
                    invite.employment_status,
                    invite.employee_id,
                    invite.status.value,
                ),
            )

    def set_status(self, org_id: str, email: str, status: InviteStatus) -> bool:
        accepted = "NOW()" if status == InviteStatus.ACCEPTED else "accepted_at"
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"UPDATE invites SET status=%s, accepted_at={accepted} WHERE org_id=%s AND email=%s",
                (status.value, org_id, email),
            )
            return cur.rowcount > 0
