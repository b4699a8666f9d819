from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import MemberRole
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Membership
from .repository import MembershipRepository

_COLUMNS = "org_id, uid, email, role, name, phone, created_at"


def _to_membership(row: dict) -> Membership:
    return Membership(
        org_id=row["org_id"],
        uid=row["uid"],
        email=row["email"],
        role=MemberRole(row["role"]),
        name=row.get("name"),
        phone=row.get("phone"),
        created_at=row.get("created_at"),
    )


class MySQLMembershipRepository(MembershipRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, org_id: str, uid: str) -> Optional[Membership]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM memberships WHERE org_id=%s AND uid=%s", (org_id, uid))
            row = fetchone(cur)
            return _to_membership(row) if row else None

    def find_by_uid(self, uid: str) -> Sequence[Membership]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM memberships WHERE uid=%s ORDER BY created_at", (uid,))
            return [_to_membership(r) for r in fetchall(cur)]

    def create(
        self,
        *,
        org_id: str,
        uid: str,
        email: str,
        role: MemberRole,
        name: Optional[str] = None,
        phone: Optional[str] = None,
    ) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO memberships(org_id, uid, email, role, name, phone)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (org_id, uid, email, role.value, name, phone),
            )

    def set_role(self, org_id: str, uid: str, role: MemberRole) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE memberships SET role=%s WHERE org_id=%s AND uid=%s", (role.value, org_id, uid))
            return cur.rowcount > 0

    def list_for_org(self, org_id: str) -> Sequence[Membership]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM memberships WHERE org_id=%s ORDER BY name, email", (org_id,))
            return [_to_membership(r) for r in fetchall(cur)]

    def delete(self, org_id: str, uid: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM memberships WHERE org_id=%s AND uid=%s", (org_id, uid))
            return cur.rowcount > 0
