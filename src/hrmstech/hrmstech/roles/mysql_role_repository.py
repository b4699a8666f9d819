from __future__ import annotations

from enum import Enum
from typing import Optional, Sequence

from ..core.enums import RoleCategory, RoleStatus, Seniority
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, dump_json, fetchall, fetchone, load_json
from .model import JobRole
from .repository import JobRoleRepository

_SELECT = """
    SELECT r.role_id, r.org_id, r.title, r.code, r.category, r.department_ids, r.primary_department_id,
           r.level, r.seniority, r.description, r.responsibilities, r.status, r.created_by,
           r.created_at, r.updated_at,
           (SELECT COUNT(*) FROM employees e WHERE e.org_id = r.org_id AND e.role_id = r.role_id) AS employee_count
    FROM job_roles r
"""
_WRITABLE = (
    "title",
    "code",
    "category",
    "department_ids",
    "primary_department_id",
    "level",
    "seniority",
    "description",
    "responsibilities",
    "status",
)


def _to_role(r: dict) -> JobRole:
    return JobRole(
        role_id=int(r["role_id"]),
        org_id=r["org_id"],
        title=r["title"],
        code=r.get("code"),
        category=RoleCategory(r["category"]),
        department_ids=[int(d) for d in load_json(r.get("department_ids"), [])],
        primary_department_id=r.get("primary_department_id"),
        level=int(r.get("level") or 1),
        seniority=Seniority(r["seniority"]),
        description=r.get("description") or "",
        responsibilities=list(load_json(r.get("responsibilities"), [])),
        status=RoleStatus(r.get("status") or RoleStatus.DRAFT.value),
        employee_count=int(r.get("employee_count") or 0),
        created_by=r.get("created_by"),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
    )


def _params(values: dict) -> dict:
    out = {}
    for key in _WRITABLE:
        if key not in values:
            continue
        value = values[key]
        if isinstance(value, Enum):
            value = value.value
        elif key in ("department_ids", "responsibilities"):
            value = dump_json(list(value or []))
        out[key] = value
    return out


class MySQLJobRoleRepository(JobRoleRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self, org_id: str, *, department_id: Optional[int] = None) -> Sequence[JobRole]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE r.org_id=%s ORDER BY r.level, r.title", (org_id,))
            roles = [_to_role(r) for r in fetchall(cur)]
        if department_id is not None:
            roles = [r for r in roles if int(department_id) in r.department_ids]
        return roles

    def get(self, org_id: str, role_id: int) -> Optional[JobRole]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE r.org_id=%s AND r.role_id=%s", (org_id, int(role_id)))
            row = fetchone(cur)
            return _to_role(row) if row else None

    def get_by_code(self, org_id: str, code: str) -> Optional[JobRole]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE r.org_id=%s AND r.code=%s", (org_id, code))
            row = fetchone(cur)
            return _to_role(row) if row else None

    def create(self, org_id: str, values: dict, *, created_by: str) -> int:
        data = _params(values)
        cols = ["org_id", "created_by", *data]
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"INSERT INTO job_roles({', '.join(cols)}) VALUES({', '.join(['%s'] * len(cols))})",
                (org_id, created_by, *data.values()),
            )
            return int(cur.lastrowid)

    def update(self, org_id: str, role_id: int, values: dict) -> bool:
        data = _params(values)
        if not data:
            return False
        assignments = ", ".join(f"{k}=%s" for k in data)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"UPDATE job_roles SET {assignments} WHERE org_id=%s AND role_id=%s",
                (*data.values(), org_id, int(role_id)),
            )
            return cur.rowcount > 0

    def delete(self, org_id: str, role_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM job_roles WHERE org_id=%s AND role_id=%s", (org_id, int(role_id)))
            return cur.rowcount > 0
