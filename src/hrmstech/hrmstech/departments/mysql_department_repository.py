from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import DepartmentStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Department
from .repository import DepartmentRepository

_COLUMNS = "dept_id, org_id, name, code, description, type, parent_id, head, location, budget, status, created_at"
_WRITABLE = ("name", "code", "description", "type", "parent_id", "head", "location", "budget", "status")


def _to_department(r: dict) -> Department:
    return Department(
        dept_id=int(r["dept_id"]),
        org_id=r["org_id"],
        name=r["name"],
        code=r.get("code"),
        description=r.get("description"),
        type=r.get("type") or "operational",
        parent_id=r.get("parent_id"),
        head=r.get("head"),
        location=r.get("location"),
        budget=r.get("budget"),
        status=DepartmentStatus(r.get("status") or DepartmentStatus.ACTIVE.value),
        created_at=r.get("created_at"),
    )


def _params(values: dict) -> dict:
    out = {k: values[k] for k in _WRITABLE if k in values}
    if isinstance(out.get("status"), DepartmentStatus):
        out["status"] = out["status"].value
    return out


class MySQLDepartmentRepository(DepartmentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self, org_id: str) -> Sequence[Department]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM departments WHERE org_id=%s ORDER BY name", (org_id,))
            return [_to_department(r) for r in fetchall(cur)]

    def get(self, org_id: str, dept_id: int) -> Optional[Department]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM departments WHERE org_id=%s AND dept_id=%s", (org_id, int(dept_id)))
            row = fetchone(cur)
            return _to_department(row) if row else None

    def get_by_code(self, org_id: str, code: str) -> Optional[Department]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM departments WHERE org_id=%s AND code=%s", (org_id, code))
            row = fetchone(cur)
            return _to_department(row) if row else None

    def create(self, org_id: str, values: dict) -> int:
        data = _params(values)
        cols = ["org_id", *data]
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"INSERT INTO departments({', '.join(cols)}) VALUES({', '.join(['%s'] * len(cols))})",
                (org_id, *data.values()),
            )
            return int(cur.lastrowid)

    def update(self, org_id: str, dept_id: int, values: dict) -> bool:
        data = _params(values)
        if not data:
            return False
        assignments = ", ".join(f"{k}=%s" for k in data)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"UPDATE departments SET {assignments} WHERE org_id=%s AND dept_id=%s",
                (*data.values(), org_id, int(dept_id)),
            )
            return cur.rowcount > 0

    def delete(self, org_id: str, dept_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM departments WHERE org_id=%s AND dept_id=%s", (org_id, int(dept_id)))
            return cur.rowcount > 0
