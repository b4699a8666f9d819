from __future__ import annotations

from dataclasses import asdict, fields
from typing import Optional, Sequence

from ..core.enums import EmployeeStatus, EmployeeType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import ADMIN_EDITABLE, ONBOARDING_FIELDS, Employee
from .repository import EmployeeRepository

_COLUMNS = [f.name for f in fields(Employee)]
_SELECT = f"SELECT {', '.join(_COLUMNS)} FROM employees"
_WRITABLE = set(ADMIN_EDITABLE) | set(ONBOARDING_FIELDS) | {"employee_id", "email", "onboarding_completed"}


def _to_employee(row: dict) -> Employee:
    data = {name: row.get(name) for name in _COLUMNS}
    data["status"] = EmployeeStatus(row.get("status") or EmployeeStatus.ACTIVE.value)
    data["employee_type"] = EmployeeType(row.get("employee_type") or EmployeeType.FULL_TIME.value)
    data["onboarding_completed"] = bool(row.get("onboarding_completed"))
    for name in ("department", "job_title", "manager", "location"):
        data[name] = data[name] or ""
    return Employee(**data)


def _db_value(value):
    return value.value if isinstance(value, (EmployeeStatus, EmployeeType)) else value


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, org_id: str, uid: str) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE org_id=%s AND uid=%s", (org_id, uid))
            row = fetchone(cur)
            return _to_employee(row) if row else None

    def get_by_email(self, org_id: str, email: str) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE org_id=%s AND email=%s", (org_id, email))
            row = fetchone(cur)
            return _to_employee(row) if row else None

    def list_for_org(self, org_id: str) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE org_id=%s ORDER BY name", (org_id,))
            return [_to_employee(r) for r in fetchall(cur)]

    def list_employee_ids(self, org_id: str) -> Sequence[str]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT employee_id FROM employees WHERE org_id=%s", (org_id,))
            return [r["employee_id"] for r in fetchall(cur) if r.get("employee_id")]

    def create(self, employee: Employee) -> None:
        data = {k: _db_value(v) for k, v in asdict(employee).items() if k not in ("created_at", "last_updated")}
        cols = list(data)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"INSERT INTO employees({', '.join(cols)}) VALUES({', '.join(['%s'] * len(cols))})",
                tuple(data[c] for c in cols),
            )

    def update_fields(self, org_id: str, uid: str, fields: dict, *, updated_by: str) -> bool:
        unknown = set(fields) - _WRITABLE
        if unknown:
            raise ValueError(f"Unsupported employee columns: {sorted(unknown)}")
        if not fields:
            return False

        assignments = ", ".join(f"{name}=%s" for name in fields)
        params = [_db_value(v) for v in fields.values()] + [updated_by, org_id, uid]
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"UPDATE employees SET {assignments}, last_updated=NOW(), updated_by=%s WHERE org_id=%s AND uid=%s",
                tuple(params),
            )
            return cur.rowcount > 0

    def delete(self, org_id: str, uid: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM employees WHERE org_id=%s AND uid=%s", (org_id, uid))
            return cur.rowcount > 0

    def count_in_department(self, org_id: str, department_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT COUNT(*) AS n FROM employees WHERE org_id=%s AND department_id=%s",
                (org_id, int(department_id)),
            )
            return int((fetchone(cur) or {}).get("n", 0))

    def count_with_role(self, org_id: str, role_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT COUNT(*) AS n FROM employees WHERE org_id=%s AND role_id=%s",
                (org_id, int(role_id)),
            )
            return int((fetchone(cur) or {}).get("n", 0))
