from __future__ import annotations

from decimal import Decimal
from typing import Optional, Sequence

from ..core.enums import PayrollStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import PayrollItem, PayrollRun
from .repository import PayrollRepository


def _to_run(r: dict) -> PayrollRun:
    return PayrollRun(
        run_id=int(r["run_id"]),
        org_id=r["org_id"],
        period=r["period"],
        status=PayrollStatus(r["status"]),
        notes=r.get("notes") or "",
        created_at=r.get("created_at"),
    )


def _to_item(r: dict) -> PayrollItem:
    return PayrollItem(
        run_id=int(r["run_id"]),
        uid=r["uid"],
        employee_id=r["employee_id"],
        name=r["name"],
        department=r.get("department") or "",
        base=Decimal(r["base"]),
        allowances=Decimal(r["allowances"]),
        deductions=Decimal(r["deductions"]),
        net=Decimal(r["net"]),
    )


class MySQLPayrollRepository(PayrollRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create_run(self, *, org_id: str, period: str, notes: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO payroll_runs(org_id, period, status, notes) VALUES(%s, %s, %s, %s)",
                (org_id, period, PayrollStatus.DRAFT.value, notes),
            )
            return int(cur.lastrowid)

    def get_run(self, org_id: str, run_id: int) -> Optional[PayrollRun]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT * FROM payroll_runs WHERE org_id=%s AND run_id=%s", (org_id, int(run_id)))
            row = fetchone(cur)
            return _to_run(row) if row else None

    def list_runs(self, org_id: str) -> Sequence[PayrollRun]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT * FROM payroll_runs WHERE org_id=%s ORDER BY created_at DESC, run_id DESC", (org_id,))
            return [_to_run(r) for r in fetchall(cur)]

    def set_run_status(self, org_id: str, run_id: int, status: PayrollStatus) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE payroll_runs SET status=%s WHERE org_id=%s AND run_id=%s",
                (status.value, org_id, int(run_id)),
            )
            return cur.rowcount > 0

    def delete_run(self, org_id: str, run_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM payroll_runs WHERE org_id=%s AND run_id=%s", (org_id, int(run_id)))
            return cur.rowcount > 0

    def list_items(self, run_id: int) -> Sequence[PayrollItem]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT * FROM payroll_items WHERE run_id=%s ORDER BY name", (int(run_id),))
            return [_to_item(r) for r in fetchall(cur)]

    def save_item(self, item: PayrollItem) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO payroll_items(run_id, uid, employee_id, name, department, base, allowances, deductions, net)
                VALUES(%s, %s, %s, %s, %s, %s, %s, %s, %s)
                ON DUPLICATE KEY UPDATE
                    employee_id=VALUES(employee_id), name=VALUES(name), department=VALUES(department),
                    base=VALUES(base), allowances=VALUES(allowances), deductions=VALUES(deductions), net=VALUES(net)
                """,
                (
                    item.run_id,
                    item.uid,
                    item.employee_id,
                    item.name,
                    item.department,
                    item.base,
                    item.allowances,
                    item.deductions,
                    item.net,
                ),
            )

    def delete_items(self, run_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM payroll_items WHERE run_id=%s", (int(run_id),))
            return int(cur.rowcount)
