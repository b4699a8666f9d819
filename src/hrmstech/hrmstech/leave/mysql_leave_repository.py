from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.enums import LeaveStatus, LeaveType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import LeaveRequest
from .repository import LeaveRepository

_SELECT = """
    SELECT l.request_id, l.org_id, l.user_id, l.type, l.from_date, l.to_date, l.reason, l.status,
           l.created_at, l.reviewed_at, l.reviewed_by, e.name AS employee_name
    FROM leave_requests l
    LEFT JOIN employees e ON e.org_id = l.org_id AND e.uid = l.user_id
"""


def _to_request(r: dict) -> LeaveRequest:
    return LeaveRequest(
        request_id=int(r["request_id"]),
        org_id=r["org_id"],
        user_id=r["user_id"],
        type=LeaveType(r["type"]),
        from_date=r["from_date"],
        to_date=r["to_date"],
        reason=r.get("reason") or "",
        status=LeaveStatus(r["status"]),
        created_at=r.get("created_at"),
        reviewed_at=r.get("reviewed_at"),
        reviewed_by=r.get("reviewed_by"),
        employee_name=r.get("employee_name"),
    )


class MySQLLeaveRepository(LeaveRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(
        self,
        *,
        org_id: str,
        user_id: str,
        leave_type: LeaveType,
        from_date: date,
        to_date: date,
        reason: str,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO leave_requests(org_id, user_id, type, from_date, to_date, reason, status)
                VALUES(%s, %s, %s, %s, %s, %s, %s)
                """,
                (org_id, user_id, leave_type.value, from_date, to_date, reason, LeaveStatus.PENDING.value),
            )
            return int(cur.lastrowid)

    def get(self, org_id: str, request_id: int) -> Optional[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE l.org_id=%s AND l.request_id=%s", (org_id, int(request_id)))
            row = fetchone(cur)
            return _to_request(row) if row else None

    def list_for_user(self, org_id: str, user_id: str) -> Sequence[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"{_SELECT} WHERE l.org_id=%s AND l.user_id=%s ORDER BY l.created_at DESC",
                (org_id, user_id),
            )
            return [_to_request(r) for r in fetchall(cur)]

    def list_for_org(self, org_id: str, *, status: Optional[LeaveStatus] = None) -> Sequence[LeaveRequest]:
        sql = f"{_SELECT} WHERE l.org_id=%s"
        params: list = [org_id]
        if status is not None:
            sql += " AND l.status=%s"
            params.append(status.value)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql + " ORDER BY l.created_at DESC", tuple(params))
            return [_to_request(r) for r in fetchall(cur)]

    def list_overlapping(self, org_id: str, start: date, end: date) -> Sequence[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"{_SELECT} WHERE l.org_id=%s AND l.from_date<=%s AND l.to_date>=%s ORDER BY l.from_date",
                (org_id, end, start),
            )
            return [_to_request(r) for r in fetchall(cur)]

    def decide(self, org_id: str, request_id: int, *, status: LeaveStatus, reviewed_by: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE leave_requests
                SET status=%s, reviewed_at=NOW(), reviewed_by=%s
                WHERE org_id=%s AND request_id=%s AND status=%s
                """,
                (status.value, reviewed_by, org_id, int(request_id), LeaveStatus.PENDING.value),
            )
            return cur.rowcount > 0
