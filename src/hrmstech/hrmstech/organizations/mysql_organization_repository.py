from __future__ import annotations

from typing import Optional

from ..core.constants import DEFAULT_EMPLOYEE_ID_FORMAT
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, dump_json, fetchone, load_json
from .model import Organization
from .repository import OrganizationRepository


class MySQLOrganizationRepository(OrganizationRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, org_id: str) -> Optional[Organization]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT org_id, name, size, created_by, setup_completed, employee_id_format,
                       settings_json, created_at, updated_at
                FROM organizations
                WHERE org_id=%s
                """,
                (org_id,),
            )
            row = fetchone(cur)
            if not row:
                return None
            return Organization(
                org_id=row["org_id"],
                name=row["name"],
                created_by=row["created_by"],
                size=row.get("size"),
                setup_completed=bool(row.get("setup_completed")),
                employee_id_format=row.get("employee_id_format") or DEFAULT_EMPLOYEE_ID_FORMAT,
                settings=load_json(row.get("settings_json"), {}),
                created_at=row.get("created_at"),
                updated_at=row.get("updated_at"),
            )

    def create(self, *, org_id: str, name: str, size: Optional[str], created_by: str) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO organizations(org_id, name, size, created_by, setup_completed, employee_id_format)
                VALUES(%s,%s,%s,%s,0,%s)
                """,
                (org_id, name, size, created_by, DEFAULT_EMPLOYEE_ID_FORMAT),
            )

    def save_settings(self, org_id: str, *, settings: dict, setup_completed: bool) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE organizations SET settings_json=%s, setup_completed=%s WHERE org_id=%s",
                (dump_json(settings), 1 if setup_completed else 0, org_id),
            )
            return cur.rowcount > 0

    def set_employee_id_format(self, org_id: str, employee_id_format: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE organizations SET employee_id_format=%s WHERE org_id=%s",
                (employee_id_format, org_id),
            )
            return cur.rowcount > 0
