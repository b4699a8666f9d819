from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import EmployeeDocument
from .repository import DocumentRepository


def _to_document(r: dict) -> EmployeeDocument:
    return EmployeeDocument(
        document_id=int(r["document_id"]),
        org_id=r["org_id"],
        uid=r["uid"],
        document_type=r["document_type"],
        name=r["name"],
        size=int(r["size"]),
        content_type=r["content_type"],
        storage_path=r["storage_path"],
        uploaded_at=r.get("uploaded_at"),
    )


class MySQLDocumentRepository(DocumentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(
        self,
        *,
        org_id: str,
        uid: str,
        document_type: str,
        name: str,
        size: int,
        content_type: str,
        storage_path: str,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO employee_documents(org_id, uid, document_type, name, size, content_type, storage_path)
                VALUES(%s, %s, %s, %s, %s, %s, %s)
                """,
                (org_id, uid, document_type, name, int(size), content_type, storage_path),
            )
            return int(cur.lastrowid)

    def get(self, org_id: str, document_id: int) -> Optional[EmployeeDocument]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT * FROM employee_documents WHERE org_id=%s AND document_id=%s",
                (org_id, int(document_id)),
            )
            row = fetchone(cur)
            return _to_document(row) if row else None

    def list_for_employee(self, org_id: str, uid: str) -> Sequence[EmployeeDocument]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT * FROM employee_documents WHERE org_id=%s AND uid=%s ORDER BY uploaded_at DESC",
                (org_id, uid),
            )
            return [_to_document(r) for r in fetchall(cur)]

    def delete(self, org_id: str, document_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "DELETE FROM employee_documents WHERE org_id=%s AND document_id=%s",
                (org_id, int(document_id)),
            )
            return cur.rowcount > 0
