from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import LetterTemplate
from .repository import LetterTemplateRepository


def _to_template(r: dict) -> LetterTemplate:
    return LetterTemplate(
        template_id=int(r["template_id"]),
        org_id=r["org_id"],
        name=r["name"],
        content=r["content"],
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
    )


class MySQLLetterTemplateRepository(LetterTemplateRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self, org_id: str) -> Sequence[LetterTemplate]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT * FROM letter_templates WHERE org_id=%s ORDER BY name", (org_id,))
            return [_to_template(r) for r in fetchall(cur)]

    def get(self, org_id: str, template_id: int) -> Optional[LetterTemplate]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT * FROM letter_templates WHERE org_id=%s AND template_id=%s",
                (org_id, int(template_id)),
            )
            row = fetchone(cur)
            return _to_template(row) if row else None

    def create(self, *, org_id: str, name: str, content: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO letter_templates(org_id, name, content) VALUES(%s, %s, %s)",
                (org_id, name, content),
            )
            return int(cur.lastrowid)

    def update(self, org_id: str, template_id: int, *, name: str, content: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE letter_templates SET name=%s, content=%s WHERE org_id=%s AND template_id=%s",
                (name, content, org_id, int(template_id)),
            )
            return cur.rowcount > 0

    def delete(self, org_id: str, template_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "DELETE FROM letter_templates WHERE org_id=%s AND template_id=%s",
                (org_id, int(template_id)),
            )
            return cur.rowcount > 0
