from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import Notification
from .repository import NotificationRepository


def _to_notification(r: dict) -> Notification:
    return Notification(
        notification_id=int(r["notification_id"]),
        org_id=r["org_id"],
        uid=r["uid"],
        title=r["title"],
        message=r["message"],
        link=r.get("link"),
        is_read=bool(r.get("is_read")),
        created_at=r.get("created_at"),
    )


class MySQLNotificationRepository(NotificationRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(self, *, org_id: str, uid: str, title: str, message: str, link: Optional[str] = None) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO notifications(org_id, uid, title, message, link) VALUES(%s, %s, %s, %s, %s)",
                (org_id, uid, title, message, link),
            )
            return int(cur.lastrowid)

    def list_for_user(self, org_id: str, uid: str, *, unread_only: bool = False) -> Sequence[Notification]:
        sql = "SELECT * FROM notifications WHERE org_id=%s AND uid=%s"
        if unread_only:
            sql += " AND is_read=0"
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql + " ORDER BY created_at DESC, notification_id DESC", (org_id, uid))
            return [_to_notification(r) for r in fetchall(cur)]

    def mark_read(self, org_id: str, uid: str, notification_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE notifications SET is_read=1 WHERE org_id=%s AND uid=%s AND notification_id=%s",
                (org_id, uid, int(notification_id)),
            )
            return cur.rowcount > 0

    def mark_all_read(self, org_id: str, uid: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE notifications SET is_read=1 WHERE org_id=%s AND uid=%s AND is_read=0", (org_id, uid))
            return int(cur.rowcount)
