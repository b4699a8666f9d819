from __future__ import annotations

from datetime import datetime
from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import PasswordReset, UserAccount
from .repository import UserRepository


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    @staticmethod
    def _to_account(row: dict) -> UserAccount:
        return UserAccount(
            uid=row["uid"],
            email=row["email"],
            password_hash=row["password_hash"],
            is_active=bool(row.get("is_active", True)),
            created_at=row.get("created_at"),
        )

    def get_by_uid(self, uid: str) -> Optional[UserAccount]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT uid, email, password_hash, is_active, created_at FROM user_accounts WHERE uid=%s",
                (uid,),
            )
            row = fetchone(cur)
            return self._to_account(row) if row else None

    def get_by_email(self, email: str) -> Optional[UserAccount]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT uid, email, password_hash, is_active, created_at FROM user_accounts WHERE email=%s",
                (email,),
            )
            row = fetchone(cur)
            return self._to_account(row) if row else None

    def create_account(self, *, uid: str, email: str, password_hash: str) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO user_accounts(uid, email, password_hash, is_active) VALUES(%s,%s,%s,1)",
                (uid, email, password_hash),
            )

    def set_password(self, uid: str, password_hash: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE user_accounts SET password_hash=%s WHERE uid=%s", (password_hash, uid))
            return cur.rowcount > 0

    def set_active(self, uid: str, *, is_active: bool) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE user_accounts SET is_active=%s WHERE uid=%s", (1 if is_active else 0, uid))
            return cur.rowcount > 0

    def create_reset(self, *, token: str, uid: str, expires_at: datetime) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO password_resets(token, uid, expires_at, used) VALUES(%s,%s,%s,0)",
                (token, uid, expires_at),
            )

    def get_reset(self, token: str) -> Optional[PasswordReset]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT token, uid, expires_at, used FROM password_resets WHERE token=%s", (token,))
            row = fetchone(cur)
            if not row:
                return None
            return PasswordReset(
                token=row["token"],
                uid=row["uid"],
                expires_at=row["expires_at"],
                used=bool(row.get("used")),
            )

    def mark_reset_used(self, token: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE password_resets SET used=1 WHERE token=%s AND used=0", (token,))
            return cur.rowcount > 0
