from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterator, Mapping

from werkzeug.security import generate_password_hash

from ..core.constants import DEFAULT_EMPLOYEE_ID_FORMAT
from .connection import DBConfig, DatabaseConnection
from .mysql_base import db_cursor

logger = logging.getLogger(__name__)

DEMO_ORG_ID = "demo-org"
DEMO_ADMIN_EMAIL = "admin@hrmstech.local"
DEMO_ORG_NAME = "HRMSTech Demo"

# schema.sql names its own database; the configured one wins.
_DATABASE_DIRECTIVE = re.compile(r"^\s*(CREATE\s+DATABASE|USE)\b[^;]*;", re.IGNORECASE | re.MULTILINE)
_COMMENT_LINE = re.compile(r"^\s*--.*$", re.MULTILINE)
# A statement body: quoted literals (with backslash escapes) or anything but ';'.
_STATEMENT = re.compile(r"""(?:'(?:\\.|[^'\\])*'|"(?:\\.|[^"\\])*"|[^;'"])+""", re.DOTALL)


def split_statements(sql: str) -> Iterator[str]:
    body = _DATABASE_DIRECTIVE.sub("", _COMMENT_LINE.sub("", sql))
    for match in _STATEMENT.finditer(body):
        statement = match.group(0).strip()
        if statement:
            yield statement


def _factory(db_config: Mapping) -> DatabaseConnection:
    return DatabaseConnection(DBConfig.from_mapping(db_config))


def apply_schema(db_config: Mapping, *, schema_path: str | Path) -> int:
    """Create the database if needed and run every statement of ``schema_path``.

    Returns the number of statements executed.
    """
    factory = _factory(db_config)
    server = factory.connect(select_database=False)
    try:
        cur = server.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{factory.config.database}` "
            "CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )
        server.commit()
    finally:
        server.close()

    statements = list(split_statements(Path(schema_path).read_text(encoding="utf-8")))
    with db_cursor(factory, dictionary=False) as (_, cur):
        for statement in statements:
            cur.execute(statement)
    logger.info("applied %d statements from %s to %s", len(statements), schema_path, factory.config.database)
    return len(statements)


def ensure_demo_organization(db_config: Mapping, *, password: str = "admin123") -> str:
    """Create (or refresh) a demo organization with one admin account; returns its org id."""
    password_hash = generate_password_hash(password)
    with db_cursor(_factory(db_config)) as (_, cur):
        cur.execute("SELECT uid FROM user_accounts WHERE email=%s", (DEMO_ADMIN_EMAIL,))
        row = cur.fetchone()
        uid = row["uid"] if row else DEMO_ORG_ID
        cur.execute(
            """
            INSERT INTO user_accounts(uid, email, password_hash, is_active) VALUES(%s,%s,%s,1)
            ON DUPLICATE KEY UPDATE password_hash=VALUES(password_hash), is_active=1
            """,
            (uid, DEMO_ADMIN_EMAIL, password_hash),
        )
        cur.execute(
            """
            INSERT INTO organizations(org_id, name, size, created_by, setup_completed, employee_id_format)
            VALUES(%s,%s,%s,%s,1,%s)
            ON DUPLICATE KEY UPDATE setup_completed=1
            """,
            (uid, DEMO_ORG_NAME, "1-10", uid, DEFAULT_EMPLOYEE_ID_FORMAT),
        )
        cur.execute(
            """
            INSERT INTO memberships(org_id, uid, email, role, name)
            VALUES(%s,%s,%s,'admin',%s)
            ON DUPLICATE KEY UPDATE role='admin'
            """,
            (uid, uid, DEMO_ADMIN_EMAIL, "Demo Admin"),
        )
    logger.info("demo organization %s ready (admin=%s)", uid, DEMO_ADMIN_EMAIL)
    return uid


def list_tables(db_config: Mapping) -> list[str]:
    with db_cursor(_factory(db_config), dictionary=False) as (_, cur):
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
