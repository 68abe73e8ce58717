"""Applies ``database/schema.sql`` to the configured MySQL server.

The schema file is plain DDL: statements end with ``;`` and comments are whole
``--`` lines. Its own ``CREATE DATABASE``/``USE`` lines are dropped so the same
file works for any configured database name.
"""
from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterator

from .connection import DatabaseConnection

logger = logging.getLogger(__name__)

_DATABASE_LINE = re.compile(r"^\s*(CREATE\s+DATABASE|USE)\b", re.IGNORECASE)


def iter_sql_statements(sql: str) -> Iterator[str]:
    kept = [
        line
        for line in sql.splitlines()
        if not line.strip().startswith("--") and not _DATABASE_LINE.match(line)
    ]
    for chunk in "\n".join(kept).split(";"):
        stmt = chunk.strip()
        if stmt:
            yield stmt


def ensure_database_exists(conn_factory: DatabaseConnection) -> None:
    name = conn_factory.config.database
    conn = conn_factory.connect(with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(f"CREATE DATABASE IF NOT EXISTS `{name}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci")
        cur.close()
    finally:
        conn.close()


def apply_schema(conn_factory: DatabaseConnection, *, schema_path: str | Path) -> None:
    ensure_database_exists(conn_factory)
    statements = list(iter_sql_statements(Path(schema_path).read_text(encoding="utf-8")))

    conn = conn_factory.connect()
    try:
        cur = conn.cursor()
        for stmt in statements:
            cur.execute(stmt)
        conn.commit()
        cur.close()
    finally:
        conn.close()
    logger.info("Applied %d schema statements to %s", len(statements), conn_factory.config.describe())


def list_tables(conn_factory: DatabaseConnection) -> list[str]:
    conn = conn_factory.connect()
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
