"""Small query helpers over short-lived MySQL connections.

Each helper opens a connection, runs one statement in its own transaction and
closes it again. Errors roll back and propagate to the caller.
"""
from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Iterator, Optional, Sequence

import mysql.connector

from .connection import DatabaseConnection

logger = logging.getLogger(__name__)

Params = Sequence[Any]


@contextmanager
def db_cursor(conn_factory: DatabaseConnection) -> Iterator[Any]:
    conn = conn_factory.connect()
    cur = conn.cursor(dictionary=True)
    try:
        yield cur
        conn.commit()
    except mysql.connector.Error as exc:
        conn.rollback()
        logger.error("Query failed on %s: %s", conn_factory.config.describe(), exc)
        raise
    except Exception:
        conn.rollback()
        raise
    finally:
        cur.close()
        conn.close()


def query_one(conn_factory: DatabaseConnection, sql: str, params: Params = ()) -> Optional[dict]:
    with db_cursor(conn_factory) as cur:
        cur.execute(sql, tuple(params))
        return cur.fetchone() or None


def query_all(conn_factory: DatabaseConnection, sql: str, params: Params = ()) -> list[dict]:
    with db_cursor(conn_factory) as cur:
        cur.execute(sql, tuple(params))
        return list(cur.fetchall() or [])


def execute(conn_factory: DatabaseConnection, sql: str, params: Params = ()) -> int:
    """Run a write statement and return the affected row count."""
    with db_cursor(conn_factory) as cur:
        cur.execute(sql, tuple(params))
        return int(cur.rowcount)


def row_exists(conn_factory: DatabaseConnection, table: str, key: str) -> bool:
    # MySQL reports 0 affected rows for an UPDATE that changes nothing,
    # so writers confirm the row is there with this instead.
    return query_one(conn_factory, f"SELECT 1 AS found FROM {table} WHERE id=%s", (key,)) is not None
