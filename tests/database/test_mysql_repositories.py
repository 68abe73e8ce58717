from __future__ import annotations

import datetime as dt

from conftest import make_user
from src.ops_tracker.ops_tracker.core.enums import Role
from src.ops_tracker.ops_tracker.database.connection import DBConfig
from src.ops_tracker.ops_tracker.records.mysql_record_repository import MySQLRecordRepository
from src.ops_tracker.ops_tracker.users.mysql_user_repository import MySQLUserRepository


class FakeCursor:
    def __init__(self, script):
        self._script = script
        self.rowcount = 0
        self._result = []

    def execute(self, sql, params=()):
        self._script.executed.append((" ".join(sql.split()), params))
        self.rowcount, self._result = self._script.replies.pop(0) if self._script.replies else (0, [])

    def fetchone(self):
        return self._result[0] if self._result else None

    def fetchall(self):
        return list(self._result)

    def close(self):
        pass


class FakeConnection:
    def __init__(self, script):
        self._script = script

    def cursor(self, dictionary=False):
        return FakeCursor(self._script)

    def commit(self):
        self._script.commits += 1

    def rollback(self):
        self._script.rollbacks += 1

    def close(self):
        pass


class ScriptedDatabase:
    """Stands in for DatabaseConnection; replies are (rowcount, rows) per statement."""

    def __init__(self, *replies):
        self.replies = list(replies)
        self.executed: list = []
        self.commits = 0
        self.rollbacks = 0
        self.config = DBConfig()

    def connect(self, *, with_database=True):
        return FakeConnection(self)


RECORD_ROW = {
    "id": "r1",
    "user_id": "u1",
    "user_name": "Asha",
    "process_name": "Hold Calls",
    "team": "Pick My Career Operations",
    "frequency": "Daily",
    "total_utilization": 5,
    "count": 2,
    "completed_date": dt.date(2024, 1, 2),
    "actual_utilization_user_input": 12,
    "remarks": None,
}


def test_record_rows_map_dates_to_iso_strings():
    db = ScriptedDatabase((1, [RECORD_ROW]))

    record = MySQLRecordRepository(db).get_by_id("r1")

    assert record.completed_date == "2024-01-02"
    assert record.remarks == ""
    assert db.executed[0][1] == ("r1",)
    assert db.commits == 1


def test_records_are_listed_in_insertion_order():
    db = ScriptedDatabase((2, [RECORD_ROW, {**RECORD_ROW, "id": "r2"}]))

    assert [r.id for r in MySQLRecordRepository(db).list_all()] == ["r1", "r2"]
    assert db.executed[0][0].endswith("ORDER BY seq")


def test_unchanged_update_still_counts_as_found():
    db = ScriptedDatabase((0, []), (1, [{"found": 1}]))

    assert MySQLUserRepository(db).update(make_user("u1")) is True
    assert db.executed[1][0].startswith("SELECT 1 AS found FROM users")


def test_update_of_missing_user_is_false():
    db = ScriptedDatabase((0, []), (0, []))

    assert MySQLUserRepository(db).update(make_user("ghost")) is False


def test_delete_by_user_returns_rowcount():
    db = ScriptedDatabase((3, []))

    assert MySQLRecordRepository(db).delete_by_user("u1") == 3


def test_user_rows_map_role_and_flag():
    db = ScriptedDatabase((1, [{"id": "u1", "username": "asha", "password": "pw", "name": "Asha", "role": "ADMIN", "is_disabled": 1}]))

    user = MySQLUserRepository(db).get_by_username("asha")

    assert user.role == Role.ADMIN
    assert user.is_disabled is True
