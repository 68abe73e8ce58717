from __future__ import annotations

from dataclasses import replace
from typing import Optional

import pytest

from src.ops_tracker.ops_tracker.container import assemble
from src.ops_tracker.ops_tracker.core.enums import Role
from src.ops_tracker.ops_tracker.main import create_app
from src.ops_tracker.ops_tracker.records.model import ProductionRecord
from src.ops_tracker.ops_tracker.users.model import User

TEAM_A = "Pick My Career Operations"
TEAM_B = "CA 360 Academy Operations"


class InMemoryUsers:
    def __init__(self, users=()):
        self._by_id: dict[str, User] = {u.id: u for u in users}

    def get_by_id(self, user_id: str) -> Optional[User]:
        return self._by_id.get(user_id)

    def get_by_username(self, username: str) -> Optional[User]:
        return next((u for u in self._by_id.values() if u.username == username), None)

    def list_all(self):
        return list(self._by_id.values())

    def create(self, user: User) -> User:
        self._by_id[user.id] = user
        return user

    def update(self, user: User) -> bool:
        if user.id not in self._by_id:
            return False
        self._by_id[user.id] = user
        return True

    def delete_by_id(self, user_id: str) -> bool:
        return self._by_id.pop(user_id, None) is not None


class InMemoryRecords:
    def __init__(self, records=()):
        self._rows: list[ProductionRecord] = list(records)

    def get_by_id(self, record_id: str) -> Optional[ProductionRecord]:
        return next((r for r in self._rows if r.id == record_id), None)

    def list_all(self):
        return list(self._rows)

    def create(self, record: ProductionRecord) -> ProductionRecord:
        self._rows.append(record)
        return record

    def update(self, record: ProductionRecord) -> bool:
        for i, r in enumerate(self._rows):
            if r.id == record.id:
                self._rows[i] = record
                return True
        return False

    def delete_by_id(self, record_id: str) -> bool:
        before = len(self._rows)
        self._rows = [r for r in self._rows if r.id != record_id]
        return len(self._rows) != before

    def delete_by_user(self, user_id: str) -> int:
        before = len(self._rows)
        self._rows = [r for r in self._rows if r.user_id != user_id]
        return before - len(self._rows)


def make_user(user_id: str, *, name: Optional[str] = None, role: Role = Role.USER, **kw) -> User:
    return User(
        id=user_id,
        username=kw.pop("username", user_id),
        name=name or user_id.upper(),
        role=role,
        password=kw.pop("password", "secret"),
        **kw,
    )


def make_record(record_id: str, user_id: str = "u1", **kw) -> ProductionRecord:
    base = ProductionRecord(
        id=record_id,
        user_id=user_id,
        user_name=user_id.upper(),
        process_name="Hold Calls",
        team=TEAM_A,
        frequency="Daily",
        total_utilization=60,
        count=1,
        completed_date="2024-01-01",
        actual_utilization_user_input=60,
    )
    return replace(base, **kw)


@pytest.fixture
def admin():
    return make_user("admin-001", name="Super Admin", role=Role.ADMIN, username="admin", password="password123")


@pytest.fixture
def users_repo(admin):
    return InMemoryUsers([admin, make_user("u1"), make_user("u2")])


@pytest.fixture
def records_repo():
    return InMemoryRecords()


@pytest.fixture
def container(users_repo, records_repo):
    return assemble(users_repo, records_repo)


@pytest.fixture
def client(monkeypatch, container):
    monkeypatch.setenv("APP_ENV", "testing")
    app = create_app(container=container)
    return app.test_client()
