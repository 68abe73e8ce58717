from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import execute, query_all, query_one, row_exists
from .model import User
from .repository import UserRepository

_SELECT = "SELECT id, username, password, name, role, is_disabled FROM users"


def _row_to_user(row: Optional[dict]) -> Optional[User]:
    if not row:
        return None
    return User(
        id=str(row["id"]),
        username=row["username"],
        name=row["name"],
        role=Role(row["role"]),
        password=row.get("password"),
        is_disabled=bool(row.get("is_disabled", False)),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: str) -> Optional[User]:
        return _row_to_user(query_one(self._conn_factory, f"{_SELECT} WHERE id=%s", (user_id,)))

    def get_by_username(self, username: str) -> Optional[User]:
        return _row_to_user(query_one(self._conn_factory, f"{_SELECT} WHERE username=%s", (username,)))

    def list_all(self) -> Sequence[User]:
        rows = query_all(self._conn_factory, f"{_SELECT} ORDER BY created_at, id")
        return [_row_to_user(r) for r in rows]

    def create(self, user: User) -> User:
        execute(
            self._conn_factory,
            "INSERT INTO users(id, username, password, name, role, is_disabled) VALUES(%s,%s,%s,%s,%s,%s)",
            (user.id, user.username, user.password, user.name, user.role.value, int(user.is_disabled)),
        )
        return user

    def update(self, user: User) -> bool:
        changed = execute(
            self._conn_factory,
            "UPDATE users SET username=%s, password=%s, name=%s, role=%s, is_disabled=%s WHERE id=%s",
            (user.username, user.password, user.name, user.role.value, int(user.is_disabled), user.id),
        )
        return changed > 0 or row_exists(self._conn_factory, "users", user.id)

    def delete_by_id(self, user_id: str) -> bool:
        return execute(self._conn_factory, "DELETE FROM users WHERE id=%s", (user_id,)) > 0
