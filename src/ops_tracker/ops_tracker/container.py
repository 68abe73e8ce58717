from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .database.connection import DBConfig, DatabaseConnection
from .records.mysql_record_repository import MySQLRecordRepository
from .records.repository import RecordRepository
from .records.service import RecordService
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService, UserService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    users_repo: UserRepository
    records_repo: RecordRepository

    auth_service: AuthService
    user_service: UserService
    record_service: RecordService


def assemble(
    users_repo: UserRepository,
    records_repo: RecordRepository,
    *,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    return Container(
        conn=conn,
        users_repo=users_repo,
        records_repo=records_repo,
        auth_service=AuthService(users_repo),
        user_service=UserService(users_repo, records_repo),
        record_service=RecordService(records_repo, users_repo),
    )


def build_container(*, db_config: dict) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
    return assemble(MySQLUserRepository(conn), MySQLRecordRepository(conn), conn=conn)
