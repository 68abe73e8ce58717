from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.constants import ISO_DATE_FORMAT
from ..database.connection import DatabaseConnection
from ..database.mysql_base import execute, query_all, query_one, row_exists
from .model import ProductionRecord
from .repository import RecordRepository

_COLUMNS = """
    id, user_id, user_name, process_name, team, frequency,
    total_utilization, count, completed_date, actual_utilization_user_input, remarks
"""


def _iso(value) -> str:
    if isinstance(value, date):
        return value.strftime(ISO_DATE_FORMAT)
    return str(value)[:10]


def _row_to_record(row: dict) -> ProductionRecord:
    return ProductionRecord(
        id=str(row["id"]),
        user_id=str(row["user_id"]),
        user_name=row.get("user_name") or "",
        process_name=row["process_name"],
        team=row["team"],
        frequency=row["frequency"],
        total_utilization=int(row["total_utilization"]),
        count=int(row["count"]),
        completed_date=_iso(row["completed_date"]),
        actual_utilization_user_input=int(row.get("actual_utilization_user_input") or 0),
        remarks=row.get("remarks") or "",
    )


def _params(record: ProductionRecord) -> tuple:
    return (
        record.user_id,
        record.user_name,
        record.process_name,
        record.team,
        record.frequency,
        record.total_utilization,
        record.count,
        record.completed_date,
        record.actual_utilization_user_input,
        record.remarks,
    )


class MySQLRecordRepository(RecordRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, record_id: str) -> Optional[ProductionRecord]:
        row = query_one(self._conn_factory, f"SELECT {_COLUMNS} FROM production_records WHERE id=%s", (record_id,))
        return _row_to_record(row) if row else None

    def list_all(self) -> Sequence[ProductionRecord]:
        # Insertion order matters: the per-user team label is taken from the first match.
        rows = query_all(self._conn_factory, f"SELECT {_COLUMNS} FROM production_records ORDER BY seq")
        return [_row_to_record(r) for r in rows]

    def create(self, record: ProductionRecord) -> ProductionRecord:
        execute(
            self._conn_factory,
            f"INSERT INTO production_records({_COLUMNS}) VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)",
            (record.id, *_params(record)),
        )
        return record

    def update(self, record: ProductionRecord) -> bool:
        changed = execute(
            self._conn_factory,
            """
            UPDATE production_records
            SET user_id=%s, user_name=%s, process_name=%s, team=%s, frequency=%s,
                total_utilization=%s, count=%s, completed_date=%s,
                actual_utilization_user_input=%s, remarks=%s
            WHERE id=%s
            """,
            (*_params(record), record.id),
        )
        return changed > 0 or row_exists(self._conn_factory, "production_records", record.id)

    def delete_by_id(self, record_id: str) -> bool:
        return execute(self._conn_factory, "DELETE FROM production_records WHERE id=%s", (record_id,)) > 0

    def delete_by_user(self, user_id: str) -> int:
        return execute(self._conn_factory, "DELETE FROM production_records WHERE user_id=%s", (user_id,))
