from __future__ import annotations

import logging
import uuid
from typing import Any, Mapping, Optional, Sequence

from ..common.validators import require_identifier
from ..core.exceptions import NotFoundError, ValidationError
from ..users.model import User
from ..users.repository import UserRepository
from .catalog import duration_for
from .model import ProductionRecord, has_process_name, process_name_of
from .repository import RecordRepository
from .validation import validate_new_record, validate_record_edit

logger = logging.getLogger(__name__)


def build_record(
    user: User,
    *,
    process_name: str,
    team: str,
    frequency: str,
    completed_date: str,
    count: int,
    actual_utilization_user_input: int,
    total_utilization: Optional[int] = None,
    remarks: str = "",
) -> ProductionRecord:
    """Data-entry use case: turn form input into a validated new record.

    Fixed-duration tasks take their minutes from the catalog; runtime tasks use
    ``total_utilization`` as entered.
    """

    nominal = duration_for(process_name)
    minutes = nominal if nominal is not None else (total_utilization or 0)
    return validate_new_record(
        {
            "id": str(uuid.uuid4()),
            "userId": user.id,
            "userName": user.name,
            "processName": process_name,
            "team": team,
            "frequency": frequency,
            "completedDate": completed_date,
            "count": count,
            "totalUtilization": minutes,
            "actualUtilizationUserInput": actual_utilization_user_input,
            "remarks": remarks,
        }
    )


def merge_record_update(existing: ProductionRecord, changes: Mapping[str, Any]) -> dict:
    """Overlay a partial wire-format update on an existing record (wire format out)."""
    merged = existing.to_dict()
    merged.update({k: v for k, v in changes.items() if k not in ("processName", "task")})
    if has_process_name(changes):
        name = process_name_of(changes)
        merged["processName"] = name
        merged["task"] = name
    return merged


class RecordService:
    """Use case: record CRUD against the store."""

    def __init__(self, records: RecordRepository, users: UserRepository):
        self._records = records
        self._users = users

    def list_records(self) -> Sequence[ProductionRecord]:
        return self._records.list_all()

    def create_record(self, data: Mapping[str, Any]) -> ProductionRecord:
        if not isinstance(data, Mapping):
            raise ValidationError("Invalid request body")

        record = validate_new_record({**data, "id": data.get("id") or str(uuid.uuid4())})
        if not self._users.get_by_id(record.user_id):
            raise ValidationError(f"Unknown userId '{record.user_id}'")
        if self._records.get_by_id(record.id):
            raise ValidationError(f"Record id '{record.id}' already exists")

        created = self._records.create(record)
        logger.info("Record created id=%s user=%s", created.id, created.user_id)
        return created

    def update_record(self, data: Mapping[str, Any]) -> ProductionRecord:
        if not isinstance(data, Mapping):
            raise ValidationError("Invalid request body")
        record_id = require_identifier(data.get("id"), "Record ID")

        existing = self._records.get_by_id(record_id)
        if not existing:
            logger.info("Update for unknown record id=%s", record_id)
            raise NotFoundError("Record not found for updating")

        updated = validate_record_edit(merge_record_update(existing, data))
        if not self._records.update(updated):
            raise NotFoundError("Record not found for updating")
        logger.info("Record updated id=%s", record_id)
        return updated

    def delete_record(self, record_id: Any) -> None:
        record_id = require_identifier(record_id, "Record ID")
        if not self._records.delete_by_id(record_id):
            logger.info("Delete for unknown record id=%s", record_id)
            raise NotFoundError("Record not found")
        logger.info("Record deleted id=%s", record_id)
