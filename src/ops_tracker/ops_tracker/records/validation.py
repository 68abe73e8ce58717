"""Rules a record must satisfy before it is persisted.

Both the server and the client data cache run these, so an invalid record is
rejected before any request is made.
"""
from __future__ import annotations

from typing import Any, Mapping

from ..common.datetime_utils import require_iso_date
from ..common.validators import (
    require_choice,
    require_identifier,
    require_in_range,
    require_int,
    require_non_empty,
)
from ..core.constants import MAX_UTILIZATION_MINUTES
from ..core.exceptions import ValidationError
from .catalog import FREQUENCIES, TEAMS
from .model import ProductionRecord, process_name_of


def _common_fields(data: Mapping[str, Any]) -> dict:
    if not isinstance(data, Mapping):
        raise ValidationError("Invalid request body")

    return {
        "id": require_identifier(data.get("id"), "Record ID"),
        "user_id": require_identifier(data.get("userId"), "userId"),
        "user_name": str(data.get("userName") or ""),
        "process_name": require_non_empty(process_name_of(data), "processName"),
        "team": require_choice(data.get("team"), "team", TEAMS),
        "frequency": require_choice(data.get("frequency"), "frequency", FREQUENCIES),
        "completed_date": require_iso_date(data.get("completedDate")),
        "count": require_in_range(
            require_int(data.get("count", 0), "count"), "count", low=1, high=10**6
        ),
        "remarks": str(data.get("remarks") or ""),
    }


def validate_new_record(data: Mapping[str, Any]) -> ProductionRecord:
    """Entry-form rules for a freshly logged record."""
    out = _common_fields(data)

    total = require_int(data.get("totalUtilization", 0) or 0, "totalUtilization")
    actual = require_int(data.get("actualUtilizationUserInput", 0) or 0, "actualUtilizationUserInput")
    require_in_range(total, "totalUtilization", low=0, high=MAX_UTILIZATION_MINUTES)
    require_in_range(
        actual, "actualUtilizationUserInput", low=0, high=MAX_UTILIZATION_MINUTES, low_inclusive=False
    )

    return ProductionRecord(total_utilization=total, actual_utilization_user_input=actual, **out)


def validate_record_edit(data: Mapping[str, Any]) -> ProductionRecord:
    """Admin edit rules: duration must be within (0, 480] minutes."""
    out = _common_fields(data)

    total = require_int(data.get("totalUtilization", 0) or 0, "totalUtilization")
    require_in_range(total, "totalUtilization", low=0, high=MAX_UTILIZATION_MINUTES, low_inclusive=False)
    actual = require_int(data.get("actualUtilizationUserInput", 0) or 0, "actualUtilizationUserInput")
    require_in_range(actual, "actualUtilizationUserInput", low=0, high=MAX_UTILIZATION_MINUTES)

    return ProductionRecord(total_utilization=total, actual_utilization_user_input=actual, **out)
