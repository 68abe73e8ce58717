from __future__ import annotations

import pytest

from conftest import make_record, make_user
from src.ops_tracker.ops_tracker.core.exceptions import ValidationError
from src.ops_tracker.ops_tracker.records.model import ProductionRecord
from src.ops_tracker.ops_tracker.records.service import build_record, merge_record_update
from src.ops_tracker.ops_tracker.records.validation import validate_new_record, validate_record_edit


def _wire(**changes):
    data = make_record("r1").to_dict()
    data.update(changes)
    return data


def test_new_record_accepts_zero_duration_but_not_zero_actual():
    assert validate_new_record(_wire(totalUtilization=0)).total_utilization == 0

    with pytest.raises(ValidationError):
        validate_new_record(_wire(actualUtilizationUserInput=0))


def test_edit_requires_positive_duration_and_allows_zero_actual():
    assert validate_record_edit(_wire(actualUtilizationUserInput=0)).actual_utilization_user_input == 0

    with pytest.raises(ValidationError):
        validate_record_edit(_wire(totalUtilization=0))


@pytest.mark.parametrize(
    "changes",
    [
        {"totalUtilization": 481},
        {"actualUtilizationUserInput": 481},
        {"count": 0},
        {"count": "many"},
        {"count": True},
        {"team": "Night Shift"},
        {"frequency": "Hourly"},
        {"completedDate": "2024-1-5"},
        {"completedDate": "2024-02-30"},
        {"userId": ""},
        {"id": None},
        {"processName": "", "task": ""},
    ],
)
def test_invalid_fields_are_rejected(changes):
    with pytest.raises(ValidationError):
        validate_new_record(_wire(**changes))


def test_legacy_task_alias_is_accepted():
    data = _wire()
    del data["processName"]
    data["task"] = "Other"

    assert validate_new_record(data).process_name == "Other"


def test_process_name_wins_over_task_alias():
    assert validate_new_record(_wire(processName="Hold Calls", task="Other")).process_name == "Hold Calls"


def test_derived_fields_on_the_wire():
    data = make_record("r1", total_utilization=5, count=3, actual_utilization_user_input=90).to_dict()

    assert data["task"] == data["processName"]
    assert data["actualVolume"] == 15
    assert data["expectedUtilization"] == 15
    assert data["actualOverallPerDayUtilization"] == 1.5


def test_build_record_fills_catalog_duration():
    user = make_user("u1", name="Asha")

    record = build_record(
        user,
        process_name="Hold Calls",
        team="Pick My Career Operations",
        frequency="Daily",
        completed_date="2024-03-01",
        count=4,
        actual_utilization_user_input=25,
        total_utilization=99,
    )

    assert isinstance(record, ProductionRecord)
    assert record.total_utilization == 5
    assert record.user_name == "Asha"
    assert record.id


def test_build_record_keeps_entered_minutes_for_runtime_tasks():
    record = build_record(
        make_user("u1"),
        process_name="Support Queries",
        team="Pick My Career Operations",
        frequency="Weekly",
        completed_date="2024-03-01",
        count=1,
        actual_utilization_user_input=40,
        total_utilization=35,
    )

    assert record.total_utilization == 35


def test_merge_update_overlays_partial_changes():
    merged = merge_record_update(make_record("r1"), {"id": "r1", "task": "Other", "count": 2})

    assert merged["processName"] == "Other"
    assert merged["count"] == 2
    assert merged["team"] == make_record("r1").team
