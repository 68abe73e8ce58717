from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping


@dataclass(frozen=True)
class ProductionRecord:
    """Domain entity: one logged unit of work.

    ``process_name`` is the single stored task name. On the wire it is published
    under both ``processName`` and ``task`` for older clients.
    ``user_name`` is a copy of the owner's name at creation time and is not kept in sync.
    """

    id: str
    user_id: str
    user_name: str
    process_name: str
    team: str
    frequency: str
    total_utilization: int
    count: int
    completed_date: str
    actual_utilization_user_input: int = 0
    remarks: str = ""

    @property
    def actual_volume(self) -> int:
        return self.total_utilization * self.count

    @property
    def expected_utilization(self) -> int:
        return self.total_utilization * self.count

    @property
    def actual_overall_per_day_utilization(self) -> float:
        return self.actual_utilization_user_input / 60

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "userId": self.user_id,
            "userName": self.user_name,
            "processName": self.process_name,
            "task": self.process_name,
            "team": self.team,
            "frequency": self.frequency,
            "totalUtilization": self.total_utilization,
            "count": self.count,
            "completedDate": self.completed_date,
            "actualUtilizationUserInput": self.actual_utilization_user_input,
            "remarks": self.remarks,
            "actualVolume": self.actual_volume,
            "expectedUtilization": self.expected_utilization,
            "actualOverallPerDayUtilization": self.actual_overall_per_day_utilization,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ProductionRecord":
        """Build from wire format. Numeric fields must already be validated."""
        return cls(**record_kwargs(data))


# wire name -> attribute name
WIRE_FIELDS = {
    "id": "id",
    "userId": "user_id",
    "userName": "user_name",
    "team": "team",
    "frequency": "frequency",
    "totalUtilization": "total_utilization",
    "count": "count",
    "completedDate": "completed_date",
    "actualUtilizationUserInput": "actual_utilization_user_input",
    "remarks": "remarks",
}


def process_name_of(data: Mapping[str, Any]) -> Any:
    """Either alias may carry the task name; ``processName`` wins when both are set."""
    value = data.get("processName")
    if value in (None, ""):
        value = data.get("task")
    return value


def record_kwargs(data: Mapping[str, Any]) -> dict:
    out: dict = {}
    for wire, attr in WIRE_FIELDS.items():
        if wire in data and data[wire] is not None:
            out[attr] = data[wire]
    name = process_name_of(data)
    if name is not None:
        out["process_name"] = name
    if out.get("remarks") is None:
        out["remarks"] = ""
    return out


def has_process_name(data: Mapping[str, Any]) -> bool:
    return "processName" in data or "task" in data
