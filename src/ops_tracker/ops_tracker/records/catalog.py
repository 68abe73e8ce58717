"""Task catalog: fixed teams, frequencies and per-task nominal durations.

Durations come from the operations time study. A task whose duration depends on
the actual run is a "runtime" task and has its minutes entered per occurrence.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional, Union

from ..core.enums import Frequency

RUNTIME = "runtime"

_RAW_TASKS = [
    ("Live Class Scheduling", "1"),
    ("Live Class Schedule Checking", "2"),
    ("Attendance Updation", "2"),
    ("Absent Sheet Updation / Message Sending", "3"),
    ("Assignment Remainder Message", "4"),
    ("Assessment Remainder Message", "5"),
    ("Frequent Absentees call", "3"),
    ("Kit Address Updation", "2"),
    ("Follow-up Calls", "3"),
    ("Support Queries", RUNTIME),
    ("Trainers Queries", RUNTIME),
    ("Absentees chat updation in sheet / Reply", "1"),
    ("Normal Chat Reply ( Gallabox )", "1"),
    ("Kit Address Verification ( 1 on 1 ) / Message", "2"),
    ("Kit Address Verification ( 1 on 1 ) / call", "3"),
    ("Progression Sheet Updation / Message Sending", "3"),
    ("Overall Sheet Updation", "1"),
    ("Time Table Creation", "4"),
    ("Materials Required Sending", "5"),
    ("Course Access Message", "4"),
    ("Course absentees sheet Updation", "5"),
    ("Course absentees Call", "5"),
    ("Course Feedback message", "3"),
    ("Course Document messsage", "3"),
    ("PTM Schedule Template Making", "3"),
    ("PTM Schedule Sending", "2"),
    ("PTM Absent sheet updation / Message sending", "3"),
    ("PTM Reschedule Sheet Updation", "2"),
    ("PTM Reschedule Call", "7"),
    ("Hold Calls", "5"),
    ("Morning Club Inaguration Message", "3"),
    ("Payment Follow Sheet - Sales Team", "7"),
    ("Batch Changing", "3"),
    ("Whatsapp Message Number Changing", "2"),
    ("Kit Address Sheet Updation", RUNTIME),
    ("Graduation and Event calls", "4"),
    ("Leave Holiday message", "30"),
    ("Course Preparation Message From Trainer Team", RUNTIME),
    ("Competition Message From Trainers Team", RUNTIME),
    ("Trainer Follow Up Messages", RUNTIME),
    ("Trainer Follow Up calls", RUNTIME),
    ("Innovation Club Messages", "3"),
    ("Discontinue Process From Sales Team", "2"),
    ("Scheduling Class in Edmingle", "2"),
    ("Live Class Scheduling ( Gallabox )", "1"),
    ("PMC 1 on 1 Call Scheduling", "5"),
    ("Absentees Call", "3"),
    ("Whastapp Chat Reply", "2"),
    ("Customer Assistance", "5"),
    ("Onboarding Call / Payment Verification", "10"),
    ("Chitti Account Creation / Adding in Dashboard / Sending Login Credentials", "5"),
    ("Whatsapp Class Remainder", "2"),
    ("Certificate Address collection", "2"),
    ("Queries from Sales", RUNTIME),
    ("Other", RUNTIME),
]

_RAW_TEAMS = [
    "Stem Educational Program Onboarding",
    "Stem Educational Program Operations",
    "Neet/Jee Operations and Onboarding",
    "Pick My Career Onboarding",
    "Pick My Career Operations",
    "Chitti Future School Onboarding",
    "Chitti Future School Operations",
    "CA 360 Academy Operations",
]


@dataclass(frozen=True)
class TaskDefinition:
    name: str
    time: Union[int, str]

    @property
    def is_runtime(self) -> bool:
        return self.time == RUNTIME


def parse_task_time(value: str) -> Union[int, str]:
    """'4 min / Section' -> 4; 'Based on run time' or no number -> 'runtime'."""
    if "based on run time" in value.lower():
        return RUNTIME
    match = re.search(r"(\d+)", value)
    if match:
        return int(match.group(1))
    return RUNTIME


TASKS_WITH_TIME = tuple(TaskDefinition(name=name, time=parse_task_time(t)) for name, t in _RAW_TASKS)
TEAMS = tuple(sorted(set(_RAW_TEAMS), key=str.lower))
FREQUENCIES = tuple(sorted((f.value for f in Frequency), key=str.lower))

_BY_NAME = {t.name: t for t in TASKS_WITH_TIME}


def duration_for(name: str) -> Optional[int]:
    """Nominal minutes for a task, or None when it must be entered per occurrence.

    Unknown task names are treated as runtime.
    """
    task = _BY_NAME.get(name)
    if task is None or task.is_runtime:
        return None
    return int(task.time)


def time_study_table() -> list[dict]:
    """Minute-to-decimal-hours lookup, 00:01 .. 01:00."""
    return [{"time": f"{m // 60:02d}:{m % 60:02d}", "num": round(m / 60, 2)} for m in range(1, 61)]
