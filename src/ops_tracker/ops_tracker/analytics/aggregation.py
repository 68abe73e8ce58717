"""Derived views over a record snapshot.

Every function here is pure: same inputs, same (immutable) outputs, no I/O.
Hours are minutes / 60; per-user averages are capped at one working day.
"""
from __future__ import annotations

from collections import OrderedDict
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

from ..common.datetime_utils import format_display_date, month_of
from ..core.constants import WORKDAY_HOURS
from ..core.enums import Role
from ..records.catalog import TEAMS
from ..records.model import ProductionRecord
from ..users.model import User
from .filters import NO_FILTER, OverviewFilter


@dataclass(frozen=True)
class UserUtilization:
    user_id: str
    name: str
    team: str
    days: int
    total_hours: float
    average_hours: float
    utilization_percentage: float

    def to_dict(self) -> dict:
        return {
            "userId": self.user_id,
            "name": self.name,
            "team": self.team,
            "days": self.days,
            "totalHours": self.total_hours,
            "averageHours": self.average_hours,
            "utilizationPercentage": self.utilization_percentage,
        }


@dataclass(frozen=True)
class TeamCount:
    team: str
    count: int

    def to_dict(self) -> dict:
        return {"name": self.team, "count": self.count}


@dataclass(frozen=True)
class TeamTaskComposition:
    team: str
    tasks: tuple[tuple[str, int], ...]

    def to_dict(self) -> dict:
        return {"name": self.team, "tasks": dict(self.tasks)}


@dataclass(frozen=True)
class TrendPoint:
    date: str
    display_date: str
    total_minutes: int
    per_person_average_hours: float

    def to_dict(self) -> dict:
        return {
            "date": self.date,
            "displayDate": self.display_date,
            "totalMinutes": self.total_minutes,
            "perPersonAverageHours": self.per_person_average_hours,
        }


@dataclass(frozen=True)
class DailyUtilization:
    date: str
    actual_hours: float
    expected_hours: float

    def to_dict(self) -> dict:
        return {"date": self.date, "actualHours": self.actual_hours, "expectedHours": self.expected_hours}


@dataclass(frozen=True)
class OverviewReport:
    utilization_by_user: tuple[UserUtilization, ...]
    records_by_team: tuple[TeamCount, ...]
    task_composition_by_team: tuple[TeamTaskComposition, ...]
    process_tasks: tuple[str, ...]
    trend: tuple[TrendPoint, ...]

    def to_dict(self) -> dict:
        return {
            "utilizationByUser": [u.to_dict() for u in self.utilization_by_user],
            "recordsByTeam": [t.to_dict() for t in self.records_by_team],
            "taskCompositionByTeam": [t.to_dict() for t in self.task_composition_by_team],
            "processTasks": list(self.process_tasks),
            "trend": [p.to_dict() for p in self.trend],
        }


def _non_admins(users: Iterable[User]) -> list[User]:
    return [u for u in users if not u.is_admin]


def utilization_by_user(
    records: Sequence[ProductionRecord],
    users: Sequence[User],
    filters: OverviewFilter = NO_FILTER,
) -> tuple[UserUtilization, ...]:
    """Average logged hours per active day for each non-admin user.

    Sums ``totalUtilization`` as logged (not multiplied by count). A user's team is
    the team of their first matching record in input order.
    """

    selected = filters.apply(records)
    out: list[UserUtilization] = []

    for user in _non_admins(users):
        mine = [r for r in selected if r.user_id == user.id]
        if not mine:
            continue

        days = len({r.completed_date for r in mine})
        total_hours = sum(r.total_utilization for r in mine) / 60
        average = min(total_hours / days, WORKDAY_HOURS) if days else 0.0
        if average <= 0:
            continue

        out.append(
            UserUtilization(
                user_id=user.id,
                name=user.name,
                team=mine[0].team or "Unknown",
                days=days,
                total_hours=total_hours,
                average_hours=average,
                utilization_percentage=(average / WORKDAY_HOURS) * 100,
            )
        )

    # sorted() is stable, so equal averages keep user order.
    return tuple(sorted(out, key=lambda u: u.average_hours, reverse=True))


def records_by_team(
    records: Sequence[ProductionRecord],
    filters: OverviewFilter = NO_FILTER,
    teams: Sequence[str] = TEAMS,
) -> tuple[TeamCount, ...]:
    """Record count per known team; every team appears, zero or not."""
    selected = filters.apply(records)
    return tuple(TeamCount(team=t, count=sum(1 for r in selected if r.team == t)) for t in teams)


def task_composition_by_team(
    records: Sequence[ProductionRecord],
    filters: OverviewFilter = NO_FILTER,
    teams: Sequence[str] = TEAMS,
) -> tuple[TeamTaskComposition, ...]:
    selected = filters.apply(records)
    out: list[TeamTaskComposition] = []

    for team in teams:
        if filters.team is not None and team != filters.team:
            continue
        counts: "OrderedDict[str, int]" = OrderedDict()
        for r in selected:
            if r.team == team:
                counts[r.process_name] = counts.get(r.process_name, 0) + 1
        out.append(TeamTaskComposition(team=team, tasks=tuple(counts.items())))

    return tuple(out)


def unique_process_tasks(records: Sequence[ProductionRecord], filters: OverviewFilter = NO_FILTER) -> tuple[str, ...]:
    return tuple(sorted({r.process_name for r in filters.apply(records)}))


def trend_data(
    records: Sequence[ProductionRecord],
    users: Sequence[User],
    filters: OverviewFilter = NO_FILTER,
) -> tuple[TrendPoint, ...]:
    """Per-date logged hours divided by the number of non-admin users, oldest date first.

    The head count is global, not narrowed by the filters.
    """

    active_users = len(_non_admins(users))
    if active_users == 0:
        return ()

    minutes_by_date: dict[str, int] = {}
    for r in filters.apply(records):
        minutes_by_date[r.completed_date] = minutes_by_date.get(r.completed_date, 0) + r.total_utilization

    return tuple(
        TrendPoint(
            date=d,
            display_date=format_display_date(d),
            total_minutes=minutes_by_date[d],
            per_person_average_hours=(minutes_by_date[d] / 60) / active_users,
        )
        for d in sorted(minutes_by_date)
    )


def daily_utilization_for_user(
    records: Sequence[ProductionRecord],
    user_id: str,
    month: Optional[str] = None,
) -> tuple[DailyUtilization, ...]:
    """Self-service chart: actual vs expected hours per day for one user.

    ``month`` is ``YYYY-MM``; ``None`` means all dates.
    """

    actual: dict[str, int] = {}
    expected: dict[str, int] = {}
    for r in records:
        if r.user_id != user_id:
            continue
        if month is not None and month_of(r.completed_date) != month:
            continue
        actual[r.completed_date] = actual.get(r.completed_date, 0) + r.actual_utilization_user_input
        expected[r.completed_date] = expected.get(r.completed_date, 0) + r.total_utilization * r.count

    return tuple(
        DailyUtilization(
            date=d,
            actual_hours=actual.get(d, 0) / 60,
            expected_hours=expected.get(d, 0) / 60,
        )
        for d in sorted(set(actual) | set(expected))
    )


def search_records(
    records: Sequence[ProductionRecord],
    query: str = "",
    date_start: Optional[str] = None,
    date_end: Optional[str] = None,
) -> tuple[ProductionRecord, ...]:
    """Admin records table: text search on user/task plus date range, newest first."""
    needle = (query or "").strip().lower()
    window = OverviewFilter.from_params(date_start, date_end)

    def hit(r: ProductionRecord) -> bool:
        if not window.matches(r):
            return False
        if not needle:
            return True
        return needle in r.user_name.lower() or needle in r.process_name.lower()

    return tuple(sorted((r for r in records if hit(r)), key=lambda r: r.completed_date, reverse=True))


def filter_users_by_role(users: Sequence[User], role: Optional[Role] = None) -> tuple[User, ...]:
    if role is None:
        return tuple(users)
    return tuple(u for u in users if u.role == role)


def build_overview(
    records: Sequence[ProductionRecord],
    users: Sequence[User],
    filters: OverviewFilter = NO_FILTER,
    teams: Sequence[str] = TEAMS,
) -> OverviewReport:
    return OverviewReport(
        utilization_by_user=utilization_by_user(records, users, filters),
        records_by_team=records_by_team(records, filters, teams),
        task_composition_by_team=task_composition_by_team(records, filters, teams),
        process_tasks=unique_process_tasks(records, filters),
        trend=trend_data(records, users, filters),
    )
