from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from ..records.model import ProductionRecord

# Legacy UI sentinel for "no restriction"; only understood at the request boundary.
ALL = "ALL"


def _optional(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    if not value or value == ALL:
        return None
    return value


@dataclass(frozen=True)
class OverviewFilter:
    """Optional criteria; a ``None`` criterion matches everything.

    Dates are inclusive and compared as fixed-width YYYY-MM-DD strings.
    """

    date_start: Optional[str] = None
    date_end: Optional[str] = None
    team: Optional[str] = None
    user_id: Optional[str] = None

    @classmethod
    def from_params(
        cls,
        start: Optional[str] = None,
        end: Optional[str] = None,
        team: Optional[str] = None,
        user_id: Optional[str] = None,
    ) -> "OverviewFilter":
        return cls(
            date_start=_optional(start),
            date_end=_optional(end),
            team=_optional(team),
            user_id=_optional(user_id),
        )

    def matches(self, record: ProductionRecord) -> bool:
        if self.date_start is not None and record.completed_date < self.date_start:
            return False
        if self.date_end is not None and record.completed_date > self.date_end:
            return False
        if self.team is not None and record.team != self.team:
            return False
        if self.user_id is not None and record.user_id != self.user_id:
            return False
        return True

    def apply(self, records: Iterable[ProductionRecord]) -> tuple[ProductionRecord, ...]:
        return tuple(r for r in records if self.matches(r))


NO_FILTER = OverviewFilter()
