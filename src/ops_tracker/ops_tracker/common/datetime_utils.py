from __future__ import annotations

from datetime import date, datetime, timezone

from ..core.constants import DISPLAY_DATE_FORMAT, ISO_DATE_FORMAT
from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, ISO_DATE_FORMAT).date()


def require_iso_date(value, field_name: str = "completedDate") -> str:
    """Return the value unchanged if it is a fixed-width YYYY-MM-DD date.

    Range filters compare these strings lexicographically, so the format must be exact.
    """
    if not isinstance(value, str) or len(value) != 10:
        raise ValidationError(f"{field_name} must be a YYYY-MM-DD date")
    try:
        parse_iso_date(value)
    except ValueError:
        raise ValidationError(f"{field_name} must be a YYYY-MM-DD date")
    return value


def format_display_date(value: str) -> str:
    """YYYY-MM-DD -> dd/mm/yyyy. Unparseable input is returned as-is."""
    if not value:
        return ""
    try:
        return parse_iso_date(value).strftime(DISPLAY_DATE_FORMAT)
    except ValueError:
        return value


def today_iso() -> str:
    return date.today().strftime(ISO_DATE_FORMAT)


def now_utc_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def month_of(value: str) -> str:
    """'2024-01-15' -> '2024-01'."""
    return value[:7]
