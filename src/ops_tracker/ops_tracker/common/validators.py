from __future__ import annotations

from typing import Any

from ..core.exceptions import ValidationError


def require_non_empty(value: Any, field_name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_identifier(value: Any, field_name: str = "id") -> str:
    """Ids are opaque non-empty strings."""
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field_name} is missing or malformed")
    return value


def require_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be a whole number")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            pass
    raise ValidationError(f"{field_name} must be a whole number")


def require_in_range(value: int, field_name: str, *, low: int, high: int, low_inclusive: bool = True) -> int:
    too_low = value < low if low_inclusive else value <= low
    if too_low or value > high:
        bound = "at least" if low_inclusive else "greater than"
        raise ValidationError(f"{field_name} must be {bound} {low} and no more than {high}")
    return value


def require_choice(value: Any, field_name: str, choices) -> str:
    if value not in choices:
        raise ValidationError(f"{field_name} '{value}' is not one of the allowed values")
    return value


def optional_bool(value: Any, field_name: str, *, default: bool = False) -> bool:
    """JSON booleans only; a missing (None) value takes the default."""
    if value is None:
        return default
    if not isinstance(value, bool):
        raise ValidationError(f"{field_name} must be true or false")
    return value
