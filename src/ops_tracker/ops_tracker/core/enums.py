from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User role used for access control."""

    ADMIN = "ADMIN"
    USER = "USER"


class Frequency(str, Enum):
    """How often a task is performed."""

    DAILY = "Daily"
    MONTHLY = "Monthly"
    WEEKEND = "Weekend"
    WEEKLY = "Weekly"
    YEARLY = "Yearly"
