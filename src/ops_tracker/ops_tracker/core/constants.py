"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

WORKDAY_HOURS = 8
MAX_UTILIZATION_MINUTES = WORKDAY_HOURS * 60

STATUS_POLL_SECONDS = 30
REQUEST_TIMEOUT_SECONDS = 10.0

DEFAULT_ADMIN = {
    "id": "admin-001",
    "username": "admin",
    "password": "password123",
    "name": "Super Admin",
    "role": "ADMIN",
}

DISPLAY_DATE_FORMAT = "%d/%m/%Y"
ISO_DATE_FORMAT = "%Y-%m-%d"
