from __future__ import annotations

from flask import request

from ..core.exceptions import ValidationError


def json_body() -> dict:
    """Request JSON object, or ValidationError (-> 400) when missing or malformed."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Invalid JSON in request body")
    return data
