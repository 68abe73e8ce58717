from __future__ import annotations

import logging
import uuid
from dataclasses import replace
from typing import Any, Mapping, Sequence

from ..common.validators import require_identifier, require_non_empty
from ..core.constants import DEFAULT_ADMIN
from ..core.exceptions import AccountDisabledError, AuthenticationError, NotFoundError, ValidationError
from ..records.repository import RecordRepository
from .model import User
from .repository import UserRepository

logger = logging.getLogger(__name__)

_EDITABLE_FIELDS = ("username", "name", "role", "password", "isDisabled")


class AuthService:
    """Use case: authenticate user (login).

    Credentials are compared as stored. The disabled flag is reported back to the
    caller, which decides how to reject it (see ``ensure_enabled``).
    """

    def __init__(self, users: UserRepository):
        self._users = users

    def authenticate(self, username: str, password: str) -> User:
        if not username or not password:
            raise ValidationError("Username and password required")

        user = self._users.get_by_username(username)
        if not user or user.password != password:
            raise AuthenticationError("Invalid credentials")
        return user.without_password()


def ensure_enabled(user: User) -> User:
    if user.is_disabled:
        raise AccountDisabledError("This account has been disabled.")
    return user


class UserService:
    """Use case: manage users (admin)."""

    def __init__(self, users: UserRepository, records: RecordRepository):
        self._users = users
        self._records = records

    def ensure_default_admin(self) -> bool:
        """Create the built-in admin account if it is missing. Returns True when created."""
        if self._users.get_by_id(DEFAULT_ADMIN["id"]):
            return False
        self._users.create(User.from_dict(DEFAULT_ADMIN))
        logger.info("Default admin user created (id=%s)", DEFAULT_ADMIN["id"])
        return True

    def list_users(self) -> Sequence[User]:
        return [u.without_password() for u in self._users.list_all()]

    def create_user(self, data: Mapping[str, Any]) -> User:
        if not isinstance(data, Mapping):
            raise ValidationError("Invalid request body")

        user = User.from_dict({**data, "id": data.get("id") or str(uuid.uuid4())})
        require_identifier(user.id)
        username = require_non_empty(user.username, "username")
        name = require_non_empty(user.name, "name")
        require_non_empty(user.password, "password")

        if self._users.get_by_username(username):
            raise ValidationError("Username already exists")
        if self._users.get_by_id(user.id):
            raise ValidationError(f"User id '{user.id}' already exists")

        created = self._users.create(replace(user, username=username, name=name))
        logger.info("User created id=%s role=%s", created.id, created.role.value)
        return created.without_password()

    def update_user(self, data: Mapping[str, Any]) -> User:
        if not isinstance(data, Mapping):
            raise ValidationError("Invalid request body")
        user_id = require_identifier(data.get("id"), "User ID")

        existing = self._users.get_by_id(user_id)
        if not existing:
            logger.info("Update for unknown user id=%s", user_id)
            raise NotFoundError("User not found")

        merged = existing.to_dict(include_password=True)
        for key in _EDITABLE_FIELDS:
            if key not in data:
                continue
            # A blank password in an edit form means "keep the current one".
            if key == "password" and not data.get(key):
                continue
            merged[key] = data[key]

        updated = User.from_dict(merged)
        username = require_non_empty(updated.username, "username")
        require_non_empty(updated.name, "name")
        other = self._users.get_by_username(username)
        if other and other.id != user_id:
            raise ValidationError("Username already exists")

        if not self._users.update(updated):
            raise NotFoundError("User not found")
        logger.info("User updated id=%s disabled=%s", user_id, updated.is_disabled)
        return updated.without_password()

    def delete_user(self, user_id: Any) -> int:
        """Delete a user and every record they own. Returns the number of records removed."""
        user_id = require_identifier(user_id, "User ID")
        if not self._users.get_by_id(user_id):
            raise NotFoundError("User not found")

        removed = self._records.delete_by_user(user_id)
        if not self._users.delete_by_id(user_id):
            raise NotFoundError("User not found")
        logger.info("User deleted id=%s (records removed=%d)", user_id, removed)
        return removed

