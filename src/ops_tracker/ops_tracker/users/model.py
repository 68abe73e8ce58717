from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Mapping, Optional

from ..common.validators import optional_bool
from ..core.enums import Role
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class User:
    """Domain entity: User.

    Note: plain data object, no DB access here. The password is stored as given.
    """

    id: str
    username: str
    name: str
    role: Role = Role.USER
    password: Optional[str] = None
    is_disabled: bool = False

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    def without_password(self) -> "User":
        return replace(self, password=None)

    def to_public_dict(self) -> dict:
        return {
            "id": self.id,
            "username": self.username,
            "name": self.name,
            "role": self.role.value,
            "isDisabled": self.is_disabled,
        }

    def to_dict(self, *, include_password: bool = False) -> dict:
        out = self.to_public_dict()
        if include_password and self.password:
            out["password"] = self.password
        return out

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "User":
        try:
            role = Role(data.get("role") or Role.USER.value)
        except ValueError:
            raise ValidationError(f"Unknown role: {data.get('role')!r}")
        return cls(
            id=str(data.get("id") or ""),
            username=str(data.get("username") or ""),
            name=str(data.get("name") or ""),
            role=role,
            password=data.get("password") or None,
            is_disabled=optional_bool(data.get("isDisabled"), "isDisabled"),
        )
