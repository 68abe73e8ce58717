from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

from ..core.exceptions import ValidationError
from ..users.model import User

logger = logging.getLogger(__name__)


class SessionStorage:
    """Keeps the signed-in identity on local disk so it survives restarts.

    Only the public user fields are written; never the password.
    """

    def __init__(self, path: str | Path):
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> Optional[User]:
        if not self._path.exists():
            return None
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
            if not isinstance(data, dict):
                raise ValueError("expected a JSON object")
            user = User.from_dict(data)
        except (OSError, ValueError, ValidationError) as exc:
            logger.warning("Ignoring unreadable session file %s: %s", self._path, exc)
            return None
        if not user.id:
            return None
        return user

    def save(self, user: User) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(json.dumps(user.to_public_dict()), encoding="utf-8")

    def clear(self) -> None:
        if self._path.exists():
            self._path.unlink()
