"""In-memory mirror of users and records, and the only writer of that state.

Record mutations are optimistic: the snapshot changes first, the request
follows, and a failed request undoes the change before the error is re-raised.
User mutations wait for the server and only then touch the snapshot.
"""
from __future__ import annotations

import logging
from typing import Callable, Optional

from ..analytics.aggregation import OverviewReport, build_overview, daily_utilization_for_user
from ..analytics.filters import NO_FILTER, OverviewFilter
from ..common.validators import require_identifier, require_non_empty
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..records.model import ProductionRecord
from ..records.service import build_record
from ..records.validation import validate_new_record, validate_record_edit
from ..users.model import User
from ..users.service import ensure_enabled
from .api import RecordStoreClient
from .session import SessionStorage

logger = logging.getLogger(__name__)

Listener = Callable[[int], None]


def _index_of(items: list, item_id: str) -> int:
    for i, item in enumerate(items):
        if item.id == item_id:
            return i
    return -1


class ClientDataStore:
    def __init__(
        self,
        api: RecordStoreClient,
        storage: Optional[SessionStorage] = None,
        *,
        on_forced_logout: Optional[Callable[[User], None]] = None,
    ):
        self._api = api
        self._storage = storage
        self._on_forced_logout = on_forced_logout

        self._users: list[User] = []
        self._records: list[ProductionRecord] = []
        self._current_user: Optional[User] = None
        self._last_update = 0
        self._listeners: list[Listener] = []
        self.loading = False

    # ----- read side -------------------------------------------------------

    @property
    def users(self) -> tuple[User, ...]:
        return tuple(self._users)

    @property
    def records(self) -> tuple[ProductionRecord, ...]:
        return tuple(self._records)

    @property
    def current_user(self) -> Optional[User]:
        return self._current_user

    @property
    def last_update(self) -> int:
        return self._last_update

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call ``listener(last_update)`` after every snapshot change."""
        self._listeners.append(listener)
        return lambda: self._listeners.remove(listener)

    def _touch(self) -> None:
        self._last_update += 1
        for listener in list(self._listeners):
            listener(self._last_update)

    def overview(self, filters: OverviewFilter = NO_FILTER) -> OverviewReport:
        return build_overview(self._records, self._users, filters)

    def my_daily_chart(self, month: Optional[str] = None):
        user = self._require_signed_in()
        return daily_utilization_for_user(self._records, user.id, month)

    def my_records(self) -> tuple[ProductionRecord, ...]:
        user = self._require_signed_in()
        mine = [r for r in self._records if r.user_id == user.id]
        return tuple(sorted(mine, key=lambda r: r.completed_date, reverse=True))

    # ----- session ---------------------------------------------------------

    def restore_session(self) -> Optional[User]:
        if self._storage is not None:
            self._current_user = self._storage.load()
            if self._current_user:
                logger.info("Restored session for user id=%s", self._current_user.id)
        return self._current_user

    async def start(self) -> None:
        """Restore the stored identity first, then load the remote snapshot."""
        self.restore_session()
        await self.refresh_data()

    async def refresh_data(self) -> None:
        self.loading = True
        try:
            users, records = await self._api.fetch_data()
        finally:
            self.loading = False
        self._users = list(users)
        self._records = list(records)
        self._touch()

    async def login(self, username: str, password: str) -> User:
        user = ensure_enabled(await self._api.login(username, password))
        self._set_current_user(user)
        return user

    def logout(self) -> None:
        self._current_user = None
        if self._storage is not None:
            self._storage.clear()

    def _set_current_user(self, user: User) -> None:
        self._current_user = user.without_password()
        if self._storage is not None:
            self._storage.save(self._current_user)

    def _require_signed_in(self) -> User:
        if self._current_user is None:
            raise AuthorizationError("Not signed in")
        return self._current_user

    def _force_logout(self, user: User) -> None:
        logger.warning("User id=%s was disabled by an administrator; logging out", user.id)
        self.logout()
        if self._on_forced_logout is not None:
            self._on_forced_logout(user)

    # ----- record mutations (optimistic) ----------------------------------

    async def new_record(self, **form) -> ProductionRecord:
        """Data-entry form submit for the signed-in user."""
        record = build_record(self._require_signed_in(), **form)
        return await self.add_record(record)

    async def add_record(self, record: ProductionRecord) -> ProductionRecord:
        validate_new_record(record.to_dict())
        if _index_of(self._records, record.id) >= 0:
            raise ValidationError(f"Record id '{record.id}' already exists")

        self._records.append(record)
        self._touch()
        try:
            saved = await self._api.create_record(record)
        except Exception:
            logger.warning("Create of record id=%s failed; rolling back", record.id)
            idx = _index_of(self._records, record.id)
            if idx >= 0:
                del self._records[idx]
            self._touch()
            raise

        self._replace_record(saved)
        return saved

    async def update_record(self, record: ProductionRecord) -> ProductionRecord:
        validate_record_edit(record.to_dict())
        idx = _index_of(self._records, record.id)
        if idx < 0:
            raise NotFoundError("Record not found")

        previous = self._records[idx]
        self._records[idx] = record
        self._touch()
        try:
            saved = await self._api.update_record(record)
        except Exception:
            logger.warning("Update of record id=%s failed; rolling back", record.id)
            self._restore_record(previous, idx)
            self._touch()
            raise

        self._replace_record(saved)
        return saved

    async def delete_record(self, record_id: str) -> None:
        require_identifier(record_id, "Record ID")
        idx = _index_of(self._records, record_id)
        if idx < 0:
            raise NotFoundError("Record not found")

        removed = self._records.pop(idx)
        self._touch()
        try:
            await self._api.delete_record(record_id)
        except Exception:
            logger.warning("Delete of record id=%s failed; rolling back", record_id)
            self._restore_record(removed, idx)
            self._touch()
            raise

    def _replace_record(self, record: ProductionRecord) -> None:
        idx = _index_of(self._records, record.id)
        if idx >= 0:
            self._records[idx] = record
        else:
            self._records.append(record)
        self._touch()

    def _restore_record(self, record: ProductionRecord, position: int) -> None:
        idx = _index_of(self._records, record.id)
        if idx >= 0:
            self._records[idx] = record
        else:
            self._records.insert(min(position, len(self._records)), record)

    # ----- user mutations (confirmed first) -------------------------------

    async def add_user(self, user: User) -> User:
        require_non_empty(user.username, "username")
        require_non_empty(user.name, "name")
        require_non_empty(user.password, "password")

        created = await self._api.create_user(user)
        self._users.append(created)
        self._touch()
        return created

    async def update_user(self, user: User) -> User:
        require_identifier(user.id, "User ID")

        updated = await self._api.update_user(user)
        idx = _index_of(self._users, updated.id)
        if idx >= 0:
            self._users[idx] = updated
        else:
            self._users.append(updated)
        self._touch()

        current = self._current_user
        if current is not None and current.id == updated.id:
            if updated.is_disabled:
                self._force_logout(updated)
            else:
                self._set_current_user(updated)
        return updated

    async def delete_user(self, user_id: str) -> int:
        require_identifier(user_id, "User ID")

        await self._api.delete_user(user_id)
        before = len(self._records)
        self._users = [u for u in self._users if u.id != user_id]
        self._records = [r for r in self._records if r.user_id != user_id]
        self._touch()
        return before - len(self._records)

    # ----- background status poll -----------------------------------------

    def apply_user_poll(self, users: list[User]) -> bool:
        """Take a fresh user list as the new truth. Returns True if this forced a logout.

        Only a transition to disabled logs out; a session that was already
        flagged disabled when it was loaded is left alone.
        """

        self._users = list(users)
        self._touch()

        current = self._current_user
        if current is None:
            return False
        fresh = next((u for u in users if u.id == current.id), None)
        if fresh is not None and fresh.is_disabled and not current.is_disabled:
            self._force_logout(fresh)
            return True
        return False
