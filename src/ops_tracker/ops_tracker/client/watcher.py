"""Background check that signs the current user out once an admin disables them."""
from __future__ import annotations

import logging
from typing import Optional

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger

from ..core.constants import STATUS_POLL_SECONDS
from ..core.exceptions import DomainError
from .api import RecordStoreClient
from .store import ClientDataStore

logger = logging.getLogger(__name__)

JOB_ID = "check-user-status"


class DisabledAccountWatcher:
    def __init__(
        self,
        store: ClientDataStore,
        api: RecordStoreClient,
        *,
        interval_seconds: int = STATUS_POLL_SECONDS,
        scheduler: Optional[AsyncIOScheduler] = None,
    ):
        self._store = store
        self._api = api
        self._interval_seconds = interval_seconds
        self._scheduler = scheduler or AsyncIOScheduler()

    @property
    def scheduler(self) -> AsyncIOScheduler:
        return self._scheduler

    def start(self) -> None:
        """Schedule the poll and start the scheduler. Must run inside an event loop."""
        trigger = IntervalTrigger(seconds=self._interval_seconds)
        self._scheduler.add_job(
            self.check_user_status,
            trigger=trigger,
            id=JOB_ID,
            replace_existing=True,
            max_instances=1,
            coalesce=True,
        )
        if not self._scheduler.running:
            self._scheduler.start()
        logger.info("Scheduled %s every %s seconds", JOB_ID, self._interval_seconds)

    def stop(self) -> None:
        if self._scheduler.get_job(JOB_ID):
            self._scheduler.remove_job(JOB_ID)
        if self._scheduler.running:
            self._scheduler.shutdown(wait=False)
            logger.info("Status watcher stopped")

    async def check_user_status(self) -> bool:
        """One poll. Returns True when it forced a logout.

        Transport and server errors are logged and dropped; the next tick retries.
        """

        if self._store.current_user is None:
            return False
        try:
            users = await self._api.list_users()
        except DomainError as exc:
            logger.warning("User status check failed: %s", exc)
            return False
        return self._store.apply_user_poll(users)
