"""Client-side wiring: one API client, one data store, one status watcher."""
from __future__ import annotations

import logging
from typing import Callable, Optional

import httpx
from dotenv import load_dotenv

from config import load_settings

from ..core.constants import REQUEST_TIMEOUT_SECONDS, STATUS_POLL_SECONDS
from ..users.model import User
from .api import RecordStoreClient
from .session import SessionStorage
from .store import ClientDataStore
from .watcher import DisabledAccountWatcher

logger = logging.getLogger(__name__)


class ClientApp:
    def __init__(
        self,
        api: RecordStoreClient,
        *,
        storage: Optional[SessionStorage] = None,
        poll_seconds: int = STATUS_POLL_SECONDS,
        on_forced_logout: Optional[Callable[[User], None]] = None,
    ):
        self.api = api
        self.store = ClientDataStore(api, storage, on_forced_logout=on_forced_logout)
        self.watcher = DisabledAccountWatcher(self.store, api, interval_seconds=poll_seconds)

    @classmethod
    def from_settings(
        cls,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        on_forced_logout: Optional[Callable[[User], None]] = None,
    ) -> "ClientApp":
        load_dotenv(override=False)
        settings = load_settings()

        api = RecordStoreClient(
            getattr(settings, "API_BASE_URL"),
            timeout=float(getattr(settings, "REQUEST_TIMEOUT_SECONDS", REQUEST_TIMEOUT_SECONDS)),
            transport=transport,
        )
        session_file = getattr(settings, "SESSION_FILE", None)
        return cls(
            api,
            storage=SessionStorage(session_file) if session_file else None,
            poll_seconds=int(getattr(settings, "STATUS_POLL_SECONDS", STATUS_POLL_SECONDS)),
            on_forced_logout=on_forced_logout,
        )

    async def start(self) -> None:
        await self.store.start()
        self.watcher.start()
        logger.info("Client started (signed in: %s)", self.store.current_user is not None)

    async def close(self) -> None:
        self.watcher.stop()
        await self.api.aclose()
