"""Async HTTP client for the record store endpoints."""
from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from ..core.constants import REQUEST_TIMEOUT_SECONDS
from ..core.exceptions import AuthenticationError, NotFoundError, RecordStoreError, ValidationError
from ..records.model import ProductionRecord
from ..users.model import User

logger = logging.getLogger(__name__)


def _message_of(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return response.reason_phrase


def _error_for(response: httpx.Response) -> Exception:
    message = _message_of(response)
    if response.status_code == 400:
        return ValidationError(message)
    if response.status_code == 401:
        return AuthenticationError(message)
    if response.status_code == 404:
        return NotFoundError(message)
    return RecordStoreError(f"HTTP {response.status_code}: {message}", status_code=response.status_code)


class RecordStoreClient:
    """Thin wrapper over ``httpx.AsyncClient``. No retries; timeouts come from the transport."""

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = REQUEST_TIMEOUT_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._client = httpx.AsyncClient(base_url=base_url, timeout=timeout, transport=transport)

    async def __aenter__(self) -> "RecordStoreClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, path: str, *, json: Any = None) -> Any:
        try:
            response = await self._client.request(method, path, json=json)
        except httpx.HTTPError as exc:
            raise RecordStoreError(f"{method} {path} failed: {exc}") from exc

        if response.status_code >= 400:
            raise _error_for(response)
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise RecordStoreError(
                f"{method} {path} returned a non-JSON body", status_code=response.status_code
            ) from exc

    async def fetch_data(self) -> tuple[list[User], list[ProductionRecord]]:
        body = await self._request("GET", "/api/data")
        users = [User.from_dict(u) for u in body.get("users", [])]
        records = [ProductionRecord.from_dict(r) for r in body.get("records", [])]
        return users, records

    async def login(self, username: str, password: str) -> User:
        body = await self._request("POST", "/api/login", json={"username": username, "password": password})
        return User.from_dict(body)

    async def list_users(self) -> list[User]:
        body = await self._request("GET", "/api/users")
        return [User.from_dict(u) for u in body]

    async def create_user(self, user: User) -> User:
        body = await self._request("POST", "/api/users", json=user.to_dict(include_password=True))
        return User.from_dict(body)

    async def update_user(self, user: User) -> User:
        body = await self._request("PATCH", "/api/users", json=user.to_dict(include_password=True))
        return User.from_dict(body)

    async def delete_user(self, user_id: str) -> int:
        body = await self._request("DELETE", "/api/users", json={"id": user_id})
        return int((body or {}).get("deletedRecords", 0))

    async def list_records(self) -> list[ProductionRecord]:
        body = await self._request("GET", "/api/records")
        return [ProductionRecord.from_dict(r) for r in body]

    async def create_record(self, record: ProductionRecord) -> ProductionRecord:
        body = await self._request("POST", "/api/records", json=record.to_dict())
        return ProductionRecord.from_dict(body)

    async def update_record(self, record: ProductionRecord) -> ProductionRecord:
        body = await self._request("PUT", "/api/records", json=record.to_dict())
        return ProductionRecord.from_dict(body)

    async def delete_record(self, record_id: str) -> None:
        await self._request("DELETE", "/api/records", json={"id": record_id})
