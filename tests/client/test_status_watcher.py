from __future__ import annotations

import asyncio

import httpx

from conftest import make_user
from src.ops_tracker.ops_tracker.client.api import RecordStoreClient
from src.ops_tracker.ops_tracker.client.store import ClientDataStore
from src.ops_tracker.ops_tracker.client.watcher import JOB_ID, DisabledAccountWatcher


def _api(handler) -> RecordStoreClient:
    return RecordStoreClient("http://testserver", transport=httpx.MockTransport(handler))


def _users_handler(*users):
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/api/users"
        return httpx.Response(200, json=[u.to_public_dict() for u in users])

    return handler


def _signed_in_store(api: RecordStoreClient, user_id: str = "u1") -> ClientDataStore:
    store = ClientDataStore(api)
    store._set_current_user(make_user(user_id))
    return store


def test_check_forces_logout_when_disabled():
    api = _api(_users_handler(make_user("u1", is_disabled=True)))
    forced = []
    store = ClientDataStore(api, on_forced_logout=forced.append)
    store._set_current_user(make_user("u1"))
    watcher = DisabledAccountWatcher(store, api)

    assert asyncio.run(watcher.check_user_status()) is True
    assert store.current_user is None
    assert [u.id for u in forced] == ["u1"]


def test_check_is_a_no_op_when_signed_out():
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(200, json=[])

    api = _api(handler)
    watcher = DisabledAccountWatcher(ClientDataStore(api), api)

    assert asyncio.run(watcher.check_user_status()) is False
    assert calls == []


def test_transport_errors_are_swallowed_until_next_tick():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    api = _api(handler)
    store = _signed_in_store(api)
    watcher = DisabledAccountWatcher(store, api)

    assert asyncio.run(watcher.check_user_status()) is False
    assert store.current_user is not None


def test_start_schedules_single_interval_job():
    api = _api(_users_handler(make_user("u1")))
    watcher = DisabledAccountWatcher(_signed_in_store(api), api, interval_seconds=5)

    async def scenario():
        watcher.start()
        watcher.start()
        try:
            jobs = watcher.scheduler.get_jobs()
            assert [j.id for j in jobs] == [JOB_ID]
            assert jobs[0].trigger.interval.total_seconds() == 5
            assert jobs[0].max_instances == 1
        finally:
            watcher.stop()
        assert watcher.scheduler.get_job(JOB_ID) is None

    asyncio.run(scenario())


def test_non_json_reply_is_treated_like_a_failed_tick():
    api = _api(lambda request: httpx.Response(200, text="<html>gateway</html>"))
    store = _signed_in_store(api)
    watcher = DisabledAccountWatcher(store, api)

    assert asyncio.run(watcher.check_user_status()) is False
    assert store.current_user is not None
