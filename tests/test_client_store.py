# tests/test_client_store.py

from __future__ import annotations

import asyncio

from taskboard.client.state import RequestStatus
from taskboard.client.store import SessionStore

from .fakes import FakeClient


def run(coro):
    return asyncio.run(coro)


def test_create_is_pending_during_the_call_then_succeeds():
    client = FakeClient()
    store = SessionStore(client)
    seen = []
    client.on_call = lambda op: seen.append(store.state.tasks.request(op).status)

    assert run(store.create_task("Write spec"))

    assert seen == [RequestStatus.PENDING]
    assert store.state.tasks.request("create").status is RequestStatus.SUCCEEDED
    assert store.state.tasks.tasks[0]["title"] == "Write spec"
    # No refetch after a mutation
    assert client.calls == ["create"]


def test_failure_records_server_message():
    client = FakeClient()
    client.fail["create"] = "Title is required"
    store = SessionStore(client)

    assert not run(store.create_task(""))

    tasks = store.state.tasks
    assert tasks.request("create").status is RequestStatus.FAILED
    assert tasks.is_error
    assert tasks.message == "Title is required"
    assert tasks.tasks == []


def test_unexpected_exception_still_settles_the_operation():
    client = FakeClient()
    store = SessionStore(client)

    def explode(op):
        raise RuntimeError("decoder blew up")

    client.on_call = explode

    assert not run(store.fetch_stats())

    tasks = store.state.tasks
    assert tasks.request("stats").status is RequestStatus.FAILED
    assert not tasks.is_loading
    assert tasks.message == "decoder blew up"

    client.on_call = None
    assert run(store.fetch_stats())
    assert tasks.request("stats").status is RequestStatus.SUCCEEDED


def test_update_and_delete_merge_locally():
    client = FakeClient()
    client.add("one")
    client.add("two")
    store = SessionStore(client)
    run(store.fetch_tasks())
    first_id = store.state.tasks.tasks[-1]["id"]

    assert run(store.update_task(first_id, status="Completed"))
    assert store.state.tasks.tasks[-1]["status"] == "Completed"

    assert run(store.delete_task(first_id))
    assert [t["title"] for t in store.state.tasks.tasks] == ["two"]
    assert client.calls == ["list", "update", "delete"]


def test_delete_of_missing_task_fails_without_touching_list():
    client = FakeClient()
    client.add("one")
    store = SessionStore(client)
    run(store.fetch_tasks())

    assert not run(store.delete_task(42))
    assert store.state.tasks.message == "Task not found"
    assert len(store.state.tasks.tasks) == 1


def test_refresh_dashboard_loads_list_and_stats():
    client = FakeClient()
    client.add("Buy Milk", "Completed")
    client.add("Walk dog")
    store = SessionStore(client)

    assert run(store.refresh_dashboard(search="milk"))

    assert [t["title"] for t in store.state.tasks.tasks] == ["Buy Milk"]
    assert store.state.tasks.stats == {"total": 2, "todo": 1, "inProgress": 0, "completed": 1}
    assert sorted(client.calls) == ["list", "stats"]


def test_last_request_wins_when_responses_arrive_out_of_order():
    client = FakeClient()
    client.add("alpha")
    client.add("beta")
    store = SessionStore(client)

    async def scenario():
        release = client.hold("list")
        slow = asyncio.create_task(store.fetch_tasks(search="alpha"))
        while "list" not in client.calls:
            await asyncio.sleep(0.01)
        fast_applied = await store.fetch_tasks(search="beta")
        release.set()
        slow_applied = await slow
        return fast_applied, slow_applied

    fast_applied, slow_applied = run(scenario())

    assert fast_applied is True
    assert slow_applied is False
    assert [t["title"] for t in store.state.tasks.tasks] == ["beta"]
    assert store.state.tasks.request("list").status is RequestStatus.SUCCEEDED


def test_login_stores_session_and_logout_resets():
    client = FakeClient()
    store = SessionStore(client)

    assert run(store.login("a@x.com", "pw"))
    assert store.state.auth.is_authenticated
    assert store.state.auth.user["email"] == "a@x.com"
    assert "token" not in store.state.auth.user

    assert run(store.load_profile())
    assert store.state.auth.user["username"] == "alice"

    run(store.fetch_tasks())
    store.logout()
    assert client.token is None
    assert not store.state.auth.is_authenticated
    assert store.state.tasks.tasks == []


def test_failed_login_keeps_session_anonymous():
    client = FakeClient()
    client.fail["login"] = "Invalid credentials"
    store = SessionStore(client)

    assert not run(store.login("a@x.com", "wrong"))
    assert not store.state.auth.is_authenticated
    assert store.state.auth.message == "Invalid credentials"


def test_register_signs_in():
    client = FakeClient()
    store = SessionStore(client)
    assert run(store.register("a@x.com", "pw", "alice"))
    assert store.state.auth.token == "token-alice"
