# tests/test_client_state.py

from taskboard.client.state import RequestStatus, SessionState, TaskState


def task(task_id, title="t", status="Todo"):
    return {"id": task_id, "title": title, "status": status}


def test_new_state_is_idle_and_empty():
    state = TaskState()
    assert state.tasks == []
    assert state.stats is None
    assert state.request("list").status is RequestStatus.IDLE
    assert not (state.is_loading or state.is_success or state.is_error)


def test_three_phases_of_a_request():
    state = TaskState()
    rid = state.begin("list")
    assert state.request("list").status is RequestStatus.PENDING
    assert state.is_loading

    assert state.set_tasks(rid, [task(1)])
    assert state.request("list").status is RequestStatus.SUCCEEDED
    assert state.is_success and not state.is_loading
    assert state.tasks == [task(1)]

    rid = state.begin("stats")
    assert state.fail("stats", rid, "Server error fetching statistics")
    assert state.is_error
    assert state.message == "Server error fetching statistics"
    assert state.request("stats").message == "Server error fetching statistics"


def test_create_prepends_update_replaces_delete_removes():
    state = TaskState()
    state.set_tasks(state.begin("list"), [task(2), task(1)])

    state.add_task(state.begin("create"), task(3, "new"))
    assert [t["id"] for t in state.tasks] == [3, 2, 1]

    state.replace_task(state.begin("update"), task(2, "renamed", "Completed"))
    assert state.tasks[1] == task(2, "renamed", "Completed")
    assert [t["id"] for t in state.tasks] == [3, 2, 1]

    state.remove_task(state.begin("delete"), 3)
    assert [t["id"] for t in state.tasks] == [2, 1]


def test_update_of_task_not_on_screen_leaves_list_alone():
    state = TaskState()
    state.set_tasks(state.begin("list"), [task(1)])
    state.replace_task(state.begin("update"), task(9))
    assert state.tasks == [task(1)]


def test_mutations_do_not_touch_stats():
    state = TaskState()
    state.set_stats(state.begin("stats"), {"total": 1, "todo": 1, "inProgress": 0, "completed": 0})
    state.add_task(state.begin("create"), task(2))
    assert state.stats["total"] == 1


def test_superseded_list_response_is_dropped():
    state = TaskState()
    older = state.begin("list")
    newer = state.begin("list")

    assert state.set_tasks(newer, [task(2, "newer")])
    assert not state.set_tasks(older, [task(1, "older")])
    assert state.tasks == [task(2, "newer")]

    # A stale failure is dropped too
    assert not state.fail("list", older, "late failure")
    assert not state.is_error


def test_overlapping_mutations_all_apply():
    state = TaskState()
    first = state.begin("create")
    second = state.begin("create")
    state.add_task(second, task(2))
    state.add_task(first, task(1))
    assert [t["id"] for t in state.tasks] == [1, 2]


def test_reset_clears_flags_but_keeps_data_and_request_order():
    state = TaskState()
    stale = state.begin("list")
    current = state.begin("list")
    state.set_tasks(current, [task(1)])
    state.fail("create", state.begin("create"), "Title is required")

    state.reset()

    assert not (state.is_loading or state.is_success or state.is_error)
    assert state.message == ""
    assert state.tasks == [task(1)]
    assert not state.set_tasks(stale, [])


def test_session_login_and_reset():
    session = SessionState()
    rid = session.auth.begin("login")
    session.auth.set_session("login", rid, {"id": 1, "username": "alice", "token": "t"})

    assert session.auth.is_authenticated
    assert session.auth.token == "t"
    assert session.auth.user == {"id": 1, "username": "alice"}

    session.tasks.set_tasks(session.tasks.begin("list"), [task(1)])
    session.reset()
    assert not session.auth.is_authenticated
    assert session.auth.user is None
    assert session.tasks.tasks == []


def test_profile_refresh_keeps_token():
    session = SessionState()
    session.auth.set_session("login", session.auth.begin("login"), {"id": 1, "username": "a", "token": "t"})
    session.auth.set_session("me", session.auth.begin("me"), {"id": 1, "username": "alice"})
    assert session.auth.token == "t"
    assert session.auth.user["username"] == "alice"
