# tests/test_seed.py

from demo_tasks import DEMO_TASKS
from demo_users import DEMO_USERS
from seed_all import seed_all
from taskboard.models import Task, User
from taskboard.services.auth_service import AuthService
from taskboard.services.task_service import TaskService


def test_seed_creates_users_and_tasks_once(db):
    expected_tasks = sum(len(tasks) for tasks in DEMO_TASKS.values())

    summary = seed_all(db)
    assert summary == {"users": len(DEMO_USERS), "tasks": expected_tasks}
    assert db.query(User).count() == len(DEMO_USERS)
    assert db.query(Task).count() == expected_tasks

    again = seed_all(db)
    assert again == {"users": 0, "tasks": 0}
    assert db.query(Task).count() == expected_tasks


def test_seeded_user_can_log_in_and_sees_own_tasks(db):
    seed_all(db)
    demo = DEMO_USERS[0]

    user, _ = AuthService.login(db, demo["email"], demo["password"])
    stats = TaskService.get_stats(db, user.id)
    assert stats["total"] == len(DEMO_TASKS[demo["email"]])
    assert [t.title for t in TaskService.list_tasks(db, user.id, search="milk")] == ["Buy milk"]
