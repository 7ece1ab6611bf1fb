# taskboard/client/store.py
import asyncio
import logging
from typing import Any, Callable, Optional

from taskboard.client.api import APIError, TaskboardClient
from taskboard.client.state import SessionState, RequestTracker

logger = logging.getLogger(__name__)


class SessionStore:
    """Asynchronous actions over a TaskboardClient that keep a SessionState current.

    Each action marks its operation pending, runs the blocking HTTP call in a
    worker thread, then merges the result or records the failure message.
    Actions return True when their result was applied.
    """

    def __init__(self, client: TaskboardClient, state: Optional[SessionState] = None):
        self.client = client
        self.state = state or SessionState()

    async def _run(
        self,
        tracker: RequestTracker,
        op: str,
        call: Callable[..., Any],
        apply: Callable[[int, Any], bool],
        *args,
        **kwargs,
    ) -> bool:
        request_id = tracker.begin(op)
        try:
            result = await asyncio.to_thread(call, *args, **kwargs)
            applied = apply(request_id, result)
        except APIError as e:
            logger.warning(f"{op} failed: {e.message}")
            tracker.fail(op, request_id, e.message)
            return False
        except Exception as e:
            # Anything else still settles the operation so it never stays pending
            logger.exception(f"{op} raised unexpectedly")
            tracker.fail(op, request_id, str(e) or "Unexpected error")
            return False
        if not applied:
            logger.debug(f"Dropped stale {op} response {request_id}")
        return applied

    # Auth

    async def register(self, email: str, password: str, username: str) -> bool:
        auth = self.state.auth
        return await self._run(
            auth, "register", self.client.register,
            lambda rid, data: auth.set_session("register", rid, data),
            email, password, username,
        )

    async def login(self, email: str, password: str) -> bool:
        auth = self.state.auth
        return await self._run(
            auth, "login", self.client.login,
            lambda rid, data: auth.set_session("login", rid, data),
            email, password,
        )

    async def load_profile(self) -> bool:
        auth = self.state.auth
        return await self._run(
            auth, "me", self.client.me,
            lambda rid, data: auth.set_session("me", rid, data),
        )

    def logout(self) -> None:
        self.client.logout()
        self.state.reset()

    # Tasks

    async def fetch_tasks(self, status: Optional[str] = None, search: Optional[str] = None) -> bool:
        tasks = self.state.tasks
        return await self._run(
            tasks, "list", self.client.list_tasks, tasks.set_tasks,
            status=status, search=search,
        )

    async def fetch_stats(self) -> bool:
        tasks = self.state.tasks
        return await self._run(tasks, "stats", self.client.get_stats, tasks.set_stats)

    async def create_task(self, title: str, status: Optional[str] = None) -> bool:
        tasks = self.state.tasks
        return await self._run(tasks, "create", self.client.create_task, tasks.add_task, title, status)

    async def update_task(self, task_id: int, **fields) -> bool:
        tasks = self.state.tasks
        return await self._run(
            tasks, "update", self.client.update_task, tasks.replace_task, task_id, **fields
        )

    async def delete_task(self, task_id: int) -> bool:
        tasks = self.state.tasks
        return await self._run(tasks, "delete", self.client.delete_task, tasks.remove_task, task_id)

    async def refresh_dashboard(self, status: Optional[str] = None, search: Optional[str] = None) -> bool:
        """One fetch sequence per filter change: the list and the stats, concurrently"""
        listed, counted = await asyncio.gather(
            self.fetch_tasks(status=status, search=search),
            self.fetch_stats(),
        )
        return listed and counted
