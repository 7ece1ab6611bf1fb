# taskboard/client/state.py
"""
Client-side session state.

Every server call is tracked as its own RequestState, tagged with the
operation name, so the views can render purely from this object:

    idle -> pending -> succeeded | failed(message)

Read operations ("list", "stats", "me") are superseded by newer requests of
the same kind: a response whose request id is older than the latest one
issued is dropped, so the last request wins regardless of arrival order.
Mutations are never dropped.
"""

from __future__ import annotations

import enum
import itertools
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

SUPERSEDABLE = frozenset({"list", "stats", "me"})


class RequestStatus(str, enum.Enum):
    IDLE = "idle"
    PENDING = "pending"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass
class RequestState:
    status: RequestStatus = RequestStatus.IDLE
    message: str = ""
    request_id: int = 0


class RequestTracker:
    """Per-operation request tags plus the aggregate flags the views read."""

    def __init__(self, counter: Optional[itertools.count] = None) -> None:
        self._counter = counter or itertools.count(1)
        self.requests: Dict[str, RequestState] = {}
        self.message = ""

    def request(self, op: str) -> RequestState:
        return self.requests.setdefault(op, RequestState())

    def begin(self, op: str) -> int:
        request_id = next(self._counter)
        self.requests[op] = RequestState(RequestStatus.PENDING, "", request_id)
        return request_id

    def is_current(self, op: str, request_id: int) -> bool:
        if op not in SUPERSEDABLE:
            return True
        return self.request(op).request_id == request_id

    def _settle(self, op: str, request_id: int, status: RequestStatus, message: str = "") -> bool:
        if not self.is_current(op, request_id):
            return False
        self.requests[op] = RequestState(status, message, self.request(op).request_id)
        if status is RequestStatus.FAILED:
            self.message = message
        return True

    def succeed(self, op: str, request_id: int) -> bool:
        return self._settle(op, request_id, RequestStatus.SUCCEEDED)

    def fail(self, op: str, request_id: int, message: str) -> bool:
        return self._settle(op, request_id, RequestStatus.FAILED, message)

    def reset(self) -> None:
        """Clear transient flags back to idle; request ids survive so late responses stay stale"""
        for state in self.requests.values():
            state.status = RequestStatus.IDLE
            state.message = ""
        self.message = ""

    @property
    def is_loading(self) -> bool:
        return any(r.status is RequestStatus.PENDING for r in self.requests.values())

    @property
    def is_success(self) -> bool:
        return any(r.status is RequestStatus.SUCCEEDED for r in self.requests.values())

    @property
    def is_error(self) -> bool:
        return any(r.status is RequestStatus.FAILED for r in self.requests.values())


class TaskState(RequestTracker):
    def __init__(self, counter: Optional[itertools.count] = None) -> None:
        super().__init__(counter)
        self.tasks: List[Dict[str, Any]] = []
        self.stats: Optional[Dict[str, int]] = None

    def set_tasks(self, request_id: int, tasks: List[Dict[str, Any]]) -> bool:
        if not self.succeed("list", request_id):
            return False
        self.tasks = list(tasks)
        return True

    def set_stats(self, request_id: int, stats: Dict[str, int]) -> bool:
        if not self.succeed("stats", request_id):
            return False
        self.stats = dict(stats)
        return True

    def add_task(self, request_id: int, task: Dict[str, Any]) -> bool:
        self.succeed("create", request_id)
        self.tasks.insert(0, task)
        return True

    def replace_task(self, request_id: int, task: Dict[str, Any]) -> bool:
        self.succeed("update", request_id)
        for index, existing in enumerate(self.tasks):
            if existing["id"] == task["id"]:
                self.tasks[index] = task
                break
        return True

    def remove_task(self, request_id: int, task_id: int) -> bool:
        self.succeed("delete", request_id)
        self.tasks = [task for task in self.tasks if task["id"] != task_id]
        return True


class AuthState(RequestTracker):
    def __init__(self, counter: Optional[itertools.count] = None) -> None:
        super().__init__(counter)
        self.user: Optional[Dict[str, Any]] = None
        self.token: Optional[str] = None

    @property
    def is_authenticated(self) -> bool:
        return self.token is not None

    def set_session(self, op: str, request_id: int, data: Dict[str, Any]) -> bool:
        if not self.succeed(op, request_id):
            return False
        data = dict(data)
        token = data.pop("token", None)
        if token is not None:
            self.token = token
        self.user = data
        return True


@dataclass
class SessionState:
    """Everything one dashboard session knows; built at session start, rebuilt on logout."""

    auth: AuthState = field(default_factory=AuthState)
    tasks: TaskState = field(default_factory=TaskState)

    def reset(self) -> None:
        self.auth = AuthState()
        self.tasks = TaskState()
