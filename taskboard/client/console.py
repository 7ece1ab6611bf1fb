# taskboard/client/console.py

from __future__ import annotations

import argparse
import asyncio
import getpass
import logging
from collections import deque
from typing import Awaitable, Callable, Deque, Dict, List, Optional, Tuple

from taskboard.client.api import TaskboardClient
from taskboard.client.store import SessionStore
from taskboard.client.views import STATUSES, render_dashboard
from taskboard.logging_setup import setup_logging

logger = logging.getLogger(__name__)

MAX_NOTIFICATIONS = 5
DELETE_PROMPT = "Are you sure you want to delete this task?"

Confirm = Callable[[str], Awaitable[bool]]

HELP_TEXT = """Commands:
  add <title> [| <status>]  create a task (status defaults to Todo)
  edit <id>                 load a task into the form; the next 'add' saves it
  cancel                    leave edit mode
  rename <id> <title>       change a task's title
  status <id> <status>      Todo, In Progress or Completed
  rm <id>                   delete a task
  filter [status]           show one status (no argument shows all)
  search [text]             title search (no argument clears it)
  refresh                   reload tasks and statistics
  logout                    end the session
  quit                      exit"""


def parse_status(text: str) -> Optional[str]:
    wanted = " ".join(text.split()).lower()
    for status in STATUSES:
        if status.lower() == wanted:
            return status
    return None


class Dashboard:
    """The dashboard's behaviour, independent of how it is drawn.

    Holds the filter inputs and edit form, dispatches store actions, and turns
    the store's transient flags into notifications before clearing them.
    """

    def __init__(self, store: SessionStore, confirm: Optional[Confirm] = None):
        self.store = store
        self.confirm = confirm
        self.status_filter: Optional[str] = None
        self.search: Optional[str] = None
        self.editing_id: Optional[int] = None
        self.editing_status: Optional[str] = None
        self.notifications: Deque[Tuple[str, str]] = deque(maxlen=MAX_NOTIFICATIONS)

    @property
    def state(self):
        return self.store.state

    def notify(self, level: str, text: str) -> None:
        self.notifications.append((level, text))

    def observe(self) -> None:
        """Surface any failure once, then reset the flags so it is not shown again"""
        for tracker in (self.state.auth, self.state.tasks):
            if tracker.is_error:
                self.notify("error", tracker.message)
            tracker.reset()

    async def login(self, email: str, password: str) -> bool:
        if not email or not password:
            self.notify("error", "Please fill in all fields")
            return False
        ok = await self.store.login(email, password)
        self.observe()
        if ok:
            await self.refresh()
        return ok

    async def register(self, email: str, password: str, username: str) -> bool:
        if not email or not password or not username:
            self.notify("error", "Please fill in all fields")
            return False
        ok = await self.store.register(email, password, username)
        self.observe()
        if ok:
            await self.refresh()
        return ok

    def logout(self) -> None:
        self.store.logout()
        self.status_filter = None
        self.search = None
        self.cancel_edit()
        self.notifications.clear()

    async def refresh(self) -> None:
        await self.store.refresh_dashboard(status=self.status_filter, search=self.search)
        self.observe()

    async def set_filter(self, status: Optional[str]) -> None:
        self.status_filter = status or None
        await self.refresh()

    async def set_search(self, text: Optional[str]) -> None:
        self.search = text or None
        await self.refresh()

    def start_edit(self, task_id: int) -> bool:
        task = next((t for t in self.state.tasks.tasks if t["id"] == task_id), None)
        if task is None:
            self.notify("error", f"No task {task_id} on screen")
            return False
        self.editing_id = task_id
        self.editing_status = task.get("status")
        return True

    def cancel_edit(self) -> None:
        self.editing_id = None
        self.editing_status = None

    async def submit(self, title: str, status: Optional[str] = None) -> bool:
        if not title.strip():
            self.notify("error", "Please enter a task title")
            return False

        if self.editing_id is not None:
            fields = {"title": title}
            # The form keeps the edited task's status unless a new one is chosen
            status = status or self.editing_status
            if status is not None:
                fields["status"] = status
            ok = await self.store.update_task(self.editing_id, **fields)
            success_text = "Task updated successfully"
        else:
            ok = await self.store.create_task(title, status)
            success_text = "Task created successfully"

        self.observe()
        if ok:
            self.notify("success", success_text)
            self.cancel_edit()
            await self._refresh_stats()
        return ok

    async def rename(self, task_id: int, title: str) -> bool:
        return await self._update(task_id, title=title)

    async def set_status(self, task_id: int, status: str) -> bool:
        return await self._update(task_id, status=status)

    async def delete(self, task_id: int) -> bool:
        if self.confirm is not None and not await self.confirm(DELETE_PROMPT):
            self.notify("info", "Delete cancelled")
            return False
        ok = await self.store.delete_task(task_id)
        self.observe()
        if ok:
            self.notify("success", "Task deleted successfully")
            if self.editing_id == task_id:
                self.cancel_edit()
            await self._refresh_stats()
        return ok

    async def _update(self, task_id: int, **fields) -> bool:
        ok = await self.store.update_task(task_id, **fields)
        self.observe()
        if ok:
            self.notify("success", "Task updated successfully")
            await self._refresh_stats()
        return ok

    async def _refresh_stats(self) -> None:
        # Mutations merge locally; only the aggregate counts are refetched
        await self.store.fetch_stats()
        self.observe()

    def render(self) -> str:
        text = render_dashboard(
            self.state,
            status=self.status_filter,
            search=self.search,
            notifications=list(self.notifications),
        )
        self.notifications.clear()
        if self.editing_id is not None:
            text += (
                f"\n\nEditing task {self.editing_id} ({self.editing_status}): "
                "'add <title> [| <status>]' saves, 'cancel' aborts"
            )
        return text


def _task_id(args: List[str]) -> Optional[int]:
    if not args:
        return None
    try:
        return int(args[0])
    except ValueError:
        return None


CommandHandler = Callable[[Dashboard, List[str]], Awaitable[Optional[str]]]


async def _cmd_add(dashboard: Dashboard, args: List[str]) -> Optional[str]:
    title, sep, raw_status = " ".join(args).partition("|")
    status = None
    if sep:
        status = parse_status(raw_status)
        if status is None:
            return "Usage: add <title> [| Todo|In Progress|Completed]"
    await dashboard.submit(title.strip(), status)
    return None


async def _cmd_edit(dashboard: Dashboard, args: List[str]) -> Optional[str]:
    task_id = _task_id(args)
    if task_id is None:
        return "Usage: edit <id>"
    dashboard.start_edit(task_id)
    return None


async def _cmd_cancel(dashboard: Dashboard, args: List[str]) -> Optional[str]:
    dashboard.cancel_edit()
    return None


async def _cmd_rename(dashboard: Dashboard, args: List[str]) -> Optional[str]:
    task_id = _task_id(args)
    if task_id is None or len(args) < 2:
        return "Usage: rename <id> <title>"
    await dashboard.rename(task_id, " ".join(args[1:]))
    return None


async def _cmd_status(dashboard: Dashboard, args: List[str]) -> Optional[str]:
    task_id = _task_id(args)
    status = parse_status(" ".join(args[1:])) if task_id is not None else None
    if status is None:
        return "Usage: status <id> <Todo|In Progress|Completed>"
    await dashboard.set_status(task_id, status)
    return None


async def _cmd_rm(dashboard: Dashboard, args: List[str]) -> Optional[str]:
    task_id = _task_id(args)
    if task_id is None:
        return "Usage: rm <id>"
    await dashboard.delete(task_id)
    return None


async def _cmd_filter(dashboard: Dashboard, args: List[str]) -> Optional[str]:
    if args and parse_status(" ".join(args)) is None:
        return "Usage: filter [Todo|In Progress|Completed]"
    await dashboard.set_filter(parse_status(" ".join(args)) if args else None)
    return None


async def _cmd_search(dashboard: Dashboard, args: List[str]) -> Optional[str]:
    await dashboard.set_search(" ".join(args))
    return None


async def _cmd_refresh(dashboard: Dashboard, args: List[str]) -> Optional[str]:
    await dashboard.refresh()
    return None


COMMANDS: Dict[str, CommandHandler] = {
    "add": _cmd_add,
    "edit": _cmd_edit,
    "cancel": _cmd_cancel,
    "rename": _cmd_rename,
    "status": _cmd_status,
    "rm": _cmd_rm,
    "filter": _cmd_filter,
    "search": _cmd_search,
    "refresh": _cmd_refresh,
}


async def handle_command(dashboard: Dashboard, line: str) -> Optional[str]:
    """Run one command line. Returns text to print instead of the dashboard, if any."""
    parts = line.split()
    if not parts:
        return None
    name, args = parts[0].lower(), parts[1:]
    if name == "help":
        return HELP_TEXT
    handler = COMMANDS.get(name)
    if handler is None:
        return f"Unknown command: {name}. Type 'help' for commands."
    return await handler(dashboard, args)


async def _prompt(text: str, secret: bool = False) -> str:
    reader = getpass.getpass if secret else input
    return (await asyncio.to_thread(reader, text)).strip()


async def _sign_in(dashboard: Dashboard) -> bool:
    choice = (await _prompt("(l)ogin, (r)egister or (q)uit: ")).lower()
    if choice.startswith("q"):
        raise EOFError
    email = await _prompt("Email: ")
    password = await _prompt("Password: ", secret=True)
    if choice.startswith("r"):
        username = await _prompt("Username: ")
        ok = await dashboard.register(email, password, username)
    else:
        ok = await dashboard.login(email, password)
    if not ok:
        print(dashboard.render())
    return ok


async def _confirm(question: str) -> bool:
    answer = await _prompt(f"{question} (y/N): ")
    return answer.lower() in ("y", "yes")


async def run_console(client: TaskboardClient) -> None:
    dashboard = Dashboard(SessionStore(client), confirm=_confirm)
    logger.info(f"Dashboard console connected to {client.base_url}")
    try:
        while True:
            if not dashboard.state.auth.is_authenticated:
                if not await _sign_in(dashboard):
                    continue
                print(dashboard.render())

            line = await _prompt("> ")
            if line.lower() in ("quit", "exit"):
                break
            if line.lower() == "logout":
                dashboard.logout()
                print("Logged out.")
                continue

            output = await handle_command(dashboard, line)
            print(output if output is not None else dashboard.render())
    except (EOFError, KeyboardInterrupt):
        print()


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Task dashboard in the terminal")
    parser.add_argument("--url", default="http://localhost:8000", help="API base URL")
    parser.add_argument("--timeout", type=float, default=10, help="request timeout in seconds")
    args = parser.parse_args(argv)

    setup_logging("WARNING")
    asyncio.run(run_console(TaskboardClient(args.url, timeout=args.timeout)))


if __name__ == "__main__":
    main()
