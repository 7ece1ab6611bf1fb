# taskboard/client/views.py
"""Plain-text rendering of the dashboard. Every function is pure: state in, text out."""
from typing import Any, Dict, Iterable, List, Optional, Tuple

from taskboard.client.state import SessionState

STATUSES = ("Todo", "In Progress", "Completed")
STAT_KEYS = {"Todo": "todo", "In Progress": "inProgress", "Completed": "completed"}
BAR_CHAR = "#"
SHARE_CHAR = "*"


def _bar_line(label: str, count: int, scale: int, width: int) -> str:
    filled = round(width * count / scale) if scale else 0
    return f"{label:<12} {BAR_CHAR * filled:<{width}} {count:>3}"


def render_overview(stats: Dict[str, int], width: int = 30) -> str:
    """Bar chart of the total and each status, all scaled against the total"""
    total = stats.get("total", 0)
    lines = ["Task overview", _bar_line("Total", total, total, width)]
    for status in STATUSES:
        lines.append(_bar_line(status, stats.get(STAT_KEYS[status], 0), total, width))
    return "\n".join(lines)


def render_distribution(stats: Dict[str, int], width: int = 30) -> str:
    """Share of each status in the total"""
    total = stats.get("total", 0)
    if not total:
        return "Status distribution\nNo tasks to chart yet."
    lines = ["Status distribution"]
    for status in STATUSES:
        count = stats.get(STAT_KEYS[status], 0)
        share = round(width * count / total)
        percent = round(100 * count / total)
        lines.append(f"{status:<12} {SHARE_CHAR * share:<{width}} {percent:>3}%")
    return "\n".join(lines)


def render_stats(stats: Optional[Dict[str, int]], width: int = 30) -> str:
    if not stats:
        return "No statistics yet."
    return f"{render_overview(stats, width)}\n\n{render_distribution(stats, width)}"


def render_task(task: Dict[str, Any]) -> str:
    created = str(task.get("createdAt", ""))[:10]
    return f"[{task['id']:>4}] {task['status']:<12} {task['title']}  ({created})"


def render_task_list(tasks: List[Dict[str, Any]]) -> str:
    if not tasks:
        return "No tasks found. Create one to get started!"
    return "\n".join(render_task(task) for task in tasks)


def render_filters(status: Optional[str], search: Optional[str]) -> str:
    return f"Filter: {status or 'All'} | Search: {search or '-'}"


def render_notifications(notifications: Iterable[Tuple[str, str]]) -> str:
    return "\n".join(f"({level}) {text}" for level, text in notifications)


def render_dashboard(
    state: SessionState,
    status: Optional[str] = None,
    search: Optional[str] = None,
    notifications: Iterable[Tuple[str, str]] = (),
) -> str:
    user = state.auth.user or {}
    sections = [
        f"Welcome, {user.get('username', 'guest')}!",
        render_stats(state.tasks.stats),
        render_filters(status, search),
    ]
    if state.tasks.is_loading:
        sections.append("Loading...")
    sections.append(render_task_list(state.tasks.tasks))

    notes = render_notifications(notifications)
    if notes:
        sections.append(notes)
    return "\n\n".join(sections)
