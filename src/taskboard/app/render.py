# src/taskboard/app/render.py

from __future__ import annotations

from collections.abc import Sequence
from datetime import date

from ..tasks.task_models import FilterMode, Task, TaskPriority, TaskStatus

FILTER_LABELS: dict[FilterMode, str] = {
    FilterMode.ALL: "All Tasks",
    FilterMode.PENDING: "Pending",
    FilterMode.COMPLETED: "Completed",
    FilterMode.HIGH_PRIORITY: "High Priority",
}

_BADGES = {
    TaskPriority.LOW: "[LOW]",
    TaskPriority.MEDIUM: "[MEDIUM]",
    TaskPriority.HIGH: "[HIGH]",
}


def priority_badge(priority: TaskPriority | str | None) -> str:
    # Records written by older versions may lack a priority; show them as medium.
    return _BADGES[TaskPriority.from_raw(priority)]


def status_badge(status: TaskStatus) -> str:
    return "[COMPLETED]" if status == TaskStatus.COMPLETED else "[PENDING]"


def format_due_date(raw: str) -> str:
    """'2025-01-01' -> 'Jan 1, 2025'. Unparsable input is shown as-is."""
    try:
        d = date.fromisoformat((raw or "")[:10])
    except ValueError:
        return raw or "-"
    return f"{d.strftime('%b')} {d.day}, {d.year}"


def render_task(task: Task) -> str:
    mark = "x" if task.status == TaskStatus.COMPLETED else " "
    line = (
        f"[{mark}] {task.id}  {task.title}  {priority_badge(task.priority)} "
        f"{status_badge(task.status)}  Due: {format_due_date(task.due_date)}"
    )
    if task.description:
        line += f"\n      {task.description}"
    return line


def render_filter_bar(active: FilterMode) -> str:
    cells = []
    for mode, label in FILTER_LABELS.items():
        cells.append(f"*{label}*" if mode == active else label)
    return " | ".join(cells)


def render_dashboard(
    *,
    user: str | None,
    total: int,
    visible: Sequence[Task],
    active_filter: FilterMode,
    search_term: str,
) -> str:
    lines = [
        "Task Manager Dashboard",
        f"Welcome, {user or '-'} | Total Tasks: {total}",
        f"Filter: {render_filter_bar(active_filter)}",
    ]
    if search_term.strip():
        lines.append(f"Search: {search_term.strip()!r}")
    lines.append(f"Tasks ({len(visible)})")
    if not visible:
        lines.append("  No tasks found.")
    lines.extend(render_task(t) for t in visible)
    return "\n".join(lines)
