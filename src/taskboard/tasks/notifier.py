# src/taskboard/tasks/notifier.py

from __future__ import annotations

"""
Overdue-task notifier.

A small polling loop that:
- scans the current task list for pending tasks whose due date has passed,
- hands one NotificationRecord per non-empty scan to a NotificationSink.

The default sink only logs (a mock email); there is no delivery, retry, or
acknowledgement. The loop runs until cancelled.
"""

import asyncio
import json
import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from datetime import UTC, date, datetime
from typing import Any

from ..core.ports import Disposer, NotificationSink
from ..core.scheduling import spawn_cancellable
from .task_engine import iso_timestamp
from .task_models import Task, TaskStatus

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL_SECONDS = 20 * 60

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(UTC)


@dataclass(slots=True, frozen=True)
class OverdueTask:
    id: str
    title: str
    due_date: str


@dataclass(slots=True, frozen=True)
class NotificationRecord:
    timestamp: str
    pending_count: int
    tasks: tuple[OverdueTask, ...]

    def to_dict(self) -> dict[str, Any]:
        return {
            "timestamp": self.timestamp,
            "pendingCount": self.pending_count,
            "tasks": [{"id": t.id, "title": t.title, "dueDate": t.due_date} for t in self.tasks],
        }


def parse_due(raw: str | None) -> datetime | None:
    """
    Due date -> aware UTC datetime.

    A bare "YYYY-MM-DD" means midnight UTC of that day; full ISO timestamps are
    accepted too (naive ones are taken as UTC). Anything else -> None.
    """
    text = (raw or "").strip()
    if not text:
        return None
    try:
        if len(text) == 10:
            d = date.fromisoformat(text)
            return datetime(d.year, d.month, d.day, tzinfo=UTC)
        dt = datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return dt


def is_overdue(task: Task, now: datetime) -> bool:
    if task.status != TaskStatus.PENDING:
        return False
    due = parse_due(task.due_date)
    return due is not None and due <= now


def find_overdue_tasks(tasks: Sequence[Task], now: datetime) -> list[Task]:
    return [t for t in tasks if is_overdue(t, now)]


def build_notification(tasks: Sequence[Task], now: datetime) -> NotificationRecord | None:
    overdue = find_overdue_tasks(tasks, now)
    if not overdue:
        return None
    return NotificationRecord(
        timestamp=iso_timestamp(now),
        pending_count=len(overdue),
        tasks=tuple(OverdueTask(id=t.id, title=t.title, due_date=t.due_date) for t in overdue),
    )


class LogNotificationSink:
    """Mock email: one INFO record per notification."""

    def __init__(self, log: logging.Logger | None = None) -> None:
        self._log = log or logger

    def emit(self, record: NotificationRecord) -> None:
        self._log.info(
            "Mock email notification - pending tasks: %s",
            json.dumps(record.to_dict(), ensure_ascii=False),
        )


def check_overdue_tasks(
    get_tasks: Callable[[], Sequence[Task]],
    sink: NotificationSink,
    *,
    clock: Clock = utc_now,
) -> NotificationRecord | None:
    """One scan. Returns the emitted record (or None when nothing is overdue)."""
    record = build_notification(get_tasks(), clock())
    if record is not None:
        sink.emit(record)
    return record


async def run_task_notifier(
    get_tasks: Callable[[], Sequence[Task]],
    sink: NotificationSink,
    *,
    interval_seconds: float = DEFAULT_INTERVAL_SECONDS,
    clock: Clock = utc_now,
) -> None:
    """
    Scan immediately, then every interval_seconds.

    get_tasks is called on every scan so edits made between scans are seen.
    A failing scan is logged and the loop goes on. To stop, cancel the task.
    """
    sleep_s = max(0.001, float(interval_seconds))

    while True:
        try:
            check_overdue_tasks(get_tasks, sink, clock=clock)
        except Exception:
            logger.exception("Overdue task scan failed")

        await asyncio.sleep(sleep_s)


def start_task_notifier(
    get_tasks: Callable[[], Sequence[Task]],
    sink: NotificationSink,
    *,
    interval_seconds: float = DEFAULT_INTERVAL_SECONDS,
    clock: Clock = utc_now,
) -> Disposer:
    """Run the notifier as a task on the running loop; returns its disposer."""
    dispose = spawn_cancellable(
        run_task_notifier(get_tasks, sink, interval_seconds=interval_seconds, clock=clock),
        name="task-notifier",
    )
    logger.debug("Task notifier started interval=%ss", interval_seconds)
    return dispose
