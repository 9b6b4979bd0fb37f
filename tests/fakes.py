# tests/fakes.py

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime

from taskboard.core.ports import NotificationSink
from taskboard.tasks.notifier import NotificationRecord
from taskboard.tasks.task_models import Task, TaskPriority, TaskStatus


@dataclass(slots=True)
class RecordingSink(NotificationSink):
    """
    Fake NotificationSink used by notifier/dashboard tests.
    """

    records: list[NotificationRecord] = field(default_factory=list)

    def emit(self, record: NotificationRecord) -> None:
        self.records.append(record)


class FixedClock:
    """Deterministic clock for notifier scans."""

    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now


class SequenceIds:
    """Deterministic id factory: "1", "2", ..."""

    def __init__(self) -> None:
        self.n = 0

    def __call__(self, existing=()) -> str:
        self.n += 1
        return str(self.n)


def make_task(
    id: str,
    title: str = "Task",
    *,
    description: str = "",
    priority: TaskPriority = TaskPriority.MEDIUM,
    status: TaskStatus = TaskStatus.PENDING,
    due_date: str = "2025-01-01",
    created_at: str = "2024-12-01T00:00:00.000Z",
) -> Task:
    return Task(
        id=id,
        title=title,
        description=description,
        priority=priority,
        status=status,
        due_date=due_date,
        created_at=created_at,
    )


def utc(year: int, month: int, day: int, hour: int = 0) -> datetime:
    return datetime(year, month, day, hour, tzinfo=UTC)
