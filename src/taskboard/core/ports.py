# src/taskboard/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the app.

Views and services depend on Protocols instead of concrete implementations,
so storage areas and notification sinks stay swappable and easy to fake in tests.
"""

from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from ..tasks.notifier import NotificationRecord
    from ..tasks.task_models import Task

Disposer = Callable[[], None]
# Cancels whatever a start_* helper scheduled. Safe to call more than once.


class KeyValueStore(Protocol):
    """
    Web-Storage-like string map.

    Two scopes are used:
    - durable (survives restarts): holds the "tasks" key
    - session (dies with the process / on logout): holds login flags
    """

    def get(self, key: str) -> str | None: ...
    def set(self, key: str, value: str) -> None: ...
    def remove(self, key: str) -> None: ...
    def clear(self) -> None: ...


class TaskRepo(Protocol):
    def load_tasks(self) -> list[Task]: ...
    def save_tasks(self, tasks: Sequence[Task]) -> None: ...


class NotificationSink(Protocol):
    """Where overdue-task notifications go (a log line; no real delivery)."""

    def emit(self, record: NotificationRecord) -> None: ...
