# src/taskboard/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any


class TaskStatus(StrEnum):
    """Task lifecycle status. Only user toggles move a task between the two values."""

    PENDING = "pending"
    COMPLETED = "completed"

    @classmethod
    def from_raw(cls, raw: Any) -> TaskStatus:
        if not raw:
            return cls.PENDING
        try:
            return cls(str(raw))
        except Exception:
            return cls.PENDING


class TaskPriority(StrEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @classmethod
    def from_raw(cls, raw: Any) -> TaskPriority:
        if not raw:
            return cls.MEDIUM
        try:
            return cls(str(raw).strip().lower())
        except Exception:
            return cls.MEDIUM


class FilterMode(StrEnum):
    """
    Dashboard filter.

    "high" is accepted as an alias of "highPriority" by parse(); it is the id
    the filter bar buttons use.
    """

    ALL = "all"
    PENDING = "pending"
    COMPLETED = "completed"
    HIGH_PRIORITY = "highPriority"

    @classmethod
    def parse(cls, raw: str | FilterMode) -> FilterMode:
        if isinstance(raw, FilterMode):
            return raw
        key = (raw or "").strip()
        if key.lower() == "high":
            return cls.HIGH_PRIORITY
        for mode in cls:
            if key == mode.value or key.lower() == mode.value.lower() or key.upper() == mode.name:
                return mode
        raise ValueError(f"Unknown filter mode: {raw!r}")


@dataclass(slots=True, frozen=True)
class Task:
    id: str
    title: str
    due_date: str
    created_at: str

    description: str = ""
    priority: TaskPriority = TaskPriority.MEDIUM
    status: TaskStatus = TaskStatus.PENDING

    def to_dict(self) -> dict[str, Any]:
        """JSON record as kept under the "tasks" storage key."""
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "priority": self.priority.value,
            "dueDate": self.due_date,
            "status": self.status.value,
            "createdAt": self.created_at,
        }

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> Task:
        return cls(
            id=str(raw.get("id") or ""),
            title=str(raw.get("title") or ""),
            description=str(raw.get("description") or ""),
            priority=TaskPriority.from_raw(raw.get("priority")),
            due_date=str(raw.get("dueDate") or ""),
            status=TaskStatus.from_raw(raw.get("status")),
            created_at=str(raw.get("createdAt") or ""),
        )


@dataclass(slots=True, frozen=True)
class TaskDraft:
    """Fields a user supplies when creating a task."""

    title: str
    due_date: str
    description: str = ""
    priority: TaskPriority | str | None = None
