# src/taskboard/tasks/task_engine.py

from __future__ import annotations

"""
Task engine.

Pure functions over task lists:
- derivation: filter first, then case-insensitive substring search,
- mutators: create / update / remove / toggle, each returning a new list.

No function here mutates its input or keeps a reference to a list it returned;
callers replace their list with the return value.
"""

import dataclasses
import time
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from datetime import UTC, datetime

from .task_models import FilterMode, Task, TaskDraft, TaskPriority, TaskStatus

# Fields an edit may replace. FIXED_FIELDS are set at creation and ignored in a patch.
EDITABLE_FIELDS = frozenset({"title", "description", "priority", "due_date", "status"})
FIXED_FIELDS = frozenset({"id", "created_at"})


class TaskIdFactory:
    """
    Issues millisecond-epoch ids ("1735689600000").

    Ids are strictly increasing per factory even when the clock stalls or steps
    back, and never collide with ids already present in the list.
    """

    def __init__(self, clock: Callable[[], float] = time.time) -> None:
        self._clock = clock
        self._last = 0

    def __call__(self, existing: Iterable[str] = ()) -> str:
        taken = set(existing)
        candidate = max(int(self._clock() * 1000), self._last + 1)
        while str(candidate) in taken:
            candidate += 1
        self._last = candidate
        return str(candidate)


default_id_factory = TaskIdFactory()


def iso_timestamp(now: datetime | None = None) -> str:
    """UTC ISO-8601 with millisecond precision and a Z suffix."""
    now = now or datetime.now(UTC)
    return now.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


# ---- derivation ----


def normalize_search_term(term: str | None) -> str:
    return (term or "").strip().lower()


def matches_filter(task: Task, mode: FilterMode) -> bool:
    if mode == FilterMode.PENDING:
        return task.status == TaskStatus.PENDING
    if mode == FilterMode.COMPLETED:
        return task.status == TaskStatus.COMPLETED
    if mode == FilterMode.HIGH_PRIORITY:
        return task.priority == TaskPriority.HIGH
    return True


def matches_search(task: Task, needle: str) -> bool:
    """needle must already be normalized."""
    if not needle:
        return True
    return (
        needle in task.title.lower()
        or needle in task.description.lower()
        or needle in str(task.priority).lower()
    )


def apply_filter(tasks: Iterable[Task], mode: FilterMode | str) -> list[Task]:
    mode = FilterMode.parse(mode)
    return [t for t in tasks if matches_filter(t, mode)]


def apply_search(tasks: Iterable[Task], search_term: str | None) -> list[Task]:
    needle = normalize_search_term(search_term)
    if not needle:
        return list(tasks)
    return [t for t in tasks if matches_search(t, needle)]


def derive_visible_tasks(
    tasks: Sequence[Task],
    filter_mode: FilterMode | str = FilterMode.ALL,
    search_term: str | None = "",
) -> list[Task]:
    """Filter, then search. Input order is kept; nothing is re-ranked."""
    return apply_search(apply_filter(tasks, filter_mode), search_term)


@dataclass(slots=True, frozen=True)
class TaskCounts:
    total: int
    pending: int
    completed: int
    high_priority: int


def summarize_tasks(tasks: Iterable[Task]) -> TaskCounts:
    total = pending = completed = high = 0
    for t in tasks:
        total += 1
        if t.status == TaskStatus.COMPLETED:
            completed += 1
        else:
            pending += 1
        if t.priority == TaskPriority.HIGH:
            high += 1
    return TaskCounts(total=total, pending=pending, completed=completed, high_priority=high)


# ---- mutators ----


def create_task(
    tasks: Sequence[Task],
    draft: TaskDraft,
    *,
    id_factory: Callable[[Iterable[str]], str] | None = None,
    now: datetime | None = None,
) -> list[Task]:
    """Prepend a new pending task built from draft. Never validates."""
    make_id = id_factory or default_id_factory
    task = Task(
        id=make_id(t.id for t in tasks),
        title=draft.title,
        description=draft.description or "",
        priority=TaskPriority.from_raw(draft.priority),
        due_date=draft.due_date,
        status=TaskStatus.PENDING,
        created_at=iso_timestamp(now),
    )
    return [task, *tasks]


def _coerce_patch(patch: dict[str, object]) -> dict[str, object]:
    unknown = set(patch) - EDITABLE_FIELDS - FIXED_FIELDS
    if unknown:
        raise TypeError(f"Unknown task fields: {', '.join(sorted(unknown))}")

    out: dict[str, object] = {}
    for name, value in patch.items():
        if value is None or name in FIXED_FIELDS:
            continue
        if name == "priority":
            value = TaskPriority(str(value).strip().lower())
        elif name == "status":
            value = TaskStatus(str(value).strip().lower())
        else:
            value = str(value)
        out[name] = value
    return out


def update_task(tasks: Sequence[Task], task_id: str, **patch: object) -> list[Task]:
    """
    Replace the given fields of the task with task_id.

    None values mean "leave unchanged"; id and created_at in the patch are
    ignored. An unknown task_id returns the list unchanged (no error); a delete
    racing an edit must stay harmless. Priority and status values must name a
    member exactly, otherwise ValueError.
    """
    changes = _coerce_patch(patch)
    return [dataclasses.replace(t, **changes) if t.id == task_id else t for t in tasks]


def remove_task(tasks: Sequence[Task], task_id: str) -> list[Task]:
    return [t for t in tasks if t.id != task_id]


def toggle_task_status(tasks: Sequence[Task], task_id: str) -> list[Task]:
    out: list[Task] = []
    for t in tasks:
        if t.id == task_id:
            flipped = TaskStatus.PENDING if t.status == TaskStatus.COMPLETED else TaskStatus.COMPLETED
            t = dataclasses.replace(t, status=flipped)
        out.append(t)
    return out


def find_task(tasks: Iterable[Task], task_id: str) -> Task | None:
    for t in tasks:
        if t.id == task_id:
            return t
    return None
