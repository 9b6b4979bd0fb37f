# src/taskboard/tasks/task_store.py

from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from typing import Any

from ..core.ports import KeyValueStore
from .task_models import Task

logger = logging.getLogger(__name__)

TASKS_KEY = "tasks"


def encode_tasks(tasks: Sequence[Task]) -> str:
    return json.dumps([t.to_dict() for t in tasks], ensure_ascii=False)


def decode_tasks(raw: str | None) -> list[Task]:
    """
    Decode the stored JSON array.

    Never raises: missing / undecodable / non-array content decodes to [],
    and entries that are not objects are skipped.
    """
    if raw is None or not raw.strip():
        return []
    try:
        data: Any = json.loads(raw)
    except Exception:
        logger.warning("Stored task list is not valid JSON; treating it as empty.")
        return []
    if not isinstance(data, list):
        logger.warning("Stored task list is %s, not an array; treating it as empty.", type(data).__name__)
        return []

    out: list[Task] = []
    for item in data:
        if not isinstance(item, dict):
            logger.debug("Skipping non-object task entry: %r", item)
            continue
        out.append(Task.from_dict(item))
    return out


class TaskStore:
    """
    Task list persisted under one key of a durable KeyValueStore.

    Writes are synchronous write-through: the caller saves after every mutation.
    """

    def __init__(self, storage: KeyValueStore, *, key: str = TASKS_KEY) -> None:
        self._storage = storage
        self._key = key

    def load_tasks(self) -> list[Task]:
        tasks = decode_tasks(self._storage.get(self._key))
        logger.debug("Loaded %d tasks", len(tasks))
        return tasks

    def save_tasks(self, tasks: Sequence[Task]) -> None:
        self._storage.set(self._key, encode_tasks(tasks))
        logger.debug("Saved %d tasks", len(tasks))

    def count_tasks(self) -> int:
        return len(self.load_tasks())
