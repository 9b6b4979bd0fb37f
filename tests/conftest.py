# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from taskboard.core.state import AppState
from taskboard.session.session_store import SessionStore
from taskboard.storage.kv_store import JsonFileKeyValueStore, MemoryKeyValueStore
from taskboard.tasks.task_models import TaskPriority, TaskStatus
from taskboard.tasks.task_store import TaskStore

from .fakes import RecordingSink, make_task


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the app modules.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic. Timers are off: the
    notifier is disabled and search input applies immediately.
    """
    return SimpleNamespace(
        app_name="taskboard-test",
        data_dir=tmp_path,
        storage_path=tmp_path / "local_storage.json",
        notify_interval_seconds=0,
        search_debounce_ms=0,
    )


@pytest.fixture()
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture()
def state(settings: SimpleNamespace, sink: RecordingSink) -> AppState:
    """
    AppState wired with a real file-backed store in tmp_path.

    NOTE: the durable store is real because write-through persistence is part
    of what we want to test.
    """
    session_storage = MemoryKeyValueStore()
    return AppState(
        settings=settings,
        session_storage=session_storage,
        session=SessionStore(session_storage),
        task_store=TaskStore(JsonFileKeyValueStore(settings.storage_path)),
        sink=sink,
    )


@pytest.fixture()
def sample_tasks():
    return [
        make_task("3", "Write report", description="Quarterly numbers", priority=TaskPriority.HIGH),
        make_task("2", "Buy milk", description="2%", priority=TaskPriority.LOW, status=TaskStatus.COMPLETED),
        make_task("1", "Call plumber", description="Kitchen sink leaks", priority=TaskPriority.MEDIUM),
    ]
