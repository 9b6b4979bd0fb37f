# tests/test_dashboard.py

from __future__ import annotations

import asyncio

import pytest

from taskboard.app.dashboard import DashboardView
from taskboard.app.render import format_due_date, priority_badge
from taskboard.session.session_store import SessionStore
from taskboard.storage.kv_store import MemoryKeyValueStore
from taskboard.tasks.task_models import FilterMode, TaskPriority, TaskStatus
from taskboard.tasks.task_store import TASKS_KEY, TaskStore, decode_tasks

from .fakes import RecordingSink, SequenceIds, make_task


def _view(kv: MemoryKeyValueStore, **kwargs) -> DashboardView:
    session_kv = MemoryKeyValueStore()
    session = SessionStore(session_kv)
    session.login("me@example.com")
    opts = {"notify_interval_seconds": None, "search_delay_seconds": 0, "id_factory": SequenceIds()}
    opts.update(kwargs)
    return DashboardView(task_store=TaskStore(kv), session=session, **opts)


def _stored(kv: MemoryKeyValueStore):
    return decode_tasks(kv.get(TASKS_KEY))


def test_every_mutation_is_written_through() -> None:
    kv = MemoryKeyValueStore()
    view = _view(kv)
    view.mount()

    first = view.add_task("Buy milk", "2025-01-01", priority="low")
    second = view.add_task("Pay rent", "2025-02-01")
    assert [t.id for t in _stored(kv)] == [second.id, first.id]

    view.edit_task(first.id, title="Buy oat milk")
    assert _stored(kv)[1].title == "Buy oat milk"

    view.toggle_task(second.id)
    assert _stored(kv)[0].status == TaskStatus.COMPLETED

    assert view.request_delete(first.id, lambda task: True)
    assert [t.id for t in _stored(kv)] == [second.id]
    assert _stored(kv) == view.tasks


def test_mount_loads_persisted_tasks(sample_tasks) -> None:
    kv = MemoryKeyValueStore()
    TaskStore(kv).save_tasks(sample_tasks)
    view = _view(kv)
    view.mount()
    assert view.tasks == sample_tasks


def test_mount_with_corrupt_storage_starts_empty() -> None:
    kv = MemoryKeyValueStore({TASKS_KEY: "garbage"})
    view = _view(kv)
    view.mount()
    assert view.tasks == []


@pytest.mark.parametrize(("title", "due"), [("", "2025-01-01"), ("   ", "2025-01-01"), ("x", "")])
def test_add_task_rejects_incomplete_form(title, due) -> None:
    kv = MemoryKeyValueStore()
    view = _view(kv)
    view.mount()
    with pytest.raises(ValueError):
        view.add_task(title, due)
    assert kv.get(TASKS_KEY) is None


def test_delete_requires_confirmation(sample_tasks) -> None:
    kv = MemoryKeyValueStore()
    TaskStore(kv).save_tasks(sample_tasks)
    view = _view(kv)
    view.mount()

    asked = []

    def refuse(task):
        asked.append(task.id)
        return False

    assert not view.request_delete("2", refuse)
    assert asked == ["2"]
    assert len(view.tasks) == 3
    assert not view.request_delete("missing", lambda _t: True)


def test_filter_and_search_drive_visible_tasks(sample_tasks) -> None:
    kv = MemoryKeyValueStore()
    TaskStore(kv).save_tasks(sample_tasks)
    view = _view(kv)
    view.mount()

    assert view.set_filter("high") == FilterMode.HIGH_PRIORITY
    assert [t.id for t in view.visible_tasks] == ["3"]

    view.set_filter("all")
    view.set_search("  PLUMB ")
    assert [t.id for t in view.visible_tasks] == ["1"]

    rendered = view.render()
    assert "Welcome, me@example.com | Total Tasks: 3" in rendered
    assert "Tasks (1)" in rendered


def test_edit_unknown_task_is_noop(sample_tasks) -> None:
    kv = MemoryKeyValueStore()
    TaskStore(kv).save_tasks(sample_tasks)
    view = _view(kv)
    view.mount()
    assert view.edit_task("missing", title="x") is None
    assert view.toggle_task("missing") is None
    assert view.tasks == sample_tasks


@pytest.mark.asyncio
async def test_search_is_debounced() -> None:
    kv = MemoryKeyValueStore()
    view = _view(kv, search_delay_seconds=0.02)
    view.mount()
    view.set_search("mi")
    view.set_search("milk")
    assert view.search_term == ""
    assert view.search_pending

    await asyncio.sleep(0.05)
    assert view.search_term == "milk"


@pytest.mark.asyncio
async def test_mount_starts_notifier_and_unmount_stops_it() -> None:
    kv = MemoryKeyValueStore()
    TaskStore(kv).save_tasks([make_task("1", "Old", due_date="2000-01-01")])
    sink = RecordingSink()
    view = _view(kv, sink=sink, notify_interval_seconds=0.01, search_delay_seconds=10)
    view.mount()
    view.set_search("pending input")

    await asyncio.sleep(0.03)
    assert sink.records
    assert sink.records[0].tasks[0].id == "1"

    view.unmount()
    view.unmount()
    await asyncio.sleep(0)
    seen = len(sink.records)
    assert not view.search_pending

    await asyncio.sleep(0.03)
    assert len(sink.records) == seen
    assert view.search_term == ""


@pytest.mark.asyncio
async def test_notifier_sees_latest_task_list() -> None:
    kv = MemoryKeyValueStore()
    sink = RecordingSink()
    view = _view(kv, sink=sink, notify_interval_seconds=0.01)
    view.mount()
    await asyncio.sleep(0.02)
    assert sink.records == []

    view.add_task("Overdue", "2000-01-01")
    await asyncio.sleep(0.03)
    view.unmount()
    assert sink.records and sink.records[-1].pending_count == 1


def test_priority_badge_defaults_to_medium_and_date_format() -> None:
    assert priority_badge(None) == "[MEDIUM]"
    assert priority_badge("bogus") == "[MEDIUM]"
    assert priority_badge(TaskPriority.HIGH) == "[HIGH]"
    assert format_due_date("2025-01-01") == "Jan 1, 2025"
    assert format_due_date("soon") == "soon"


def test_logout_clears_session_and_unmounts() -> None:
    session = SessionStore(MemoryKeyValueStore())
    session.login("me@example.com")
    view = DashboardView(
        task_store=TaskStore(MemoryKeyValueStore()),
        session=session,
        notify_interval_seconds=None,
        search_delay_seconds=0,
    )
    view.mount()
    view.logout()
    assert not view.mounted
    assert not session.is_authenticated()
    assert session.current_user() is None


class _FailingTaskStore:
    def __init__(self, tasks) -> None:
        self._tasks = list(tasks)

    def load_tasks(self):
        return list(self._tasks)

    def save_tasks(self, tasks) -> None:
        raise OSError("disk full")


def test_failed_save_leaves_view_unchanged(sample_tasks) -> None:
    session = SessionStore(MemoryKeyValueStore())
    session.login("me@example.com")
    view = DashboardView(
        task_store=_FailingTaskStore(sample_tasks),
        session=session,
        notify_interval_seconds=None,
        search_delay_seconds=0,
    )
    view.mount()

    with pytest.raises(OSError):
        view.toggle_task("1")
    with pytest.raises(OSError):
        view.add_task("New", "2025-01-01")
    assert view.tasks == sample_tasks
