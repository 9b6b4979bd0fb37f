# src/taskboard/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires concrete storage areas, stores and the notification sink into AppState.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.state import AppState
from ..session.session_store import SessionStore
from ..storage.kv_store import JsonFileKeyValueStore, MemoryKeyValueStore
from ..tasks.notifier import LogNotificationSink
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.storage_path.parent.mkdir(parents=True, exist_ok=True)


def create_initial_state(*, settings=None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    durable = JsonFileKeyValueStore(settings.storage_path)
    session_storage = MemoryKeyValueStore()

    state = AppState(
        settings=settings,
        session_storage=session_storage,
        session=SessionStore(session_storage),
        task_store=TaskStore(durable),
        sink=LogNotificationSink(),
    )
    logger.debug("State created storage=%s", settings.storage_path)
    return state


def shutdown_state(state: AppState) -> None:
    """Best-effort teardown: stop view timers and drop the session area."""
    try:
        if state.dashboard is not None:
            state.dashboard.unmount()
    except Exception:
        logger.exception("Dashboard unmount failed.")
    state.session_storage.clear()
