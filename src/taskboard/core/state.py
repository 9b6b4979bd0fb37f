# src/taskboard/core/state.py

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from ..app.routes import Route
from ..session.session_store import SessionStore
from .ports import KeyValueStore, NotificationSink, TaskRepo

if TYPE_CHECKING:
    from ..app.dashboard import DashboardView


@dataclass
class AppState:
    # Store Settings on the state for easy access in other modules later.
    settings: Any

    session_storage: KeyValueStore
    session: SessionStore
    task_store: TaskRepo
    sink: NotificationSink

    route: Route = Route.LOGIN
    dashboard: DashboardView | None = None

    # Task id awaiting a /yes or /no after /rm.
    pending_delete: str | None = None
