# src/taskboard/app/dashboard.py

from __future__ import annotations

"""
Dashboard view-model.

Owns the in-memory task list for one logged-in session and forwards user
intents to the task engine. Every mutation is written through to the TaskRepo
before the intent returns.

Lifecycle:
- mount(): load tasks, start the overdue notifier (needs a running loop)
- unmount(): stop the notifier and drop any pending search input
"""

import logging
from collections.abc import Callable, Sequence

from ..core.ports import Disposer, NotificationSink, TaskRepo
from ..core.scheduling import Debouncer
from ..session.session_store import SessionStore
from ..tasks import task_engine
from ..tasks.notifier import DEFAULT_INTERVAL_SECONDS, LogNotificationSink, start_task_notifier
from ..tasks.task_models import FilterMode, Task, TaskDraft, TaskPriority
from .render import render_dashboard

logger = logging.getLogger(__name__)

ConfirmDelete = Callable[[Task], bool]


class DashboardView:
    def __init__(
        self,
        *,
        task_store: TaskRepo,
        session: SessionStore,
        sink: NotificationSink | None = None,
        notify_interval_seconds: float | None = DEFAULT_INTERVAL_SECONDS,
        search_delay_seconds: float = 0.3,
        id_factory: Callable[..., str] | None = None,
    ) -> None:
        self._store = task_store
        self._session = session
        self._sink = sink or LogNotificationSink()
        self._notify_interval = notify_interval_seconds
        self._id_factory = id_factory

        self._tasks: list[Task] = []
        self._filter = FilterMode.ALL
        self._search_term = ""
        self._search = Debouncer(self._apply_search_term, delay_seconds=search_delay_seconds)
        self._stop_notifier: Disposer | None = None
        self._mounted = False

    # ---- lifecycle ----

    @property
    def mounted(self) -> bool:
        return self._mounted

    def mount(self) -> None:
        if self._mounted:
            return
        self._tasks = self._store.load_tasks()
        self._mounted = True
        if self._notify_interval:
            self._stop_notifier = start_task_notifier(
                lambda: self._tasks,
                self._sink,
                interval_seconds=self._notify_interval,
            )
        logger.info("Dashboard mounted user=%s tasks=%d", self._session.current_user(), len(self._tasks))

    def unmount(self) -> None:
        if self._stop_notifier is not None:
            self._stop_notifier()
            self._stop_notifier = None
        self._search.cancel()
        if self._mounted:
            logger.debug("Dashboard unmounted")
        self._mounted = False

    # ---- state ----

    @property
    def tasks(self) -> list[Task]:
        return list(self._tasks)

    @property
    def filter_mode(self) -> FilterMode:
        return self._filter

    @property
    def search_term(self) -> str:
        return self._search_term

    @property
    def search_pending(self) -> bool:
        return self._search.pending

    @property
    def visible_tasks(self) -> list[Task]:
        return task_engine.derive_visible_tasks(self._tasks, self._filter, self._search_term)

    def get_task(self, task_id: str) -> Task | None:
        return task_engine.find_task(self._tasks, task_id)

    def render(self) -> str:
        return render_dashboard(
            user=self._session.current_user(),
            total=len(self._tasks),
            visible=self.visible_tasks,
            active_filter=self._filter,
            search_term=self._search_term,
        )

    # ---- intents ----

    def _commit(self, tasks: Sequence[Task]) -> None:
        tasks = list(tasks)
        self._store.save_tasks(tasks)
        self._tasks = tasks

    def add_task(
        self,
        title: str,
        due_date: str,
        *,
        description: str = "",
        priority: TaskPriority | str | None = None,
    ) -> Task:
        """Form-level checks, then create. Raises ValueError on a rejected form."""
        title = (title or "").strip()
        due_date = (due_date or "").strip()
        if not title:
            raise ValueError("Title is required.")
        if not due_date:
            raise ValueError("Due date is required.")

        draft = TaskDraft(
            title=title,
            due_date=due_date,
            description=(description or "").strip(),
            priority=priority,
        )
        self._commit(task_engine.create_task(self._tasks, draft, id_factory=self._id_factory))
        created = self._tasks[0]
        logger.info("Task created id=%s title=%r", created.id, created.title)
        return created

    def edit_task(self, task_id: str, **patch: object) -> Task | None:
        """Returns the edited task, or None if it no longer exists."""
        self._commit(task_engine.update_task(self._tasks, task_id, **patch))
        return self.get_task(task_id)

    def request_delete(self, task_id: str, confirm: ConfirmDelete) -> bool:
        """Delete only after confirm(task) agrees. Returns True if removed."""
        task = self.get_task(task_id)
        if task is None:
            return False
        if not confirm(task):
            logger.debug("Delete cancelled id=%s", task_id)
            return False
        self._commit(task_engine.remove_task(self._tasks, task_id))
        logger.info("Task deleted id=%s", task_id)
        return True

    def toggle_task(self, task_id: str) -> Task | None:
        self._commit(task_engine.toggle_task_status(self._tasks, task_id))
        return self.get_task(task_id)

    def set_filter(self, mode: FilterMode | str) -> FilterMode:
        self._filter = FilterMode.parse(mode)
        return self._filter

    def set_search(self, raw: str) -> None:
        self._search.push(raw)

    def flush_search(self) -> None:
        self._search.flush()

    def _apply_search_term(self, term: str) -> None:
        self._search_term = term

    def logout(self) -> None:
        self.unmount()
        self._session.logout()
