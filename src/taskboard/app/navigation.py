# src/taskboard/app/navigation.py

from __future__ import annotations

import logging

from ..core.state import AppState
from .dashboard import DashboardView
from .login import submit_login
from .routes import Route, resolve_route

logger = logging.getLogger(__name__)


def _build_dashboard(state: AppState) -> DashboardView:
    settings = state.settings
    interval = float(getattr(settings, "notify_interval_seconds", 0) or 0)
    delay_ms = int(getattr(settings, "search_debounce_ms", 300))
    return DashboardView(
        task_store=state.task_store,
        session=state.session,
        sink=state.sink,
        notify_interval_seconds=interval if interval > 0 else None,
        search_delay_seconds=max(0, delay_ms) / 1000.0,
    )


def navigate(state: AppState, path: str) -> Route:
    """
    Go to path through the route guard.

    Entering the dashboard mounts a fresh DashboardView; leaving it unmounts the
    view so no timers outlive it.
    """
    resolution = resolve_route(path, state.session.is_authenticated())
    target = resolution.route
    if resolution.redirected:
        logger.debug("Redirect %s -> %s", path, target.value)

    if target == Route.DASHBOARD:
        if state.dashboard is None:
            state.dashboard = _build_dashboard(state)
        state.dashboard.mount()
    elif state.dashboard is not None:
        state.dashboard.unmount()
        state.dashboard = None
        state.pending_delete = None

    state.route = target
    return target


def login(state: AppState, identifier: str, secret: str) -> str | None:
    """Submit the login form; on success navigate to the dashboard."""
    error = submit_login(state.session, identifier, secret)
    if error is None:
        navigate(state, Route.DASHBOARD.value)
    return error


def logout(state: AppState) -> None:
    """Clear the session (and its storage area) and return to the login route."""
    if state.dashboard is not None:
        state.dashboard.logout()
    else:
        state.session.logout()
    state.session_storage.clear()
    navigate(state, Route.LOGIN.value)
