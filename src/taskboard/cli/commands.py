# src/taskboard/cli/commands.py

from __future__ import annotations

import logging
import shlex
from collections.abc import Callable

from ..app.dashboard import DashboardView
from ..app.navigation import login, logout
from ..app.render import FILTER_LABELS, render_task
from ..core.state import AppState
from ..tasks.task_engine import summarize_tasks
from ..tasks.task_models import FilterMode

CommandEmitter = Callable[[str], None]
CommandHandler = Callable[[AppState, list[str], CommandEmitter | None], str]

logger = logging.getLogger(__name__)

LOGIN_FIRST = "Please /login <email> <password> first."

# /edit field names -> task fields
EDIT_FIELDS = {
    "title": "title",
    "description": "description",
    "desc": "description",
    "priority": "priority",
    "due": "due_date",
    "duedate": "due_date",
    "due_date": "due_date",
}


class CommandRegistry:
    """Simple slash-command registry used by the console (/help, /add, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(self, state: AppState, line: str, emit: CommandEmitter | None = None) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        return handler(state, args, emit)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


def _dashboard(state: AppState) -> DashboardView | None:
    if state.dashboard is None or not state.dashboard.mounted:
        return None
    return state.dashboard


def cmd_help(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    return registry.build_help()


def cmd_login(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    if state.session.is_authenticated():
        return f"Already logged in as {state.session.current_user()}."
    if len(args) != 2:
        return "Usage: /login <email> <password>"
    error = login(state, args[0], args[1])
    if error is not None:
        return error
    dash = _dashboard(state)
    return dash.render() if dash is not None else "Logged in."


def cmd_logout(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    if not state.session.is_authenticated():
        return "Not logged in."
    logout(state)
    return "Logged out."


def cmd_list(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    dash = _dashboard(state)
    if dash is None:
        return LOGIN_FIRST
    return dash.render()


def cmd_add(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    """
    /add <title> | <due YYYY-MM-DD> [| <priority> [| <description>]]
    """
    dash = _dashboard(state)
    if dash is None:
        return LOGIN_FIRST

    parts = [p.strip() for p in " ".join(args).split("|")]
    if len(parts) < 2:
        return "Usage: /add <title> | <due YYYY-MM-DD> [| <priority> [| <description>]]"

    title, due = parts[0], parts[1]
    priority = parts[2] if len(parts) > 2 and parts[2] else None
    description = "|".join(parts[3:]).strip() if len(parts) > 3 else ""

    try:
        task = dash.add_task(title, due, description=description, priority=priority)
    except ValueError as e:
        return str(e)
    return f"Added:\n{render_task(task)}"


def cmd_edit(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    """
    /edit <id> title="New title" priority=high due=2025-02-01 description="..."
    """
    dash = _dashboard(state)
    if dash is None:
        return LOGIN_FIRST
    if len(args) < 2:
        return "Usage: /edit <id> field=value ...  (fields: title, description, priority, due)"

    task_id = args[0]
    if dash.get_task(task_id) is None:
        return f"Task {task_id} not found."

    try:
        tokens = shlex.split(" ".join(args[1:]))
    except ValueError as e:
        return f"Cannot parse edit: {e}"

    patch: dict[str, object] = {}
    for tok in tokens:
        key, sep, value = tok.partition("=")
        field = EDIT_FIELDS.get(key.strip().lower())
        if not sep or field is None:
            return f"Unknown edit field: {key!r}. Fields: title, description, priority, due."
        patch[field] = value

    if "title" in patch and not str(patch["title"]).strip():
        return "Title is required."
    if "due_date" in patch and not str(patch["due_date"]).strip():
        return "Due date is required."

    try:
        task = dash.edit_task(task_id, **patch)
    except ValueError:
        return f"Invalid priority: {patch.get('priority')!r}. Use low, medium or high."
    if task is None:
        return f"Task {task_id} not found."
    return f"Updated:\n{render_task(task)}"


def cmd_toggle(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    dash = _dashboard(state)
    if dash is None:
        return LOGIN_FIRST
    if len(args) != 1:
        return "Usage: /toggle <id>"
    task = dash.toggle_task(args[0])
    if task is None:
        return f"Task {args[0]} not found."
    return f"Task {task.id} is now {task.status.value}."


def cmd_rm(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    dash = _dashboard(state)
    if dash is None:
        return LOGIN_FIRST
    if len(args) != 1:
        return "Usage: /rm <id>"
    task = dash.get_task(args[0])
    if task is None:
        return f"Task {args[0]} not found."
    state.pending_delete = task.id
    return f"Are you sure you want to delete {task.title!r}? Reply /yes to confirm or /no to cancel."


def _answer_delete(state: AppState, confirmed: bool) -> str:
    dash = _dashboard(state)
    task_id, state.pending_delete = state.pending_delete, None
    if dash is None or task_id is None:
        return "Nothing to confirm."
    removed = dash.request_delete(task_id, lambda _task: confirmed)
    if removed:
        return f"Task {task_id} deleted."
    return "Delete cancelled." if not confirmed else f"Task {task_id} no longer exists."


def cmd_yes(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    return _answer_delete(state, True)


def cmd_no(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    return _answer_delete(state, False)


def cmd_filter(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    dash = _dashboard(state)
    if dash is None:
        return LOGIN_FIRST
    modes = ", ".join(m.value for m in FilterMode)
    if len(args) != 1:
        return f"Usage: /filter <mode>  (modes: {modes})"
    try:
        mode = dash.set_filter(args[0])
    except ValueError:
        return f"Unknown filter {args[0]!r}. Modes: {modes}"
    return f"Filter: {FILTER_LABELS[mode]} ({len(dash.visible_tasks)} tasks)"


def cmd_search(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    dash = _dashboard(state)
    if dash is None:
        return LOGIN_FIRST
    term = " ".join(args)
    dash.set_search(term)
    if not term.strip():
        return "Search cleared."
    return f"Searching for {term.strip()!r}. Use /list to see matches."


def cmd_status(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    user = state.session.current_user() if state.session.is_authenticated() else None
    lines = ["Status:", f"  User: {user or '(logged out)'}", f"  Route: {state.route.value}"]
    dash = _dashboard(state)
    if dash is not None:
        counts = summarize_tasks(dash.tasks)
        lines.append(
            f"  Tasks: {counts.total} total, {counts.pending} pending, "
            f"{counts.completed} completed, {counts.high_priority} high priority"
        )
        lines.append(f"  Filter: {FILTER_LABELS[dash.filter_mode]}")
        if dash.search_term.strip():
            lines.append(f"  Search: {dash.search_term.strip()!r}")
    return "\n".join(lines)


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("login", cmd_login, help_text="Log in: /login <email> <password>.")
registry.register("logout", cmd_logout, help_text="Log out and return to the login screen.")
registry.register("list", cmd_list, help_text="Show the dashboard.", aliases=["ls"])
registry.register(
    "add",
    cmd_add,
    help_text="Add a task: /add <title> | <due YYYY-MM-DD> [| <priority> [| <description>]].",
)
registry.register("edit", cmd_edit, help_text="Edit a task: /edit <id> title=... priority=... due=...")
registry.register("toggle", cmd_toggle, help_text="Mark a task complete/pending: /toggle <id>.", aliases=["done"])
registry.register("rm", cmd_rm, help_text="Delete a task (asks for confirmation): /rm <id>.", aliases=["delete"])
registry.register("yes", cmd_yes, help_text="Confirm a pending delete.")
registry.register("no", cmd_no, help_text="Cancel a pending delete.")
registry.register("filter", cmd_filter, help_text="Filter: /filter all | pending | completed | high.")
registry.register("search", cmd_search, help_text="Search title/description/priority: /search <text>.")
registry.register("status", cmd_status, help_text="Show session and task counts.")
