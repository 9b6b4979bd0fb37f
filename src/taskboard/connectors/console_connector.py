# src/taskboard/connectors/console_connector.py

from __future__ import annotations

import asyncio
import logging
from datetime import datetime

from ..app.navigation import navigate
from ..app.routes import Route
from ..cli.commands import registry as command_registry
from ..core.state import AppState

logger = logging.getLogger(__name__)


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}", flush=True)


def _prompt(state: AppState) -> str:
    if state.route == Route.DASHBOARD:
        return f"{state.session.current_user() or ''}> "
    return "login> "


async def run_console_loop(state: AppState) -> None:
    """
    Interactive REPL on the running event loop.

    Input is read in a worker thread so the notifier and the search debouncer
    keep firing on this loop while we wait for the user.
    """
    logger.info("Console connector started.")
    app_name = str(getattr(state.settings, "app_name", "taskboard"))

    navigate(state, Route.LOGIN.value)
    _print_ts(f"[{app_name}] Sign in to continue: /login <email> <password>. Use /help for commands, /exit to quit.")

    while True:
        try:
            user_input = (await asyncio.to_thread(input, _prompt(state))).strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print()
            break

        if not user_input:
            continue

        if user_input.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        try:
            reply = command_registry.handle(state, user_input, emit=_print_ts)
        except Exception:
            logger.exception("Command handler crashed.")
            reply = "Internal error while handling a command."

        if reply is None:
            reply = "Commands start with '/'. Use /help to list them."
        _print_ts(reply)

    logger.info("Console connector finished.")
