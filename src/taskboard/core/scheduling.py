# src/taskboard/core/scheduling.py

from __future__ import annotations

"""
Timer helpers on the asyncio event loop.

Everything runs on one loop thread, so callbacks never overlap. Whoever starts
a timer owns the returned handle/disposer and must cancel it on teardown.
"""

import asyncio
import logging
from collections.abc import Callable, Coroutine
from typing import Any, Generic, TypeVar

from .ports import Disposer

logger = logging.getLogger(__name__)

T = TypeVar("T")

_MISSING = object()


class Debouncer(Generic[T]):
    """
    Propagate only the settled value of a rapidly changing input.

    push() cancels the pending timer and restarts the quiet period with the new
    value. With delay_seconds <= 0 the callback runs synchronously on push().
    """

    def __init__(
        self,
        callback: Callable[[T], None],
        *,
        delay_seconds: float = 0.3,
        loop: asyncio.AbstractEventLoop | None = None,
    ) -> None:
        self._callback = callback
        self._delay = float(delay_seconds)
        self._loop = loop
        self._handle: asyncio.TimerHandle | None = None
        self._pending: object = _MISSING

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def push(self, value: T) -> None:
        self._cancel_handle()
        if self._delay <= 0:
            self._callback(value)
            return
        loop = self._loop or asyncio.get_running_loop()
        self._pending = value
        self._handle = loop.call_later(self._delay, self._fire)

    def flush(self) -> None:
        """Deliver the pending value now, if any."""
        if self._handle is None:
            return
        self._cancel_handle()
        self._fire()

    def cancel(self) -> None:
        self._cancel_handle()
        self._pending = _MISSING

    def _cancel_handle(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _fire(self) -> None:
        self._handle = None
        value, self._pending = self._pending, _MISSING
        if value is _MISSING:
            return
        self._callback(value)  # type: ignore[arg-type]


def spawn_cancellable(coro: Coroutine[Any, Any, None], *, name: str | None = None) -> Disposer:
    """Schedule coro on the running loop; the disposer cancels it."""
    task = asyncio.get_running_loop().create_task(coro, name=name)

    def dispose() -> None:
        if not task.done():
            task.cancel()

    return dispose
