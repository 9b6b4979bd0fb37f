# tests/test_scheduling.py

from __future__ import annotations

import asyncio

import pytest

from taskboard.core.scheduling import Debouncer, spawn_cancellable


@pytest.mark.asyncio
async def test_debouncer_propagates_only_the_settled_value() -> None:
    seen: list[str] = []
    deb = Debouncer(seen.append, delay_seconds=0.02)

    deb.push("m")
    deb.push("mi")
    deb.push("milk")
    assert deb.pending
    assert seen == []

    await asyncio.sleep(0.06)
    assert seen == ["milk"]
    assert not deb.pending


@pytest.mark.asyncio
async def test_debouncer_restarts_quiet_period_on_each_push() -> None:
    seen: list[str] = []
    deb = Debouncer(seen.append, delay_seconds=0.05)

    deb.push("a")
    await asyncio.sleep(0.03)
    deb.push("ab")
    await asyncio.sleep(0.03)
    assert seen == [], "second push must restart the timer"

    await asyncio.sleep(0.05)
    assert seen == ["ab"]


@pytest.mark.asyncio
async def test_debouncer_cancel_drops_pending_value() -> None:
    seen: list[str] = []
    deb = Debouncer(seen.append, delay_seconds=0.01)
    deb.push("x")
    deb.cancel()
    await asyncio.sleep(0.03)
    assert seen == []


@pytest.mark.asyncio
async def test_debouncer_flush_fires_now() -> None:
    seen: list[str] = []
    deb = Debouncer(seen.append, delay_seconds=10)
    deb.push("now")
    deb.flush()
    deb.flush()
    assert seen == ["now"]


def test_zero_delay_debouncer_is_synchronous() -> None:
    seen: list[str] = []
    deb = Debouncer(seen.append, delay_seconds=0)
    deb.push("a")
    deb.push("b")
    assert seen == ["a", "b"]
    assert not deb.pending


@pytest.mark.asyncio
async def test_spawn_cancellable_disposer_cancels() -> None:
    ticks: list[int] = []

    async def ticker() -> None:
        while True:
            ticks.append(1)
            await asyncio.sleep(0.005)

    dispose = spawn_cancellable(ticker(), name="ticker")
    await asyncio.sleep(0.02)
    dispose()
    await asyncio.sleep(0)
    n = len(ticks)
    assert n >= 1
    await asyncio.sleep(0.02)
    assert len(ticks) == n
