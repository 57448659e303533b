"""Tests for ScheduledTasks and AsyncioScheduler."""

import asyncio

import pytest

from nova_archives.playback import AsyncioScheduler, ScheduledTasks


def test_schedule_and_fire(clock):
    fired = []
    tasks = ScheduledTasks(clock)
    tasks.schedule("tick", 30, lambda: fired.append("tick"))
    assert "tick" in tasks
    clock.advance(30)
    assert fired == ["tick"]
    assert tasks.pending() == []


def test_reschedule_replaces(clock):
    fired = []
    tasks = ScheduledTasks(clock)
    tasks.schedule("auto", 100, lambda: fired.append("first"))
    tasks.schedule("auto", 200, lambda: fired.append("second"))
    clock.fire_all_raw()
    assert fired == ["second"]


def test_cancel_all_blocks_fired_handles(clock):
    fired = []
    tasks = ScheduledTasks(clock)
    tasks.schedule("tick", 30, lambda: fired.append("tick"))
    tasks.schedule("auto", 30, lambda: fired.append("auto"))
    tasks.cancel_all()
    clock.fire_all_raw()
    assert fired == []
    assert tasks.pending() == []


@pytest.mark.asyncio
async def test_asyncio_scheduler_runs_on_loop():
    fired = asyncio.Event()
    tasks = ScheduledTasks(AsyncioScheduler())
    tasks.schedule("tick", 1, fired.set)
    await asyncio.wait_for(fired.wait(), timeout=1)
    assert tasks.pending() == []
