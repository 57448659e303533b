"""Cancellable one-shot timers for the staged reader.

The playback machine never touches the event loop directly. It schedules
through a Scheduler (AsyncioScheduler in the app, a manual clock in tests)
and keeps its handles in a ScheduledTasks owner, which guarantees that a
callback cancelled by name or by cancel_all() never runs, even if the
underlying timer still fires.
"""

import asyncio
from typing import Callable, Protocol


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle: ...


class AsyncioScheduler:
    """Schedules on the running asyncio loop (or an explicit one)."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop

    def call_later(self, delay: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        loop = self._loop or asyncio.get_running_loop()
        return loop.call_later(delay, callback)


class ScheduledTasks:
    """Named timers owned by one playback machine.

    Scheduling a name that is already pending replaces it.
    """

    def __init__(self, scheduler: Scheduler) -> None:
        self._scheduler = scheduler
        self._handles: dict[str, TimerHandle] = {}
        self._tokens: dict[str, object] = {}

    def schedule(self, name: str, delay_ms: float, callback: Callable[[], None]) -> None:
        self.cancel(name)
        token = object()

        def fire() -> None:
            if self._tokens.get(name) is not token:
                return
            del self._tokens[name]
            self._handles.pop(name, None)
            callback()

        self._tokens[name] = token
        self._handles[name] = self._scheduler.call_later(delay_ms / 1000, fire)

    def cancel(self, name: str) -> None:
        self._tokens.pop(name, None)
        handle = self._handles.pop(name, None)
        if handle is not None:
            handle.cancel()

    def cancel_all(self) -> None:
        for name in list(self._handles):
            self.cancel(name)
        self._tokens.clear()

    def pending(self) -> list[str]:
        return sorted(self._tokens)

    def __contains__(self, name: str) -> bool:
        return name in self._tokens
