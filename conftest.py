import shutil
from pathlib import Path

import pytest

from nova_archives import storage

TEST_DATA_DIR = Path("data-tests")


@pytest.fixture(autouse=True)
def clean_test_data():
    """Wipe and re-init data-tests/ before every test."""
    if TEST_DATA_DIR.exists():
        shutil.rmtree(TEST_DATA_DIR)
    storage.init_storage(TEST_DATA_DIR)
    yield
    # leave data-tests around after tests for inspection; CI can ignore it


class ManualClock:
    """Deterministic Scheduler: timers fire only when the test advances time."""

    class Handle:
        def __init__(self, clock, due: float, callback) -> None:
            self._clock = clock
            self.due = due
            self.callback = callback
            self.cancelled = False

        def cancel(self) -> None:
            self.cancelled = True

    def __init__(self) -> None:
        self.now = 0.0
        self._timers: list[ManualClock.Handle] = []

    def call_later(self, delay: float, callback):
        handle = ManualClock.Handle(self, self.now + delay, callback)
        self._timers.append(handle)
        return handle

    def pending(self) -> list["ManualClock.Handle"]:
        return [h for h in self._timers if not h.cancelled]

    def advance(self, ms: float) -> None:
        """Move time forward, firing due timers in order (including ones they schedule)."""
        target = self.now + ms / 1000
        while True:
            due = [h for h in self.pending() if h.due <= target + 1e-9]
            if not due:
                break
            handle = min(due, key=lambda h: h.due)
            self._timers.remove(handle)
            self.now = max(self.now, handle.due)
            handle.callback()
        self.now = target

    def fire_all_raw(self) -> None:
        """Run every callback ever scheduled, cancelled or not (stale-timer checks)."""
        timers, self._timers = self._timers, []
        for handle in timers:
            handle.callback()


@pytest.fixture
def clock():
    return ManualClock()
