"""Staged-surface playback.

PlaybackMachine consumes a parsed node tuple and exposes one current node at
a time: typewriter reveal (one code point per tick), auto-play with a delay
of base + per-character time, a backlog of advanced-past nodes, and an
end-of-sequence state. Timers go through a Scheduler so every pending
callback can be cancelled deterministically; SessionRegistry holds the
machines mounted by API clients.

Default timings (overridable via config.json "playback"):
  typewriter_interval_ms   30
  auto_base_delay_ms       1500
  auto_rich_base_delay_ms  2000  (nodes shown at once because of inline tags)
  auto_per_char_ms         20
"""

from .machine import (  # noqa: F401
    NO_SCRIPT_DATA,
    Phase,
    PlaybackMachine,
    PlaybackSettings,
    PlaybackState,
    display_text,
    is_instant,
)
from .scheduler import AsyncioScheduler, ScheduledTasks, Scheduler  # noqa: F401
from .sessions import Session, SessionRegistry  # noqa: F401
