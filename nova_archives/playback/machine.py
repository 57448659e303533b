"""Staged (visual-novel) playback state machine.

Phases:
  REVEALING         typewriter running, one code point per tick
  AWAITING_ADVANCE  full text shown; waits for advance() or the auto timer
  AT_END            past the last node; every further event is a no-op

advance():
  REVEALING        → complete the reveal (cursor unchanged)
  AWAITING_ADVANCE → push current node to the backlog, move to the next node,
                     or enter AT_END (auto-play off) on the last node

Nodes without typewriter reveal: images, dividers, jump links, and any node
whose text contains inline tags (a half-typed tag would render as broken
markup). They enter AWAITING_ADVANCE immediately.

Timers: "tick" (typewriter) and "auto" (auto-play delay). Every transition
that replaces the displayed state cancels both before arming new ones.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable

from nova_archives.script.classifier import strip_intercept_markers
from nova_archives.script.inline import has_inline_markup
from nova_archives.script.nodes import SystemMessage
from nova_archives.script.speakers import dialogue_body

from .scheduler import ScheduledTasks, Scheduler

logger = logging.getLogger(__name__)

NO_SCRIPT_DATA = SystemMessage(raw_text="NO_SCRIPT_DATA")

_INSTANT_TYPES = {"image", "divider", "jump"}


class Phase(str, Enum):
    REVEALING = "revealing"
    AWAITING_ADVANCE = "awaiting_advance"
    AT_END = "at_end"


@dataclass(frozen=True)
class PlaybackSettings:
    typewriter_interval_ms: int = 30
    auto_base_delay_ms: int = 1500
    auto_rich_base_delay_ms: int = 2000
    auto_per_char_ms: int = 20

    @classmethod
    def from_config(cls, values: dict[str, Any] | None) -> "PlaybackSettings":
        values = values or {}
        known = {k: int(v) for k, v in values.items() if k in cls.__dataclass_fields__}
        return cls(**known)


@dataclass(frozen=True)
class PlaybackState:
    nodes: tuple
    cursor: int
    revealed_length: int
    is_revealing: bool
    is_auto_playing: bool
    backlog: tuple
    is_at_end: bool


def display_text(node) -> str:
    """Text the staged reader types out for a node."""
    if node.type == "dialogue":
        return dialogue_body(node)
    if node.type in ("narration", "system", "comms"):
        return node.raw_text
    if node.type == "image":
        return node.caption
    if node.type == "jump":
        return node.label
    if node.type == "intercept":
        return "\n".join(strip_intercept_markers(line) for line in node.lines)
    if node.type == "reveal":
        return node.content
    return ""


def is_instant(node) -> bool:
    return node.type in _INSTANT_TYPES or has_inline_markup(display_text(node))


class PlaybackMachine:
    """One instance per mounted chapter view. Call close() on unmount."""

    def __init__(
        self,
        nodes,
        scheduler: Scheduler,
        settings: PlaybackSettings | None = None,
        on_change: Callable[["PlaybackMachine"], None] | None = None,
    ) -> None:
        self._nodes = tuple(nodes) or (NO_SCRIPT_DATA,)
        self._settings = settings or PlaybackSettings()
        self._tasks = ScheduledTasks(scheduler)
        self._on_change = on_change
        self._cursor = 0
        self._revealed = 0
        self._phase = Phase.REVEALING
        self._auto = False
        self._backlog: list = []
        self._closed = False
        self._enter_node()

    # ── Accessors ──────────────────────────────────────────

    @property
    def nodes(self) -> tuple:
        return self._nodes

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def phase(self) -> Phase:
        return self._phase

    @property
    def current_node(self):
        return self._nodes[self._cursor]

    @property
    def display_text(self) -> str:
        return display_text(self.current_node)

    @property
    def revealed_length(self) -> int:
        return self._revealed

    @property
    def revealed_text(self) -> str:
        return self.display_text[: self._revealed]

    @property
    def backlog(self) -> tuple:
        return tuple(self._backlog)

    @property
    def is_revealing(self) -> bool:
        return self._phase is Phase.REVEALING

    @property
    def is_auto_playing(self) -> bool:
        return self._auto

    @property
    def is_at_end(self) -> bool:
        return self._phase is Phase.AT_END

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def pending_timers(self) -> list[str]:
        return self._tasks.pending()

    def snapshot(self) -> PlaybackState:
        return PlaybackState(
            nodes=self._nodes,
            cursor=self._cursor,
            revealed_length=self._revealed,
            is_revealing=self.is_revealing,
            is_auto_playing=self._auto,
            backlog=self.backlog,
            is_at_end=self.is_at_end,
        )

    # ── Events ─────────────────────────────────────────────

    def advance(self) -> None:
        if self._closed or self._phase is Phase.AT_END:
            return
        if self._phase is Phase.REVEALING:
            self._complete_reveal()
            self._notify()
            return

        self._tasks.cancel_all()
        if self._cursor < len(self._nodes) - 1:
            self._backlog.append(self.current_node)
            self._cursor += 1
            self._enter_node()
        else:
            self._phase = Phase.AT_END
            self._auto = False
            logger.debug(f"Playback reached end after {len(self._nodes)} nodes")
        self._notify()

    def toggle_auto(self) -> None:
        if self._closed or self._phase is Phase.AT_END:
            return
        if self._auto:
            self._auto = False
            self._tasks.cancel("auto")
            self._notify()
            return
        self._auto = True
        if self._phase is Phase.AWAITING_ADVANCE:
            self.advance()
        else:
            self._notify()

    def close(self) -> None:
        """Unmount: cancel every pending timer; later events do nothing."""
        self._tasks.cancel_all()
        self._closed = True

    # ── Internals ──────────────────────────────────────────

    def _enter_node(self) -> None:
        self._tasks.cancel_all()
        self._revealed = 0
        if is_instant(self.current_node) or not self.display_text:
            self._complete_reveal()
            return
        self._phase = Phase.REVEALING
        self._tasks.schedule("tick", self._settings.typewriter_interval_ms, self._tick)

    def _tick(self) -> None:
        self._revealed += 1
        if self._revealed >= len(self.display_text):
            self._complete_reveal()
        else:
            self._tasks.schedule("tick", self._settings.typewriter_interval_ms, self._tick)
        self._notify()

    def _complete_reveal(self) -> None:
        self._tasks.cancel_all()
        self._revealed = len(self.display_text)
        self._phase = Phase.AWAITING_ADVANCE
        self._arm_auto()

    def _auto_delay_ms(self) -> int:
        s = self._settings
        text = self.display_text
        base = s.auto_rich_base_delay_ms if has_inline_markup(text) else s.auto_base_delay_ms
        return base + len(text) * s.auto_per_char_ms

    def _arm_auto(self) -> None:
        if self._auto and self._phase is Phase.AWAITING_ADVANCE:
            self._tasks.schedule("auto", self._auto_delay_ms(), self.advance)

    def _notify(self) -> None:
        if self._on_change is not None:
            self._on_change(self)
