"""In-process registry of mounted staged-reader sessions.

One machine per (client, chapter view). Opening a new chapter for a client
closes that client's previous machine first, so a stale timer can never act
on a replaced node sequence.

Sessions idle longer than idle_timeout_s are closed on the next open(); when
max_sessions is reached the least recently touched session is closed too.
"""

import logging
import time
import uuid
from dataclasses import dataclass, field
from typing import Callable

from .machine import PlaybackMachine, PlaybackSettings
from .scheduler import AsyncioScheduler, Scheduler

logger = logging.getLogger(__name__)

MAX_SESSIONS = 256
IDLE_TIMEOUT_S = 1800.0


@dataclass
class Session:
    id: str
    client_id: str
    volume_id: str
    chapter_index: int
    chapter_id: str
    language: str
    machine: PlaybackMachine
    meta: dict = field(default_factory=dict)
    touched: float = 0.0


class SessionRegistry:
    def __init__(
        self,
        scheduler: Scheduler | None = None,
        *,
        max_sessions: int = MAX_SESSIONS,
        idle_timeout_s: float = IDLE_TIMEOUT_S,
        now: Callable[[], float] = time.monotonic,
    ) -> None:
        self._scheduler = scheduler or AsyncioScheduler()
        self._sessions: dict[str, Session] = {}
        self._by_client: dict[str, str] = {}
        self._max_sessions = max(1, max_sessions)
        self._idle_timeout_s = idle_timeout_s
        self._now = now

    def open(
        self,
        nodes,
        *,
        client_id: str,
        volume_id: str,
        chapter_index: int,
        chapter_id: str,
        language: str,
        settings: PlaybackSettings | None = None,
        meta: dict | None = None,
    ) -> Session:
        previous = self._by_client.get(client_id)
        if previous is not None:
            self.close(previous)
        self._evict()

        machine = PlaybackMachine(nodes, self._scheduler, settings)
        session = Session(
            id=uuid.uuid4().hex,
            client_id=client_id,
            volume_id=volume_id,
            chapter_index=chapter_index,
            chapter_id=chapter_id,
            language=language,
            machine=machine,
            meta=meta or {},
            touched=self._now(),
        )
        self._sessions[session.id] = session
        self._by_client[client_id] = session.id
        logger.info(f"Opened playback {session.id} for {client_id} ({volume_id} #{chapter_index})")
        return session

    def get(self, session_id: str) -> Session | None:
        session = self._sessions.get(session_id)
        if session is not None:
            session.touched = self._now()
        return session

    def close(self, session_id: str) -> bool:
        session = self._sessions.pop(session_id, None)
        if session is None:
            return False
        session.machine.close()
        if self._by_client.get(session.client_id) == session_id:
            del self._by_client[session.client_id]
        logger.info(f"Closed playback {session_id}")
        return True

    def close_all(self) -> None:
        for session_id in list(self._sessions):
            self.close(session_id)

    def _evict(self) -> None:
        cutoff = self._now() - self._idle_timeout_s
        for session in list(self._sessions.values()):
            if session.touched < cutoff:
                logger.info(f"Evicting idle playback {session.id}")
                self.close(session.id)
        while len(self._sessions) >= self._max_sessions:
            oldest = min(self._sessions.values(), key=lambda s: s.touched)
            logger.info(f"Evicting playback {oldest.id} (limit {self._max_sessions})")
            self.close(oldest.id)

    def __len__(self) -> int:
        return len(self._sessions)
