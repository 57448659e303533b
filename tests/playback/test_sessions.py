"""Tests for SessionRegistry."""

from nova_archives.playback import SessionRegistry
from nova_archives.script import Narration

NODES = (Narration(raw_text="hello"), Narration(raw_text="world"))


def _open(registry, client_id="reader", index=0):
    return registry.open(
        NODES,
        client_id=client_id,
        volume_id="vol-main",
        chapter_index=index,
        chapter_id=f"ch-{index}",
        language="zh-CN",
    )


def test_open_and_get(clock):
    registry = SessionRegistry(clock)
    session = _open(registry)
    assert registry.get(session.id) is session
    assert session.machine.nodes == NODES
    assert len(registry) == 1


def test_reopen_for_same_client_closes_previous(clock):
    registry = SessionRegistry(clock)
    first = _open(registry)
    second = _open(registry, index=1)
    assert registry.get(first.id) is None
    assert first.machine.closed
    assert first.machine.pending_timers == []
    clock.advance(10_000)
    assert first.machine.revealed_length == 0
    assert second.machine.phase.value == "awaiting_advance"
    assert len(registry) == 1


def test_clients_are_independent(clock):
    registry = SessionRegistry(clock)
    a = _open(registry, client_id="a")
    b = _open(registry, client_id="b")
    assert registry.get(a.id) is a
    assert registry.get(b.id) is b


def test_close(clock):
    registry = SessionRegistry(clock)
    session = _open(registry)
    assert registry.close(session.id)
    assert not registry.close(session.id)
    assert session.machine.closed


def test_close_all(clock):
    registry = SessionRegistry(clock)
    sessions = [_open(registry, client_id=c) for c in ("a", "b")]
    registry.close_all()
    assert len(registry) == 0
    assert all(s.machine.closed for s in sessions)


# ── Eviction ───────────────────────────────────────────────


def test_get_touches_session(clock):
    registry = SessionRegistry(clock, now=lambda: clock.now)
    session = _open(registry)
    clock.advance(5_000)
    registry.get(session.id)
    assert session.touched == 5.0


def test_idle_sessions_evicted_on_open(clock, caplog):
    caplog.set_level("INFO", logger="nova_archives.playback.sessions")
    registry = SessionRegistry(clock, idle_timeout_s=60, now=lambda: clock.now)
    stale = _open(registry, client_id="a")
    fresh = _open(registry, client_id="b")
    clock.advance(40_000)
    registry.get(fresh.id)
    clock.advance(30_000)

    newest = _open(registry, client_id="c")
    assert registry.get(stale.id) is None
    assert stale.machine.closed
    assert registry.get(fresh.id) is fresh
    assert registry.get(newest.id) is newest
    assert f"Evicting idle playback {stale.id}" in caplog.text


def test_session_limit_evicts_least_recently_touched(clock):
    registry = SessionRegistry(clock, max_sessions=2, now=lambda: clock.now)
    a = _open(registry, client_id="a")
    clock.advance(1_000)
    b = _open(registry, client_id="b")
    clock.advance(1_000)
    registry.get(a.id)
    clock.advance(1_000)

    c = _open(registry, client_id="c")
    assert len(registry) == 2
    assert registry.get(b.id) is None
    assert b.machine.closed
    assert registry.get(a.id) is a
    assert registry.get(c.id) is c


def test_reopen_same_client_does_not_evict_others(clock):
    registry = SessionRegistry(clock, max_sessions=2, now=lambda: clock.now)
    a = _open(registry, client_id="a")
    _open(registry, client_id="b")
    _open(registry, client_id="b", index=1)
    assert registry.get(a.id) is a
    assert len(registry) == 2
