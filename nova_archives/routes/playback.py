"""Staged-reader session endpoints.

A session wraps one PlaybackMachine. Timers run on the server's event loop,
so GET /playback/{sid} observes typewriter progress and auto-play between
requests. DELETE unmounts the machine and cancels its timers.
"""

from fastapi import APIRouter, HTTPException, Request

from nova_archives import storage
from nova_archives.playback import PlaybackSettings, Session, SessionRegistry
from nova_archives.script import parse_chapter
from nova_archives.surfaces import staged_view

from .models import OpenPlayback
from .volumes import load_chapter, load_volume, speaker_table

router = APIRouter()


def _sessions(request: Request) -> SessionRegistry:
    return request.app.state.sessions


def _session(request: Request, session_id: str) -> Session:
    session = _sessions(request).get(session_id)
    if session is None:
        raise HTTPException(404, "Session not found")
    return session


def _frame(session: Session) -> dict:
    return {"session_id": session.id, **staged_view(session.machine, session.chapter_id)}


@router.post("/playback")
async def open_playback(body: OpenPlayback, request: Request):
    """Mount a staged reader on a chapter. Replaces the client's previous session."""
    volume = load_volume(body.volume_id)
    index = storage.clamp_chapter_index(volume, body.index)
    chapter = load_chapter(volume, index)
    config = storage.get_config()
    language = body.language or config["default_language"]

    nodes = parse_chapter(storage.chapter_text(chapter, language), speaker_table(config))
    session = _sessions(request).open(
        nodes,
        client_id=body.client_id,
        volume_id=volume["id"],
        chapter_index=index,
        chapter_id=chapter.get("id", ""),
        language=language,
        settings=PlaybackSettings.from_config(config["playback"]),
        meta={
            "prev": storage.prev_chapter_index(volume, index),
            "next": storage.next_chapter_index(volume, index),
        },
    )
    storage.mark_as_read(storage.read_registry(), chapter)
    return {**_frame(session), **session.meta, "volume_id": volume["id"], "index": index}


@router.get("/playback/{session_id}")
async def get_frame(session_id: str, request: Request):
    """Current frame of a session."""
    return _frame(_session(request, session_id))


@router.post("/playback/{session_id}/advance")
async def advance(session_id: str, request: Request):
    """Complete the current reveal, or move to the next node."""
    session = _session(request, session_id)
    session.machine.advance()
    return _frame(session)


@router.post("/playback/{session_id}/auto")
async def toggle_auto(session_id: str, request: Request):
    """Toggle auto-play."""
    session = _session(request, session_id)
    session.machine.toggle_auto()
    return _frame(session)


@router.delete("/playback/{session_id}")
async def close_playback(session_id: str, request: Request):
    """Unmount a session; pending timers are cancelled."""
    if not _sessions(request).close(session_id):
        raise HTTPException(404, "Session not found")
    return {"ok": True}
