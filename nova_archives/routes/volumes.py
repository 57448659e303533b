"""Volume catalog, chapter reading, read status, and spoiler acknowledgement endpoints."""

from fastapi import APIRouter, HTTPException

from nova_archives import storage
from nova_archives.script import SpeakerTable, parse_chapter
from nova_archives.surfaces import render_document
from nova_archives.themes import detect_chapter_theme

router = APIRouter()


def load_volume(volume_id: str) -> dict:
    """Volume by id, or 404. A volume whose prerequisite is unread is 403."""
    volume = storage.get_volume(volume_id)
    if volume is None:
        raise HTTPException(404, "Volume not found")
    if not storage.volume_unlocked(volume, storage.read_registry()):
        raise HTTPException(403, "Volume locked")
    return volume


def load_chapter(volume: dict, index: int) -> dict:
    """Chapter by index, or 404. Locked and corrupted chapters are 403."""
    chapter = storage.get_chapter(volume["id"], index)
    if chapter is None:
        raise HTTPException(404, "Chapter not found")
    if storage.chapter_locked(chapter):
        raise HTTPException(403, "Chapter locked")
    return chapter


def speaker_table(config: dict) -> SpeakerTable:
    return SpeakerTable.from_config(config["speakers"])


def _volume_summary(volume: dict, registry) -> dict:
    chapters = volume.get("chapters", [])
    return {
        "id": volume["id"],
        "title": volume.get("title", volume["id"]),
        "chapter_count": len(chapters),
        "read_count": sum(1 for c in chapters if storage.has_read(registry, c.get("id", ""))),
        "unlocked": storage.volume_unlocked(volume, registry),
    }


@router.get("/volumes")
async def list_volumes():
    """List volumes with read progress and lock state."""
    registry = storage.read_registry()
    return [_volume_summary(v, registry) for v in storage.list_volumes()]


@router.get("/volumes/{volume_id}")
async def get_volume(volume_id: str, language: str | None = None):
    """Volume detail: chapter titles in the requested language, read flags."""
    volume = storage.get_volume(volume_id)
    if volume is None:
        raise HTTPException(404, "Volume not found")
    registry = storage.read_registry()
    lang = language or storage.get_config()["default_language"]
    summary = _volume_summary(volume, registry)
    summary["chapters"] = [
        {
            "index": i,
            "id": chapter.get("id", ""),
            "title": storage.chapter_translation(chapter, lang).get("title", ""),
            "status": chapter.get("status", ""),
            "locked": storage.chapter_locked(chapter),
            "read": storage.has_read(registry, chapter.get("id", "")),
        }
        for i, chapter in enumerate(volume.get("chapters", []))
    ]
    return summary


@router.get("/volumes/{volume_id}/chapters/{index}")
async def read_chapter(volume_id: str, index: int, language: str | None = None):
    """Render a chapter for the document reader and mark it read.

    The chapter is parsed on every request; jump blocks report whether their
    target volume exists.
    """
    volume = load_volume(volume_id)
    chapter = load_chapter(volume, index)
    config = storage.get_config()
    lang = language or config["default_language"]
    translation = storage.chapter_translation(chapter, lang)
    chapter_id = chapter.get("id", "")

    nodes = parse_chapter(translation.get("content", ""), speaker_table(config))
    blocks = render_document(nodes, chapter_id)
    for block in blocks:
        if block["type"] == "jump":
            block["available"] = storage.resolve_jump(block["target_volume_id"]) is not None

    storage.mark_as_read(storage.read_registry(), chapter)
    return {
        "volume_id": volume["id"],
        "index": index,
        "chapter_id": chapter_id,
        "title": translation.get("title", ""),
        "language": lang,
        "theme": detect_chapter_theme(chapter_id),
        "blocks": blocks,
        "prev": storage.prev_chapter_index(volume, index),
        "next": storage.next_chapter_index(volume, index),
    }


@router.get("/read-status")
async def read_status():
    """Ids of every chapter the reader has opened."""
    return {"read": storage.read_registry().all()}


@router.get("/spoilers/{group_id}")
async def check_spoiler(group_id: str):
    """Whether a spoiler warning must be shown before opening group_id."""
    phases = storage.get_config()["spoiler_phases"]
    return {
        "group_id": group_id,
        "needs_warning": storage.needs_spoiler_warning(storage.spoiler_registry(), group_id, phases),
    }


@router.post("/spoilers/{group_id}")
async def acknowledge_spoiler(group_id: str):
    """Acknowledge the spoiler warning for group_id (persists)."""
    storage.acknowledge_spoiler(storage.spoiler_registry(), group_id)
    return {"group_id": group_id, "needs_warning": False}
