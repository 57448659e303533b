"""Volume/chapter catalog stored as one JSON file per volume.

  data/volumes/<volume_id>.json
    {"id", "title", "requires_read"?: <chapter id>,
     "chapters": [{"id", "status"?, "translations": {<lang>: {"title", "content"}}}]}

Chapter indexes are positional. Out-of-range lookups return None and
navigation helpers clamp instead of raising. Chapters with status "locked" or
"corrupted" cannot be opened; next/prev navigation skips them.
"""

import json
from pathlib import Path
from typing import Any

from .core import volumes_dir
from .registry import KeyRegistry, has_read

FALLBACK_LANGUAGE = "zh-CN"
CLOSED_STATUSES = ("locked", "corrupted")
# Chapters listed as locked that still open (they render their own error screen).
ALWAYS_OPEN = {"F_ERR"}


def _volume_path(volume_id: str) -> Path:
    return volumes_dir() / f"{volume_id}.json"


def list_volumes() -> list[dict[str, Any]]:
    results = []
    for path in sorted(volumes_dir().glob("*.json")):
        results.append(json.loads(path.read_text()))
    return results


def get_volume(volume_id: str) -> dict[str, Any] | None:
    if not volume_id or "/" in volume_id or volume_id.startswith("."):
        return None
    path = _volume_path(volume_id)
    if not path.is_file():
        return None
    return json.loads(path.read_text())


def save_volume(volume: dict[str, Any]) -> dict[str, Any]:
    """Write a volume (creating or replacing it). Returns the stored volume."""
    stored = {
        "id": volume["id"],
        "title": volume.get("title", volume["id"]),
        "chapters": volume.get("chapters", []),
    }
    if volume.get("requires_read"):
        stored["requires_read"] = volume["requires_read"]
    _volume_path(stored["id"]).write_text(json.dumps(stored, indent=2, ensure_ascii=False))
    return stored


def delete_volume(volume_id: str) -> bool:
    path = _volume_path(volume_id)
    if not path.is_file():
        return False
    path.unlink()
    return True


def get_chapter(volume_id: str, index: int) -> dict[str, Any] | None:
    """Chapter at a positional index, or None (missing volume / out of range)."""
    volume = get_volume(volume_id)
    if volume is None:
        return None
    chapters = volume.get("chapters", [])
    if index < 0 or index >= len(chapters):
        return None
    return chapters[index]


def find_chapter_index(volume: dict[str, Any], chapter_id: str) -> int | None:
    for i, chapter in enumerate(volume.get("chapters", [])):
        if chapter.get("id") == chapter_id:
            return i
    return None


def chapter_translation(chapter: dict[str, Any], language: str) -> dict[str, str]:
    """Translation for language, falling back to zh-CN, then to any available one."""
    translations = chapter.get("translations", {})
    if language in translations:
        return translations[language]
    if FALLBACK_LANGUAGE in translations:
        return translations[FALLBACK_LANGUAGE]
    for value in translations.values():
        return value
    return {"title": chapter.get("id", ""), "content": ""}


def chapter_text(chapter: dict[str, Any], language: str) -> str:
    return chapter_translation(chapter, language).get("content", "")


def chapter_locked(chapter: dict[str, Any]) -> bool:
    """Locked and corrupted chapters cannot be opened, except the always-open ones."""
    return chapter.get("status") in CLOSED_STATUSES and chapter.get("id") not in ALWAYS_OPEN


def clamp_chapter_index(volume: dict[str, Any], index: int) -> int:
    count = len(volume.get("chapters", []))
    if count == 0:
        return 0
    return max(0, min(index, count - 1))


def next_chapter_index(volume: dict[str, Any], index: int) -> int | None:
    """Next chapter that can be opened, skipping locked ones. None at the end."""
    chapters = volume.get("chapters", [])
    for i in range(index + 1, len(chapters)):
        if not chapter_locked(chapters[i]):
            return i
    return None


def prev_chapter_index(volume: dict[str, Any], index: int) -> int | None:
    chapters = volume.get("chapters", [])
    for i in range(min(index, len(chapters)) - 1, -1, -1):
        if not chapter_locked(chapters[i]):
            return i
    return None


def resolve_jump(target_volume_id: str) -> dict[str, Any] | None:
    """Volume targeted by a jump link, or None when the catalog lacks it."""
    return get_volume(target_volume_id)


def volume_unlocked(volume: dict[str, Any], registry: KeyRegistry) -> bool:
    """A volume with requires_read stays locked until that chapter was read."""
    required = volume.get("requires_read", "")
    return not required or has_read(registry, required)
