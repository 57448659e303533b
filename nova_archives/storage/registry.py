"""Key registries: read chapters and acknowledged spoiler warnings.

The engine never reaches for ambient storage. Call sites receive a
KeyRegistry (has / set / all) and pass it in; JsonKeyRegistry persists to a
JSON array of ids, MemoryKeyRegistry is for tests and ephemeral readers.
"""

import json
import logging
from pathlib import Path
from typing import Protocol

from .core import data_dir

logger = logging.getLogger(__name__)


class KeyRegistry(Protocol):
    def has(self, key: str) -> bool: ...

    def set(self, key: str) -> None: ...

    def all(self) -> list[str]: ...


class MemoryKeyRegistry:
    def __init__(self, keys: list[str] | None = None) -> None:
        self._keys: list[str] = list(dict.fromkeys(keys or []))

    def has(self, key: str) -> bool:
        return key in self._keys

    def set(self, key: str) -> None:
        if key not in self._keys:
            self._keys.append(key)

    def all(self) -> list[str]:
        return list(self._keys)


class JsonKeyRegistry:
    """Unique ids stored as a JSON array. An unreadable file reads as empty."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def _load(self) -> list[str]:
        if not self.path.is_file():
            return []
        try:
            raw = json.loads(self.path.read_text())
        except (OSError, ValueError) as e:
            logger.warning(f"Ignoring unreadable registry {self.path}: {e}")
            return []
        if not isinstance(raw, list):
            logger.warning(f"Ignoring malformed registry {self.path}")
            return []
        return [k for k in raw if isinstance(k, str)]

    def has(self, key: str) -> bool:
        return key in self._load()

    def set(self, key: str) -> None:
        keys = self._load()
        if key in keys:
            return
        keys.append(key)
        self.path.write_text(json.dumps(keys, indent=2, ensure_ascii=False))

    def all(self) -> list[str]:
        return self._load()


def read_registry() -> JsonKeyRegistry:
    return JsonKeyRegistry(data_dir() / "read-registry.json")


def spoiler_registry() -> JsonKeyRegistry:
    return JsonKeyRegistry(data_dir() / "spoiler-acks.json")


# ── Read status ──────────────────────────────────────────


def mark_as_read(registry: KeyRegistry, chapter: dict) -> bool:
    """Record a chapter as read. Locked chapters and empty ids are ignored.

    Returns True if the registry changed.
    """
    chapter_id = chapter.get("id", "")
    if not chapter_id or chapter.get("status") == "locked":
        return False
    if registry.has(chapter_id):
        return False
    registry.set(chapter_id)
    return True


def has_read(registry: KeyRegistry, chapter_id: str) -> bool:
    if not chapter_id:
        return False
    return registry.has(chapter_id)


# ── Spoiler acknowledgements ─────────────────────────────


def needs_spoiler_warning(registry: KeyRegistry, group_id: str, spoiler_phases: list[str]) -> bool:
    """True if group_id is a spoiler phase the reader has not acknowledged yet."""
    return group_id in spoiler_phases and not registry.has(group_id)


def acknowledge_spoiler(registry: KeyRegistry, group_id: str) -> None:
    registry.set(group_id)
