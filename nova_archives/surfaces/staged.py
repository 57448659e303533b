"""Staged surface: one frame of the visual-novel reader."""

from typing import Any

from nova_archives.playback.machine import PlaybackMachine, display_text, is_instant
from nova_archives.script.inline import format_inline
from nova_archives.script.speakers import identity_for
from nova_archives.themes import detect_chapter_theme, speaker_theme

# Sprite identity for nodes that have no speaker.
_NODE_IDENTITIES = {
    "system": "system",
    "comms": "unknown",
}


def _speaker(node, theme: str) -> dict[str, Any] | None:
    if node.type == "dialogue":
        key, name = node.speaker_key, node.speaker_display_name
    elif node.type in _NODE_IDENTITIES:
        key = _NODE_IDENTITIES[node.type]
        name = node.speaker_display_name if node.type == "comms" else key.upper()
    else:
        return None
    themed = speaker_theme(key, theme)
    return {
        "key": key,
        "name": name,
        "identity": identity_for(key),
        "initials": themed["initials"],
        "theme": themed["style"],
    }


def staged_view(machine: PlaybackMachine, chapter_id: str = "") -> dict[str, Any]:
    """Current frame as a JSON-ready dict.

    Runs are only included once the text is fully shown, so a partially
    typed string is always delivered as plain text.
    """
    node = machine.current_node
    theme = detect_chapter_theme(chapter_id)
    revealed = machine.revealed_text
    complete = is_instant(node) or not machine.is_revealing
    frame: dict[str, Any] = {
        "node_type": node.type,
        "speaker": _speaker(node, theme),
        "emotion": node.emotion if node.type == "dialogue" else "",
        "text": revealed,
        "runs": [run.to_dict() for run in format_inline(revealed)] if complete else None,
        "theme": theme,
        "is_revealing": machine.is_revealing,
        "is_auto_playing": machine.is_auto_playing,
        "is_at_end": machine.is_at_end,
        "cursor": machine.cursor,
        "total": len(machine.nodes),
        "backlog": [display_text(n) for n in machine.backlog],
    }
    if node.type == "image":
        frame["image"] = {"src": node.source_ref, "caption": node.caption}
    elif node.type == "jump":
        frame["jump"] = {"target_volume_id": node.target_volume_id, "label": node.label}
    return frame
