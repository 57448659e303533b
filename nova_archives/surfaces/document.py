"""Document surface: the whole chapter as a scrolling list of blocks.

Every node becomes one JSON-ready block dict keyed by "type":

  paragraph  {"node": "narration"|"dialogue", "speaker", "style", "runs"}
  reveal     {"content"}                  lifted [[VOID_VISION::...]] card
  comms      {"speaker", "runs"}
  system     {"runs"}
  image      {"src", "caption"}
  divider    {}
  jump       {"target_volume_id", "label"}
  intercept  {"intercept_id", "lines": [[run, ...], ...]}

A paragraph's style is its speaker key ("narration" when unattributed), unless
the chapter forces one style on every paragraph (see themes.PARAGRAPH_OVERRIDES).
"""

from typing import Any

from nova_archives.script.classifier import intercept_id, strip_intercept_markers
from nova_archives.script.inline import RunStyle, StyledRun, format_inline
from nova_archives.script.speakers import SpeakerTable, attribute
from nova_archives.themes import paragraph_override


def _runs(runs: list[StyledRun]) -> list[dict[str, str]]:
    return [run.to_dict() for run in runs]


def _paragraph_blocks(node, style: str) -> list[dict[str, Any]]:
    """Split a paragraph around void-vision runs.

    Each void-vision run becomes a reveal block placed right after the text
    that precedes it; text after it continues as a new paragraph block.
    """
    speaker = node.speaker_key if node.type == "dialogue" else None
    blocks: list[dict[str, Any]] = []
    pending: list[StyledRun] = []

    def flush() -> None:
        if pending:
            blocks.append({
                "type": "paragraph",
                "node": node.type,
                "speaker": speaker,
                "style": style,
                "runs": _runs(pending),
            })
            pending.clear()

    for run in format_inline(node.raw_text):
        if run.style is RunStyle.VOID_VISION:
            flush()
            blocks.append({"type": "reveal", "content": run.text})
        else:
            pending.append(run)
    flush()
    return blocks


def _intercept_block(node) -> dict[str, Any]:
    first = node.lines[0] if node.lines else ""
    lines = []
    for line in node.lines:
        cleaned = strip_intercept_markers(line).strip()
        lines.append(_runs(format_inline(cleaned)) if cleaned else [])
    return {"type": "intercept", "intercept_id": intercept_id(first), "lines": lines}


def render_block(node, style_override: str | None = None) -> list[dict[str, Any]]:
    """Blocks for one node (a paragraph may expand to several)."""
    if node.type in ("narration", "dialogue"):
        style = style_override or (node.speaker_key if node.type == "dialogue" else "narration")
        return _paragraph_blocks(node, style)
    if node.type == "comms":
        return [{
            "type": "comms",
            "speaker": node.speaker_display_name,
            "runs": _runs(format_inline(node.raw_text)),
        }]
    if node.type == "system":
        return [{"type": "system", "runs": _runs(format_inline(node.raw_text))}]
    if node.type == "image":
        return [{"type": "image", "src": node.source_ref, "caption": node.caption}]
    if node.type == "divider":
        return [{"type": "divider"}]
    if node.type == "jump":
        return [{"type": "jump", "target_volume_id": node.target_volume_id, "label": node.label}]
    if node.type == "intercept":
        return [_intercept_block(node)]
    if node.type == "reveal":
        return [{"type": "reveal", "content": node.content}]
    return []


def render_document(nodes, chapter_id: str = "", table: SpeakerTable | None = None) -> list[dict[str, Any]]:
    """Render a parsed chapter for the document surface.

    Nodes that are still plain narration are attributed against `table` when
    one is given; already-attributed sequences pass through unchanged.
    """
    override = paragraph_override(chapter_id)
    blocks: list[dict[str, Any]] = []
    for node in nodes:
        if table is not None:
            node = attribute(node, table)
        blocks.extend(render_block(node, override))
    return blocks
