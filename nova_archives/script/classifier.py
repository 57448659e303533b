"""Per-line classification for chapter markup.

Block-level markup (one construct per line):
  0000.2Void>>...        opens an intercept block (any DDDD.D level)
  【插入结束】 / 【插入結束】 / [INSERTION_END]
                         closes it (may sit on the opener line)
  [[DIVIDER]]            visual break
  [[JUMP::vol::label]]   cross-volume link
  [[IMAGE::src::caption]] image cue, caption may itself contain ::

Anything else is prose. The classifier is stateless; whether a block is open
is passed in by the parser.
"""

import re
from dataclasses import dataclass, field
from enum import Enum

INTERCEPT_OPEN_RE = re.compile(r"\d{4}\.\dVoid>>")
INTERCEPT_ID_RE = re.compile(r"(\d{4}\.\d)Void>>")
INTERCEPT_CLOSE_RE = re.compile(r"【插入结束】|【插入結束】|\[INSERTION_END\]")

DIVIDER_TOKEN = "[[DIVIDER]]"
JUMP_PREFIX = "[[JUMP::"
IMAGE_PREFIX = "[[IMAGE::"
DIRECTIVE_SUFFIX = "]]"


class LineKind(str, Enum):
    PROSE = "prose"
    BLANK = "blank"
    BLOCK_OPEN = "block_open"
    BLOCK_CONTINUE = "block_continue"
    BLOCK_CLOSE = "block_close"
    DIRECTIVE = "directive"


class DirectiveKind(str, Enum):
    DIVIDER = "divider"
    JUMP = "jump"
    IMAGE = "image"


@dataclass(frozen=True)
class LineClass:
    kind: LineKind
    directive: DirectiveKind | None = None
    payload: dict[str, str] = field(default_factory=dict)
    closes: bool = False  # BLOCK_OPEN only: closer on the same line


def _directive_body(trimmed: str, prefix: str) -> str | None:
    if trimmed.startswith(prefix) and trimmed.endswith(DIRECTIVE_SUFFIX):
        return trimmed[len(prefix):-len(DIRECTIVE_SUFFIX)]
    return None


def classify_line(line: str, in_block: bool = False) -> LineClass:
    """Classify one raw line.

    An intercept opener always wins, even inside an open block, so the parser
    can flush the unterminated block before starting the next one.
    """
    trimmed = line.strip()

    if INTERCEPT_OPEN_RE.search(trimmed):
        return LineClass(
            LineKind.BLOCK_OPEN,
            closes=bool(INTERCEPT_CLOSE_RE.search(trimmed)),
        )
    if in_block:
        if INTERCEPT_CLOSE_RE.search(trimmed):
            return LineClass(LineKind.BLOCK_CLOSE)
        return LineClass(LineKind.BLOCK_CONTINUE)

    if trimmed == DIVIDER_TOKEN:
        return LineClass(LineKind.DIRECTIVE, DirectiveKind.DIVIDER)

    body = _directive_body(trimmed, JUMP_PREFIX)
    if body is not None:
        parts = body.split("::")
        label = parts[1] if len(parts) > 1 else ""
        return LineClass(
            LineKind.DIRECTIVE,
            DirectiveKind.JUMP,
            {"target": parts[0], "label": label},
        )

    body = _directive_body(trimmed, IMAGE_PREFIX)
    if body is not None:
        src, _, caption = body.partition("::")
        return LineClass(
            LineKind.DIRECTIVE,
            DirectiveKind.IMAGE,
            {"src": src, "caption": caption},
        )

    if not trimmed:
        return LineClass(LineKind.BLANK)
    return LineClass(LineKind.PROSE)


def intercept_id(first_line: str, default: str = "0000.2") -> str:
    """Interference level of an intercept block, e.g. "0600.0"."""
    m = INTERCEPT_ID_RE.search(first_line)
    return m.group(1) if m else default


def strip_intercept_markers(line: str) -> str:
    """Remove opener/closer markers, leaving the transmitted text."""
    return INTERCEPT_CLOSE_RE.sub("", INTERCEPT_OPEN_RE.sub("", line))
