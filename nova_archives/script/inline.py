"""Inline markup → styled runs.

Tags (closed set, no nesting, one pass):
  [[MASK::x]] [[GREEN::x]] [[GLITCH_GREEN::x]] [[VOID::x]] [[DANGER::x]]
  [[BLUE::x]] [[WHITE::x]] [[VOID_VISION::x]]   and **x** for bold.

Unknown tag names and unclosed openers are left as literal text.
"""

import re
from dataclasses import dataclass
from enum import Enum


class RunStyle(str, Enum):
    PLAIN = "plain"
    BOLD = "bold"
    MASK = "mask"
    GREEN = "green"
    GLITCH_GREEN = "glitch_green"
    VOID = "void"
    DANGER = "danger"
    BLUE = "blue"
    WHITE = "white"
    VOID_VISION = "void_vision"


# Tag name in markup → style. Bold and plain have no bracket tag.
TAG_STYLES: dict[str, RunStyle] = {
    "MASK": RunStyle.MASK,
    "GREEN": RunStyle.GREEN,
    "GLITCH_GREEN": RunStyle.GLITCH_GREEN,
    "VOID": RunStyle.VOID,
    "DANGER": RunStyle.DANGER,
    "BLUE": RunStyle.BLUE,
    "WHITE": RunStyle.WHITE,
    "VOID_VISION": RunStyle.VOID_VISION,
}

# Style → run kind (plain | mask | emphasis). Must cover every RunStyle.
RUN_KINDS: dict[RunStyle, str] = {
    RunStyle.PLAIN: "plain",
    RunStyle.BOLD: "emphasis",
    RunStyle.MASK: "mask",
    RunStyle.GREEN: "emphasis",
    RunStyle.GLITCH_GREEN: "emphasis",
    RunStyle.VOID: "emphasis",
    RunStyle.DANGER: "emphasis",
    RunStyle.BLUE: "emphasis",
    RunStyle.WHITE: "emphasis",
    RunStyle.VOID_VISION: "emphasis",
}

_TAG_RE = re.compile(
    r"\[\[(?P<tag>" + "|".join(TAG_STYLES) + r")::(?P<content>.*?)\]\]"
)
_BOLD_RE = re.compile(r"\*\*(.*?)\*\*")


@dataclass(frozen=True)
class StyledRun:
    style: RunStyle
    text: str

    @property
    def kind(self) -> str:
        return RUN_KINDS[self.style]

    def to_dict(self) -> dict[str, str]:
        return {"style": self.style.value, "kind": self.kind, "text": self.text}


def _split_bold(segment: str) -> list[StyledRun]:
    runs: list[StyledRun] = []
    pos = 0
    for m in _BOLD_RE.finditer(segment):
        if m.start() > pos:
            runs.append(StyledRun(RunStyle.PLAIN, segment[pos:m.start()]))
        runs.append(StyledRun(RunStyle.BOLD, m.group(1)))
        pos = m.end()
    if pos < len(segment):
        runs.append(StyledRun(RunStyle.PLAIN, segment[pos:]))
    return runs


def format_inline(text: str) -> list[StyledRun]:
    """Expand one fragment into an ordered list of styled runs."""
    runs: list[StyledRun] = []
    pos = 0
    for m in _TAG_RE.finditer(text):
        runs.extend(_split_bold(text[pos:m.start()]))
        runs.append(StyledRun(TAG_STYLES[m.group("tag")], m.group("content")))
        pos = m.end()
    runs.extend(_split_bold(text[pos:]))
    if not runs:
        return [StyledRun(RunStyle.PLAIN, text)]
    return runs


def plain_text(runs: list[StyledRun]) -> str:
    """Concatenate run text, i.e. the fragment with markup removed."""
    return "".join(run.text for run in runs)


def has_inline_markup(text: str) -> bool:
    """True if text contains a bracket-tag opener.

    The staged reader shows such text at once instead of typing it out, so a
    half-revealed tag never reaches the renderer.
    """
    return "[[" in text
