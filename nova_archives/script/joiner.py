"""Paragraph buffer with language-aware line joining.

Consecutive prose lines form one paragraph. Latin lines are joined with a
single space; when either side of a line break is CJK (ideographs, kana,
CJK punctuation, full-width forms) the lines are concatenated directly.
"""

import re

from .nodes import CommsMessage, Narration

CJK_RE = re.compile(
    r"[\u3000-\u303f\u3040-\u309f\u30a0-\u30ff\uff00-\uff9f\u4e00-\u9faf\u3400-\u4dbf]"
)

COMMS_RE = re.compile(
    r"^(.+?)[（(](?:通信频道|Comms Channel|通信頻道)[）)][:：]\s*(.*)",
    re.DOTALL,
)


def is_cjk(ch: str) -> bool:
    return bool(ch) and CJK_RE.match(ch) is not None


def smart_join(lines: list[str]) -> str:
    if not lines:
        return ""
    out = lines[0]
    for prev, curr in zip(lines, lines[1:]):
        if not prev or not curr or is_cjk(prev[-1]) or is_cjk(curr[0]):
            out += curr
        else:
            out += " " + curr
    return out


def paragraph_node(text: str) -> CommsMessage | Narration:
    """Comms-channel paragraphs become CommsMessage, everything else Narration."""
    m = COMMS_RE.match(text)
    if m:
        return CommsMessage(
            speaker_display_name=m.group(1).strip(),
            raw_text=m.group(2).strip(),
        )
    return Narration(raw_text=text)


class SmartJoinBuffer:
    """Accumulates prose lines until a flush trigger (blank line, block,
    directive, end of input)."""

    def __init__(self) -> None:
        self._lines: list[str] = []

    def __bool__(self) -> bool:
        return bool(self._lines)

    def __len__(self) -> int:
        return len(self._lines)

    def append(self, line: str) -> None:
        self._lines.append(line)

    def flush(self) -> CommsMessage | Narration | None:
        """Join and clear the buffer. Returns None when empty."""
        if not self._lines:
            return None
        text = smart_join(self._lines)
        self._lines = []
        return paragraph_node(text)
