"""Speaker attribution for prose paragraphs.

A paragraph is dialogue when it starts with a known name followed by one of
the rule's markers (`:` `：` `(` `（`, plus `>` for the void identity):

  零点：信号正常。          → point
  Zeri(whispering): ...   → zeri, emotion "whispering"
  ???>> ...               → void

Rules are tried in table order and the first match wins. A paragraph that
matches nothing stays narration; that is never an error.

The table is data: DEFAULT_SPEAKERS is the built-in list and config.json may
replace it (see storage.config).
"""

import re
from dataclasses import dataclass, field

from .nodes import Dialogue, Narration

DEFAULT_MARKERS = [":", "：", "(", "（"]

DEFAULT_SPEAKERS: list[dict] = [
    {"key": "point", "names": ["零点", "Point", "零點"]},
    {"key": "zeri", "names": ["芷漓", "Zeri"]},
    {"key": "zelo", "names": ["泽洛", "Zelo", "澤洛"]},
    {"key": "byaki", "names": ["白栖", "Byaki", "白棲"]},
    {"key": "void", "names": ["???", "Void", "void"], "markers": [":", "：", "(", "（", ">"]},
]

# key → display initials used by the staged reader's sprite placeholder
IDENTITIES: dict[str, str] = {
    "point": "ZP",
    "zeri": "ZL",
    "zelo": "ZO",
    "void": "VOID",
    "dusk": "DR",
    "byaki": "BK",
    "system": "SYS",
    "unknown": "??",
}
UNKNOWN_SPEAKER = "unknown"

_QUOTE_PAIRS = [("“", "”"), ('"', '"'), ("「", "」")]


def identity_for(speaker_key: str) -> str:
    """Normalise a speaker key to a known identity, falling back to unknown."""
    return speaker_key if speaker_key in IDENTITIES else UNKNOWN_SPEAKER


@dataclass(frozen=True)
class SpeakerRule:
    key: str
    names: tuple[str, ...]
    markers: tuple[str, ...] = tuple(DEFAULT_MARKERS)
    pattern: re.Pattern = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        names = "|".join(re.escape(n) for n in self.names)
        markers = "|".join(re.escape(m) for m in self.markers)
        object.__setattr__(self, "pattern", re.compile(rf"^({names})(?:{markers})"))

    def match(self, text: str) -> str | None:
        """Return the matched display name, or None."""
        m = self.pattern.match(text)
        return m.group(1) if m else None


class SpeakerTable:
    """Ordered (pattern, speaker key) rules."""

    def __init__(self, rules: list[SpeakerRule]) -> None:
        self.rules = list(rules)

    @classmethod
    def from_config(cls, entries: list[dict] | None = None) -> "SpeakerTable":
        """Build from a list of {"key", "names", "markers"?} dicts.

        Entries without a key or names are skipped.
        """
        rules = []
        for entry in entries if entries is not None else DEFAULT_SPEAKERS:
            key = entry.get("key", "")
            names = [n for n in entry.get("names", []) if n]
            if not key or not names:
                continue
            markers = entry.get("markers") or DEFAULT_MARKERS
            rules.append(SpeakerRule(key=key, names=tuple(names), markers=tuple(markers)))
        return cls(rules)

    def match(self, text: str) -> tuple[str, str] | None:
        """(speaker_key, display_name) of the first matching rule."""
        for rule in self.rules:
            name = rule.match(text)
            if name is not None:
                return rule.key, name
        return None


DEFAULT_TABLE = SpeakerTable.from_config(DEFAULT_SPEAKERS)


def _prefix_re(name: str) -> re.Pattern:
    return re.compile(
        rf"^{re.escape(name)}\s*(?:[（(](?P<emotion>[^）)]*)[）)])?\s*(?P<sep>[:：]|>+)?\s*"
    )


def attribute(node, table: SpeakerTable = DEFAULT_TABLE):
    """Turn a Narration paragraph into Dialogue when a speaker rule matches.

    Other node types pass through unchanged.
    """
    if not isinstance(node, Narration):
        return node
    hit = table.match(node.raw_text)
    if hit is None:
        return node
    key, name = hit
    m = _prefix_re(name).match(node.raw_text)
    emotion = (m.group("emotion") or "").strip() if m else ""
    return Dialogue(
        speaker_key=key,
        speaker_display_name=name,
        raw_text=node.raw_text,
        emotion=emotion,
    )


def attribute_nodes(nodes, table: SpeakerTable = DEFAULT_TABLE) -> tuple:
    return tuple(attribute(node, table) for node in nodes)


def clean_dialogue_text(text: str) -> str:
    """Strip matching outer quote pairs, repeatedly."""
    clean = text.strip()
    changed = True
    while changed and len(clean) >= 2:
        changed = False
        for open_q, close_q in _QUOTE_PAIRS:
            if clean.startswith(open_q) and clean.endswith(close_q):
                clean = clean[1:-1].strip()
                changed = True
                break
    return clean


def dialogue_body(node: Dialogue) -> str:
    """Spoken text of a dialogue paragraph without the leading name.

    "零点（低声）：“走吧。”" → "走吧。"
    """
    m = _prefix_re(node.speaker_display_name).match(node.raw_text)
    if m and m.group("sep"):
        return clean_dialogue_text(node.raw_text[m.end():])
    return clean_dialogue_text(node.raw_text)
