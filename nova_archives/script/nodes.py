"""Script node types.

Every parsed chapter becomes an ordered tuple of these frozen models. The
`type` field is the discriminator, so a node list round-trips through JSON
with `NODE_ADAPTER` and renderers can switch on `node.type`.
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


class _Node(BaseModel):
    model_config = ConfigDict(frozen=True)


class Dialogue(_Node):
    """A paragraph attributed to a known speaker."""

    type: Literal["dialogue"] = "dialogue"
    speaker_key: str
    speaker_display_name: str
    raw_text: str
    emotion: str = ""  # parenthetical after the name, e.g. 零点（低声）：


class Narration(_Node):
    type: Literal["narration"] = "narration"
    raw_text: str


class SystemMessage(_Node):
    type: Literal["system"] = "system"
    raw_text: str


class CommsMessage(_Node):
    """A paragraph of the form `Speaker（通信频道）：message`."""

    type: Literal["comms"] = "comms"
    speaker_display_name: str
    raw_text: str


class ImageCue(_Node):
    type: Literal["image"] = "image"
    source_ref: str
    caption: str = ""


class Divider(_Node):
    type: Literal["divider"] = "divider"


class JumpLink(_Node):
    type: Literal["jump"] = "jump"
    target_volume_id: str
    label: str = ""


class InterceptBlock(_Node):
    """Raw lines of an intercepted transmission, markers included."""

    type: Literal["intercept"] = "intercept"
    lines: tuple[str, ...]


class CollapsibleReveal(_Node):
    """Spoiler card lifted out of a paragraph by the document renderer."""

    type: Literal["reveal"] = "reveal"
    content: str


ScriptNode = Annotated[
    Union[
        Dialogue,
        Narration,
        SystemMessage,
        CommsMessage,
        ImageCue,
        Divider,
        JumpLink,
        InterceptBlock,
        CollapsibleReveal,
    ],
    Field(discriminator="type"),
]

NODE_ADAPTER: TypeAdapter[list[ScriptNode]] = TypeAdapter(list[ScriptNode])


def dump_nodes(nodes) -> list[dict]:
    """Serialise nodes to plain dicts (JSON-ready)."""
    return NODE_ADAPTER.dump_python(list(nodes), mode="json")


def load_nodes(data: list[dict]) -> tuple:
    """Inverse of dump_nodes()."""
    return tuple(NODE_ADAPTER.validate_python(data))
