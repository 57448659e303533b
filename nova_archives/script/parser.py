"""Single-pass chapter parser.

States: SCANNING (prose goes to the join buffer) and IN_BLOCK (lines go to
the open intercept block). Every flush trigger (blank line, block opener,
directive, end of input) closes the current paragraph first, so node order
always equals line order.

Recovery rules:
  - an opener while a block is still open emits the old block as-is
  - end of input while a block is open emits the partial block
Nothing in here raises on content.
"""

import logging
from enum import Enum

from .classifier import DirectiveKind, LineKind, classify_line
from .joiner import SmartJoinBuffer
from .nodes import Divider, ImageCue, InterceptBlock, JumpLink
from .speakers import DEFAULT_TABLE, SpeakerTable, attribute_nodes

logger = logging.getLogger(__name__)


class ParserState(str, Enum):
    SCANNING = "scanning"
    IN_BLOCK = "in_block"


class ScriptParser:
    def __init__(self) -> None:
        self._nodes: list = []
        self._buffer = SmartJoinBuffer()
        self._block: list[str] = []
        self.state = ParserState.SCANNING

    def _flush_buffer(self) -> None:
        node = self._buffer.flush()
        if node is not None:
            self._nodes.append(node)

    def _emit_block(self) -> None:
        self._nodes.append(InterceptBlock(lines=tuple(self._block)))
        self._block = []
        self.state = ParserState.SCANNING

    def _emit_directive(self, kind: DirectiveKind, payload: dict[str, str]) -> None:
        if kind is DirectiveKind.DIVIDER:
            self._nodes.append(Divider())
        elif kind is DirectiveKind.JUMP:
            self._nodes.append(JumpLink(target_volume_id=payload["target"], label=payload["label"]))
        elif kind is DirectiveKind.IMAGE:
            self._nodes.append(ImageCue(source_ref=payload["src"], caption=payload["caption"]))

    def feed(self, line: str, line_no: int = 0) -> None:
        line = line.rstrip()
        in_block = self.state is ParserState.IN_BLOCK
        cls = classify_line(line, in_block=in_block)

        if cls.kind is LineKind.BLOCK_OPEN:
            self._flush_buffer()
            if in_block and self._block:
                logger.debug(f"Line {line_no}: intercept block reopened before close, flushing")
                self._emit_block()
            self._block = [line]
            self.state = ParserState.IN_BLOCK
            if cls.closes:
                self._emit_block()
            return

        if cls.kind is LineKind.BLOCK_CONTINUE:
            self._block.append(line)
            return

        if cls.kind is LineKind.BLOCK_CLOSE:
            self._block.append(line)
            self._emit_block()
            return

        if cls.kind is LineKind.DIRECTIVE:
            self._flush_buffer()
            self._emit_directive(cls.directive, cls.payload)
            return

        if cls.kind is LineKind.BLANK:
            self._flush_buffer()
            return

        self._buffer.append(line.strip())

    def finish(self) -> tuple:
        self._flush_buffer()
        if self.state is ParserState.IN_BLOCK and self._block:
            logger.debug(f"Intercept block unterminated at end of input ({len(self._block)} lines)")
            self._emit_block()
        nodes = tuple(self._nodes)
        self._nodes = []
        self.state = ParserState.SCANNING
        return nodes

    def parse(self, text: str) -> tuple:
        """Parse a whole chapter into an ordered tuple of nodes."""
        for i, line in enumerate((text or "").lstrip("\ufeff").split("\n"), start=1):
            self.feed(line, i)
        return self.finish()


def parse_script(text: str) -> tuple:
    """Parse without speaker attribution (paragraphs stay Narration)."""
    return ScriptParser().parse(text)


def parse_chapter(text: str, speakers: SpeakerTable | None = None) -> tuple:
    """Parse and attribute speakers. This is what both reading surfaces use."""
    return attribute_nodes(parse_script(text), speakers or DEFAULT_TABLE)
