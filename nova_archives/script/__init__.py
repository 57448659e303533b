"""Chapter markup → script nodes.

Pipeline for one chapter view (re-run every time a chapter is opened, never
cached):
  1. classify_line()  : block opener/closer, directive, blank, or prose.
  2. SmartJoinBuffer  : prose lines → paragraphs (space only between Latin
                        boundaries); comms-channel paragraphs detected here.
  3. ScriptParser     : drives 1+2, owns intercept-block nesting/recovery.
  4. attribute_nodes(): leading-name rules turn paragraphs into Dialogue.
  5. format_inline()  : called by renderers per node text, never by the parser.

Node types (see nodes.py): dialogue, narration, system, comms, image,
divider, jump, intercept, reveal (document renderer only).
"""

from .classifier import (  # noqa: F401
    DirectiveKind,
    LineClass,
    LineKind,
    classify_line,
    intercept_id,
    strip_intercept_markers,
)
from .inline import (  # noqa: F401
    RunStyle,
    StyledRun,
    format_inline,
    has_inline_markup,
    plain_text,
)
from .joiner import SmartJoinBuffer, smart_join  # noqa: F401
from .nodes import (  # noqa: F401
    CollapsibleReveal,
    CommsMessage,
    Dialogue,
    Divider,
    ImageCue,
    InterceptBlock,
    JumpLink,
    Narration,
    ScriptNode,
    SystemMessage,
    dump_nodes,
    load_nodes,
)
from .parser import ScriptParser, parse_chapter, parse_script  # noqa: F401
from .speakers import (  # noqa: F401
    DEFAULT_SPEAKERS,
    IDENTITIES,
    SpeakerRule,
    SpeakerTable,
    attribute,
    attribute_nodes,
    clean_dialogue_text,
    dialogue_body,
    identity_for,
)
