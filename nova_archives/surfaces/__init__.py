"""Presentation surfaces built on parsed script nodes.

document: the whole chapter as blocks (scrolling reader).
staged:   the current frame of a PlaybackMachine (visual-novel reader).
"""

from .document import render_block, render_document  # noqa: F401
from .staged import staged_view  # noqa: F401
