"""Lines, documents, render transform, syntax classifier and viewport."""

from .buffer import Buffer, Transaction
from .document import Document
from .line import Line
from .render import char_to_display, display_to_char, expand_tabs
from .state import Cursor, CursorState, ViewSnapshot
from .syntax import Highlight, classify, highlight_to_color
from .validation import clamp_cursor, ensure_cursor
from .viewport import scroll

__all__ = [
    "Buffer",
    "Transaction",
    "Document",
    "Line",
    "Cursor",
    "CursorState",
    "ViewSnapshot",
    "Highlight",
    "classify",
    "highlight_to_color",
    "char_to_display",
    "display_to_char",
    "expand_tabs",
    "clamp_cursor",
    "ensure_cursor",
    "scroll",
]
