"""Buffer abstractions, registers and undo/redo data structures."""

from .buffer import Buffer, Transaction
from .document import LinesView, Row, TextBuffer, char_width
from .registers import (
    ClipboardRegister,
    Granularity,
    InternalRegister,
    Register,
    RegisterValue,
    create_register,
    foreign_value,
)
from .state import BufferState, CharSelection, Cursor, LineSelection, Selection
from .sync import (
    ClipboardService,
    EditorSnapshot,
    HighlightSpan,
    MatchRange,
    SyntaxHighlighter,
)
from .undo import UndoEntry, UndoTimeline, diff_rows
from .validation import first_non_blank

__all__ = [
    "Buffer",
    "BufferState",
    "CharSelection",
    "ClipboardRegister",
    "ClipboardService",
    "Cursor",
    "EditorSnapshot",
    "Granularity",
    "HighlightSpan",
    "InternalRegister",
    "LineSelection",
    "LinesView",
    "MatchRange",
    "Register",
    "RegisterValue",
    "Row",
    "Selection",
    "SyntaxHighlighter",
    "TextBuffer",
    "Transaction",
    "UndoEntry",
    "UndoTimeline",
    "char_width",
    "create_register",
    "foreign_value",
    "diff_rows",
    "first_non_blank",
]
