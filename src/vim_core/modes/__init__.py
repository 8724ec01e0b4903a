"""Mode manager, pending-key interpreter, and dispatch logic."""

from .base_mode import KeyInput, Mode, ModeBus, ModeContext, ModeResult
from .normal_mode import NormalMode
from .insert_mode import InsertMode, SearchMode
from .visual_mode import VisualLineMode, VisualMode
from .mode_manager import ModeManager
from .keymap_helpers import parse_keys
from .operator_pipeline import (
    IDLE,
    CountOnly,
    Idle,
    OperatorPending,
    PendingState,
    Step,
    TextObjectPending,
    advance,
)

__all__ = [
    "KeyInput",
    "Mode",
    "ModeBus",
    "ModeContext",
    "ModeManager",
    "ModeResult",
    "NormalMode",
    "InsertMode",
    "SearchMode",
    "VisualMode",
    "VisualLineMode",
    "parse_keys",
    "IDLE",
    "Idle",
    "CountOnly",
    "OperatorPending",
    "TextObjectPending",
    "PendingState",
    "Step",
    "advance",
]
