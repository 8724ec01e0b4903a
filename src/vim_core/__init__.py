"""UI-agnostic Vim editing engine."""

from .config import EngineConfig, Mode
from .editor import Editor, PointerEvent
from .modes import KeyInput

__all__ = [
    "Editor",
    "EngineConfig",
    "KeyInput",
    "Mode",
    "PointerEvent",
    "actions",
    "adapters",
    "buffer",
    "keymaps",
    "modes",
    "motions",
    "runtime",
    "search",
]

__version__ = "0.2.0"
