"""Base classes and shared utilities for editor modes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, Optional, Tuple

from vim_core.actions.models import Action
from vim_core.buffer import Buffer
from vim_core.config import EngineConfig, Mode as ModeName
from vim_core.search import SearchEngine


@dataclass(slots=True)
class KeyInput:
    """Normalized key event passed to modes.

    ``key`` is a printable character or a named key (``ESC``, ``ENTER``,
    ``BACKSPACE``, ``DELETE``, ``TAB``, ``LEFT``, ``RIGHT``, ``UP``,
    ``DOWN``, ``HOME``, ``END``); ``text`` carries the character a
    printable key produces.
    """

    key: str
    modifiers: Tuple[str, ...] = ()
    text: Optional[str] = None


@dataclass(slots=True)
class ModeResult:
    """Result returned from ``Mode.handle_key``."""

    consumed: bool
    switch_to: Optional[str] = None
    status: str = "ok"
    message: Optional[str] = None
    action: Optional[Action] = None


class ModeBus:
    """Minimal event bus letting modes exchange structured signals."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, list[Callable[[object], None]]] = {}

    def subscribe(self, event: str, callback: Callable[[object], None]) -> None:
        self._subscribers.setdefault(event, []).append(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in self._subscribers.get(event, []):
            callback(payload)


@dataclass(slots=True)
class ModeContext:
    """Shared services every mode and action handler can access."""

    buffer: Buffer
    bus: ModeBus = field(default_factory=ModeBus)
    search: SearchEngine = field(default_factory=SearchEngine)
    config: EngineConfig = field(default_factory=EngineConfig)
    mode: str = ModeName.NORMAL.value
    viewport_height: int = 0
    extras: Dict[str, object] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.viewport_height <= 0:
            self.viewport_height = self.config.viewport_height


class Mode:
    """Base class all concrete editor modes inherit from."""

    name: str = "mode"
    cursor_on_char: bool = True

    def __init__(self, context: ModeContext) -> None:
        self.context = context

    @property
    def pending_keys(self) -> tuple[str, ...]:
        return ()

    def on_enter(self, previous: Optional[str]) -> None:
        del previous

    def on_exit(self, next_mode: Optional[str]) -> None:
        del next_mode

    def reset(self) -> None:
        """Drop any partially typed command."""

    def handle_key(
        self, key: KeyInput
    ) -> ModeResult:  # pragma: no cover - abstract override
        raise NotImplementedError


__all__ = ["KeyInput", "Mode", "ModeBus", "ModeContext", "ModeResult"]
