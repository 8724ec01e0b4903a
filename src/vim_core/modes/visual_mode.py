"""Visual modes: normal-mode key handling plus an anchored selection."""

from __future__ import annotations

from vim_core.actions.visual import begin_selection, end_selection, sync_selection
from vim_core.config import VISUAL_MODES, Mode as ModeName
from vim_core.runtime import telemetry

from .base_mode import ModeContext
from .normal_mode import NormalMode


class VisualMode(NormalMode):
    """Characterwise selection from the anchor to the cursor, both inclusive.

    Switching between ``visual`` and ``visual_line`` keeps the anchor; leaving
    for any other mode drops it together with the selection.
    """

    name = ModeName.VISUAL.value

    def __init__(self, context: ModeContext) -> None:
        super().__init__(context)
        self.logger = telemetry.get_logger(f"vim_core.modes.{self.name}")

    def on_enter(self, previous: str | None) -> None:
        self.reset()
        if previous not in VISUAL_MODES:
            begin_selection(self.context, self.context.buffer.cursor)
        sync_selection(self.context, self.name)

    def on_exit(self, next_mode: str | None) -> None:
        self.reset()
        if next_mode not in VISUAL_MODES:
            end_selection(self.context)


class VisualLineMode(VisualMode):
    name = ModeName.VISUAL_LINE.value


__all__ = ["VisualLineMode", "VisualMode"]
