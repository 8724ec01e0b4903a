"""Normal mode: counts, operators and motions through the pending interpreter."""

from __future__ import annotations

from typing import List

from vim_core.config import Mode as ModeName
from vim_core.runtime import telemetry

from .base_mode import KeyInput, Mode, ModeContext, ModeResult
from .keymap_helpers import key_to_token, require_keymap_resolver
from .operator_pipeline import IDLE, PendingState, advance


class NormalMode(Mode):
    name = ModeName.NORMAL.value

    def __init__(self, context: ModeContext) -> None:
        super().__init__(context)
        self.logger = telemetry.get_logger("vim_core.modes.normal")
        self._resolver = require_keymap_resolver(context)
        self._state: PendingState = IDLE
        self._keys: List[str] = []

    @property
    def state(self) -> PendingState:
        return self._state

    @property
    def pending_keys(self) -> tuple[str, ...]:
        return tuple(self._keys)

    def reset(self) -> None:
        self._state = IDLE
        self._keys.clear()

    def on_exit(self, next_mode: str | None) -> None:
        del next_mode
        self.reset()

    def handle_key(self, key: KeyInput) -> ModeResult:
        token = key_to_token(key)
        step = advance(self._state, token, mode=self.name, resolver=self._resolver)
        self._state = step.state

        if step.status == "pending":
            if step.restarted:
                self._keys.clear()
            self._keys.append(token)
            return ModeResult(consumed=True, status="pending", message="awaiting_sequence")

        self._keys.clear()
        if step.action is not None:
            return ModeResult(consumed=True, action=step.action)
        if step.status == "cancelled":
            return ModeResult(consumed=True, status="cancelled", message="pending_cancelled")
        return ModeResult(consumed=False, status="miss")


__all__ = ["NormalMode"]
