"""Insert and search modes: direct keymap lookups with printable fallthrough."""

from __future__ import annotations

from typing import List, Optional

from vim_core.actions.models import Action, Invocation
from vim_core.config import Mode as ModeName
from vim_core.runtime import telemetry

from .base_mode import KeyInput, Mode, ModeContext, ModeResult
from .keymap_helpers import is_printable, key_text, key_to_token, require_keymap_resolver


class TextEntryMode(Mode):
    """Resolves bound keys directly; unbound printable keys become text."""

    text_action = "insert_text"

    def __init__(self, context: ModeContext) -> None:
        super().__init__(context)
        self.logger = telemetry.get_logger(f"vim_core.modes.{self.name}")
        self._resolver = require_keymap_resolver(context)
        self._pending: List[str] = []

    @property
    def pending_keys(self) -> tuple[str, ...]:
        return tuple(self._pending)

    def reset(self) -> None:
        self._pending.clear()

    def handle_key(self, key: KeyInput) -> ModeResult:
        token = key_to_token(key)
        self._pending.append(token)
        keys = tuple(self._pending)
        result = self._resolver.resolve(self.name, keys)

        if result.status == "match" and result.match:
            self._pending.clear()
            action = result.match.action(
                Invocation(keys=keys, mode=self.name, text=key.text)
            )
            return ModeResult(consumed=True, action=action)

        if result.status == "pending":
            return ModeResult(consumed=True, status="pending", message="awaiting_sequence")

        self._pending.clear()
        if len(keys) > 1:
            # unfinished sequence: type what was held back, then this key
            return self._fallthrough(keys[:-1], key)
        return self._fallthrough((), key)

    def _fallthrough(self, held: tuple[str, ...], key: KeyInput) -> ModeResult:
        text = "".join(token for token in held if len(token) == 1)
        if is_printable(key):
            text += key_text(key)
        if not text:
            return ModeResult(consumed=False, status="miss")
        return ModeResult(consumed=True, action=Action(name=self.text_action, text=text))


class InsertMode(TextEntryMode):
    """Insert mode; one undo group spans the whole session."""

    name = ModeName.INSERT.value
    cursor_on_char = False

    def on_enter(self, previous: Optional[str]) -> None:
        del previous
        self.reset()
        self.context.buffer.begin_undo_group("insert")

    def on_exit(self, next_mode: Optional[str]) -> None:
        del next_mode
        self.reset()
        self.context.buffer.end_undo_group()


class SearchMode(TextEntryMode):
    """Collects a ``/`` pattern; typed characters extend it."""

    name = ModeName.SEARCH.value
    text_action = "search_input"

    def on_enter(self, previous: Optional[str]) -> None:
        del previous
        self.reset()

    def on_exit(self, next_mode: Optional[str]) -> None:
        del next_mode
        self.reset()


__all__ = ["InsertMode", "SearchMode", "TextEntryMode"]
