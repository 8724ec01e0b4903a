"""Minimal Textual adapter that wires Editor events into UI callbacks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Optional

from vim_core.buffer import EditorSnapshot
from vim_core.config import MODE_CONFIGS, Mode as ModeName
from vim_core.editor import Editor, PointerEvent
from vim_core.modes import KeyInput, ModeResult

# Textual key names -> engine key names
TEXTUAL_KEYS = {
    "escape": "ESC",
    "enter": "ENTER",
    "return": "ENTER",
    "backspace": "BACKSPACE",
    "ctrl+h": "BACKSPACE",
    "delete": "DELETE",
    "tab": "TAB",
    "left": "LEFT",
    "right": "RIGHT",
    "up": "UP",
    "down": "DOWN",
    "home": "HOME",
    "end": "END",
    "space": " ",
}


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_buffer: Callable[[EditorSnapshot], None]
    update_status: Callable[[str], None] = _noop
    show_command: Callable[[str], None] = _noop
    handle_event: Callable[[str, object | None], None] = _noop
    # Optional realtime log callback a host may use to surface debug lines
    log: Callable[[str], None] = _noop


def translate_key(
    key: str,
    *,
    text: Optional[str] = None,
    modifiers: Iterable[str] = (),
) -> KeyInput:
    """Turn a Textual key name (``escape``, ``ctrl+r``, ``a``) into a ``KeyInput``."""

    mods = [str(mod).lower() for mod in modifiers]
    name = TEXTUAL_KEYS.get(key)
    if name is None and "+" in key[:-1]:
        *prefix, base = key.split("+")
        mods.extend(prefix)
        name = TEXTUAL_KEYS.get(base, base)
        if len(name) == 1:
            text = None
    elif name is None:
        name = key
    if name == " ":
        text = " "
    if text is None and len(name) == 1 and not mods:
        text = name
    return KeyInput(key=name, modifiers=tuple(dict.fromkeys(mods)), text=text)


class TextualVimAdapter:
    """Bridges an ``Editor`` + bus events to a Textual-friendly surface."""

    def __init__(self, editor: Editor, hooks: TextualUIHooks) -> None:
        self.editor = editor
        self.hooks = hooks
        self._subscribe_events()
        self._refresh_buffer()
        self._refresh_command_line()

    def handle_textual_key(
        self,
        key: str,
        *,
        text: Optional[str] = None,
        modifiers: Iterable[str] = (),
    ) -> ModeResult:
        """Translate a Textual key event into a KeyInput and dispatch it."""

        key_input = translate_key(key, text=text, modifiers=modifiers)
        self._log_state("key ->", key=key_input.key, text=key_input.text, mods=key_input.modifiers)
        result = self.editor.handle_key(key_input)
        self._after_mode_result(result)
        self._log_state(
            "result <-",
            consumed=result.consumed,
            status=result.status,
            message=result.message,
            switch_to=result.switch_to,
        )
        return result

    def handle_pointer(self, kind: str, row: int, col: int) -> None:
        """Forward a mouse event already mapped to buffer coordinates."""

        self.editor.handle_pointer(PointerEvent(kind=kind, row=row, col=col))
        self._log_state("pointer ->", kind=kind, row=row, col=col)
        self._refresh_buffer()

    def handle_paste(self, text: str) -> None:
        result = self.editor.handle_paste(text)
        self._log_state("paste ->", chars=len(text))
        if result is not None:
            self._after_mode_result(result)

    def resize(self, height: int) -> None:
        self.editor.set_viewport(height)
        self._refresh_buffer()

    def _after_mode_result(self, result: ModeResult) -> None:
        status = result.message or result.status
        if status:
            self.hooks.update_status(status)
        self._refresh_buffer()
        self._refresh_command_line()

    def _subscribe_events(self) -> None:
        bus = self.editor.context.bus
        for event in ("visual.selection", "mode.switch"):
            bus.subscribe(
                event, lambda payload, name=event: self._handle_event(name, payload)
            )

    def _handle_event(self, name: str, payload: object | None) -> None:
        self._log_state("event ->", event=name, payload=payload)
        self.hooks.handle_event(name, payload)
        if name == "mode.switch" and isinstance(payload, str):
            self.hooks.update_status(MODE_CONFIGS[ModeName(payload)].label)

    def _refresh_buffer(self) -> None:
        self.hooks.update_buffer(self.editor.snapshot())

    def _refresh_command_line(self) -> None:
        search = self.editor.search
        if self.editor.mode == ModeName.SEARCH.value:
            self.hooks.show_command(f"/{search.pattern}")
        else:
            self.hooks.show_command("")

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot = self._state_metadata()
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix]
        for key, value in snapshot.items():
            parts.append(f"{key}={value!r}")
        self.hooks.log(" ".join(parts))

    def _state_metadata(self) -> Dict[str, object]:
        buffer = self.editor.buffer
        return {
            "mode": self.editor.mode,
            "cursor": tuple(buffer.cursor),
            "selection": buffer.state.selection,
            "buffer": buffer.name,
            "revision": buffer.revision,
        }


__all__ = ["TEXTUAL_KEYS", "TextualUIHooks", "TextualVimAdapter", "translate_key"]
