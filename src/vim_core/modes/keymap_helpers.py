"""Helper utilities for keymap-driven modes."""

from __future__ import annotations

import re
from typing import List

from vim_core.keymaps import KeymapResolver, KeyStroke

from .base_mode import KeyInput, ModeContext

NAMED_KEYS = {
    "esc": "ESC",
    "cr": "ENTER",
    "enter": "ENTER",
    "return": "ENTER",
    "bs": "BACKSPACE",
    "backspace": "BACKSPACE",
    "del": "DELETE",
    "delete": "DELETE",
    "tab": "TAB",
    "left": "LEFT",
    "right": "RIGHT",
    "up": "UP",
    "down": "DOWN",
    "home": "HOME",
    "end": "END",
    "space": " ",
    "lt": "<",
}

_NOTATION = re.compile(r"<([^<>]+)>")


def key_to_token(key: KeyInput) -> str:
    return KeyStroke(key.key, tuple(key.modifiers)).token


def is_printable(key: KeyInput) -> bool:
    text = key.text if key.text is not None else key.key
    if len(text) != 1 or not text.isprintable():
        return False
    return not any(mod in {"ctrl", "alt", "meta"} for mod in key.modifiers)


def key_text(key: KeyInput) -> str:
    return key.text if key.text is not None else key.key


def _parse_notation(body: str) -> KeyInput | None:
    lowered = body.lower()
    if lowered in NAMED_KEYS:
        name = NAMED_KEYS[lowered]
        return KeyInput(name, text=name if len(name) == 1 else None)
    modifier, sep, key = body.partition("-")
    if sep and key and modifier.lower() in {"c", "a", "m", "s"}:
        names = {"c": "ctrl", "a": "alt", "m": "alt", "s": "shift"}
        base = NAMED_KEYS.get(key.lower(), key if len(key) == 1 else key.upper())
        if len(base) == 1:
            base = base.lower()
        return KeyInput(base, modifiers=(names[modifier.lower()],))
    return None


def parse_keys(keys: str) -> List[KeyInput]:
    """Split ``"3dw<Esc>"`` style notation into key inputs.

    ``<...>`` groups name special keys (``<Esc>``, ``<CR>``, ``<BS>``,
    ``<Del>``, ``<Tab>``, arrows, ``<Home>``, ``<End>``, ``<C-r>``);
    ``<lt>`` types a literal ``<``. Unknown groups are typed as text.
    """

    result: List[KeyInput] = []
    index = 0
    while index < len(keys):
        match = _NOTATION.match(keys, index)
        if match:
            parsed = _parse_notation(match.group(1))
            if parsed is not None:
                result.append(parsed)
                index = match.end()
                continue
        char = keys[index]
        if char == "\n":
            result.append(KeyInput("ENTER"))
        elif char == "\t":
            result.append(KeyInput("TAB"))
        else:
            result.append(KeyInput(char, text=char))
        index += 1
    return result


def require_keymap_resolver(context: ModeContext) -> KeymapResolver:
    resolver = context.extras.get("keymap_resolver")
    if not isinstance(resolver, KeymapResolver):
        raise RuntimeError("ModeContext.extras missing 'keymap_resolver'")
    return resolver


__all__ = [
    "NAMED_KEYS",
    "is_printable",
    "key_text",
    "key_to_token",
    "parse_keys",
    "require_keymap_resolver",
]
