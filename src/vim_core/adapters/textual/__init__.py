"""Textual host adapter; the runnable demo lives in ``app``."""

from .controller import TEXTUAL_KEYS, TextualUIHooks, TextualVimAdapter, translate_key

__all__ = ["TEXTUAL_KEYS", "TextualUIHooks", "TextualVimAdapter", "translate_key"]
