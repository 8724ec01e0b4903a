"""Editor façade: one buffer, one search engine, one mode manager."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Union

from vim_core.actions import Action
from vim_core.actions.visual import sync_selection
from vim_core.buffer import (
    Buffer,
    ClipboardService,
    Cursor,
    EditorSnapshot,
    HighlightSpan,
    SyntaxHighlighter,
    create_register,
    foreign_value,
)
from vim_core.config import VISUAL_MODES, EngineConfig, Mode as ModeName
from vim_core.keymaps import KeymapRegistry, KeyStroke
from vim_core.modes import (
    InsertMode,
    KeyInput,
    ModeContext,
    ModeManager,
    ModeResult,
    NormalMode,
    SearchMode,
    VisualLineMode,
    VisualMode,
    parse_keys,
)
from vim_core.runtime import telemetry
from vim_core.search import SearchEngine

POINTER_KINDS = ("press", "drag", "release")


@dataclass(frozen=True, slots=True)
class PointerEvent:
    """Mouse input already translated to buffer coordinates by the host."""

    kind: str
    row: int
    col: int

    def __post_init__(self) -> None:
        if self.kind not in POINTER_KINDS:
            raise ValueError(f"Unknown pointer event kind '{self.kind}'")


KeyLike = Union[KeyInput, str]


def to_key_input(key: KeyLike) -> KeyInput:
    """Accept ``KeyInput`` objects, single characters or ``"ctrl+r"`` tokens."""

    if isinstance(key, KeyInput):
        return key
    if len(key) == 1:
        return KeyInput(key, text=key)
    stroke = KeyStroke.parse(key)
    return KeyInput(stroke.key, modifiers=stroke.modifiers)


class Editor:
    """Embeddable modal editor.

    The host feeds ``handle_key``/``handle_pointer`` and renders
    ``snapshot()``; nothing here draws or blocks.
    """

    def __init__(
        self,
        text: str = "",
        *,
        config: Optional[EngineConfig] = None,
        clipboard: Optional[ClipboardService] = None,
        highlighter: Optional[SyntaxHighlighter] = None,
        keymap_registry: Optional[KeymapRegistry] = None,
        name: str = "default",
    ) -> None:
        self.config = config or EngineConfig()
        if self.config.telemetry_preset:
            telemetry.configure(preset=self.config.telemetry_preset)
        self.logger = telemetry.get_logger("vim_core.editor")
        self.highlighter = highlighter
        self.buffer = Buffer.from_text(
            text,
            name=name,
            tab_width=self.config.tab_width,
            undo_limit=self.config.undo_limit,
            register=create_register(self.config.clipboard, service=clipboard),
        )
        self.search = SearchEngine()
        self.context = ModeContext(
            buffer=self.buffer, search=self.search, config=self.config
        )
        self.modes = ModeManager(self.context, keymap_registry=keymap_registry)
        for mode_cls in (NormalMode, InsertMode, VisualMode, VisualLineMode, SearchMode):
            self.modes.register_mode(mode_cls)
        self.scroll_offset = 0

    @classmethod
    def from_text(cls, text: str, **kwargs: object) -> "Editor":
        return cls(text, **kwargs)  # type: ignore[arg-type]

    @property
    def mode(self) -> str:
        return self.context.mode

    @property
    def cursor(self) -> Cursor:
        return self.buffer.cursor

    @property
    def viewport_height(self) -> int:
        return self.context.viewport_height

    @property
    def keymaps(self) -> KeymapRegistry:
        return self.modes.keymap_registry

    def text(self) -> str:
        return self.buffer.text()

    def handle_key(self, key: KeyLike) -> ModeResult:
        result = self.modes.handle_key(to_key_input(key))
        self._follow_cursor()
        return result

    def type_keys(self, keys: Union[str, Iterable[KeyLike]]) -> List[ModeResult]:
        """Feed several keys; strings use ``<Esc>``-style notation."""

        inputs = parse_keys(keys) if isinstance(keys, str) else [to_key_input(k) for k in keys]
        return [self.handle_key(key) for key in inputs]

    def handle_paste(self, text: str) -> Optional[ModeResult]:
        """Paste text handed over by the host, e.g. a bracketed terminal paste.

        The register takes the text first. Normal mode then pastes it after
        the cursor, visual modes replace the selection with it and insert mode
        types it. Search mode ignores pastes.
        """

        if not text or self.mode == ModeName.SEARCH.value:
            return None
        value = foreign_value(text)
        with telemetry.span(
            "editor::paste",
            logger_name="vim_core.editor",
            metadata={"mode": self.mode, "linewise": value.linewise},
        ):
            self.buffer.register.write(value.text, value.granularity)
            if self.mode in VISUAL_MODES:
                action = Action(name="visual_paste")
            elif self.mode == ModeName.INSERT.value:
                action = Action(name="insert_text", text=text)
            else:
                action = Action(name="paste_after")
            result = self.modes.dispatch(action)
        self._follow_cursor()
        return result

    def handle_pointer(self, event: PointerEvent) -> None:
        buffer = self.buffer
        mode = self.modes.active_mode
        if mode is not None:
            mode.reset()
        if event.kind == "press":
            if self.mode in VISUAL_MODES or self.mode == ModeName.SEARCH.value:
                self.modes.switch_mode(ModeName.NORMAL.value)
            buffer.state.clear_selection()
            buffer.set_cursor(event.row, event.col)
        elif event.kind == "drag":
            if self.mode not in VISUAL_MODES:
                self.modes.switch_mode(ModeName.VISUAL.value)
            buffer.set_cursor(event.row, event.col)
            self.modes.settle_cursor()
            sync_selection(self.context)
        else:
            buffer.set_cursor(event.row, event.col)
            if self.mode in VISUAL_MODES:
                self.modes.settle_cursor()
                sync_selection(self.context)
        self.modes.settle_cursor()
        self._follow_cursor()

    def set_viewport(self, height: int) -> None:
        if height < 1:
            raise ValueError("viewport height must be positive")
        self.context.viewport_height = height
        self._follow_cursor()

    def _follow_cursor(self) -> None:
        row = self.buffer.cursor.row
        height = self.context.viewport_height
        if row < self.scroll_offset:
            self.scroll_offset = row
        elif row >= self.scroll_offset + height:
            self.scroll_offset = row - height + 1
        self.scroll_offset = max(
            0, min(self.scroll_offset, self.buffer.document.line_count - 1)
        )

    def snapshot(self) -> EditorSnapshot:
        buffer = self.buffer
        search = self.search
        highlights: tuple = ()
        current = None
        if search.active:
            if search.revision != buffer.revision:
                search.refresh(buffer.lines(), buffer.revision)
            highlights = search.highlights()
            current = search.current()
        mode = self.modes.active_mode
        return EditorSnapshot(
            rows=tuple(row.cells() for row in buffer.document.snapshot()),
            cursor=buffer.cursor,
            mode=self.mode,
            selection=buffer.state.selection,
            search_highlights=highlights,
            current_match=current,
            revision=buffer.revision,
            scroll_offset=self.scroll_offset,
            pending_keys=mode.pending_keys if mode is not None else (),
            search_pattern=search.pattern if search.active else None,
        )

    def highlight(self, language: str) -> tuple[int, tuple[HighlightSpan, ...]]:
        revision = self.buffer.revision
        if self.highlighter is None:
            return revision, ()
        with telemetry.span(
            "editor::highlight",
            logger_name="vim_core.editor",
            metadata={"language": language, "revision": revision},
        ):
            spans = tuple(self.highlighter(self.buffer.text(), language))
        return revision, spans


__all__ = ["Editor", "KeyLike", "POINTER_KINDS", "PointerEvent", "to_key_input"]
