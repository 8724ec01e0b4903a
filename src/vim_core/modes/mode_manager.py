"""Mode manager coordinating Normal/Visual/Insert/Search dispatch."""

from __future__ import annotations

from typing import Dict, Optional, Type

from vim_core.actions.executor import ActionExecutor
from vim_core.actions.models import Action
from vim_core.keymaps import KeymapRegistry, KeymapResolver, load_default_keymaps
from vim_core.runtime import telemetry

from .base_mode import KeyInput, Mode, ModeContext, ModeResult


class ModeManager:
    """Owns active mode, handles transitions, and dispatches key events.

    A key goes to the active mode; a completed ``Action`` is handed to the
    executor, and the mode switch requested by either runs last. After every
    key the cursor is clamped onto a character unless the active mode allows
    the append position.
    """

    def __init__(
        self,
        context: ModeContext,
        *,
        keymap_registry: KeymapRegistry | None = None,
        keymap_resolver: KeymapResolver | None = None,
        executor: ActionExecutor | None = None,
        load_defaults: bool = True,
    ) -> None:
        self.context = context
        self._modes: Dict[str, Mode] = {}
        self._active: Optional[str] = None
        self.logger = telemetry.get_logger("vim_core.modes")
        self.keymap_registry = keymap_registry or KeymapRegistry(
            logger_name="vim_core.keymaps"
        )
        if load_defaults and keymap_registry is None:
            load_default_keymaps(self.keymap_registry)
        self.keymap_resolver = keymap_resolver or KeymapResolver(
            self.keymap_registry, logger_name="vim_core.keymaps"
        )
        self.executor = executor or ActionExecutor(context)
        self.context.extras.setdefault("keymap_registry", self.keymap_registry)
        self.context.extras.setdefault("keymap_resolver", self.keymap_resolver)
        self.context.extras.setdefault("mode_manager", self)

    @property
    def active_mode(self) -> Optional[Mode]:
        if self._active is None:
            return None
        return self._modes.get(self._active)

    def modes(self) -> tuple[str, ...]:
        return tuple(self._modes)

    def register_mode(
        self,
        mode_cls: Type[Mode],
        /,
        *mode_args: object,
        **mode_kwargs: object,
    ) -> Mode:
        mode = mode_cls(self.context, *mode_args, **mode_kwargs)
        if mode.name in self._modes:
            raise ValueError(f"Mode '{mode.name}' already registered")
        self._modes[mode.name] = mode
        if self._active is None:
            self._active = mode.name
            self.context.mode = mode.name
            mode.on_enter(None)
        return mode

    def switch_mode(self, name: str) -> None:
        if name not in self._modes:
            raise KeyError(f"Unknown mode '{name}'")
        previous = self.active_mode
        if previous and previous.name == name:
            return
        if previous:
            previous.on_exit(name)
        self._active = name
        self.context.mode = name
        self._modes[name].on_enter(previous.name if previous else None)
        telemetry.record_event(
            "mode.switch",
            level="debug",
            data={"mode": name, "previous": previous.name if previous else None},
            logger_name="vim_core.modes",
        )
        self.context.bus.emit("mode.switch", name)

    def handle_key(self, key: KeyInput) -> ModeResult:
        mode = self.active_mode
        if mode is None:
            raise RuntimeError("No active mode registered")
        with telemetry.span(
            name=f"mode::{mode.name}",
            component=True,
            metadata={"key": key.key, "mode": mode.name},
        ) as handle:
            result = mode.handle_key(key)
            handle.add_metadata("status", result.status)
        return self._after_mode_result(result)

    def dispatch(self, action: Action) -> ModeResult:
        """Run ``action`` as if the active mode had produced it from a key."""

        mode = self.active_mode
        if mode is not None:
            mode.reset()
        return self._after_mode_result(ModeResult(consumed=True, action=action))

    def _after_mode_result(self, result: ModeResult) -> ModeResult:
        if result.action is not None:
            outcome = self.executor.execute(result.action)
            if outcome.switch_to and not result.switch_to:
                result.switch_to = outcome.switch_to
            if not outcome.applied:
                result.status = outcome.status
            result.message = outcome.message or result.message
        if result.switch_to:
            self.switch_mode(result.switch_to)
        self.settle_cursor()
        return result

    def settle_cursor(self) -> None:
        mode = self.active_mode
        if mode is None or not mode.cursor_on_char:
            return
        buffer = self.context.buffer
        row, col = buffer.cursor
        last = max(buffer.document.row_length(row) - 1, 0)
        if col > last:
            buffer.set_cursor(row, last, keep_sticky=True)


__all__ = ["ModeManager"]
