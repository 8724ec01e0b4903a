"""Engine configuration and mode constants."""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from typing import Optional

ENV_PREFIX = "VIM_CORE_"

CLIPBOARD_BACKENDS = ("internal", "external")


class Mode(str, Enum):
    """Editor modes; exactly one is active at a time."""

    NORMAL = "normal"
    INSERT = "insert"
    VISUAL = "visual"
    VISUAL_LINE = "visual_line"
    SEARCH = "search"


VISUAL_MODES = frozenset({Mode.VISUAL.value, Mode.VISUAL_LINE.value})


@dataclass(frozen=True)
class ModeConfig:
    """Presentation hints a host can use for the status line."""

    label: str
    accepts_text: bool


MODE_CONFIGS = {
    Mode.NORMAL: ModeConfig("NORMAL", False),
    Mode.INSERT: ModeConfig("INSERT", True),
    Mode.VISUAL: ModeConfig("VISUAL", False),
    Mode.VISUAL_LINE: ModeConfig("V-LINE", False),
    Mode.SEARCH: ModeConfig("/", True),
}


@dataclass(frozen=True)
class EngineConfig:
    """Static choices made once when an ``Editor`` is built."""

    tab_width: int = 4
    viewport_height: int = 24
    undo_limit: int = 100
    clipboard: str = "internal"
    telemetry_preset: Optional[str] = None

    def __post_init__(self) -> None:
        if self.tab_width < 1:
            raise ValueError("tab_width must be positive")
        if self.viewport_height < 1:
            raise ValueError("viewport_height must be positive")
        if self.undo_limit < 1:
            raise ValueError("undo_limit must be positive")
        if self.clipboard not in CLIPBOARD_BACKENDS:
            raise ValueError(
                f"Unknown clipboard backend '{self.clipboard}', "
                f"expected one of {CLIPBOARD_BACKENDS}"
            )

    @classmethod
    def from_env(cls) -> "EngineConfig":
        defaults = cls()
        return cls(
            tab_width=_env_int("TAB_WIDTH", defaults.tab_width),
            viewport_height=_env_int("VIEWPORT_HEIGHT", defaults.viewport_height),
            undo_limit=_env_int("UNDO_LIMIT", defaults.undo_limit),
            clipboard=(_env("CLIPBOARD") or defaults.clipboard).lower(),
            telemetry_preset=_env("TELEMETRY_PRESET"),
        )


def _env(name: str) -> Optional[str]:
    return os.getenv(f"{ENV_PREFIX}{name}")


def _env_int(name: str, default: int) -> int:
    raw = _env(name)
    if raw is None or not raw.strip():
        return default
    return int(raw)


__all__ = [
    "CLIPBOARD_BACKENDS",
    "EngineConfig",
    "Mode",
    "ModeConfig",
    "MODE_CONFIGS",
    "VISUAL_MODES",
]
