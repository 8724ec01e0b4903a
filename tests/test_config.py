from __future__ import annotations

import pytest

from vim_core import Editor
from vim_core.config import MODE_CONFIGS, EngineConfig, Mode


def test_defaults() -> None:
    config = EngineConfig()

    assert config.tab_width == 4
    assert config.viewport_height == 24
    assert config.clipboard == "internal"
    assert config.telemetry_preset is None


@pytest.mark.parametrize(
    "kwargs",
    [
        {"tab_width": 0},
        {"viewport_height": 0},
        {"undo_limit": 0},
        {"clipboard": "x11"},
    ],
)
def test_invalid_values_rejected(kwargs) -> None:
    with pytest.raises(ValueError):
        EngineConfig(**kwargs)


def test_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("VIM_CORE_TAB_WIDTH", "8")
    monkeypatch.setenv("VIM_CORE_CLIPBOARD", "External")
    monkeypatch.setenv("VIM_CORE_TELEMETRY_PRESET", "development")
    monkeypatch.delenv("VIM_CORE_VIEWPORT_HEIGHT", raising=False)

    config = EngineConfig.from_env()

    assert config.tab_width == 8
    assert config.clipboard == "external"
    assert config.telemetry_preset == "development"
    assert config.viewport_height == 24


def test_from_env_rejects_garbage(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("VIM_CORE_UNDO_LIMIT", "lots")

    with pytest.raises(ValueError):
        EngineConfig.from_env()


def test_every_mode_has_a_label() -> None:
    assert set(MODE_CONFIGS) == set(Mode)
    assert MODE_CONFIGS[Mode.VISUAL_LINE].label == "V-LINE"
    assert Mode("insert") is Mode.INSERT


def test_unknown_telemetry_preset_rejected() -> None:
    with pytest.raises(ValueError):
        Editor(config=EngineConfig(telemetry_preset="chatty"))
