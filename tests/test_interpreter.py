from __future__ import annotations

from typing import Iterable

import pytest

from vim_core.actions import Action, TextObject
from vim_core.keymaps import KeymapRegistry, KeymapResolver, load_default_keymaps
from vim_core.modes import (
    IDLE,
    CountOnly,
    OperatorPending,
    Step,
    TextObjectPending,
    advance,
)
from vim_core.motions import TextObjectScope


@pytest.fixture()
def resolver() -> KeymapResolver:
    registry = KeymapRegistry()
    load_default_keymaps(registry)
    return KeymapResolver(registry)


def feed(resolver: KeymapResolver, tokens: Iterable[str], mode: str = "normal") -> list[Step]:
    state = IDLE
    steps = []
    for token in tokens:
        step = advance(state, token, mode=mode, resolver=resolver)
        steps.append(step)
        state = step.state
    return steps


def test_motion_key_produces_move(resolver: KeymapResolver) -> None:
    (step,) = feed(resolver, ["w"])

    assert step.status == "action"
    assert step.action == Action(name="move", motion="word_forward")
    assert step.state == IDLE


def test_count_accumulates_and_leading_zero_is_motion(resolver: KeymapResolver) -> None:
    steps = feed(resolver, ["1", "0", "j"])

    assert steps[0].state == CountOnly(1)
    assert steps[1].state == CountOnly(10)
    assert steps[2].action == Action(name="move", count=10, motion="down")
    (zero,) = feed(resolver, ["0"])
    assert zero.action == Action(name="move", motion="line_start")


def test_operator_then_motion(resolver: KeymapResolver) -> None:
    steps = feed(resolver, ["d", "w"])

    assert isinstance(steps[0].state, OperatorPending)
    assert steps[0].status == "pending"
    assert steps[1].action == Action(name="delete", motion="word_forward")


def test_counts_multiply(resolver: KeymapResolver) -> None:
    steps = feed(resolver, ["2", "d", "3", "w"])

    assert steps[2].state.motion_count == 3
    assert steps[-1].action == Action(name="delete", count=6, motion="word_forward")


def test_zero_after_operator_is_a_motion(resolver: KeymapResolver) -> None:
    steps = feed(resolver, ["d", "0"])

    assert steps[-1].action == Action(name="delete", motion="line_start")


def test_doubled_operator_is_linewise(resolver: KeymapResolver) -> None:
    steps = feed(resolver, ["3", "y", "y"])

    assert steps[-1].action == Action(name="yank", count=3, linewise=True)


def test_operator_with_multi_key_motion(resolver: KeymapResolver) -> None:
    steps = feed(resolver, ["d", "g", "g"])

    assert steps[1].status == "pending"
    assert steps[1].state.prefix == ("g",)
    assert steps[-1].action == Action(name="delete", motion="document_start")


def test_text_object_after_operator(resolver: KeymapResolver) -> None:
    steps = feed(resolver, ["c", "i", "w"])

    assert steps[1].state == TextObjectPending(
        target=steps[0].state.operator, count=None, scope=TextObjectScope.INNER
    )
    assert steps[-1].action == Action(
        name="change",
        text_object=TextObject("w", TextObjectScope.INNER),
    )


def test_unknown_delimiter_cancels(resolver: KeymapResolver) -> None:
    steps = feed(resolver, ["d", "a", "q"])

    assert steps[-1].status == "cancelled"
    assert steps[-1].action is None
    assert steps[-1].state == IDLE


def test_non_delimiter_after_text_object_key_is_reprocessed(resolver: KeymapResolver) -> None:
    steps = feed(resolver, ["d", "i", "x"])

    assert steps[-1].restarted
    assert steps[-1].action == Action(name="delete_char")

    counted = feed(resolver, ["c", "a", "2"])
    assert counted[-1].state == CountOnly(2)


def test_unrelated_key_cancels_and_is_reprocessed(resolver: KeymapResolver) -> None:
    steps = feed(resolver, ["d", "x"])

    assert steps[-1].restarted
    assert steps[-1].action == Action(name="delete_char")


def test_escape_cancels_pending_operator(resolver: KeymapResolver) -> None:
    steps = feed(resolver, ["2", "d", "ESC"])

    assert steps[-1].action == Action(name="cancel")
    assert steps[-1].state == IDLE


def test_broken_prefix_reprocesses_key(resolver: KeymapResolver) -> None:
    steps = feed(resolver, ["g", "j"])

    assert steps[-1].restarted
    assert steps[-1].action == Action(name="move", motion="down")

    (miss,) = feed(resolver, ["z"])
    assert miss.status == "miss"
    broken = feed(resolver, ["g", "z"])
    assert broken[-1].status == "cancelled"


def test_count_reaches_mode_switch_commands(resolver: KeymapResolver) -> None:
    steps = feed(resolver, ["3", "i"])

    assert steps[-1].action == Action(name="insert_before", count=3)


def test_visual_text_object_selection(resolver: KeymapResolver) -> None:
    steps = feed(resolver, ["a", "("], mode="visual")

    assert steps[-1].action == Action(
        name="visual_select_object",
        text_object=TextObject("(", TextObjectScope.AROUND),
    )


def test_visual_operator_keys_act_immediately(resolver: KeymapResolver) -> None:
    (step,) = feed(resolver, ["d"], mode="visual_line")

    assert step.action == Action(name="visual_delete")
