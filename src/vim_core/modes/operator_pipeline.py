"""Count × operator × motion/text-object parsing as one transition function.

``advance`` consumes one key token and returns the next ``PendingState``
plus, when a command completed, the ``Action`` to execute. There are no
timeouts: a key that cannot continue the pending sequence cancels it and is
reprocessed as a fresh key.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional, Union

from vim_core.actions.models import Action, Invocation, TextObject
from vim_core.keymaps import ActionRef, KeymapResolver
from vim_core.motions.text_objects import TEXT_OBJECT_DELIMITERS, TextObjectScope
from vim_core.runtime import telemetry

TEXT_OBJECT_KEYS = {"i": TextObjectScope.INNER, "a": TextObjectScope.AROUND}


@dataclass(frozen=True, slots=True)
class Idle:
    prefix: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class CountOnly:
    count: int
    prefix: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class OperatorPending:
    operator: ActionRef
    key: str
    count: Optional[int] = None
    motion_count: Optional[int] = None
    prefix: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class TextObjectPending:
    target: ActionRef
    count: Optional[int]
    scope: TextObjectScope


PendingState = Union[Idle, CountOnly, OperatorPending, TextObjectPending]

IDLE = Idle()


@dataclass(frozen=True, slots=True)
class Step:
    """Result of feeding one token.

    ``status`` is ``action`` (``action`` is set), ``pending`` (more keys
    needed), ``cancelled`` (a pending command was dropped) or ``miss`` (the
    key means nothing here). ``restarted`` marks a token that cancelled a
    pending command and was then reprocessed from ``Idle``.
    """

    state: PendingState
    action: Optional[Action] = None
    status: str = "miss"
    restarted: bool = False


def _count_of(state: PendingState) -> Optional[int]:
    if isinstance(state, CountOnly):
        return state.count
    if isinstance(state, OperatorPending):
        return state.motion_count
    return None


def _multiply(count: Optional[int], motion_count: Optional[int]) -> Optional[int]:
    if count is None:
        return motion_count
    if motion_count is None:
        return count
    return count * motion_count


def _accumulate(state: PendingState, token: str) -> Optional[PendingState]:
    """Fold a count digit into ``state``; ``None`` when the token is no count digit."""

    if len(token) != 1 or not token.isdigit() or getattr(state, "prefix", ()):
        return None
    current = _count_of(state)
    if token == "0" and current is None:
        return None
    value = (current or 0) * 10 + int(token)
    if isinstance(state, OperatorPending):
        return replace(state, motion_count=value)
    return CountOnly(count=value)


def _restart(token: str, *, mode: str, resolver: KeymapResolver) -> Step:
    step = advance(IDLE, token, mode=mode, resolver=resolver)
    if step.status == "miss":
        return Step(state=IDLE, status="cancelled", restarted=True)
    return replace(step, restarted=True)


def advance(
    state: PendingState,
    token: str,
    *,
    mode: str,
    resolver: KeymapResolver,
) -> Step:
    """Feed ``token`` to the interpreter for ``mode``."""

    if isinstance(state, TextObjectPending):
        delimiter = TEXT_OBJECT_DELIMITERS.get(token)
        if delimiter is None:
            return _restart(token, mode=mode, resolver=resolver)
        action = state.target(
            Invocation(
                count=state.count,
                keys=(token,),
                mode=mode,
                text_object=TextObject(delimiter=token, scope=state.scope),
            )
        )
        return Step(state=IDLE, action=action, status="action")

    counted = _accumulate(state, token)
    if counted is not None:
        return Step(state=counted, status="pending")

    if isinstance(state, OperatorPending) and not state.prefix:
        count = _multiply(state.count, state.motion_count)
        if token == state.key:
            action = state.operator(Invocation(count=count, keys=(token,), mode=mode))
            return Step(state=IDLE, action=action, status="action")
        if token in TEXT_OBJECT_KEYS:
            return Step(
                state=TextObjectPending(
                    target=state.operator, count=count, scope=TEXT_OBJECT_KEYS[token]
                ),
                status="pending",
            )

    keys = state.prefix + (token,)
    result = resolver.resolve(mode, keys)
    if result.status == "pending":
        return Step(state=replace(state, prefix=keys), status="pending")
    if result.status == "miss" or result.match is None:
        if isinstance(state, Idle) and not state.prefix:
            return Step(state=IDLE, status="miss")
        telemetry.record_event(
            "interpreter.cancel",
            level="debug",
            data={"mode": mode, "keys": " ".join(keys)},
            logger_name="vim_core.modes",
        )
        return _restart(token, mode=mode, resolver=resolver)

    ref = result.match.action
    if isinstance(state, OperatorPending):
        if ref.kind != "motion":
            return _restart(token, mode=mode, resolver=resolver)
        motion = ref.id.split(".", 1)[-1]
        action = state.operator(
            Invocation(
                count=_multiply(state.count, state.motion_count),
                keys=keys,
                mode=mode,
                motion=motion,
            )
        )
        return Step(state=IDLE, action=action, status="action")

    count = _count_of(state)
    if ref.kind == "operator":
        return Step(
            state=OperatorPending(operator=ref, key=token, count=count),
            status="pending",
        )
    if ref.kind == "text_object":
        scope = TextObjectScope(str(ref.metadata.get("scope", "i")))
        return Step(
            state=TextObjectPending(target=ref, count=count, scope=scope),
            status="pending",
        )
    action = ref(Invocation(count=count, keys=keys, mode=mode))
    return Step(state=IDLE, action=action, status="action")


__all__ = [
    "CountOnly",
    "IDLE",
    "Idle",
    "OperatorPending",
    "PendingState",
    "Step",
    "TEXT_OBJECT_KEYS",
    "TextObjectPending",
    "advance",
]
